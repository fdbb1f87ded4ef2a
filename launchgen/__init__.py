"""
launchgen — debugger launch configurations from project test files.
"""

__version__ = "0.1.0"
