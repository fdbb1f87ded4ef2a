"""
Domain models — Pydantic types for launchgen.

All models are re-exported here for convenient access:

    from launchgen.core.models import LaunchSpec, ToolConfig, Runtime
"""

from launchgen.core.models.descriptor import (
    DenoDescriptor,
    FileFilter,
    NodeDescriptor,
    ProjectDescriptor,
)
from launchgen.core.models.launch import LaunchEntry, LaunchSpec
from launchgen.core.models.runtime import Runtime, RuntimeProfile, profile_for
from launchgen.core.models.tool_config import GroupConfig, ScanOptions, ToolConfig

__all__ = [
    # descriptor.py
    "DenoDescriptor",
    "FileFilter",
    # tool_config.py
    "GroupConfig",
    # launch.py
    "LaunchEntry",
    "LaunchSpec",
    "NodeDescriptor",
    "ProjectDescriptor",
    # runtime.py
    "Runtime",
    "RuntimeProfile",
    "ScanOptions",
    "ToolConfig",
    "profile_for",
]
