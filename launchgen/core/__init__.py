"""Core layer — models, services, and use cases."""
