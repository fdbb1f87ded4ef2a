"""Input loading — project root discovery and JSON readers."""
