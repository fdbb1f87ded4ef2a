"""
Configuration loader — project root discovery and best-effort JSON reads.

Every input except the project root is optional.  Each one is read
through ``read_json_or_default()``, which reports absence and parse
failures as a ``JsonRead`` value instead of raising, and the typed
loaders below fall back to a default model on any problem.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from launchgen.core.models.descriptor import DenoDescriptor, NodeDescriptor, ProjectDescriptor
from launchgen.core.models.launch import LaunchSpec
from launchgen.core.models.runtime import Runtime, profile_for
from launchgen.core.models.tool_config import ToolConfig

logger = logging.getLogger(__name__)

# Directory that marks the project root
ROOT_MARKER = ".vscode"
LAUNCH_FILE = "launch.json"
TOOL_CONFIG_FILE = "launch.config.json"

# Parents searched above the start directory
ROOT_SEARCH_LEVELS = 2


@dataclass
class JsonRead:
    """Outcome of reading an optional JSON file.

    ``found`` is False when the file is simply absent; ``error`` is set
    when it exists but could not be read or parsed.
    """

    path: Path
    data: Any = None
    found: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.found and self.error is None


def find_project_root(start_dir: Path | None = None, levels: int = ROOT_SEARCH_LEVELS) -> Path | None:
    """Find the nearest directory containing a ``.vscode`` folder.

    Checks ``start_dir`` and up to ``levels`` parents above it.

    Returns:
        The project root, or None if no marker directory was found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(levels + 1):
        if (current / ROOT_MARKER).is_dir():
            return current
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def launch_file_path(project_root: Path) -> Path:
    return project_root / ROOT_MARKER / LAUNCH_FILE


def tool_config_path(project_root: Path) -> Path:
    return project_root / TOOL_CONFIG_FILE


def read_json_or_default(path: Path) -> JsonRead:
    """Read and parse a JSON file without raising."""
    if not path.is_file():
        logger.debug("No file at %s", path)
        return JsonRead(path=path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        return JsonRead(path=path, found=True, error=f"Cannot read {path}: {e}")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return JsonRead(path=path, found=True, error=f"Invalid JSON in {path}: {e}")

    return JsonRead(path=path, data=data, found=True)


def _mapping_or_none(read: JsonRead) -> dict | None:
    """Return the parsed mapping, logging why it is unusable otherwise."""
    if read.error:
        logger.warning("%s — using defaults", read.error)
        return None
    if not read.found:
        return None
    if not isinstance(read.data, dict):
        logger.warning(
            "Expected a JSON object in %s, got %s — using defaults",
            read.path, type(read.data).__name__,
        )
        return None
    return read.data


def load_launch_spec(path: Path) -> LaunchSpec:
    """Load an existing launch.json, or an empty document."""
    data = _mapping_or_none(read_json_or_default(path))
    if data is None:
        return LaunchSpec()

    configurations = data.get("configurations")
    if configurations is not None and not isinstance(configurations, list):
        logger.warning(
            "Expected a list for configurations in %s, got %s — ignoring it",
            path, type(configurations).__name__,
        )

    try:
        spec = LaunchSpec.from_document(data)
    except ValidationError as e:
        logger.warning("Invalid launch file %s: %s — starting fresh", path, e)
        return LaunchSpec()

    logger.debug("Loaded %d configurations from %s", len(spec.configurations), path)
    return spec


def load_tool_config(path: Path) -> ToolConfig:
    """Load launch.config.json, or the default options."""
    data = _mapping_or_none(read_json_or_default(path))
    if data is None:
        return ToolConfig()

    try:
        config = ToolConfig.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid tool config %s: %s — using defaults", path, e)
        return ToolConfig()

    logger.debug("Loaded tool config from %s (%d groups)", path, len(config.groups))
    return config


def load_descriptor(project_root: Path, runtime: Runtime) -> ProjectDescriptor:
    """Load the runtime's project descriptor.

    A missing or invalid descriptor yields an empty one: a single root
    scope and no include/exclude restriction.
    """
    model = DenoDescriptor if runtime is Runtime.DENO else NodeDescriptor
    path = project_root / profile_for(runtime).descriptor_file

    data = _mapping_or_none(read_json_or_default(path))
    if data is None:
        return model()

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid descriptor %s: %s — using defaults", path, e)
        return model()
