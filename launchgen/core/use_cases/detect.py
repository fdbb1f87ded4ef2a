"""
Detection use case — report what the generator would scan.

Ties together root discovery, runtime detection, descriptor loading and
scope resolution without walking any files or writing anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from launchgen.core.config.loader import ROOT_MARKER, find_project_root, load_descriptor
from launchgen.core.models.descriptor import FileFilter
from launchgen.core.models.runtime import Runtime, profile_for
from launchgen.core.services.detection import Scope, detect_runtime, resolve_scopes

logger = logging.getLogger(__name__)


@dataclass
class DetectResult:
    """Result of the detect use case."""

    project_root: Path | None = None
    runtime: Runtime | None = None
    descriptor_file: Path | None = None
    descriptor_found: bool = False
    scopes: list[Scope] = field(default_factory=list)
    file_filter: FileFilter = field(default_factory=FileFilter)
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["project_root"] = str(self.project_root)
        result["runtime"] = self.runtime.value if self.runtime else None
        result["descriptor_file"] = str(self.descriptor_file)
        result["descriptor_found"] = self.descriptor_found
        result["scopes"] = [s.to_dict() for s in self.scopes]
        result["include"] = self.file_filter.include
        result["exclude"] = self.file_filter.exclude
        return result


def run_detect(start_dir: Path | None = None) -> DetectResult:
    """Detect runtime and workspace scopes for the enclosing project."""
    result = DetectResult()

    project_root = find_project_root(start_dir)
    if project_root is None:
        result.error = (
            f"Project root folder not found. "
            f"Your project folder must contain a {ROOT_MARKER} folder."
        )
        return result

    result.project_root = project_root
    runtime = detect_runtime(project_root)
    result.runtime = runtime

    descriptor_file = project_root / profile_for(runtime).descriptor_file
    result.descriptor_file = descriptor_file
    result.descriptor_found = descriptor_file.is_file()

    descriptor = load_descriptor(project_root, runtime)
    result.scopes = resolve_scopes(project_root, runtime, descriptor.workspace_patterns())
    result.file_filter = descriptor.file_filter()

    return result
