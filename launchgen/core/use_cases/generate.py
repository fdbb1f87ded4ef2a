"""
Generate use case — rebuild launch.json for a project.

Pipeline, run once per invocation:

    detect runtime → load inputs → drop stale generated entries
    → discover workspace files → expand custom groups → write

Each stage hands an explicit value to the next; nothing accumulates in
module state.  Filesystem errors during discovery or the final write
propagate and abort the run before anything is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from launchgen.core.config.loader import (
    ROOT_MARKER,
    find_project_root,
    launch_file_path,
    load_descriptor,
    load_launch_spec,
    load_tool_config,
    tool_config_path,
)
from launchgen.core.models.descriptor import ProjectDescriptor
from launchgen.core.models.launch import LAUNCH_VERSION, LaunchEntry, LaunchSpec
from launchgen.core.models.runtime import Runtime, profile_for
from launchgen.core.models.tool_config import ToolConfig
from launchgen.core.persistence.launch_file import save_launch_spec
from launchgen.core.services.detection import detect_runtime, resolve_scopes
from launchgen.core.services.discovery import PathFilter, discover_files
from launchgen.core.services.entries import (
    build_file_entry,
    build_group_entries,
    duplicate_arg_notices,
    filter_existing,
    unique_by_name,
)

logger = logging.getLogger(__name__)


@dataclass
class LoadedConfigs:
    """The three inputs, each already defaulted if unusable."""

    launch: LaunchSpec
    options: ToolConfig
    descriptor: ProjectDescriptor


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    project_root: Path | None = None
    launch_file: Path | None = None
    runtime: Runtime | None = None
    retained: list[str] = field(default_factory=list)
    added_files: list[str] = field(default_factory=list)
    added_groups: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    document: dict[str, Any] | None = None
    written: bool = False
    error: str | None = None

    @property
    def total(self) -> int:
        return len(self.retained) + len(self.added_files) + len(self.added_groups)

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["project_root"] = str(self.project_root)
        result["launch_file"] = str(self.launch_file)
        result["runtime"] = self.runtime.value if self.runtime else None
        result["retained"] = self.retained
        result["added_files"] = self.added_files
        result["added_groups"] = self.added_groups
        result["notices"] = self.notices
        result["written"] = self.written
        return result


def _entry_label(entry: Any) -> str:
    name = entry.get("name") if isinstance(entry, dict) else None
    return str(name) if name is not None else "(unnamed)"


class LaunchGenerator:
    """Synthesizes launch entries for one project root.

    Args:
        project_root: Directory holding ``.vscode/``.
        runtime_args: Extra runtime arguments inserted before the file
            path of every discovered-file entry.
    """

    def __init__(self, project_root: Path, runtime_args: Sequence[str] = ()) -> None:
        self.project_root = project_root
        self.runtime_args = list(runtime_args)
        self.launch_file = launch_file_path(project_root)
        self.config_file = tool_config_path(project_root)
        self.notices: list[str] = []

    # ── Stages ──────────────────────────────────────────────────

    def detect_runtime(self) -> Runtime:
        return detect_runtime(self.project_root)

    def load_configs(self, runtime: Runtime) -> LoadedConfigs:
        """Read launch.json, launch.config.json and the descriptor."""
        return LoadedConfigs(
            launch=load_launch_spec(self.launch_file),
            options=load_tool_config(self.config_file),
            descriptor=load_descriptor(self.project_root, runtime),
        )

    def filter_existing(self, spec: LaunchSpec) -> list[Any]:
        """User-authored entries from the previous launch.json."""
        retained = filter_existing(spec.configurations)
        logger.info("Retaining %d configurations from existing launch.json", len(retained))
        return retained

    def add_workspace_files(self, runtime: Runtime, configs: LoadedConfigs) -> list[LaunchEntry]:
        """One entry per test/run file found in the workspace scopes."""
        profile = profile_for(runtime)
        self._advise(configs.options.tests.runtime_args, profile.test_args)

        scopes = resolve_scopes(
            self.project_root, runtime, configs.descriptor.workspace_patterns(),
        )
        path_filter = PathFilter.from_file_filter(configs.descriptor.file_filter())
        files = discover_files(self.project_root, scopes, path_filter, profile)

        return [
            build_file_entry(path, self.project_root, profile, configs.options, self.runtime_args)
            for path in files
        ]

    def add_custom_groups(self, runtime: Runtime, configs: LoadedConfigs) -> list[LaunchEntry]:
        """One entry per script of every group in launch.config.json."""
        profile = profile_for(runtime)
        entries: list[LaunchEntry] = []
        for group in configs.options.groups:
            self._advise(group.runtime_args, profile.group_args)
            entries.extend(build_group_entries(group, profile, configs.options))
        return entries

    def merge(
        self,
        existing: LaunchSpec,
        retained: list[Any],
        generated: list[LaunchEntry],
    ) -> LaunchSpec:
        """User entries first, generated entries appended after."""
        return LaunchSpec(
            version=LAUNCH_VERSION,
            configurations=[*retained, *(entry.to_dict() for entry in generated)],
            extra=existing.extra,
        )

    def write_launch_json(self, spec: LaunchSpec) -> Path:
        save_launch_spec(spec, self.launch_file)
        logger.info("Updated %s", self.launch_file)
        return self.launch_file

    # ── Orchestration ───────────────────────────────────────────

    def run(self, write: bool = True) -> GenerateResult:
        """Run every stage; write launch.json unless ``write`` is False."""
        self.notices = []
        result = GenerateResult(project_root=self.project_root, launch_file=self.launch_file)

        runtime = self.detect_runtime()
        result.runtime = runtime

        configs = self.load_configs(runtime)
        retained = self.filter_existing(configs.launch)

        generated = unique_by_name([
            *self.add_workspace_files(runtime, configs),
            *self.add_custom_groups(runtime, configs),
        ])

        spec = self.merge(configs.launch, retained, generated)

        result.retained = [_entry_label(entry) for entry in retained]
        # group entries are the ones with a program
        result.added_files = [e.name for e in generated if e.program is None]
        result.added_groups = [e.name for e in generated if e.program is not None]
        result.notices = list(self.notices)
        result.document = spec.to_document()

        if write:
            self.write_launch_json(spec)
            result.written = True

        return result

    def _advise(self, args: list[str], defaults: list[str]) -> None:
        for notice in duplicate_arg_notices(args, defaults):
            logger.warning(notice)
            self.notices.append(notice)


def run_generate(
    start_dir: Path | None = None,
    runtime_args: Sequence[str] = (),
    write: bool = True,
) -> GenerateResult:
    """Locate the project root and run the generator.

    Args:
        start_dir: Where the root search begins (default: cwd).
        runtime_args: Extra runtime arguments for discovered-file entries.
        write: Whether to write launch.json.

    Returns:
        GenerateResult; ``error`` is set when no project root was found.
    """
    project_root = find_project_root(start_dir)
    if project_root is None:
        return GenerateResult(
            error=f"Project root folder not found. "
            f"Your project folder must contain a {ROOT_MARKER} folder."
        )

    logger.info("Project root: %s", project_root)
    return LaunchGenerator(project_root, runtime_args).run(write=write)
