"""
Entry service — build, tag, and filter launch configurations.

Generated entries carry ``env.LAUNCHGEN = "true"``; that tag is the
only thing that separates them from entries a user wrote by hand.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from launchgen.core.models.launch import (
    SENTINEL_KEY,
    SENTINEL_VALUE,
    WORKSPACE_FOLDER,
    LaunchEntry,
)
from launchgen.core.models.runtime import RuntimeProfile
from launchgen.core.models.tool_config import GroupConfig, ToolConfig

logger = logging.getLogger(__name__)


def is_generated(entry: Any) -> bool:
    """True if the entry carries the sentinel environment tag."""
    if not isinstance(entry, dict):
        return False
    env = entry.get("env")
    return isinstance(env, dict) and env.get(SENTINEL_KEY) == SENTINEL_VALUE


def filter_existing(configurations: list[Any]) -> list[Any]:
    """Keep user-authored entries, in their original order."""
    return [entry for entry in configurations if not is_generated(entry)]


def duplicate_arg_notices(args: list[str], defaults: list[str]) -> list[str]:
    """Advisory notices for user arguments already in the default list.

    Exact token equality only; nothing is removed.
    """
    notices: list[str] = []
    for arg in dict.fromkeys(args):
        if arg in defaults:
            notices.append(f'Info: runtimeArg "{arg}" is already in the default list')
    return notices


def entry_name(file_path: Path, project_root: Path) -> str:
    """``Debug <path relative to the project root>``."""
    rel = Path(os.path.relpath(file_path, project_root)).as_posix()
    return f"Debug {rel}"


def build_file_entry(
    file_path: Path,
    project_root: Path,
    profile: RuntimeProfile,
    options: ToolConfig,
    extra_args: list[str] | tuple[str, ...] = (),
) -> LaunchEntry:
    """Entry for one discovered test or run file.

    Runtime args: profile defaults, extra command-line args, the file
    itself, then ``tests.runtimeArgs`` from the tool config.
    """
    return LaunchEntry(
        name=entry_name(file_path, project_root),
        runtime_executable=profile.executable,
        runtime_args=[
            *profile.test_args,
            *extra_args,
            str(file_path),
            *options.tests.runtime_args,
        ],
        port=options.port,
        console=options.console,
    )


def build_group_entries(
    group: GroupConfig,
    profile: RuntimeProfile,
    options: ToolConfig,
) -> list[LaunchEntry]:
    """One entry per script in a custom group."""
    runtime_args = [*profile.group_args, *group.runtime_args]
    script_args = group.script_arg_tokens()
    entries: list[LaunchEntry] = []

    for script in group.script_entries():
        if isinstance(script, list):
            label, tokens = " ".join(script), list(script)
        else:
            label, tokens = script, script.split()

        entries.append(LaunchEntry(
            name=f"Debug {group.program} {label}".rstrip(),
            program=f"{WORKSPACE_FOLDER}/{group.program}",
            runtime_executable=profile.executable,
            runtime_args=list(runtime_args),
            args=[*script_args, *tokens],
            port=options.port,
            console=options.console,
        ))

    return entries


def unique_by_name(entries: list[LaunchEntry]) -> list[LaunchEntry]:
    """Drop generated entries whose name is already taken."""
    kept: list[LaunchEntry] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.name in seen:
            logger.warning("Duplicate entry name '%s', skipping", entry.name)
            continue
        seen.add(entry.name)
        kept.append(entry)
    return kept
