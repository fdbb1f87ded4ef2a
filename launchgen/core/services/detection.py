"""
Detection service — runtime flavor and workspace scopes.

Looks at the project root to decide which runtime the project targets
and which subtrees should be scanned for test files.

Pure logic — no side effects, no persistence.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from launchgen.core.models.runtime import DETECTION_ORDER, Runtime, profile_for

logger = logging.getLogger(__name__)

_GLOB_CHARS = re.compile(r"[*?\[]")


@dataclass
class Scope:
    """A workspace subtree to scan."""

    name: str   # as written in the descriptor, or "." for the root
    path: Path

    def to_dict(self) -> dict:
        return {"name": self.name, "path": str(self.path)}


def detect_runtime(project_root: Path) -> Runtime:
    """Pick the runtime by which descriptor file exists.

    deno.json wins over package.json.  With neither present the first
    runtime is assumed.
    """
    for runtime in DETECTION_ORDER:
        if (project_root / profile_for(runtime).descriptor_file).is_file():
            logger.info("Detected %s project", runtime.value)
            return runtime

    logger.info("No descriptor found, assuming %s", DETECTION_ORDER[0].value)
    return DETECTION_ORDER[0]


def _normalize_pattern(pattern: str) -> str:
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/")


def resolve_scopes(
    project_root: Path,
    runtime: Runtime,
    patterns: list[str] | None,
) -> list[Scope]:
    """Turn descriptor workspace entries into concrete directories.

    - No entries: the project root is the only scope.
    - Literal entries (``./``, ``libs/core``) must be existing directories.
    - Glob entries (``packages/*``) expand in sorted order, and only
      directories holding the runtime's descriptor file qualify.

    Duplicate directories are dropped, first occurrence wins.
    """
    if not patterns:
        return [Scope(name=".", path=project_root)]

    descriptor_file = profile_for(runtime).descriptor_file
    scopes: list[Scope] = []
    seen: set[str] = set()

    def _add(name: str, path: Path) -> None:
        key = os.path.normpath(str(path))
        if key in seen:
            return
        seen.add(key)
        scopes.append(Scope(name=name, path=path))

    for raw in patterns:
        pattern = _normalize_pattern(raw)

        if not pattern or pattern == ".":
            _add(".", project_root)
            continue

        if _GLOB_CHARS.search(pattern):
            if Path(pattern).is_absolute():
                logger.warning("Workspace glob '%s' must be relative, skipping", raw)
                continue
            matches = sorted(p for p in project_root.glob(pattern) if p.is_dir())
            for member in matches:
                if not (member / descriptor_file).is_file():
                    logger.info("Skipping %s: no %s", member, descriptor_file)
                    continue
                _add(Path(os.path.relpath(member, project_root)).as_posix(), member)
            continue

        path = project_root / pattern
        if not path.is_dir():
            logger.warning("Workspace '%s' is not a directory, skipping", raw)
            continue
        _add(pattern, path)

    logger.debug("Resolved %d workspace scopes", len(scopes))
    return scopes
