"""
Discovery service — find test and run scripts inside workspace scopes.

Scopes are walked in parallel; each walk collects into its own list and
the lists are joined afterwards in scope order.  Directory entries are
visited in sorted order so repeated runs see the same sequence.

Include/exclude patterns use Deno-style globs relative to the project
root.  A pattern that names a directory covers everything beneath it.
"""

from __future__ import annotations

import logging
import os
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from launchgen.core.models.descriptor import FileFilter
from launchgen.core.models.runtime import RuntimeProfile
from launchgen.core.services.detection import Scope

logger = logging.getLogger(__name__)


# Never descended into, regardless of include patterns
_SKIP_DIRS = frozenset({"node_modules"})

_MAX_WORKERS = 8


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a glob into a regex over POSIX relative paths.

    ``**`` spans directories, ``*`` and ``?`` stay within one path
    segment, ``[...]`` is a character class (``[!...]`` negated).
    """
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    pattern = pattern.rstrip("/")

    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif c == "*":
            out.append("[^/]*")
            i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
                i += 1
                continue
            body = pattern[i + 1:end]
            if body.startswith("!"):
                body = "^" + body[1:]
            out.append("[" + body.replace("\\", "\\\\") + "]")
            i = end + 1
        else:
            out.append(re.escape(c))
            i += 1

    return re.compile("".join(out))


def _prefixes(rel_path: str) -> list[str]:
    """``a/b/c`` → ``["a", "a/b", "a/b/c"]``."""
    parts = rel_path.split("/")
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


@dataclass
class PathFilter:
    """Compiled include/exclude globs.

    An empty include list admits everything.
    """

    include: list[re.Pattern[str]] = field(default_factory=list)
    exclude: list[re.Pattern[str]] = field(default_factory=list)

    @classmethod
    def from_file_filter(cls, file_filter: FileFilter) -> PathFilter:
        return cls(
            include=[compile_glob(p) for p in file_filter.include if p.strip()],
            exclude=[compile_glob(p) for p in file_filter.exclude if p.strip()],
        )

    @staticmethod
    def _hits(patterns: list[re.Pattern[str]], rel_path: str) -> bool:
        return any(
            rx.fullmatch(candidate)
            for candidate in _prefixes(rel_path)
            for rx in patterns
        )

    def is_excluded(self, rel_path: str) -> bool:
        return self._hits(self.exclude, rel_path)

    def is_included(self, rel_path: str) -> bool:
        if not self.include:
            return True
        return self._hits(self.include, rel_path)

    def accepts(self, rel_path: str) -> bool:
        return self.is_included(rel_path) and not self.is_excluded(rel_path)


def _raise(err: OSError) -> None:
    raise err


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _rel(path: str, project_root: Path) -> str:
    return Path(os.path.relpath(path, project_root)).as_posix()


def walk_scope(
    scope: Scope,
    project_root: Path,
    path_filter: PathFilter,
    profile: RuntimeProfile,
) -> list[Path]:
    """Collect matching files under one scope.

    Hidden entries, ``node_modules`` and excluded directories are
    pruned.  Filesystem errors propagate.
    """
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(scope.path, onerror=_raise):
        dirnames[:] = sorted(
            d for d in dirnames
            if not _is_hidden(d)
            and d not in _SKIP_DIRS
            and not path_filter.is_excluded(_rel(os.path.join(dirpath, d), project_root))
        )

        for name in sorted(filenames):
            if _is_hidden(name) or not profile.matches(name):
                continue
            full = os.path.join(dirpath, name)
            if path_filter.accepts(_rel(full, project_root)):
                found.append(Path(full))

    logger.debug("Scope '%s': %d files", scope.name, len(found))
    return found


def discover_files(
    project_root: Path,
    scopes: list[Scope],
    path_filter: PathFilter,
    profile: RuntimeProfile,
) -> list[Path]:
    """Walk every scope concurrently and merge results in scope order.

    A file reachable from two overlapping scopes is reported once.
    """
    if not scopes:
        return []

    with ThreadPoolExecutor(max_workers=min(len(scopes), _MAX_WORKERS)) as pool:
        per_scope = list(pool.map(
            lambda scope: walk_scope(scope, project_root, path_filter, profile),
            scopes,
        ))

    files: list[Path] = []
    seen: set[str] = set()
    for scope_files in per_scope:
        for path in scope_files:
            key = os.path.normpath(str(path))
            if key in seen:
                continue
            seen.add(key)
            files.append(path)

    logger.info("Discovered %d files in %d scopes", len(files), len(scopes))
    return files
