"""
Shared test fixtures and configuration.
"""

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo any setup_logging() done by a CLI test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory for a project tree with a .vscode folder.

    Usage::

        root = make_project(["my.test.ts"], deno_json={"workspace": ["./"]})
    """

    def _make(
        files: Iterable[str] = (),
        tool_config: dict | None = None,
        deno_json: dict | None = None,
        package_json: dict | None = None,
    ) -> Path:
        root = tmp_path / "project"
        (root / ".vscode").mkdir(parents=True)

        if deno_json is not None:
            (root / "deno.json").write_text(json.dumps(deno_json))
        if package_json is not None:
            (root / "package.json").write_text(json.dumps(package_json))

        for name in files:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("// test file")

        if tool_config is not None:
            (root / "launch.config.json").write_text(json.dumps(tool_config))

        return root

    return _make


@pytest.fixture
def read_launch() -> Callable[[Path], dict]:
    """Return a reader for <root>/.vscode/launch.json."""

    def _read(root: Path) -> dict:
        return json.loads((root / ".vscode" / "launch.json").read_text())

    return _read
