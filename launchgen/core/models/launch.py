"""
Launch models — the editor's launch.json document and its entries.

User-authored entries are kept as opaque dicts so they round-trip
verbatim.  Generated entries are built as ``LaunchEntry`` and tagged
with the sentinel environment variable on output.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

LAUNCH_VERSION = "0.2.0"

# env key/value that marks an entry as ours
SENTINEL_KEY = "LAUNCHGEN"
SENTINEL_VALUE = "true"

WORKSPACE_FOLDER = "${workspaceFolder}"


class LaunchEntry(BaseModel):
    """A machine-generated debugger configuration."""

    name: str
    runtime_executable: str
    runtime_args: list[str] = Field(default_factory=list)
    port: int
    console: str
    program: str | None = None
    args: list[str] | None = None
    type: str = "node"
    request: str = "launch"
    cwd: str = WORKSPACE_FOLDER

    def to_dict(self) -> dict[str, Any]:
        """Render in launch.json key order, with the sentinel tag."""
        entry: dict[str, Any] = {
            "type": self.type,
            "request": self.request,
            "name": self.name,
        }
        if self.program is not None:
            entry["program"] = self.program
        entry["cwd"] = self.cwd
        entry["runtimeExecutable"] = self.runtime_executable
        entry["runtimeArgs"] = list(self.runtime_args)
        if self.args is not None:
            entry["args"] = list(self.args)
        entry["attachSimplePort"] = self.port
        entry["console"] = self.console
        entry["env"] = {SENTINEL_KEY: SENTINEL_VALUE}
        return entry


class LaunchSpec(BaseModel):
    """The launch.json document.

    ``extra`` holds any other top-level keys (``compounds``, ``inputs``)
    so they survive a rewrite.  Items of ``configurations`` are not
    validated: whatever a user put there (even ``null``) is carried
    through untouched.
    """

    version: str = LAUNCH_VERSION
    configurations: list[Any] = Field(default_factory=list)
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> LaunchSpec:
        """Build from a parsed launch.json object.

        A non-string ``version`` is replaced by the current one, and a
        ``configurations`` value that is not a list reads as empty.
        """
        extra = {k: v for k, v in data.items() if k not in ("version", "configurations")}
        version = data.get("version")
        configurations = data.get("configurations")
        return cls.model_validate({
            "version": version if isinstance(version, str) else LAUNCH_VERSION,
            "configurations": configurations if isinstance(configurations, list) else [],
            "extra": extra,
        })

    def to_document(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "configurations": self.configurations,
            **self.extra,
        }
