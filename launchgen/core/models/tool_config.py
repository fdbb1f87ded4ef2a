"""
Tool config model — launch.config.json.

Optional, user-authored options for the generator: the debug port and
console shared by every generated entry, extra runtime arguments for
discovered test files, and custom script groups.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PORT = 9229
DEFAULT_CONSOLE = "integratedTerminal"


class ScanOptions(BaseModel):
    """The ``tests`` section: options for discovered test/run files."""

    model_config = ConfigDict(populate_by_name=True)

    runtime_args: list[str] = Field(default_factory=list, alias="runtimeArgs")


class GroupConfig(BaseModel):
    """A custom group — scripts sharing one program and runtime arguments.

    ``scripts`` items are either a command-line string or a pre-split
    token list.  An empty list yields a single entry with no script.
    """

    model_config = ConfigDict(populate_by_name=True)

    program: str
    runtime_args: list[str] = Field(default_factory=list, alias="runtimeArgs")
    script_args: list[str] | str | None = Field(default=None, alias="scriptArgs")
    scripts: list[str | list[str]] = Field(default_factory=list)

    def script_arg_tokens(self) -> list[str]:
        """Group-level arguments placed before every script's own tokens."""
        if self.script_args is None:
            return []
        if isinstance(self.script_args, str):
            return self.script_args.split()
        return list(self.script_args)

    def script_entries(self) -> list[str | list[str]]:
        return list(self.scripts) if self.scripts else [""]


class ToolConfig(BaseModel):
    """Root of launch.config.json."""

    port: int = DEFAULT_PORT
    console: str = DEFAULT_CONSOLE
    tests: ScanOptions = Field(default_factory=ScanOptions)
    groups: list[GroupConfig] = Field(default_factory=list)
