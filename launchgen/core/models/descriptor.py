"""
Project descriptor models — deno.json and package.json.

Only the fields that shape discovery are modelled; everything else in
the descriptor is ignored.  The two shapes form a tagged union: the
loader picks the model by the detected runtime, and each model exposes
the same two accessors so callers never probe fields by hand.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class FileFilter(BaseModel):
    """Include/exclude glob lists, relative to the project root."""

    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)


class DenoDescriptor(BaseModel):
    """deno.json — ``workspace`` members and ``tests`` file filters."""

    kind: Literal["deno"] = "deno"
    workspace: list[str] | None = None
    tests: FileFilter = Field(default_factory=FileFilter)

    @model_validator(mode="before")
    @classmethod
    def _accept_test_key(cls, data: Any) -> Any:
        # Deno itself spells the section "test"
        if isinstance(data, dict) and "tests" not in data and "test" in data:
            data = {**data, "tests": data["test"]}
        return data

    def workspace_patterns(self) -> list[str] | None:
        return self.workspace

    def file_filter(self) -> FileFilter:
        return self.tests


class NodeDescriptor(BaseModel):
    """package.json — ``workspaces`` as a list or Yarn's ``{packages: [...]}``."""

    kind: Literal["node"] = "node"
    workspaces: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_yarn_workspaces(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("workspaces"), dict):
            data = {**data, "workspaces": data["workspaces"].get("packages")}
        return data

    def workspace_patterns(self) -> list[str] | None:
        return self.workspaces

    def file_filter(self) -> FileFilter:
        return FileFilter()


ProjectDescriptor = DenoDescriptor | NodeDescriptor
