"""
Runtime model — the two JavaScript runtimes a project can target.

The runtime is picked by which descriptor file sits at the project
root.  Each runtime carries a fixed profile: the executable the editor
launches, the default runtime arguments, and the file-name pattern that
marks a test or run script.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field


class Runtime(str, Enum):
    """Project runtime flavor."""

    DENO = "deno"
    NODE = "node"


class RuntimeProfile(BaseModel):
    """Fixed launch defaults for one runtime."""

    runtime: Runtime
    descriptor_file: str
    executable: str
    test_args: list[str] = Field(default_factory=list)   # discovered test/run files
    group_args: list[str] = Field(default_factory=list)  # custom script groups
    file_pattern: str = ""

    def matches(self, filename: str) -> bool:
        """Check whether a file name looks like a test or run script."""
        return re.search(self.file_pattern, filename) is not None


PROFILES: dict[Runtime, RuntimeProfile] = {
    Runtime.DENO: RuntimeProfile(
        runtime=Runtime.DENO,
        descriptor_file="deno.json",
        executable="deno",
        test_args=["test", "--inspect-brk", "-A"],
        group_args=["run", "--inspect-brk", "-A"],
        file_pattern=r"(test|run)\.(ts|tsx|js|jsx|mjs)$",
    ),
    Runtime.NODE: RuntimeProfile(
        runtime=Runtime.NODE,
        descriptor_file="package.json",
        executable="node",
        test_args=["--inspect-brk", "--test"],
        group_args=["--inspect-brk"],
        file_pattern=r"(test|run)\.(js|mjs|cjs|ts)$",
    ),
}

# Checked in this order; the first runtime is also the fallback.
DETECTION_ORDER: tuple[Runtime, ...] = (Runtime.DENO, Runtime.NODE)


def profile_for(runtime: Runtime) -> RuntimeProfile:
    """Look up the launch profile for a runtime."""
    return PROFILES[runtime]
