"""
Tests for configuration loading — root discovery and best-effort JSON reads.
"""

import json
from pathlib import Path

import pytest

from launchgen.core.config.loader import (
    find_project_root,
    load_descriptor,
    load_launch_spec,
    load_tool_config,
    read_json_or_default,
)
from launchgen.core.models.descriptor import DenoDescriptor, NodeDescriptor
from launchgen.core.models.runtime import Runtime


class TestFindProjectRoot:
    """Tests for find_project_root()."""

    def test_find_in_start_dir(self, tmp_path: Path):
        (tmp_path / ".vscode").mkdir()
        assert find_project_root(tmp_path) == tmp_path.resolve()

    def test_find_two_levels_up(self, tmp_path: Path):
        (tmp_path / ".vscode").mkdir()
        sub = tmp_path / "a" / "b"
        sub.mkdir(parents=True)
        assert find_project_root(sub) == tmp_path.resolve()

    def test_search_depth_is_bounded(self, tmp_path: Path):
        (tmp_path / ".vscode").mkdir()
        sub = tmp_path / "a" / "b" / "c"
        sub.mkdir(parents=True)
        assert find_project_root(sub) is None

    def test_marker_must_be_directory(self, tmp_path: Path):
        work = tmp_path / "x" / "y"
        work.mkdir(parents=True)
        (work / ".vscode").write_text("not a dir")
        assert find_project_root(work) is None

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / ".vscode").mkdir()
        monkeypatch.chdir(tmp_path)
        assert find_project_root() == tmp_path.resolve()


class TestReadJsonOrDefault:
    """Tests for read_json_or_default()."""

    def test_absent(self, tmp_path: Path):
        read = read_json_or_default(tmp_path / "missing.json")
        assert read.found is False
        assert read.error is None
        assert read.data is None
        assert not read.ok

    def test_valid(self, tmp_path: Path):
        path = tmp_path / "a.json"
        path.write_text('{"port": 1}')
        read = read_json_or_default(path)
        assert read.ok
        assert read.data == {"port": 1}

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "a.json"
        path.write_text("{ not json")
        read = read_json_or_default(path)
        assert read.found is True
        assert read.error is not None
        assert "Invalid JSON" in read.error


class TestLoadLaunchSpec:
    """Tests for load_launch_spec()."""

    def test_missing_returns_empty(self, tmp_path: Path):
        spec = load_launch_spec(tmp_path / "launch.json")
        assert spec.version == "0.2.0"
        assert spec.configurations == []

    def test_corrupt_returns_empty(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "launch.json"
        path.write_text("// comment\n{")
        spec = load_launch_spec(path)
        assert spec.configurations == []
        assert "Invalid JSON" in caplog.text

    def test_non_object_returns_empty(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "launch.json"
        path.write_text("[1, 2]")
        spec = load_launch_spec(path)
        assert spec.configurations == []
        assert "Expected a JSON object" in caplog.text

    def test_bad_configurations_type(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "launch.json"
        path.write_text(json.dumps({
            "version": "0.2.0",
            "configurations": "nope",
            "compounds": [],
        }))
        spec = load_launch_spec(path)
        assert spec.configurations == []
        assert spec.extra == {"compounds": []}
        assert "Expected a list for configurations" in caplog.text

    def test_non_object_items_kept(self, tmp_path: Path):
        path = tmp_path / "launch.json"
        items = [{"name": "Attach"}, None, "loose", 3]
        path.write_text(json.dumps({"version": "0.2.0", "configurations": items}))
        assert load_launch_spec(path).configurations == items

    def test_non_string_version_defaulted(self, tmp_path: Path):
        path = tmp_path / "launch.json"
        path.write_text(json.dumps({"version": 2, "configurations": [{"name": "Attach"}]}))
        spec = load_launch_spec(path)
        assert spec.version == "0.2.0"
        assert spec.configurations == [{"name": "Attach"}]

    def test_loads_entries(self, tmp_path: Path):
        path = tmp_path / "launch.json"
        path.write_text(json.dumps({
            "version": "0.2.0",
            "configurations": [{"name": "mine", "type": "node"}],
        }))
        spec = load_launch_spec(path)
        assert spec.configurations == [{"name": "mine", "type": "node"}]


class TestLoadToolConfig:
    """Tests for load_tool_config()."""

    def test_missing_returns_defaults(self, tmp_path: Path):
        cfg = load_tool_config(tmp_path / "launch.config.json")
        assert cfg.port == 9229
        assert cfg.groups == []

    def test_invalid_field_returns_defaults(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "launch.config.json"
        path.write_text(json.dumps({"port": "not-a-port"}))
        cfg = load_tool_config(path)
        assert cfg.port == 9229
        assert "Invalid tool config" in caplog.text

    def test_loads_groups(self, tmp_path: Path):
        path = tmp_path / "launch.config.json"
        path.write_text(json.dumps({
            "console": "internalConsole",
            "groups": [{"program": "main.ts", "scripts": ["a", "b"]}],
        }))
        cfg = load_tool_config(path)
        assert cfg.console == "internalConsole"
        assert len(cfg.groups) == 1
        assert cfg.groups[0].scripts == ["a", "b"]


class TestLoadDescriptor:
    """Tests for load_descriptor()."""

    def test_deno(self, tmp_path: Path):
        (tmp_path / "deno.json").write_text(json.dumps({"workspace": ["packages/*"]}))
        d = load_descriptor(tmp_path, Runtime.DENO)
        assert isinstance(d, DenoDescriptor)
        assert d.workspace_patterns() == ["packages/*"]

    def test_node(self, tmp_path: Path):
        (tmp_path / "package.json").write_text(json.dumps({"workspaces": ["./"]}))
        d = load_descriptor(tmp_path, Runtime.NODE)
        assert isinstance(d, NodeDescriptor)
        assert d.workspace_patterns() == ["./"]

    def test_missing_descriptor_defaults(self, tmp_path: Path):
        d = load_descriptor(tmp_path, Runtime.DENO)
        assert d.workspace_patterns() is None
        assert d.file_filter().include == []

    def test_invalid_descriptor_defaults(self, tmp_path: Path):
        (tmp_path / "deno.json").write_text(json.dumps({"workspace": "not-a-list"}))
        d = load_descriptor(tmp_path, Runtime.DENO)
        assert d.workspace_patterns() is None
