"""Tests for the inspection CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from sitebake.cli import cli


@pytest.fixture
def _in_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from inside the temporary project."""
    monkeypatch.chdir(project_root)


@pytest.mark.usefixtures("_in_project")
class TestPathsCommand:
    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["paths"])
        assert result.exit_code == 0
        assert "OK: paths" in result.output
        assert "layouts" in result.output

    def test_json(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "paths"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["template"] == str(project_root.resolve() / "layouts")

    def test_source_flag(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        other = tmp_path / "other-site"
        other.mkdir()
        result = cli_runner.invoke(cli, ["--json", "--source", str(other), "paths"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["content"] == str(other.resolve() / "content")


@pytest.mark.usefixtures("_in_project")
class TestDoctypesCommand:
    def test_list(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctypes"])
        assert result.exit_code == 0
        names = {item["name"] for item in json.loads(result.stdout)["data"]["items"]}
        assert {"post", "page", "masterindex"} <= names

    def test_single(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctypes", "post"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["output_extension"] == ".htm"

    def test_unknown_type_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["doctypes", "gallery"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "gallery" in result.stderr


@pytest.mark.usefixtures("_in_project")
class TestOptionsCommand:
    def test_list(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "options"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["options"]["safe"] == "UNSAFE"

    def test_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["options", "backend"])
        assert result.exit_code == 1


@pytest.mark.usefixtures("_in_project")
class TestKeyCommands:
    def test_get(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["get", "template.post.file"])
        assert result.exit_code == 0
        assert "post.html" in result.output

    def test_get_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "get", "nope"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"

    def test_keys_prefix(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "keys", "--prefix", "render"])
        assert result.exit_code == 0
        values = json.loads(result.stdout)["data"]["values"]
        assert values["feed"] is True
        assert "tagsindex" in values

    def test_explicit_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        custom = tmp_path / "alt.toml"
        custom.write_text('output.extension = ".php"\n')
        result = cli_runner.invoke(cli, ["--json", "--config", str(custom), "get", "output.extension"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["value"] == ".php"


@pytest.mark.usefixtures("_in_project")
class TestConfigFileErrors:
    def test_missing_explicit_config_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "-c", "does-not-exist.toml", "get", "template.folder"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Config file not found: does-not-exist.toml" in result.stderr

    def test_missing_explicit_config_ignores_discovered_project(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-c", "missing.toml", "paths"])
        assert result.exit_code == 1
        assert "layouts" not in result.output

    def test_config_not_utf8(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        site = tmp_path / "latin1-site"
        site.mkdir()
        (site / "sitebake.toml").write_bytes(b'a = "\xff"\n')
        result = cli_runner.invoke(cli, ["--source", str(site), "paths"])
        assert result.exit_code == 1
        assert "not valid UTF-8" in result.stderr
        assert result.exception is None or isinstance(result.exception, SystemExit)
