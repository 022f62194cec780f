"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from loguru import logger

from qml_deploy import cli
from qml_deploy.errors import DeployError, ToolError


@pytest.fixture
def recorded(monkeypatch: pytest.MonkeyPatch) -> dict:
    calls: dict = {}

    def fake_deploy(config):
        calls["deploy"] = config
        return config.output_dir

    def fake_clean(config, all_outputs=False):
        calls["clean"] = (config, all_outputs)

    monkeypatch.setattr(cli, "deploy", fake_deploy)
    monkeypatch.setattr(cli, "clean", fake_clean)
    return calls


def test_deploy_flags(recorded: dict, project_dir: Path) -> None:
    assert cli.main(["-C", str(project_dir), "deploy", "-v", "--dmg"]) == 0
    config = recorded["deploy"]
    assert config.base_dir == project_dir.resolve()
    assert config.dmg is (config.platform == "darwin")


def test_deploy_custom_profile(recorded: dict, project_dir: Path, tmp_path: Path) -> None:
    profile = tmp_path / "other.yaml"
    assert cli.main(["-C", str(project_dir), "deploy", "--profile", str(profile)]) == 0
    assert recorded["deploy"].profile_path == profile.resolve()


def test_clean_all_flag(recorded: dict, project_dir: Path) -> None:
    assert cli.main(["-C", str(project_dir), "clean", "-a"]) == 0
    _, all_outputs = recorded["clean"]
    assert all_outputs is True


def test_deploy_error_exits_nonzero(monkeypatch: pytest.MonkeyPatch, project_dir: Path) -> None:
    def failing_deploy(config):
        raise ToolError("qt info: qmake: executable not found")

    monkeypatch.setattr(cli, "deploy", failing_deploy)
    assert cli.main(["-C", str(project_dir), "deploy"]) == 1


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        cli.main([])


def test_log_file_after_subcommand(recorded: dict, project_dir: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "deploy.log"
    assert cli.main(["-C", str(project_dir), "deploy", "--log-file", str(log_file)]) == 0
    logger.remove()

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert any("bundle written" in record["record"]["message"] for record in records)


def test_clean_accepts_log_options(recorded: dict, project_dir: Path, tmp_path: Path) -> None:
    assert cli.main(["-C", str(project_dir), "clean", "-v", "--log-file", str(tmp_path / "c.log")]) == 0
    logger.remove()
    assert (tmp_path / "c.log").exists()


def test_relative_profile_resolves_against_project(
    recorded: dict, project_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert cli.main(["-C", str(project_dir), "deploy", "--profile", "profiles/release.yaml"]) == 0
    assert recorded["deploy"].profile_path == project_dir.resolve() / "profiles" / "release.yaml"


def test_relative_project_directory(recorded: dict, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(project_dir.parent)
    assert cli.main(["-C", project_dir.name, "deploy"]) == 0
    assert recorded["deploy"].base_dir == project_dir.resolve()


def test_clean_error_exits_nonzero(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_clean(config, all_outputs=False):
        raise DeployError("clean: permission denied")

    monkeypatch.setattr(cli, "clean", failing_clean)
    assert cli.main(["-C", str(project_dir), "clean"]) == 1
