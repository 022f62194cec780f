"""Tests for deploy profile loading."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from qml_deploy.errors import ProfileError
from qml_deploy.profile import load_profile, parse_profile


def test_load_profile_reads_all_sections(project_dir: Path) -> None:
    profile = load_profile(project_dir / "deploy_profile.yaml")
    assert profile.libraries_for("darwin") == ["QtCore", "QtGui", "QtWidgets"]
    assert profile.libraries_for("linux") == ["QtCore", "QtGui", "DBus"]
    assert profile.platform_plugins("windows") == ["windows"]
    assert profile.imageformats == ["jpeg"]
    assert profile.extra_libraries("linux") == ["libicudata.so.52"]
    assert profile.extra_libraries("darwin") == []


def test_module_paths_split_nested_categories() -> None:
    profile = parse_profile({"modules": {"qml": ["QtQuick.2"], "plugins/qml1": ["Window"]}})
    assert list(profile.module_paths()) == [
        PurePosixPath("qml/QtQuick.2"),
        PurePosixPath("plugins/qml1/Window"),
    ]


def test_empty_document_gives_empty_profile() -> None:
    profile = parse_profile(None)
    assert profile.libraries_for("linux") == []
    assert list(profile.module_paths()) == []


@pytest.mark.parametrize(
    "document",
    [
        ["QtCore"],
        {"libs": ["QtCore"]},
        {"libs": {"default": "QtCore"}},
        {"imageformats": [1, 2]},
        {"plugins": {"linux": ["xcb"]}},
    ],
)
def test_malformed_profile_is_rejected(document: object) -> None:
    with pytest.raises(ProfileError):
        parse_profile(document)


def test_missing_profile_file(tmp_path: Path) -> None:
    with pytest.raises(ProfileError):
        load_profile(tmp_path / "deploy_profile.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "deploy_profile.yaml"
    path.write_text("libs: [QtCore\n", encoding="utf-8")
    with pytest.raises(ProfileError):
        load_profile(path)
