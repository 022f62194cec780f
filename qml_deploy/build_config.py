"""Deployment configuration dataclasses."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

RELINK_BASE = "@executable_path/../Frameworks"
DEFAULT_PROFILE = "deploy_profile.yaml"
DEFAULT_OUT_DIR = "out"

# Files generated by the project wizard; they are not part of the application.
WIZARD_LEFTOVERS = ("wizard.xml", "wizard_icon.png", "doc.go")

ENV_PREFIX = "QML_DEPLOY_"


def current_platform() -> str:
    """Map ``sys.platform`` to the platform keys used in deploy profiles."""

    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


@dataclass(slots=True, frozen=True)
class PkgInfo:
    """Name and import path of the application package being deployed."""

    name: str
    import_path: str


@dataclass(slots=True, frozen=True)
class QtInfo:
    """Location of the Qt installation the application links against."""

    version: str
    lib_path: str
    base_path: str


@dataclass(slots=True)
class ToolNames:
    """Executables invoked during deployment."""

    qmake: str = "qmake"
    qtpaths: str = "qtpaths"
    go: str = "go"
    rice: str = "rice"
    otool: str = "otool"
    install_name_tool: str = "install_name_tool"
    hdiutil: str = "hdiutil"


@dataclass(slots=True)
class DeployConfig:
    """Settings for a single deploy or clean run."""

    base_dir: Path
    profile_path: Path
    out_dir: Path
    qml_dir: Path
    platform: str = field(default_factory=current_platform)
    relink_base: str = RELINK_BASE
    tools: ToolNames = field(default_factory=ToolNames)
    dmg: bool = False

    @property
    def output_dir(self) -> Path:
        return self.out_dir / self.platform

    @classmethod
    def default(cls, base_dir: Path, *, load_env: bool = True) -> "DeployConfig":
        """Build the standard layout for a project rooted at ``base_dir``.

        Values from ``<base_dir>/.env`` are loaded first without overriding
        the real environment; ``QML_DEPLOY_*`` variables then replace the
        defaults.
        """

        base_dir = Path(base_dir).resolve()
        if load_env:
            load_dotenv(base_dir / ".env", override=False)

        def env(name: str, default: str) -> str:
            return os.environ.get(ENV_PREFIX + name) or default

        tools = ToolNames(
            qmake=env("QMAKE", "qmake"),
            qtpaths=env("QTPATHS", "qtpaths"),
            go=env("GO", "go"),
            rice=env("RICE", "rice"),
        )
        return cls(
            base_dir=base_dir,
            profile_path=base_dir / env("PROFILE", DEFAULT_PROFILE),
            out_dir=base_dir / env("OUT_DIR", DEFAULT_OUT_DIR),
            qml_dir=base_dir / "project" / "qml",
            tools=tools,
        )


__all__ = [
    "DeployConfig",
    "PkgInfo",
    "QtInfo",
    "ToolNames",
    "RELINK_BASE",
    "WIZARD_LEFTOVERS",
    "current_platform",
]
