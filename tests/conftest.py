"""Pytest configuration and fake Qt/Go toolchain fixtures."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from qml_deploy.build_config import DeployConfig  # noqa: E402  (import after sys.path setup)
from qml_deploy.errors import ToolError  # noqa: E402
from qml_deploy.toolchain import Toolchain  # noqa: E402

IMPORT_PATH = "github.com/example/hello"
QT_VERSION = "5.3.0"

PROFILE_YAML = """\
libs:
  default: [QtCore, QtGui]
  darwin: [QtWidgets]
  linux: [DBus]
  windows: [QtNetwork]
platforms:
  darwin: [cocoa]
  linux: [xcb]
  windows: [windows]
modules:
  qml: [QtQuick.2]
imageformats: [jpeg]
extra:
  linux: [libicudata.so.52]
  windows: [icudt52.dll]
"""


def otool_output(binary: str, libs: Sequence[str]) -> str:
    lines = [f"{binary}:"]
    lines.extend(f"\t{lib} (compatibility version 5.3.0, current version 5.3.0)" for lib in libs)
    return "\n".join(lines) + "\n"


@dataclass
class FakeRunner:
    """Stand-in for the external tools; records every invocation."""

    qt_lib: str
    qt_base: str
    calls: List[List[str]] = field(default_factory=list)
    linked: Dict[str, List[str]] = field(default_factory=dict)
    fail_on: str | None = None

    def default_libs(self) -> List[str]:
        return [
            f"{self.qt_lib}/QtCore.framework/Versions/5/QtCore",
            f"{self.qt_lib}/QtGui.framework/Versions/5/QtGui",
            "/usr/lib/libSystem.B.dylib",
        ]

    def commands(self, tool: str) -> List[List[str]]:
        return [call for call in self.calls if call[0] == tool]

    def __call__(self, args: Sequence[str]) -> str:
        args = list(args)
        self.calls.append(args)
        tool = args[0]
        if self.fail_on is not None and " ".join(args).startswith(self.fail_on):
            raise ToolError(f"{tool}: exit status 1", command=args, returncode=1)
        if tool == "qmake":
            return f"QMake version 3.0\nUsing Qt version {QT_VERSION} in {self.qt_lib}\n"
        if tool == "qtpaths":
            return f"{self.qt_base}/plugins\n"
        if tool == "go" and args[1] == "list":
            return IMPORT_PATH + "\n"
        if tool == "go" and args[1] == "build":
            Path(args[3]).write_bytes(b"\xcf\xfa\xed\xfe binary")
            return ""
        if tool == "otool":
            return otool_output(args[2], self.linked.get(args[2], self.default_libs()))
        if tool == "hdiutil":
            Path(args[-1]).write_bytes(b"dmg")
        return ""


def _touch(path: Path, content: bytes = b"x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


@pytest.fixture
def qt_install(tmp_path: Path) -> Path:
    """A fake Qt installation holding files for every platform."""

    base = tmp_path / "Qt" / QT_VERSION
    lib = base / "lib"
    for name in ("Core", "Gui", "DBus"):
        _touch(lib / f"libQt5{name}.so.{QT_VERSION}")
    _touch(lib / "libicudata.so.52")
    for fw in ("QtCore", "QtGui", "QtWidgets"):
        _touch(lib / f"{fw}.framework" / "Versions" / "5" / fw)
    for name in ("Core", "Gui", "Network"):
        _touch(base / "bin" / f"Qt5{name}.dll")
    _touch(base / "bin" / "icudt52.dll")
    plugins = base / "plugins"
    for name in ("libqxcb.so", "libqcocoa.dylib", "qwindows.dll"):
        _touch(plugins / "platforms" / name)
    for name in ("libqjpeg.so", "libqjpeg.dylib", "qjpeg.dll"):
        _touch(plugins / "imageformats" / name)
    module = base / "qml" / "QtQuick.2"
    _touch(module / "qmldir", b"module QtQuick\nplugin qtquick2plugin\n")
    _touch(module / "libqtquick2plugin.dylib")
    _touch(module / ".DS_Store")
    return base


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "hello"
    _touch(project / "project" / "qml" / "main.qml", b"import QtQuick 2.2\nRectangle {}\n")
    _touch(project / "project" / "qml" / ".main.qml.swp")
    (project / "deploy_profile.yaml").write_text(PROFILE_YAML, encoding="utf-8")
    return project


@pytest.fixture
def fake_runner(qt_install: Path) -> FakeRunner:
    return FakeRunner(qt_lib=str(qt_install / "lib"), qt_base=str(qt_install))


@pytest.fixture
def toolchain(fake_runner: FakeRunner) -> Toolchain:
    return Toolchain(runner=fake_runner)


@pytest.fixture
def make_config(project_dir: Path):
    def factory(platform: str, *, dmg: bool = False) -> DeployConfig:
        config = DeployConfig.default(project_dir, load_env=False)
        config.platform = platform
        config.dmg = dmg
        return config

    return factory
