"""Wrappers around the external tools used during deployment."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from loguru import logger

from .build_config import PkgInfo, QtInfo, ToolNames
from .errors import ToolError

Runner = Callable[[Sequence[str]], str]

_QMAKE_VERSION = re.compile(r"Qt version (\S+) in (\S+)")
# otool -L entry: "\t/path/to/lib (compatibility version 5.3.0, current version 5.3.0)"
_OTOOL_ENTRY = re.compile(r"^\s+(.+?) \(compatibility version [^)]*\)\s*$")


def run_command(args: Sequence[str], cwd: Optional[Path] = None) -> str:
    """Run ``args`` and return its stdout.

    Raises ``ToolError`` when the executable is missing or exits nonzero.
    """

    cmd = [str(arg) for arg in args]
    logger.trace("exec: {}", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=True,
            text=True,
            capture_output=True,
        )
    except FileNotFoundError as exc:
        raise ToolError(f"{cmd[0]}: executable not found", command=cmd) from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or exc.stdout or "").strip()
        message = f"{cmd[0]}: exit status {exc.returncode}"
        if detail:
            message = f"{message}: {detail}"
        raise ToolError(
            message,
            command=cmd,
            returncode=exc.returncode,
            stderr=exc.stderr or "",
        ) from exc
    return result.stdout


def parse_qmake_version(output: str) -> tuple[str, str]:
    """Extract ``(version, lib_path)`` from ``qmake -v`` output like::

        QMake version 3.0
        Using Qt version 5.3.0 in /usr/local/Cellar/qt5/5.3.0/lib
    """

    match = _QMAKE_VERSION.search(output)
    if match is None:
        raise ToolError("qt info: qmake unexpected output")
    return match.group(1), match.group(2)


def parse_plugin_dir(output: str) -> str:
    """Turn ``qtpaths --plugin-dir`` output into the Qt base path."""

    plugin_dir = output.strip()
    if not plugin_dir or not plugin_dir.endswith("plugins"):
        raise ToolError("qt info: qtpaths unexpected output")
    # drop "plugins" and the separator in front of it
    return plugin_dir[: -len("plugins") - 1]


def parse_linked_libraries(output: str) -> List[str]:
    """Install names listed by ``otool -L``, in order and without duplicates.

    Universal binaries print one section per architecture, so the same
    entry may appear several times.
    """

    libs: List[str] = []
    for line in output.splitlines():
        match = _OTOOL_ENTRY.match(line)
        if match and match.group(1) not in libs:
            libs.append(match.group(1))
    return libs


class Toolchain:
    """Invoke the Go, Qt and macOS tools named in a ``ToolNames``."""

    def __init__(
        self,
        tools: ToolNames | None = None,
        *,
        runner: Runner | None = None,
        cwd: Optional[Path] = None,
    ) -> None:
        self.tools = tools or ToolNames()
        self.cwd = cwd
        self._runner = runner

    def run(self, *args: str | Path) -> str:
        if self._runner is not None:
            return self._runner([str(arg) for arg in args])
        return run_command(args, cwd=self.cwd)

    def qt_info(self) -> QtInfo:
        try:
            qmake_output = self.run(self.tools.qmake, "-v")
        except ToolError as exc:
            raise ToolError(f"qt info: qmake: {exc}") from exc
        version, lib_path = parse_qmake_version(qmake_output)

        try:
            qtpaths_output = self.run(self.tools.qtpaths, "--plugin-dir")
        except ToolError as exc:
            raise ToolError(f"qt info: qtpaths: {exc}") from exc
        base_path = parse_plugin_dir(qtpaths_output)
        return QtInfo(version=version, lib_path=lib_path, base_path=base_path)

    def pkg_info(self) -> PkgInfo:
        import_path = self.run(self.tools.go, "list", "-f", "{{.ImportPath}}").strip()
        if not import_path:
            raise ToolError("pkg info: go list printed nothing")
        return PkgInfo(name=import_path.rstrip("/").split("/")[-1], import_path=import_path)

    def build(self, import_path: str, target: Path) -> None:
        try:
            self.run(self.tools.go, "build", "-o", target, import_path)
        except ToolError as exc:
            raise ToolError(f"go build: {exc}") from exc

    def embed_resources(self) -> None:
        try:
            self.run(self.tools.rice, "embed-go")
        except ToolError as exc:
            raise ToolError(f"rice: {exc}") from exc

    def clean_resources(self) -> None:
        try:
            self.run(self.tools.rice, "clean")
        except ToolError as exc:
            raise ToolError(f"rice: {exc}") from exc

    def linked_libraries(self, binary: Path) -> List[str]:
        return parse_linked_libraries(self.run(self.tools.otool, "-L", binary))

    def change_install_name(self, binary: Path, old: str, new: str) -> None:
        self.run(self.tools.install_name_tool, "-change", old, new, binary)

    def create_disk_image(self, src_folder: Path, target: Path) -> None:
        self.run(self.tools.hdiutil, "create", "-srcfolder", src_folder, target)


__all__ = [
    "Toolchain",
    "run_command",
    "parse_qmake_version",
    "parse_plugin_dir",
    "parse_linked_libraries",
]
