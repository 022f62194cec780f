"""Deployment routine for Linux: a flat directory with a launcher script."""

from __future__ import annotations

from pathlib import Path

from ..fileops import copy_file, write_file
from ..templates import LAUNCHER_SH, QT_CONF_LINUX
from .common import DeployContext, copy_modules, copy_plugins, short_qt_name


def qt_library_names(lib: str, version: str) -> tuple[str, str]:
    """Installed and bundled file names, e.g. ``libQt5Core.so.5.3.0`` and ``libQt5Core.so.5``."""

    name = f"libQt5{short_qt_name(lib)}.so"
    return f"{name}.{version}", f"{name}.5"


def deploy_linux(ctx: DeployContext) -> Path:
    qlib = Path(ctx.qt.lib_path)

    ctx.step("building executable")
    ctx.toolchain.build(ctx.pkg.import_path, ctx.path / ctx.pkg.name)
    write_file(ctx.path / f"{ctx.pkg.name}.sh", LAUNCHER_SH, mode=0o755)

    ctx.step("copying libs")
    for lib in ctx.profile.libraries_for("linux"):
        installed, bundled = qt_library_names(lib, ctx.qt.version)
        copy_file(qlib / installed, ctx.path / bundled)
    for name in ctx.profile.extra_libraries("linux"):
        copy_file(qlib / name, ctx.path / name)

    ctx.step("copying plugins")
    copy_plugins(ctx, ctx.path, lambda name: f"libq{name}.so")

    ctx.step("copying modules")
    copy_modules(ctx, ctx.path / "qml", ctx.path)
    write_file(ctx.path / "qt.conf", QT_CONF_LINUX)
    return ctx.path


__all__ = ["deploy_linux", "qt_library_names"]
