"""Deployment routine for Windows: executable plus DLLs in one directory."""

from __future__ import annotations

from pathlib import Path

from ..fileops import copy_file
from .common import DeployContext, copy_modules, copy_plugins, short_qt_name


def deploy_windows(ctx: DeployContext) -> Path:
    qt_bin = Path(ctx.qt.base_path) / "bin"

    ctx.step("building executable")
    ctx.toolchain.build(ctx.pkg.import_path, ctx.path / f"{ctx.pkg.name}.exe")

    ctx.step("copying libs")
    for lib in ctx.profile.libraries_for("windows"):
        name = f"Qt5{short_qt_name(lib)}.dll"
        copy_file(qt_bin / name, ctx.path / name)
    for name in ctx.profile.extra_libraries("windows"):
        copy_file(qt_bin / name, ctx.path / name)

    ctx.step("copying plugins")
    copy_plugins(ctx, ctx.path, lambda name: f"q{name}.dll")

    ctx.step("copying modules")
    copy_modules(ctx, ctx.path / "qml", ctx.path)
    return ctx.path


__all__ = ["deploy_windows"]
