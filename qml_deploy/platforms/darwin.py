"""Deployment routine for macOS: an ``.app`` bundle and optional ``.dmg``."""

from __future__ import annotations

import os
from pathlib import Path

from ..fileops import copy_file, iter_files, write_file
from ..relink import relink
from ..templates import PKG_INFO, QT_CONF_DARWIN, render_info_plist
from .common import DeployContext, copy_modules, copy_plugins

QT_FRAMEWORK_VERSION = "5"


def bundle_contents(ctx: DeployContext) -> Path:
    return ctx.path / f"{ctx.pkg.name}.app" / "Contents"


def deploy_darwin(ctx: DeployContext) -> Path:
    qlib = ctx.qt.lib_path
    contents = bundle_contents(ctx)

    def relink_lenient(binary: Path) -> None:
        relink(ctx.toolchain, qlib, binary, strict=False, relink_base=ctx.config.relink_base)

    ctx.step("initial structure")
    contents.mkdir(parents=True)
    for name in ("MacOS", "Frameworks", "Plugins", "Resources"):
        (contents / name).mkdir()
    write_file(contents / "Info.plist", render_info_plist(ctx.pkg))
    write_file(contents / "PkgInfo", PKG_INFO)
    write_file(contents / "Resources" / "qt.conf", QT_CONF_DARWIN)
    write_file(contents / "Resources" / "empty.lproj", "")

    ctx.step("building executable")
    executable = contents / "MacOS" / ctx.pkg.name
    ctx.toolchain.build(ctx.pkg.import_path, executable)
    relink(ctx.toolchain, qlib, executable, strict=True, relink_base=ctx.config.relink_base)

    ctx.step("copying frameworks")
    for fw in ctx.profile.libraries_for("darwin"):
        rel = Path(f"{fw}.framework", "Versions", QT_FRAMEWORK_VERSION)
        target_dir = contents / "Frameworks" / rel
        target_dir.mkdir(parents=True, exist_ok=True)
        copy_file(Path(qlib) / rel / fw, target_dir / fw)
        relink_lenient(target_dir / fw)

    ctx.step("copying plugins")
    copy_plugins(
        ctx,
        contents / "Plugins",
        lambda name: f"libq{name}.dylib",
        after_copy=relink_lenient,
    )

    def relink_module(tree: Path) -> None:
        for dylib in iter_files(tree, ".dylib"):
            relink_lenient(dylib)

    ctx.step("copying modules")
    copy_modules(
        ctx,
        contents / "Resources" / "qml",
        contents / "Resources",
        after_copy=relink_module,
    )

    if ctx.config.dmg:
        ctx.step("creating disk image")
        os.symlink("/Applications", ctx.path / "Applications")
        ctx.toolchain.create_disk_image(ctx.path, ctx.path / f"{ctx.pkg.name}.dmg")

    return contents.parent


__all__ = ["deploy_darwin", "bundle_contents"]
