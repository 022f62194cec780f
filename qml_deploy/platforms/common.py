"""Pieces shared by the per-platform deploy routines."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from ..build_config import DeployConfig, PkgInfo, QtInfo
from ..fileops import copy_file, copy_tree
from ..profile import DeployProfile
from ..toolchain import Toolchain


@dataclass(slots=True)
class DeployContext:
    """Everything a platform routine needs to lay out a bundle."""

    config: DeployConfig
    pkg: PkgInfo
    qt: QtInfo
    profile: DeployProfile
    toolchain: Toolchain

    @property
    def path(self) -> Path:
        return self.config.output_dir

    @property
    def platform(self) -> str:
        return self.config.platform

    def step(self, message: str) -> None:
        logger.debug("deploy [{}]: {}", self.platform, message)


def short_qt_name(lib: str) -> str:
    """``QtQuick`` -> ``Quick``; names without the prefix are kept."""

    return lib[2:] if lib.startswith("Qt") else lib


def qt_plugin_source(ctx: DeployContext, category: str, filename: str) -> Path:
    return Path(ctx.qt.base_path) / "plugins" / category / filename


def copy_plugins(
    ctx: DeployContext,
    target_root: Path,
    filename: Callable[[str], str],
    after_copy: Optional[Callable[[Path], None]] = None,
) -> List[Path]:
    """Copy platform and image-format plugins into ``target_root/<category>``."""

    copied: List[Path] = []
    groups = (
        ("platforms", ctx.profile.platform_plugins(ctx.platform)),
        ("imageformats", ctx.profile.imageformats),
    )
    for category, names in groups:
        (target_root / category).mkdir(parents=True)
        for name in names:
            plugin = filename(name)
            target = target_root / category / plugin
            copy_file(qt_plugin_source(ctx, category, plugin), target)
            if after_copy is not None:
                after_copy(target)
            copied.append(target)
    return copied


def copy_modules(
    ctx: DeployContext,
    qml_target: Path,
    modules_root: Path,
    after_copy: Optional[Callable[[Path], None]] = None,
) -> List[Path]:
    """Copy the project's QML sources and every module tree in the profile."""

    copy_tree(ctx.config.qml_dir, qml_target)
    copied: List[Path] = []
    for rel in ctx.profile.module_paths():
        source = Path(ctx.qt.base_path).joinpath(*rel.parts)
        target = modules_root.joinpath(*rel.parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        copy_tree(source, target)
        if after_copy is not None:
            after_copy(target)
        copied.append(target)
    return copied


__all__ = [
    "DeployContext",
    "short_qt_name",
    "qt_plugin_source",
    "copy_plugins",
    "copy_modules",
]
