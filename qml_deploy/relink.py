"""Rewrite Qt library load paths of Mach-O binaries.

A binary built against a Qt installation records absolute install names::

    /usr/local/Cellar/qt5/5.3.0/lib/QtWidgets.framework/Versions/5/QtWidgets
    /usr/local/opt/qt5/lib/QtWidgets.framework/Versions/5/QtWidgets

After relinking they point into the application bundle::

    @executable_path/../Frameworks/QtWidgets.framework/Versions/5/QtWidgets
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

from loguru import logger

from .build_config import RELINK_BASE
from .errors import RelinkError, ToolError
from .toolchain import Toolchain

Change = Tuple[str, str]


def detect_alternative_prefix(libs: Sequence[str]) -> str:
    """Directory holding ``QtCore`` in the linked-library table, or ``""``.

    Homebrew links binaries against ``/usr/local/opt/qt5/lib`` while
    ``qmake`` reports the versioned Cellar path, so the prefix is taken from
    the binary itself.
    """

    for lib in libs:
        idx = lib.find("QtCore")
        if idx > 0:
            # drop the separator in front of QtCore
            return lib[: idx - 1]
    return ""


def replace_prefix(lib: str, prefixes: Sequence[str], relink_base: str) -> str:
    for prefix in prefixes:
        if prefix and (lib == prefix or lib.startswith(prefix.rstrip("/") + "/")):
            return relink_base + lib[len(prefix.rstrip("/")):]
    return lib


def plan_changes(
    libs: Sequence[str],
    qt_lib: str,
    *,
    strict: bool,
    relink_base: str = RELINK_BASE,
    binary: Path | str = "",
) -> List[Change]:
    """Compute ``(old, new)`` install names without touching the binary."""

    prefixes = [qt_lib]
    if strict:
        alternative = detect_alternative_prefix(libs)
        if not alternative:
            raise RelinkError(f"darwin relink: corrupt binary: {binary}")
        if alternative != qt_lib:
            prefixes.append(alternative)

    changes: List[Change] = []
    for lib in libs:
        new = replace_prefix(lib, prefixes, relink_base)
        if new != lib:
            changes.append((lib, new))
    return changes


def relink(
    toolchain: Toolchain,
    qt_lib: str,
    binary: Path,
    *,
    strict: bool = False,
    relink_base: str = RELINK_BASE,
) -> List[Change]:
    """Make the Qt libraries linked by ``binary`` relative to the executable.

    ``strict`` is used for the application executable, which must link
    ``QtCore``; plugins and frameworks are relinked leniently.
    """

    try:
        libs = toolchain.linked_libraries(binary)
    except ToolError as exc:
        raise RelinkError(f"darwin relink: {binary}: {exc}") from exc

    changes = plan_changes(libs, qt_lib, strict=strict, relink_base=relink_base, binary=binary)
    for old, new in changes:
        try:
            toolchain.change_install_name(binary, old, new)
        except ToolError as exc:
            raise RelinkError(f"darwin relink: {exc}") from exc
    logger.trace("relinked {} ({} entries)", binary, len(changes))
    return changes


__all__ = ["relink", "plan_changes", "detect_alternative_prefix", "replace_prefix"]
