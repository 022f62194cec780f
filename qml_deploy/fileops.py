"""File and directory copying helpers."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterator


def copy_file(src: Path, dst: Path) -> None:
    """Copy the contents and permission bits of ``src`` to ``dst``.

    The parent directory of ``dst`` must already exist.
    """

    shutil.copyfile(src, dst)
    shutil.copymode(src, dst)


def copy_tree(src: Path, dst: Path) -> None:
    """Recursively copy ``src`` into ``dst``, skipping dotfiles."""

    src = Path(src)
    dst = Path(dst)
    if not src.is_dir():
        raise FileNotFoundError(f"no such directory: {src}")
    dst.mkdir(parents=True, exist_ok=True)
    for root, dirs, files in os.walk(src):
        dirs.sort()
        rel = Path(root).relative_to(src)
        for name in dirs:
            (dst / rel / name).mkdir(exist_ok=True)
        for name in sorted(files):
            if name.startswith("."):
                continue
            copy_file(Path(root) / name, dst / rel / name)


def iter_files(root: Path, suffix: str) -> Iterator[Path]:
    """Regular files below ``root`` whose name ends with ``suffix``."""

    for path in sorted(Path(root).rglob(f"*{suffix}")):
        if path.is_file() and not path.is_symlink():
            yield path


def remove_tree(path: Path) -> None:
    """Remove ``path`` and everything below it, if it exists."""

    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def write_file(path: Path, content: str, mode: int = 0o644) -> None:
    path.write_text(content, encoding="utf-8")
    os.chmod(path, mode)


__all__ = ["copy_file", "copy_tree", "iter_files", "remove_tree", "write_file"]
