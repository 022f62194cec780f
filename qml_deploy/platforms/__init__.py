"""Per-platform bundle layouts."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from .common import DeployContext
from .darwin import deploy_darwin
from .linux import deploy_linux
from .windows import deploy_windows

Deployer = Callable[[DeployContext], Path]

DEPLOYERS: Dict[str, Deployer] = {
    "darwin": deploy_darwin,
    "windows": deploy_windows,
    "linux": deploy_linux,
}

__all__ = ["DEPLOYERS", "Deployer", "DeployContext"]
