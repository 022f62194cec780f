"""Deployment of Go/QML desktop applications into platform bundles."""

from importlib.metadata import PackageNotFoundError, version

from .build import clean, deploy
from .build_config import DeployConfig, PkgInfo, QtInfo, ToolNames
from .errors import DeployError, ProfileError, RelinkError, ToolError
from .profile import DeployProfile, load_profile

try:
    __version__ = version("qml-deploy")
except PackageNotFoundError:  # pragma: no cover - package metadata absent in dev
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "deploy",
    "clean",
    "DeployConfig",
    "PkgInfo",
    "QtInfo",
    "ToolNames",
    "DeployProfile",
    "load_profile",
    "DeployError",
    "ProfileError",
    "RelinkError",
    "ToolError",
]
