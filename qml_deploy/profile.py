"""Loading of the declarative deploy profile.

The profile lists everything that has to be shipped next to the executable::

    libs:
      default: [QtCore, QtGui, QtQml, QtQuick]
      darwin: [QtPrintSupport]
    platforms:
      darwin: [cocoa]
      linux: [xcb]
      windows: [windows]
    modules:
      qml: [QtQuick.2, QtQuick/Window.2]
    imageformats: [jpeg, gif]
    extra:
      linux: [libicudata.so.52]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterator, List

import yaml
from loguru import logger

from .errors import ProfileError

_MAPPING_KEYS = ("libs", "platforms", "modules", "extra")
_LIST_KEYS = ("imageformats",)


@dataclass(slots=True, frozen=True)
class DeployProfile:
    """Libraries, plugins and module trees required per platform."""

    libs: Dict[str, List[str]] = field(default_factory=dict)
    platforms: Dict[str, List[str]] = field(default_factory=dict)
    modules: Dict[str, List[str]] = field(default_factory=dict)
    imageformats: List[str] = field(default_factory=list)
    extra: Dict[str, List[str]] = field(default_factory=dict)

    def libraries_for(self, platform: str) -> List[str]:
        """Shared libraries for ``platform``, common ones first."""

        return [*self.libs.get("default", []), *self.libs.get(platform, [])]

    def platform_plugins(self, platform: str) -> List[str]:
        return list(self.platforms.get(platform, []))

    def extra_libraries(self, platform: str) -> List[str]:
        return list(self.extra.get(platform, []))

    def module_paths(self) -> Iterator[PurePosixPath]:
        """Relative paths of module trees, e.g. ``qml/QtQuick.2``."""

        for category, names in self.modules.items():
            parts = [part for part in category.split("/") if part]
            for name in names:
                yield PurePosixPath(*parts, name)


def _string_list(key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ProfileError(f"profile: {key}: expected a list of strings")
    return list(value)


def _string_mapping(key: str, value: Any) -> Dict[str, List[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProfileError(f"profile: {key}: expected a mapping")
    return {str(name): _string_list(f"{key}.{name}", items) for name, items in value.items()}


def parse_profile(document: Any) -> DeployProfile:
    """Validate an already-decoded YAML document."""

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ProfileError("profile: top level must be a mapping")
    unknown = sorted(set(document) - set(_MAPPING_KEYS) - set(_LIST_KEYS))
    if unknown:
        raise ProfileError(f"profile: unknown keys: {', '.join(map(str, unknown))}")

    return DeployProfile(
        libs=_string_mapping("libs", document.get("libs")),
        platforms=_string_mapping("platforms", document.get("platforms")),
        modules=_string_mapping("modules", document.get("modules")),
        imageformats=_string_list("imageformats", document.get("imageformats")),
        extra=_string_mapping("extra", document.get("extra")),
    )


def load_profile(path: Path) -> DeployProfile:
    """Read and validate the profile stored at ``path``."""

    try:
        with open(path, encoding="utf-8") as stream:
            document = yaml.safe_load(stream)
    except OSError as exc:
        raise ProfileError(f"profile: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ProfileError(f"profile: {path}: {exc}") from exc

    profile = parse_profile(document)
    logger.debug("Loaded deploy profile from {}", path)
    return profile


__all__ = ["DeployProfile", "load_profile", "parse_profile"]
