"""Text templates for generated bundle manifests."""

from __future__ import annotations

from xml.sax.saxutils import escape

from .build_config import PkgInfo

PKG_INFO = "APPL????\n"

QT_CONF_DARWIN = """[Paths]
Imports = Resources/qml
Qml2Imports = Resources/qml
"""

QT_CONF_LINUX = """[Paths]
Imports = qml
Qml2Imports = qml
"""

LAUNCHER_SH = """#!/bin/sh
appname=`basename $0 | sed s,\\.sh$,,`
dirname=`dirname $0`
tmp="${dirname#?}"

if [ "${dirname%$tmp}" != "/" ]; then
dirname=$PWD/$dirname
fi
LD_LIBRARY_PATH=$dirname
export LD_LIBRARY_PATH
$dirname/$appname "$@"
"""

INFO_PLIST_TMPL = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
	<key>NSPrincipalClass</key>
	<string>NSApplication</string>
	<key>CFBundleIconFile</key>
	<string>{icon}</string>
	<key>CFBundlePackageType</key>
	<string>APPL</string>
	<key>CFBundleGetInfoString</key>
	<string>Powered by Go QML</string>
	<key>CFBundleSignature</key>
	<string>????</string>
	<key>CFBundleExecutable</key>
	<string>{executable}</string>
	<key>CFBundleIdentifier</key>
	<string>{identifier}</string>
</dict>
</plist>
"""


def render_info_plist(info: PkgInfo, icon: str = "") -> str:
    return INFO_PLIST_TMPL.format(
        icon=escape(icon),
        executable=escape(info.name),
        identifier=escape(info.import_path),
    )


__all__ = [
    "PKG_INFO",
    "QT_CONF_DARWIN",
    "QT_CONF_LINUX",
    "LAUNCHER_SH",
    "INFO_PLIST_TMPL",
    "render_info_plist",
]
