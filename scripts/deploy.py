"""Run the deployment CLI from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from qml_deploy.cli import main  # noqa: E402  (import after sys.path setup)


if __name__ == "__main__":
    raise SystemExit(main())
