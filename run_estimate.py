"""CLI launcher for enthalpy queries without installing the package."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the local src directory is available for direct execution without installation.
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))

from steam_enthalpy.cli import main


if __name__ == "__main__":
    sys.exit(main())
