"""Desktop GUI launcher for the enthalpy estimator."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))

from steam_enthalpy.config import load_settings
from steam_enthalpy.ui import launch_gui


def main() -> None:
    """Start the interactive GUI with settings from the environment."""

    settings = load_settings()
    logging.basicConfig(level=settings["logging"]["level"], format="%(levelname)s: %(message)s")
    launch_gui(settings)


if __name__ == "__main__":
    main()
