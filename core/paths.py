"""Filesystem locations used by textual-overlays."""

import os
from pathlib import Path

CONFIG_DIR = Path(
    os.environ.get("TEXTUAL_OVERLAYS_CONFIG_DIR", Path.home() / ".config" / "textual-overlays")
)
CONFIG_DIR.mkdir(parents=True, exist_ok=True)

OVERLAY_CONFIG_FILE = CONFIG_DIR / "overlays.json"
LOG_FILE = CONFIG_DIR / "overlays.log"
LOG_FILE_STR = str(LOG_FILE)
