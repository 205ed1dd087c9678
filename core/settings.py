"""Settings for overlays and dialogs.

This module provides:
- Built-in overlay and dialog defaults
- Shallow merging of caller settings over defaults
- Loading/saving user overlay defaults from config
"""

import json
import logging
from pathlib import Path

from core.paths import LOG_FILE_STR, OVERLAY_CONFIG_FILE

logging.basicConfig(
    filename=LOG_FILE_STR,
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s"
)


def noop():
    pass


# Default overlay settings
OVERLAY_DEFAULTS = {
    "fade_in": False,          # bool, or fade duration in milliseconds
    "position": 4,             # rows from the top, "center" or "fixed"
    "close_selector": ".close",
    "on_close": noop,
    "esc_close": True,
    "callback": noop,
}

# Static part of the dialog defaults; actions depend on the source widget
DIALOG_DEFAULTS = {
    "text": "Are you sure?",
    "yes_text": "Yes",
    "no_text": "No",
    "position": "center",
}

# Label used for the "no" choice when the "yes" choice is suppressed
ACKNOWLEDGE_LABEL = "OK"


def merge_settings(defaults: dict, overrides: dict | None = None) -> dict:
    """Merge caller overrides over defaults.

    Keys present in overrides win (even when the value is None), keys missing
    from overrides keep their default and unknown keys pass through. Values are
    replaced wholesale, nested dicts are not merged.
    """
    merged = dict(defaults)
    if overrides:
        merged.update(overrides)
    return merged


def load_overlay_defaults(path: str | Path | None = None) -> dict:
    """Load overlay defaults from the config file, falling back to built-ins."""
    config_file = Path(path) if path is not None else OVERLAY_CONFIG_FILE
    if not config_file.exists():
        return dict(OVERLAY_DEFAULTS)

    try:
        with open(config_file, "r") as f:
            user_defaults = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logging.error(f"Failed to load overlay defaults: {e}")
        return dict(OVERLAY_DEFAULTS)

    if not isinstance(user_defaults, dict):
        logging.error(f"Ignoring overlay defaults in {config_file}: expected an object")
        return dict(OVERLAY_DEFAULTS)

    logging.info(f"Loaded overlay defaults from {config_file}")
    return merge_settings(OVERLAY_DEFAULTS, user_defaults)


def save_overlay_defaults(values: dict, path: str | Path | None = None) -> bool:
    """Save user overlay defaults to the config file."""
    config_file = Path(path) if path is not None else OVERLAY_CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(values, f, indent=2)
        logging.info(f"Saved overlay defaults to {config_file}")
        return True
    except (TypeError, IOError) as e:
        logging.error(f"Failed to save overlay defaults: {e}")
        return False
