"""Dialogs declared on controls.

A SubmitButton or Anchor created with ``data={"dialog": True}`` asks for
confirmation before doing its job. ``text``, ``yes_text`` and ``no_text`` in
``data`` replace the dialog defaults when set.

    SubmitButton("Delete", data={"dialog": True, "text": "Delete this file?"})

bind_dialog_triggers() has to run once the controls are mounted; controls
mounted after that are not covered.
"""

import logging
from functools import partial

from textual.dom import DOMNode

from core.paths import LOG_FILE_STR
from ui.controls import Activatable, Activation, Anchor, SubmitButton
from ui.dialog import dialog

logging.basicConfig(
    filename=LOG_FILE_STR,
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s"
)

DATA_SETTINGS = ("text", "yes_text", "no_text")


def trigger_settings(data: dict) -> dict:
    """Dialog settings for a trigger control's data attributes."""
    settings = {"fade_in": True}
    for key in DATA_SETTINGS:
        if data.get(key):
            settings[key] = data[key]
    return settings


def open_trigger_dialog(control: Activatable, activation: Activation):
    dialog(control, trigger_settings(control.data))
    activation.prevent_default()


def bind_dialog_triggers(root: DOMNode) -> list:
    """Bind a dialog to every trigger control under ``root``."""
    bound = []
    for control in root.query("SubmitButton, Anchor"):
        if not isinstance(control, (SubmitButton, Anchor)) or control.data.get("dialog") is not True:
            continue
        if getattr(control, "_dialog_bound", False):
            continue
        control.bind_activation(partial(open_trigger_dialog, control))
        control._dialog_bound = True
        bound.append(control)

    logging.info(f"Bound dialogs to {len(bound)} trigger controls")
    return bound
