"""Confirmation dialogs.

USAGE:
    dialog(widget, settings)

``widget`` is the control the dialog stands in front of. With the default
"yes" action a SubmitButton submits its Form and an Anchor or Link opens its
address. Pass the app or a screen instead to just ask a question; then
``on_yes`` has to be supplied.

Settings are optional. On top of the overlay settings (see ui.overlay) they
can contain:

text      heading text, default "Are you sure?"
yes_text  label of the "yes" choice, default "Yes". None removes the choice,
          and the "no" label then defaults to "OK"
no_text   label of the "no" choice, default "No"
on_yes    zero-arg callable run when "yes" is chosen
on_no     zero-arg callable run when "no" is chosen, default closes the dialog
"""

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.dom import DOMNode
from textual.widgets import Button, Static

from core.paths import LOG_FILE_STR
from core.settings import ACKNOWLEDGE_LABEL, DIALOG_DEFAULTS, merge_settings
from core.source_role import default_yes_action
from ui.controls import role_of
from ui.overlay import Overlay, show_overlay

logging.basicConfig(
    filename=LOG_FILE_STR,
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s"
)


class ConfirmDialog(Overlay):
    DEFAULT_CSS = """
    ConfirmDialog {
        min-width: 30;
    }

    ConfirmDialog .dialog_heading {
        width: auto;
        text-style: bold;
        padding-bottom: 1;
    }

    ConfirmDialog .choices {
        width: auto;
        height: auto;
    }

    ConfirmDialog .choices Button {
        margin: 0 1;
    }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.settings = {}
        self.heading = Text("")
        self.add_class("generic_dialog")

    def configure(self, settings: dict):
        self.settings = settings

    def compose(self) -> ComposeResult:
        self.heading = Text(str(self.settings.get("text", "")))
        yield Static(self.heading, classes="dialog_heading")
        with Horizontal(classes="choices"):
            if self.settings.get("yes_text") is not None:
                yield Button(str(self.settings["yes_text"]), classes="yes", variant="primary")
            yield Button(str(self.settings.get("no_text", "")), classes="no")

    def overlay_placed(self):
        choices = self.query(".yes") or self.query(".no")
        if choices:
            choices.first().focus()


def dialog(source: DOMNode | None = None, settings: dict | None = None) -> ConfirmDialog:
    """Build a ConfirmDialog for ``source`` and show it."""
    user_settings = dict(settings or {})
    box = ConfirmDialog()

    defaults = merge_settings(DIALOG_DEFAULTS, {
        "source": source,
        "on_yes": default_yes_action(role_of(source), _open_url(source)),
        "on_no": box.close,
    })
    merged = merge_settings(defaults, user_settings)
    if "yes_text" in user_settings and user_settings["yes_text"] is None and "no_text" not in user_settings:
        merged["no_text"] = ACKNOWLEDGE_LABEL

    box.configure(merged)
    show_overlay(box, merged)

    box.bind_activation(".yes", lambda event: merged["on_yes"]())
    box.bind_activation(".no", lambda event: merged["on_no"]())
    logging.info(f"Dialog '{merged['text']}' shown for {source!r}")
    return box


def _open_url(source: DOMNode | None):
    def navigate(url: str):
        source.app.open_url(url)
    return navigate
