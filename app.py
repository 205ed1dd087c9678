from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Button, Footer, Static
import logging

from commands.messages import FormSubmitted
from core.paths import LOG_FILE_STR
from ui.controls import Anchor, Form, SubmitButton
from ui.dialog import dialog
from ui.overlay import Overlay, show_overlay
from ui.overlay_app import OverlayApp

logging.basicConfig(filename=LOG_FILE_STR, level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

# Run with: python app.py


class AboutOverlay(Overlay):
    def compose(self) -> ComposeResult:
        yield Static("textual-overlays demo")
        yield Static("Press escape or close to dismiss", classes="grey")
        yield Button("close", classes="close")


class DemoApp(OverlayApp):
    BINDINGS = [
        ("a", "about", "About"),
        ("n", "notice", "Notice"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Pressing these asks first")
            with Form(id="delete_form"):
                yield Static("Delete all scratch files")
                yield SubmitButton("Delete", data={"dialog": True, "text": "Delete all scratch files?"})
            yield Anchor(
                "Open the Textual docs",
                href="https://textual.textualize.io",
                data={"dialog": True, "text": "Leave for the docs?", "yes_text": "Go", "no_text": "Stay"},
            )
        yield Footer()

    def action_about(self):
        show_overlay(AboutOverlay(), {"position": "fixed", "fade_in": 300})

    def action_notice(self):
        dialog(self, {"text": "Nothing to see here", "yes_text": None})

    def on_form_submitted(self, event: FormSubmitted):
        logging.info(f"Form {event.form.id} submitted")
        self.notify("Scratch files deleted")


if __name__ == "__main__":
    DemoApp().run()
