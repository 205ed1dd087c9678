import os
import tempfile

# Keep logs and config away from the real home directory
os.environ.setdefault("TEXTUAL_OVERLAYS_CONFIG_DIR", tempfile.mkdtemp(prefix="textual-overlays-"))

import asyncio

import pytest
from textual.app import ComposeResult
from textual.widgets import Static

import core.settings
from commands.messages import FormSubmitted, OverlayClosed, OverlayShown
from ui.controls import Anchor, Form, SubmitButton
from ui.overlay_app import OverlayApp


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(core.settings, "OVERLAY_CONFIG_FILE", tmp_path / "overlays.json")


class PageApp(OverlayApp):
    """A small page with a form, a plain submit button and a link."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.submitted = []
        self.opened = []
        self.shown = []
        self.closed = []

    def compose(self) -> ComposeResult:
        with Form(id="form"):
            yield Static("Delete everything")
            yield SubmitButton("Delete", id="delete", data={"dialog": True, "text": "Really delete?"})
            yield SubmitButton("Save", id="save")
        yield Anchor("Docs", href="https://example.com/docs", id="docs",
                     data={"dialog": True, "yes_text": "Go", "no_text": "Stay"})
        yield SubmitButton("Orphan", id="orphan")

    def open_url(self, url: str, *, new_tab: bool = True) -> None:
        self.opened.append(url)

    def on_form_submitted(self, event: FormSubmitted):
        self.submitted.append(event.form)

    def on_overlay_shown(self, event: OverlayShown):
        self.shown.append(event.content)

    def on_overlay_closed(self, event: OverlayClosed):
        self.closed.append(event.content)


@pytest.fixture
def page_app():
    return PageApp()


async def wait_shown(pilot, handle, timeout=5):
    """Let the overlay run through its fades and callback."""
    await pilot.pause()
    await asyncio.wait_for(handle.wait(), timeout)
    await pilot.pause()


async def settle(pilot):
    await pilot.pause()
    await pilot.pause()
