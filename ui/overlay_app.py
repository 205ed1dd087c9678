from textual import events
from textual.app import App

from ui.overlay import OverlayManager, get_overlay_manager
from ui.triggers import bind_dialog_triggers


class OverlayApp(App):
    """App that feeds key presses to overlay key channels and binds dialog triggers."""

    @property
    def overlays(self) -> OverlayManager:
        return get_overlay_manager(self)

    def on_key(self, event: events.Key):
        self.overlays.dispatch_key(event)

    def on_ready(self):
        bind_dialog_triggers(self.screen)
