"""Overlays: content widgets shown above a dimmed, full-document backdrop.

An app has one OverlayManager, which owns at most one open overlay. Showing
runs in order: the backdrop fades in, then the content is mounted, measured
and placed, then the content fades in, then the ``callback`` setting runs.
``show`` returns straight away with an OverlayHandle that can be awaited for
that last step.
"""

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Literal

from textual import events
from textual.app import App
from textual.containers import Container
from textual.dom import DOMNode
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Button

from commands.messages import OverlayClosed, OverlayShown
from core.paths import LOG_FILE_STR
from core.settings import load_overlay_defaults, merge_settings

logging.basicConfig(
    filename=LOG_FILE_STR,
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s"
)

DEFAULT_FADE_MS = 200
BACKDROP_CLASS = "overlay-backdrop"
BACKDROP_OPACITY = 0.75
OVERLAY_LAYER = "overlay"
ESC_CHANNEL = "keydown.show_overlay"
CLOSE_BINDING = "close"
# Refreshes to wait for fresh content to get a size before placing it anyway
LAYOUT_ATTEMPTS = 20


class Overlay(Container):
    """Base overlay class with optional width/height configuration.

    Activation handlers can be bound to descendants by selector; they receive
    the Button.Pressed or Click event and may stop it.
    """

    DEFAULT_CSS = """
    Overlay {
        layer: overlay;
        position: absolute;
        width: auto;
        height: auto;
        max-width: 80%;
        padding: 1 2;
        background: $surface;
        border: round $primary;
    }
    """

    def __init__(self, width: int = None, height: int = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._activation_bindings = []
        self.add_class("overlay")
        # Apply custom dimensions if provided
        if width:
            self.styles.width = width
        if height:
            self.styles.height = height

    def bind_activation(self, selector: str, handler: Callable, name: str | None = None):
        """Bind ``handler`` to activation of descendants matching ``selector``.

        A named binding replaces an earlier binding with the same name.
        """
        if name is not None:
            self._activation_bindings = [b for b in self._activation_bindings if b[2] != name]
        self._activation_bindings.append((selector, handler, name))

    def overlay_placed(self):
        """Called once the overlay has been positioned and made visible."""

    def close(self):
        close_overlay(self)

    def _activate(self, widget: Widget, event):
        for selector, handler, _name in list(self._activation_bindings):
            matches = {id(node) for node in self.query(selector)}
            # The activated widget or one of its ancestors inside this overlay
            node = widget
            while node is not None and node is not self:
                if id(node) in matches:
                    handler(event)
                    break
                node = node.parent

    def on_button_pressed(self, event: Button.Pressed):
        self._activate(event.button, event)

    def on_click(self, event: events.Click):
        # Buttons report activation through Button.Pressed
        if event.widget is not None and not isinstance(event.widget, Button):
            self._activate(event.widget, event)


class Backdrop(Widget):
    """Dims everything behind an overlay."""

    DEFAULT_CSS = """
    Backdrop {
        layer: overlay;
        dock: top;
        width: 100%;
        background: black;
        opacity: 0;
    }
    """


@dataclass(frozen=True)
class Placement:
    """Where an overlay goes: ``top`` from the document or viewport top, and
    horizontally centred by sitting at ``left`` shifted by ``margin_left``."""

    top: float
    margin_left: float
    mode: Literal["absolute", "fixed"] = "absolute"
    left: str = "50%"


def fade_duration(fade_in) -> int:
    """Fade duration in milliseconds for a ``fade_in`` setting."""
    if not fade_in:
        return 0
    if isinstance(fade_in, (int, float)) and not isinstance(fade_in, bool):
        return fade_in
    return DEFAULT_FADE_MS


def compute_placement(position, scroll_y: float, viewport_height: float,
                      content_width: float, content_height: float) -> Placement:
    top = scroll_y
    mode = "absolute"

    if isinstance(position, (int, float)) and not isinstance(position, bool):
        top += position
    elif position == "center":
        top = scroll_y + viewport_height / 2 - content_height / 2
    elif position == "fixed":
        top = viewport_height / 2 - content_height / 2
        mode = "fixed"

    return Placement(top=top, margin_left=-(content_width / 2), mode=mode)


def apply_placement(widget: Widget, placement: Placement, viewport_width: float):
    if placement.mode == "fixed":
        # Docked widgets don't scroll with the screen
        widget.styles.dock = "top"
    left = viewport_width / 2 + placement.margin_left
    widget.styles.offset = (round(left), round(placement.top))


def document_height(screen: Screen) -> int:
    return max(screen.virtual_size.height, screen.size.height)


class OverlayHandle:
    """A single shown overlay."""

    def __init__(self, content: Widget, settings: dict, fade_ms: int):
        self.content = content
        self.settings = settings
        self.fade_ms = fade_ms
        self.backdrop: Backdrop | None = None
        self.placement: Placement | None = None
        self.attached = False
        self.completed = False
        self.closed = False
        self._finished = asyncio.Event()

    @property
    def fade_seconds(self) -> float:
        return self.fade_ms / 1000

    def _finish(self):
        self._finished.set()

    async def wait(self):
        """Wait until the overlay is fully displayed, or closed before that."""
        await self._finished.wait()


class OverlayManager:
    """Owns the open overlay of an app and the named key listener channels."""

    def __init__(self, app: App):
        self.app = app
        self.active: OverlayHandle | None = None
        self._key_listeners: dict[str, Callable[[events.Key], None]] = {}

    # === Key channels ===

    @property
    def channels(self) -> list[str]:
        return list(self._key_listeners)

    def listen(self, channel: str, handler: Callable[[events.Key], None]):
        """Register a key listener. A channel holds one listener at a time."""
        if channel in self._key_listeners:
            logging.debug(f"Replacing key listener on {channel}")
        self._key_listeners[channel] = handler

    def unlisten(self, channel: str):
        if self._key_listeners.pop(channel, None) is not None:
            logging.debug(f"Removed key listener on {channel}")

    def dispatch_key(self, event: events.Key):
        for handler in list(self._key_listeners.values()):
            handler(event)

    # === Lifecycle ===

    def show(self, content: Widget, settings: dict | None = None) -> OverlayHandle:
        """Show ``content`` as an overlay. Closes an overlay that is already open."""
        settings = merge_settings(load_overlay_defaults(), settings)

        if self.active is not None:
            logging.info("An overlay is already open, closing it first")
            self.close()

        handle = OverlayHandle(content, settings, fade_duration(settings.get("fade_in")))
        self.active = handle

        screen = self.app.screen
        handle.backdrop = Backdrop(classes=BACKDROP_CLASS)
        content.styles.layer = OVERLAY_LAYER
        if content.is_attached and content.parent is not screen:
            # Content stays where it is, so the backdrop goes right behind it
            parent = content.parent
            self._ensure_overlay_layer(parent)
            handle.backdrop.styles.height = max(parent.virtual_size.height, parent.size.height)
            parent.mount(handle.backdrop, before=content)
        elif content.is_attached:
            self._ensure_overlay_layer(screen)
            handle.backdrop.styles.height = document_height(screen)
            screen.mount(handle.backdrop, before=content)
        else:
            self._ensure_overlay_layer(screen)
            handle.backdrop.styles.height = document_height(screen)
            screen.mount(handle.backdrop)

        close_selector = settings.get("close_selector")
        if close_selector:
            if isinstance(content, Overlay):
                content.bind_activation(close_selector, partial(self._close_activated, handle), name=CLOSE_BINDING)
            else:
                logging.warning(f"{content!r} is not an Overlay, ignoring close_selector")

        if settings.get("esc_close"):
            self.listen(ESC_CHANNEL, partial(self._escape_pressed, handle))

        logging.info(f"Showing overlay {content!r} (fade {handle.fade_ms}ms)")
        if handle.fade_ms:
            handle.backdrop.styles.animate(
                "opacity",
                BACKDROP_OPACITY,
                duration=handle.fade_seconds,
                on_complete=partial(self.app.call_later, self._display, handle),
            )
        else:
            handle.backdrop.styles.opacity = BACKDROP_OPACITY
            self.app.call_later(self._display, handle)
        return handle

    def close(self):
        """Remove the open overlay and its backdrop. Does nothing if none is open."""
        handle = self.active
        if handle is None:
            return
        self.active = None
        handle.closed = True

        if handle.attached:
            handle.content.remove()
        if handle.backdrop is not None:
            handle.backdrop.remove()
        self.unlisten(ESC_CHANNEL)
        handle._finish()

        logging.info(f"Closed overlay {handle.content!r}")
        self.app.post_message(OverlayClosed(handle.content))

    async def _display(self, handle: OverlayHandle):
        if handle.closed:
            return
        content = handle.content
        handle.attached = True
        if not content.is_attached:
            content.styles.visibility = "hidden"
            await self.app.screen.mount(content)
            if handle.closed:
                return
        self._place_when_laid_out(handle)

    def _place_when_laid_out(self, handle: OverlayHandle, attempt: int = 0):
        """Place the content once layout has given it a size."""
        if handle.closed:
            return
        size = handle.content.outer_size
        if size.width and size.height:
            self._place(handle)
        elif attempt >= LAYOUT_ATTEMPTS:
            logging.warning(f"{handle.content!r} has no size after {attempt} refreshes, placing it anyway")
            self._place(handle)
        else:
            handle.content.call_after_refresh(self._place_when_laid_out, handle, attempt + 1)

    def _place(self, handle: OverlayHandle):
        if handle.closed:
            return
        content = handle.content
        screen = self.app.screen
        handle.placement = compute_placement(
            handle.settings.get("position"),
            screen.scroll_offset.y,
            screen.size.height,
            content.outer_size.width,
            content.outer_size.height,
        )
        apply_placement(content, handle.placement, screen.size.width)
        content.styles.visibility = "visible"
        if isinstance(content, Overlay):
            content.overlay_placed()

        if handle.fade_ms:
            content.styles.opacity = 0.0
            content.styles.animate(
                "opacity",
                1.0,
                duration=handle.fade_seconds,
                on_complete=partial(self.app.call_later, self._complete, handle),
            )
        else:
            self._complete(handle)

    def _complete(self, handle: OverlayHandle):
        if handle.closed:
            return
        handle.settings["callback"]()
        handle.completed = True
        handle._finish()
        self.app.post_message(OverlayShown(handle.content))

    def _close_activated(self, handle: OverlayHandle, event):
        if self.active is not handle:
            return
        handle.settings["on_close"]()
        self.close()
        event.prevent_default()
        event.stop()

    def _escape_pressed(self, handle: OverlayHandle, event: events.Key):
        if event.key == "escape" and self.active is handle:
            event.stop()
            self.close()

    def _ensure_overlay_layer(self, container: Widget):
        layers = tuple(container.styles.layers)
        if OVERLAY_LAYER not in layers:
            container.styles.layers = (*(layers or ("default",)), OVERLAY_LAYER)


def get_overlay_manager(app: App) -> OverlayManager:
    """Get the overlay manager of an app, creating it on first use."""
    manager = getattr(app, "_overlay_manager", None)
    if manager is None:
        manager = OverlayManager(app)
        app._overlay_manager = manager
    return manager


def show_overlay(content: Widget, settings: dict | None = None) -> OverlayHandle:
    return get_overlay_manager(content.app).show(content, settings)


def close_overlay(node: DOMNode):
    """Close the open overlay of the app ``node`` belongs to (node may be the app)."""
    get_overlay_manager(node.app).close()
