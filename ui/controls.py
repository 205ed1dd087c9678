"""Document controls a dialog can be triggered from.

Form, SubmitButton and Anchor play the parts of an HTML form, a submit button
and a link. The two clickable controls carry ``data`` attributes and
element-bound activation handlers that may cancel the control's default
action (submitting or following), which is how a dialog gates the real
action.
"""

from textual import events
from textual.binding import Binding
from textual.containers import Vertical
from textual.dom import DOMNode
from textual.widgets import Button, Static
from textual.widgets import Link as LinkWidget

from commands.messages import FormSubmitted
from core.source_role import Link, Other, SourceRole, Submit


class Activation:
    """Passed to activation handlers; lets them cancel the default action."""

    def __init__(self, control):
        self.control = control
        self.default_prevented = False

    def prevent_default(self):
        self.default_prevented = True


class Activatable:
    """Mixin for controls whose default action runs after activation handlers."""

    def bind_activation(self, handler):
        if not hasattr(self, "_activation_handlers"):
            self._activation_handlers = []
        self._activation_handlers.append(handler)

    def unbind_activation(self, handler=None):
        """Remove one handler, or all of them when no handler is given."""
        handlers = getattr(self, "_activation_handlers", [])
        if handler is None:
            handlers.clear()
        elif handler in handlers:
            handlers.remove(handler)

    @property
    def activation_handlers(self) -> list:
        return list(getattr(self, "_activation_handlers", []))

    def run_activation(self) -> bool:
        """Run the bound handlers. Returns True if the default action should run."""
        activation = Activation(self)
        for handler in self.activation_handlers:
            handler(activation)
        return not activation.default_prevented


class Form(Vertical):
    """Container submitted by the SubmitButtons inside it."""

    DEFAULT_CSS = """
    Form {
        height: auto;
    }
    """

    def submit(self):
        self.post_message(FormSubmitted(self))

    def on_button_pressed(self, event: Button.Pressed):
        if isinstance(event.button, SubmitButton):
            event.stop()
            self.submit()


class SubmitButton(Activatable, Button):
    """A button that submits its enclosing Form."""

    def __init__(self, *args, data: dict | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.data = dict(data or {})

    def press(self):
        if self.disabled or not self.display:
            return self
        if not self.run_activation():
            return self
        return super().press()


class Anchor(Activatable, Static):
    """A focusable piece of text that opens ``href`` when activated."""

    can_focus = True

    BINDINGS = [Binding("enter", "activate", "Follow link", show=False)]

    DEFAULT_CSS = """
    Anchor {
        width: auto;
        color: $accent;
        text-style: underline;
    }
    """

    def __init__(self, text: str, href: str = "", *, data: dict | None = None, **kwargs):
        super().__init__(text, **kwargs)
        self.href = href
        self.data = dict(data or {})

    def on_click(self, event: events.Click):
        event.stop()
        self.activate()

    def action_activate(self):
        self.activate()

    def activate(self):
        if self.run_activation():
            self.follow()

    def follow(self):
        self.app.open_url(self.href)


def role_of(node: DOMNode | None) -> SourceRole:
    """Work out the role of the node a dialog was invoked on."""
    if isinstance(node, SubmitButton):
        form = next((a for a in node.ancestors if isinstance(a, Form)), None)
        return Submit(form)
    if isinstance(node, Anchor):
        return Link(node.href)
    if isinstance(node, LinkWidget):
        return Link(node.url)
    return Other()
