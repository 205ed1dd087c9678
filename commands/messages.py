from textual.message import Message
from textual.widget import Widget


class FormSubmitted(Message):
    """Message sent when a Form is submitted."""

    def __init__(self, form: Widget):
        super().__init__()
        self.form = form


class OverlayShown(Message):
    """Message sent to the app once an overlay is fully displayed."""

    def __init__(self, content: Widget):
        super().__init__()
        self.content = content


class OverlayClosed(Message):
    """Message sent to the app after an overlay has been removed."""

    def __init__(self, content: Widget):
        super().__init__()
        self.content = content
