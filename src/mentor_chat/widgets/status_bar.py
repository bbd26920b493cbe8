"""Status bar widget for request state and conversation telemetry."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import Label, Static


class StatusBar(Static):
    """Render compact runtime status.

    Segments (left to right):
        ● idle  |  Text: gemini-2.5-flash  |  Image: gemini-2.5-flash-image  |  Messages: 3
    """

    DEFAULT_CSS = """
    StatusBar {
        layout: horizontal;
        height: auto;
    }
    StatusBar Label {
        margin-right: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Label("● idle", id="status_state")
        yield Label("|")
        yield Label("Text: -", id="status_text_model")
        yield Label("|")
        yield Label("Image: -", id="status_image_model")
        yield Label("|")
        yield Label("Messages: 0", id="status_messages")

    def set_status(
        self,
        *,
        awaiting_response: bool,
        text_model: str,
        image_model: str,
        message_count: int,
    ) -> None:
        """Update all status segment labels."""
        state_text = "◌ awaiting response" if awaiting_response else "● idle"
        self.query_one("#status_state", Label).update(state_text)
        self.query_one("#status_text_model", Label).update(f"Text: {text_model}")
        self.query_one("#status_image_model", Label).update(f"Image: {image_model}")
        self.query_one("#status_messages", Label).update(f"Messages: {message_count}")
