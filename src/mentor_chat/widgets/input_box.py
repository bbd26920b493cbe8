"""Input row containing the message field, send button, and command hint menu."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, OptionList

INPUT_PLACEHOLDER = "Ask about design, or type '/imagine prompt'..."


class InputBox(Vertical):
    """Input region; the app handles submit and the slash hint menu."""

    DEFAULT_CSS = """
    InputBox {
        height: auto;
    }
    InputBox #input_row {
        height: auto;
    }
    InputBox #message_input {
        width: 1fr;
    }
    InputBox #slash_menu.hidden {
        display: none;
    }
    """

    def compose(self) -> ComposeResult:
        with Horizontal(id="input_row"):
            yield Input(placeholder=INPUT_PLACEHOLDER, id="message_input")
            yield Button("Send", id="send_button", variant="success")
        yield OptionList(id="slash_menu", classes="hidden")
