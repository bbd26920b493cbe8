"""Message bubble widget for conversation rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.markdown import Markdown
from rich.style import Style
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ..models import Author, Message
from ..normalizer import PNG_DATA_URI_PREFIX


def describe_image(image_url: str) -> str:
    """Return a one-line summary of a generated PNG data URI."""
    payload = image_url.removeprefix(PNG_DATA_URI_PREFIX)
    size_bytes = len(payload) * 3 // 4 - payload.count("=")
    return f"🖼  Generated design concept (PNG, {size_bytes / 1024:.1f} KB)"


def image_summary(image_url: str, image_path: Path | None = None) -> Text:
    """Describe a generated image and, once saved, where to open it."""
    summary = Text(describe_image(image_url))
    if image_path is not None:
        summary.append("\nSaved to ")
        summary.append(str(image_path), style=Style(link=image_path.absolute().as_uri()))
    else:
        summary.append("\nNot saved to disk; see the log for details.")
    return summary


def reference_markdown(message: Message) -> str:
    """Render references as a markdown link list, or "" when there are none."""
    if not message.has_references:
        return ""
    lines = ["**References:**", ""]
    for reference in message.references or ():
        lines.append(f"- [{reference.title}]({reference.uri})")
    return "\n".join(lines)


class MessageBubble(Vertical):
    """Render one conversation turn with its optional image and references."""

    DEFAULT_CSS = """
    MessageBubble {
        height: auto;
        margin-bottom: 1;
        padding: 0 1;
    }
    MessageBubble > #header-block {
        padding: 0;
    }
    MessageBubble > #image-block {
        color: $accent;
    }
    MessageBubble > #references-block {
        color: $text-muted;
        border-top: solid $panel;
    }
    """

    def __init__(
        self,
        message: Message,
        timestamp: str = "",
        image_path: Path | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.message = message
        self.timestamp = timestamp
        self.image_path = image_path
        self.add_class(f"role-{message.author.value}")

    @property
    def role_prefix(self) -> str:
        return "You" if self.message.author is Author.USER else "Mentor"

    def _compose_header(self) -> str:
        if self.timestamp:
            return f"**{self.role_prefix}**  _{self.timestamp}_"
        return f"**{self.role_prefix}**"

    def compose(self) -> ComposeResult:
        yield Static(Markdown(self._compose_header()), id="header-block")
        yield Static(Markdown(self.message.text), id="content-block")
        if self.message.has_image:
            yield Static(
                image_summary(str(self.message.image_url), self.image_path),
                id="image-block",
            )
        references = reference_markdown(self.message)
        if references:
            yield Static(Markdown(references), id="references-block")
