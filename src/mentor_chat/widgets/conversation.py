"""Scrollable conversation view widget."""

from __future__ import annotations

from pathlib import Path

from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Static

from ..models import Message
from .message import MessageBubble

PENDING_INDICATOR_ID = "pending-indicator"


class ConversationView(VerticalScroll):
    """A scrollable container that hosts message bubbles in append order."""

    async def add_message(
        self, message: Message, timestamp: str = "", image_path: Path | None = None
    ) -> MessageBubble:
        """Mount a bubble above the typing indicator (if shown) and scroll to it."""
        bubble = MessageBubble(message=message, timestamp=timestamp, image_path=image_path)
        indicator = self._pending_indicator()
        if indicator is not None:
            await self.mount(bubble, before=indicator)
        else:
            await self.mount(bubble)
        self.scroll_end(animate=False)
        return bubble

    def _pending_indicator(self) -> Static | None:
        try:
            return self.query_one(f"#{PENDING_INDICATOR_ID}", Static)
        except NoMatches:
            return None

    async def show_pending(self, text: str = "Mentor is thinking...") -> None:
        if self._pending_indicator() is None:
            await self.mount(Static(text, id=PENDING_INDICATOR_ID))
            self.scroll_end(animate=False)

    async def hide_pending(self) -> None:
        indicator = self._pending_indicator()
        if indicator is not None:
            await indicator.remove()
