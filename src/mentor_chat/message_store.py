"""Append-only, in-memory conversation log."""

from __future__ import annotations

from .models import Message


class MessageLog:
    """Ordered conversation history that only ever grows.

    There is no edit or delete operation; ids are checked for uniqueness on
    append.
    """

    def __init__(self, messages: list[Message] | None = None) -> None:
        self._messages: list[Message] = []
        self._ids: set[str] = set()
        for message in messages or []:
            self.append(message)

    @property
    def messages(self) -> tuple[Message, ...]:
        """Return an immutable snapshot of the log in append order."""
        return tuple(self._messages)

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def append(self, message: Message) -> None:
        """Append ``message``; a repeated id is a programming error."""
        if message.id in self._ids:
            raise ValueError(f"Duplicate message id {message.id!r}.")
        self._ids.add(message.id)
        self._messages.append(message)
