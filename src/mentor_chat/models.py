"""Conversation turn data shapes shared by every component."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import itertools
import time

GREETING_MESSAGE_ID = "initial-message"


class Author(str, Enum):
    """Who produced a conversation turn."""

    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class Reference:
    """A supporting web source attached to a grounded answer."""

    uri: str
    title: str


@dataclass(frozen=True)
class Message:
    """One immutable turn in the conversation log.

    ``references`` is ``None`` when the provider returned no grounding metadata
    and an (possibly empty) tuple when it did. ``image_url`` holds a ``data:``
    URI for generated images. A message never carries both.
    """

    author: Author
    text: str
    id: str
    references: tuple[Reference, ...] | None = None
    image_url: str | None = None

    def __post_init__(self) -> None:
        if self.references is not None and self.image_url is not None:
            raise ValueError("A message cannot carry both references and an image.")
        if self.author is Author.USER and (
            self.references is not None or self.image_url is not None
        ):
            raise ValueError("User messages carry plain text only.")

    @property
    def has_references(self) -> bool:
        """Return True when references are present and non-empty."""
        return bool(self.references)

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)


class MessageIdFactory:
    """Produce ids that are unique for the lifetime of one conversation.

    Ids combine a millisecond timestamp with a per-factory sequence number so two
    turns created within the same millisecond still differ.
    """

    def __init__(self) -> None:
        self._sequence = itertools.count(1)

    def next_id(self, suffix: str = "") -> str:
        """Return a fresh id, optionally tagged with a suffix such as ``-image``."""
        millis = time.time_ns() // 1_000_000
        return f"{millis}-{next(self._sequence)}{suffix}"
