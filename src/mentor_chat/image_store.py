"""On-disk copies of generated images so they can be opened outside the TUI."""

from __future__ import annotations

import base64
import binascii
import logging
import os
from pathlib import Path
import re

from .exceptions import MentorChatError
from .models import Message
from .normalizer import PNG_DATA_URI_PREFIX

LOGGER = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class ImageStoreError(MentorChatError):
    """Raised when a generated image cannot be written to disk."""


class ImageStore:
    """Write the PNG behind a message's ``data:`` URI into one directory."""

    def __init__(self, directory: str) -> None:
        self.directory = Path(directory).expanduser()

    def _ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        if os.name == "posix":
            try:
                self.directory.chmod(0o700)
            except OSError:
                LOGGER.warning("Unable to enforce 0700 permissions for %s", self.directory)

    def path_for(self, message: Message) -> Path:
        """Return ``<directory>/<message id>.png`` with the id made filename-safe."""
        return self.directory / f"{_UNSAFE_FILENAME_CHARS.sub('_', message.id)}.png"

    def save(self, message: Message) -> Path:
        """Decode the message's image and write it, returning the file path.

        Raises ImageStoreError when the message has no PNG data URI or the
        file cannot be written.
        """
        if not message.has_image or not str(message.image_url).startswith(
            PNG_DATA_URI_PREFIX
        ):
            raise ImageStoreError(f"Message {message.id!r} carries no PNG image.")
        payload = str(message.image_url).removeprefix(PNG_DATA_URI_PREFIX)
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ImageStoreError(f"Message {message.id!r} has corrupt image data.") from exc

        target = self.path_for(message)
        try:
            self._ensure_directory()
            target.write_bytes(data)
            if os.name == "posix":
                target.chmod(0o600)
        except OSError as exc:
            raise ImageStoreError(f"Unable to write image to {target}: {exc}") from exc
        LOGGER.info(
            "image.saved",
            extra={"event": "image.saved", "message_id": message.id, "path": str(target)},
        )
        return target
