"""Map mode-specific provider responses onto MODEL conversation messages."""

from __future__ import annotations

import base64
import binascii
import logging

from .commands import ClassifiedInput, RequestMode
from .exceptions import ResponseNormalizationError
from .models import Author, Message, MessageIdFactory, Reference
from .provider import ImageResponse, ProviderResponse, TextResponse

LOGGER = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


def image_caption(prompt: str) -> str:
    return f'Here is my take on: "{prompt}"'


def _encode_payload(data: bytes | str) -> str:
    """Return the base64 text for an inline payload.

    The SDK hands back raw bytes; dict-shaped responses carry base64 text,
    which is validated rather than re-encoded.
    """
    if isinstance(data, (bytes, bytearray)):
        return base64.b64encode(bytes(data)).decode("ascii")
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ResponseNormalizationError("Inline image data is not valid base64.") from exc
    return data


class ResponseNormalizer:
    """Turn a TextResponse or ImageResponse into one MODEL message."""

    def __init__(self, id_factory: MessageIdFactory | None = None) -> None:
        self.id_factory = id_factory or MessageIdFactory()

    def normalize(self, request: ClassifiedInput, response: ProviderResponse) -> Message:
        """Normalize ``response`` for the mode ``request`` was classified as."""
        if request.mode is RequestMode.IMAGE:
            if not isinstance(response, ImageResponse):
                raise ResponseNormalizationError("Expected an image response.")
            return self._normalize_image(request.prompt, response)
        if not isinstance(response, TextResponse):
            raise ResponseNormalizationError("Expected a text response.")
        return self._normalize_text(response)

    def _normalize_image(self, prompt: str, response: ImageResponse) -> Message:
        for part in response.parts:
            if part.inline_data:
                return Message(
                    author=Author.MODEL,
                    text=image_caption(prompt),
                    id=self.id_factory.next_id("-image"),
                    image_url=PNG_DATA_URI_PREFIX + _encode_payload(part.inline_data),
                )
        raise ResponseNormalizationError("No image data received from the provider.")

    def _normalize_text(self, response: TextResponse) -> Message:
        references: tuple[Reference, ...] | None = None
        if response.grounding_chunks is not None:
            references = tuple(
                Reference(uri=chunk.uri, title=chunk.title)
                for chunk in response.grounding_chunks
                if chunk.uri and chunk.title
            )
            dropped = len(response.grounding_chunks) - len(references)
            if dropped:
                LOGGER.debug(
                    "normalizer.references.dropped",
                    extra={"event": "normalizer.references.dropped", "count": dropped},
                )
        return Message(
            author=Author.MODEL,
            text=response.text,
            id=self.id_factory.next_id("-text"),
            references=references,
        )
