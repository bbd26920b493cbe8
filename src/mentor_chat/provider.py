"""Async Gemini client wrapper for grounded text and image generation."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Protocol

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
import httpx

from .exceptions import (
    ProviderAuthError,
    ProviderConnectionError,
    ProviderError,
    ResponseNormalizationError,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"


@dataclass(frozen=True)
class GroundingChunk:
    """A web source as reported by search grounding; either field may be missing."""

    uri: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class TextResponse:
    """Grounded text answer.

    ``grounding_chunks`` is ``None`` when the response carried no grounding
    metadata at all, and a tuple (possibly empty) when it did.
    """

    text: str
    grounding_chunks: tuple[GroundingChunk, ...] | None = None


@dataclass(frozen=True)
class ResponsePart:
    """One content part of an image response; ``inline_data`` is None for text parts."""

    inline_data: bytes | str | None = None


@dataclass(frozen=True)
class ImageResponse:
    """Image-generation answer as an ordered list of content parts."""

    parts: tuple[ResponsePart, ...] = ()


ProviderResponse = TextResponse | ImageResponse


class GenerationProvider(Protocol):
    """The two generation capabilities the dispatcher consumes."""

    async def generate_text(
        self, prompt: str, grounding_enabled: bool = True
    ) -> TextResponse: ...

    async def generate_image(self, prompt: str) -> ImageResponse: ...


def _field(payload: Any, *names: str) -> Any:
    """Read the first present field from an SDK object or a plain dict."""
    for name in names:
        if isinstance(payload, dict):
            value = payload.get(name)
        else:
            value = getattr(payload, name, None)
        if value is not None:
            return value
    return None


class GeminiProvider:
    """Issue single, non-streaming generate_content calls against Gemini."""

    def __init__(
        self,
        api_key: str,
        text_model: str = DEFAULT_TEXT_MODEL,
        image_model: str = DEFAULT_IMAGE_MODEL,
        client: Any | None = None,
    ) -> None:
        self.api_key = api_key
        self.text_model = text_model
        self.image_model = image_model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ProviderAuthError(
                    "No Gemini API key configured. Set gemini.api_key or GEMINI_API_KEY."
                )
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _map_exception(self, exc: Exception) -> ProviderError:
        if isinstance(exc, ProviderError):
            return exc
        if isinstance(
            exc,
            (
                httpx.ConnectError,
                httpx.ConnectTimeout,
                httpx.ReadTimeout,
                httpx.NetworkError,
            ),
        ):
            return ProviderConnectionError("Unable to reach the Gemini API.")
        if isinstance(exc, genai_errors.APIError):
            return ProviderError(f"Gemini API error {exc.code}: {exc.message}")
        return ProviderError(f"Gemini request failed: {exc}")

    async def _generate(self, model: str, contents: Any, config: Any) -> Any:
        LOGGER.info(
            "provider.request.start",
            extra={"event": "provider.request.start", "model": model},
        )
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=model, contents=contents, config=config
            )
        except Exception as exc:  # noqa: BLE001 - external API can fail in many ways.
            mapped_exc = self._map_exception(exc)
            LOGGER.warning(
                "provider.request.failed",
                extra={
                    "event": "provider.request.failed",
                    "model": model,
                    "error_type": mapped_exc.__class__.__name__,
                },
            )
            raise mapped_exc from exc
        LOGGER.info(
            "provider.request.complete",
            extra={"event": "provider.request.complete", "model": model},
        )
        return response

    async def generate_text(
        self, prompt: str, grounding_enabled: bool = True
    ) -> TextResponse:
        """Request a text completion, optionally with Google Search grounding."""
        config = None
        if grounding_enabled:
            config = genai_types.GenerateContentConfig(
                tools=[genai_types.Tool(google_search=genai_types.GoogleSearch())]
            )
        response = await self._generate(self.text_model, prompt, config)
        return self.parse_text_response(response)

    async def generate_image(self, prompt: str) -> ImageResponse:
        """Request an image-only completion for the prompt."""
        config = genai_types.GenerateContentConfig(response_modalities=["IMAGE"])
        contents = genai_types.Content(
            role="user", parts=[genai_types.Part(text=prompt)]
        )
        response = await self._generate(self.image_model, contents, config)
        return self.parse_image_response(response)

    @staticmethod
    def _first_candidate(response: Any) -> Any:
        candidates = _field(response, "candidates")
        if isinstance(candidates, (list, tuple)) and candidates:
            return candidates[0]
        return None

    @classmethod
    def parse_text_response(cls, response: Any) -> TextResponse:
        """Convert a raw generate_content response into a TextResponse."""
        text = _field(response, "text")
        if not isinstance(text, str) or not text.strip():
            raise ResponseNormalizationError("Gemini returned no text.")

        metadata = _field(
            cls._first_candidate(response), "grounding_metadata", "groundingMetadata"
        )
        raw_chunks = _field(metadata, "grounding_chunks", "groundingChunks")
        if not isinstance(raw_chunks, (list, tuple)):
            return TextResponse(text=text)

        chunks: list[GroundingChunk] = []
        for raw_chunk in raw_chunks:
            web = _field(raw_chunk, "web")
            uri = _field(web, "uri")
            title = _field(web, "title")
            chunks.append(
                GroundingChunk(
                    uri=uri if isinstance(uri, str) else None,
                    title=title if isinstance(title, str) else None,
                )
            )
        return TextResponse(text=text, grounding_chunks=tuple(chunks))

    @classmethod
    def parse_image_response(cls, response: Any) -> ImageResponse:
        """Convert a raw generate_content response into an ImageResponse."""
        candidate = cls._first_candidate(response)
        if candidate is None:
            raise ResponseNormalizationError("Gemini returned no candidates.")
        raw_parts = _field(_field(candidate, "content"), "parts") or []

        parts: list[ResponsePart] = []
        for raw_part in raw_parts:
            inline = _field(raw_part, "inline_data", "inlineData")
            parts.append(ResponsePart(inline_data=_field(inline, "data")))
        return ImageResponse(parts=tuple(parts))
