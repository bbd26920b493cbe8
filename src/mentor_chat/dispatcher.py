"""Build and issue exactly one provider request per classified submission."""

from __future__ import annotations

import logging

from .commands import ClassifiedInput, RequestMode
from .exceptions import ProviderError
from .provider import GenerationProvider, ProviderResponse

LOGGER = logging.getLogger(__name__)

DEFAULT_PERSONA = (
    "You are MigosiDesigns, a friendly and expert graphic design mentor. "
    "Your goal is to guide and assist users with their graphic design questions. "
    "Provide encouraging, insightful, and practical advice."
)


def build_persona_prompt(persona: str, prompt: str) -> str:
    """Prefix the user's prompt with the persona instruction."""
    return f"{persona} User prompt: {prompt}"


class RequestDispatcher:
    """Select the request shape for a mode and await a single provider response."""

    def __init__(
        self,
        provider: GenerationProvider,
        persona: str = DEFAULT_PERSONA,
        grounding_enabled: bool = True,
    ) -> None:
        self.provider = provider
        self.persona = persona.strip() or DEFAULT_PERSONA
        self.grounding_enabled = grounding_enabled

    async def dispatch(self, request: ClassifiedInput) -> ProviderResponse:
        """Issue one request for ``request`` with no retries.

        Raises ProviderError for any failure, including unexpected exceptions
        from the provider implementation.
        """
        LOGGER.info(
            "dispatch.request",
            extra={"event": "dispatch.request", "mode": request.mode.value},
        )
        try:
            if request.mode is RequestMode.IMAGE:
                return await self.provider.generate_image(request.prompt)
            return await self.provider.generate_text(
                build_persona_prompt(self.persona, request.prompt),
                grounding_enabled=self.grounding_enabled,
            )
        except ProviderError:
            raise
        except Exception as exc:  # noqa: BLE001 - provider implementations vary.
            raise ProviderError(f"Provider request failed: {exc}") from exc
