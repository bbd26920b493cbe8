"""Domain exception hierarchy for the mentor chat application."""

from __future__ import annotations


class MentorChatError(RuntimeError):
    """Base class for all domain-level chat errors."""


class ProviderError(MentorChatError):
    """Raised when the generation provider fails or returns an unusable response."""


class ProviderConnectionError(ProviderError):
    """Raised when the generation provider cannot be reached."""


class ProviderAuthError(ProviderError):
    """Raised when no API key is available for the generation provider."""


class ResponseNormalizationError(ProviderError):
    """Raised when a provider response lacks the fields its request mode requires."""


class InputRejected(MentorChatError):
    """Raised when a submission is empty or arrives while a request is in flight."""


class ConfigValidationError(MentorChatError):
    """Raised when configuration cannot be validated safely."""
