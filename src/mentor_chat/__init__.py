"""Top-level package for mentorchat."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import MentorChatApp
    from .commands import ClassifiedInput, RequestMode, classify_input
    from .config import ensure_config_dir, load_config
    from .dispatcher import RequestDispatcher
    from .exceptions import (
        ConfigValidationError,
        InputRejected,
        MentorChatError,
        ProviderError,
    )
    from .models import Author, Message, Reference
    from .normalizer import ResponseNormalizer
    from .orchestrator import ConversationOrchestrator
    from .provider import GeminiProvider
    from .state import ConversationState

# Symbol -> submodule; resolved lazily so the Textual UI stays optional at import time.
_EXPORTS: dict[str, str] = {
    "Author": "models",
    "ClassifiedInput": "commands",
    "ConfigValidationError": "exceptions",
    "ConversationOrchestrator": "orchestrator",
    "ConversationState": "state",
    "GeminiProvider": "provider",
    "InputRejected": "exceptions",
    "MentorChatApp": "app",
    "MentorChatError": "exceptions",
    "Message": "models",
    "ProviderError": "exceptions",
    "Reference": "models",
    "RequestDispatcher": "dispatcher",
    "RequestMode": "commands",
    "ResponseNormalizer": "normalizer",
    "classify_input": "commands",
    "ensure_config_dir": "config",
    "load_config": "config",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> Any:
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(import_module(f".{module_name}", __name__), name)
