"""Pure input classification for the /imagine command and grounded chat."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

IMAGINE_COMMAND = "/imagine"
IMAGINE_PREFIX = f"{IMAGINE_COMMAND} "


class RequestMode(str, Enum):
    """Which generation capability a submission is routed to."""

    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class ClassifiedInput:
    """Result of classifying raw user input."""

    mode: RequestMode
    prompt: str


def is_submittable(text: str) -> bool:
    """Return False for empty input and for a bare ``/imagine`` with no prompt."""
    normalized = text.strip()
    return bool(normalized) and normalized != IMAGINE_COMMAND


def classify_input(text: str) -> ClassifiedInput:
    """Route trimmed input to image mode on an exact ``/imagine `` prefix.

    The image prompt is the remainder after the prefix, kept verbatim; anything
    else is a grounded text prompt.
    """
    normalized = text.strip()
    if normalized.startswith(IMAGINE_PREFIX):
        return ClassifiedInput(
            mode=RequestMode.IMAGE, prompt=normalized[len(IMAGINE_PREFIX) :]
        )
    return ClassifiedInput(mode=RequestMode.TEXT, prompt=normalized)
