"""Configuration loading and validation for the mentor chat TUI."""

from __future__ import annotations

from copy import deepcopy
import logging
import os
from pathlib import Path
import re
import tomllib
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .dispatcher import DEFAULT_PERSONA
from .exceptions import ConfigValidationError
from .orchestrator import DEFAULT_GREETING
from .provider import DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL

LOGGER = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "mentorchat"
CONFIG_PATH = CONFIG_DIR / "config.toml"

FALLBACK_API_KEY_ENV = "API_KEY"
HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}|#[0-9a-fA-F]{3}")
LOG_LEVELS = frozenset(logging.getLevelNamesMapping()) - {"NOTSET", "WARN", "FATAL"}


def _require_non_empty(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("Expected a string value.")
    normalized = value.strip()
    if not normalized:
        raise ValueError("String value must not be empty.")
    return normalized


class AppConfig(BaseModel):
    """Application metadata."""

    title: str = "MigosiDesigns AI Mentor"

    @field_validator("title", mode="before")
    @classmethod
    def _validate_title(cls, value: Any) -> str:
        return _require_non_empty(value)


class GeminiConfig(BaseModel):
    """Gemini credentials and model selection."""

    api_key: str = ""
    api_key_env: str = "GEMINI_API_KEY"
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    grounding_enabled: bool = True

    @field_validator("api_key", mode="before")
    @classmethod
    def _normalize_api_key(cls, value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("api_key must be a string.")
        return value.strip()

    @field_validator("api_key_env", "text_model", "image_model", mode="before")
    @classmethod
    def _validate_required_string(cls, value: Any) -> str:
        return _require_non_empty(value)


class MentorConfig(BaseModel):
    """Persona instruction and opening greeting."""

    persona: str = DEFAULT_PERSONA
    greeting: str = DEFAULT_GREETING

    @field_validator("persona", "greeting", mode="before")
    @classmethod
    def _validate_text(cls, value: Any) -> str:
        return _require_non_empty(value)


class UIConfig(BaseModel):
    """Bubble colors, timestamp display and where generated images are saved."""

    user_message_color: str = "#2563eb"
    assistant_message_color: str = "#14b8a6"
    show_timestamps: bool = True
    image_dir: str = "~/.local/state/mentorchat/images"

    @field_validator("image_dir", mode="before")
    @classmethod
    def _validate_image_dir(cls, value: Any) -> str:
        return _require_non_empty(value)

    @field_validator("user_message_color", "assistant_message_color", mode="before")
    @classmethod
    def _validate_hex_color(cls, value: Any) -> str:
        color = _require_non_empty(value)
        if HEX_COLOR.fullmatch(color) is None:
            raise ValueError(f"{color!r} is not a #RGB or #RRGGBB color.")
        return color


class KeybindsConfig(BaseModel):
    """Keyboard action mapping; a blank value leaves the action unbound."""

    send_message: str = "ctrl+enter"
    quit: str = "ctrl+q"
    scroll_up: str = "ctrl+k"
    scroll_down: str = "ctrl+j"

    @field_validator("*", mode="before")
    @classmethod
    def _validate_keybind(cls, value: Any) -> str:
        if isinstance(value, str):
            return value.strip()
        raise ValueError("keybinds must be strings.")


class LoggingConfig(BaseModel):
    """Where log records go and how they are formatted."""

    level: str = "INFO"
    structured: bool = True
    log_to_file: bool = False
    log_file_path: str = "~/.local/state/mentorchat/app.log"

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any) -> str:
        level = _require_non_empty(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {sorted(LOG_LEVELS)}, got {level!r}.")
        return level

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _validate_log_file_path(cls, value: Any) -> str:
        return _require_non_empty(value)


class Config(BaseModel):
    """Every config section, each filled with defaults when absent."""

    app: AppConfig = Field(default_factory=AppConfig)
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    mentor: MentorConfig = Field(default_factory=MentorConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    keybinds: KeybindsConfig = Field(default_factory=KeybindsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG: dict[str, dict[str, Any]] = Config().model_dump()


def ensure_config_dir(config_dir: Path | None = None) -> Path:
    """Create the config directory if needed; failures are logged, not raised."""
    target = CONFIG_DIR if config_dir is None else config_dir
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        LOGGER.warning("Cannot create config directory %s: %s", target, exc)
    return target


def _overlay(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Return ``defaults`` with ``overrides`` applied, descending into tables."""
    result = deepcopy(defaults)
    for name, override in overrides.items():
        current = result.get(name)
        if isinstance(current, dict) and isinstance(override, dict):
            result[name] = _overlay(current, override)
        else:
            result[name] = override
    return result


def _restrict_permissions(path: Path) -> None:
    """Keep the file owner-only on POSIX since it may hold an API key."""
    if os.name != "posix" or not path.is_file():
        return
    try:
        path.chmod(0o600)
    except OSError as exc:
        LOGGER.warning("Cannot restrict permissions on %s: %s", path, exc)


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    _restrict_permissions(path)
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        LOGGER.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    return data


def _validate_config(raw: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Validate the merged tables; any invalid value resets to the defaults."""
    try:
        config = Config.model_validate(raw)
    except ValidationError as exc:
        LOGGER.warning(
            "config.invalid",
            extra={"event": "config.invalid", "errors": exc.error_count()},
        )
        return deepcopy(DEFAULT_CONFIG)
    except (TypeError, ValueError) as exc:
        raise ConfigValidationError(f"Unable to validate configuration: {exc}") from exc
    return config.model_dump()


def load_config(config_path: Path | None = None) -> dict[str, dict[str, Any]]:
    """Read ``config.toml`` over the defaults and return validated sections.

    Pass ``config_path`` to read somewhere other than ``CONFIG_PATH``.
    """
    path = CONFIG_PATH if config_path is None else config_path
    ensure_config_dir(path.parent)
    return _validate_config(_overlay(DEFAULT_CONFIG, _read_toml(path)))


def resolve_api_key(
    gemini_config: dict[str, Any], environ: dict[str, str] | None = None
) -> str:
    """Return the configured key, else the named env var, else ``API_KEY``."""
    explicit = str(gemini_config.get("api_key") or "").strip()
    if explicit:
        return explicit
    env = os.environ if environ is None else environ
    env_name = str(gemini_config.get("api_key_env") or "").strip()
    for name in (env_name, FALLBACK_API_KEY_ENV):
        if name and env.get(name, "").strip():
            return env[name].strip()
    return ""
