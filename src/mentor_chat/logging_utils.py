"""Logging bootstrap utilities with optional structured output."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import os
from pathlib import Path
from typing import Any

APP_LOGGER_PREFIX = "mentor_chat"
NOISY_LIBRARY_LOGGERS = ("httpx", "httpcore", "google_genai")

# Every attribute a bare LogRecord carries; anything else arrived via ``extra``.
_STANDARD_LOG_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per record, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOG_ATTRS:
                data[key] = value
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str, separators=(",", ":"))


def _app_only(record: logging.LogRecord) -> bool:
    return record.name.startswith(APP_LOGGER_PREFIX)


def configure_logging(logging_config: dict[str, Any]) -> None:
    """Configure root logging according to the ``[logging]`` config section.

    The console only receives warnings from this package so it does not draw
    over the TUI; the optional log file receives everything at ``level``.
    """
    level = getattr(logging, str(logging_config.get("level", "INFO")).upper(), logging.INFO)
    formatter: logging.Formatter
    if bool(logging_config.get("structured", True)):
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    for logger_name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(max(level, logging.WARNING))
    stderr_handler.addFilter(_app_only)
    root.addHandler(stderr_handler)

    if bool(logging_config.get("log_to_file", False)):
        target = Path(
            str(logging_config.get("log_file_path", "~/.local/state/mentorchat/app.log"))
        ).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root.addHandler(file_handler)
        if os.name == "posix":
            try:
                target.chmod(0o600)
            except OSError:
                logging.getLogger(__name__).warning(
                    "Unable to enforce 0600 permissions for %s", target
                )
