"""Logging setup for the API and CLI with credential redaction."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Optional

REDACTED = "[redacted]"
NO_REQUEST_ID = "-"

_PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"

# (pattern, replacement) pairs applied to every record before any configured secret.
_MASKS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-._~+/=]+)", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"\bsk-[A-Za-z0-9\-_]{8,}"), REDACTED),
)

_ROUTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx")


class Redactor:
    """Replace provider credentials and configured secrets in text."""

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        self._secrets = sorted(
            {secret.strip() for secret in secrets if secret and secret.strip()},
            key=len,
            reverse=True,
        )

    def __call__(self, text: str) -> str:
        for pattern, replacement in _MASKS:
            text = pattern.sub(replacement, text)
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text


class SensitiveDataFilter(logging.Filter):
    """Redact the rendered message and string ``extra`` attributes of each record."""

    def __init__(self, secrets: Iterable[str]):
        super().__init__()
        self._redact = Redactor(secrets)

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - standard interface
        message = record.getMessage()
        cleaned = self._redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = ()

        for key, value in list(vars(record).items()):
            if key in {"msg", "message"} or not isinstance(value, str):
                continue
            setattr(record, key, self._redact(value))

        if not getattr(record, "request_id", None):
            record.request_id = NO_REQUEST_ID
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, carrying the request id when one is bound."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: dict[str, Optional[str]] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id and request_id != NO_REQUEST_ID:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True)


def configure_logging(level_name: str, fmt: str, secrets: Iterable[str]) -> None:
    """Send all logging to one redacting stderr handler.

    ``fmt`` is ``plain`` or ``json``. Server and HTTP client loggers are routed
    through the root handler so their lines are redacted too.
    """

    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    redaction = SensitiveDataFilter(secrets)

    handler = logging.StreamHandler()
    if (fmt or "plain").lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    handler.addFilter(redaction)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.captureWarnings(True)

    for name in _ROUTED_LOGGERS:
        routed = logging.getLogger(name)
        routed.handlers = []
        routed.setLevel(level)
        routed.propagate = True


__all__ = ["JsonFormatter", "Redactor", "SensitiveDataFilter", "configure_logging"]
