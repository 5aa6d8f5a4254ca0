import json
import logging
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

RECORD_FIELDS = ("path", "method", "status_code", "a", "b")
LOGGER_NAMES = ("", "uvicorn.access", "uvicorn.error")


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    method: str
    path: str

    def log_extra(self, **fields: Any) -> dict[str, Any]:
        return {"path": self.path, "method": self.method, **fields}


request_ctx: ContextVar[RequestContext | None] = ContextVar("request_ctx", default=None)


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line.

    The bound request context supplies ``request_id``, ``path`` and ``method``;
    explicit ``extra`` fields on the record take precedence.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        context = request_ctx.get()
        if context is not None:
            payload["request_id"] = context.request_id
            payload.update(context.log_extra())

        payload.update(
            (field, getattr(record, field))
            for field in RECORD_FIELDS
            if getattr(record, field, None) is not None
        )

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True)


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str | int = logging.INFO) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter())

    for name in LOGGER_NAMES:
        target = logging.getLogger(name)
        target.handlers = [handler]
        # uvicorn loggers would otherwise print twice through the root handler
        if name:
            target.propagate = False

    logging.getLogger().setLevel(_resolve_level(level))
