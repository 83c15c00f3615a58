import json
import logging
import random
from datetime import datetime, timezone

# LogRecord attributes that are never copied into the JSON payload
_RESERVED = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "created",
        "msecs",
        "relativeCreated",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "exc_info",
        "exc_text",
        "stack_info",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """One JSON object per log line.

    The payload carries time (ISO-8601 UTC), level, logger name and message,
    plus every attribute passed through `extra=` (event, order_id, ...).
    Dict messages are merged into the payload. Exceptions are rendered
    under `exception`.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        for key, value in record.__dict__.items():
            if key in _RESERVED or key in payload:
                continue
            try:
                json.dumps(value)
            except TypeError:
                value = str(value)
            payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class SamplingFilter(logging.Filter):
    """Probabilistically drop records at the given levels.

    Records whose message is listed in `allow_events` are always kept, as
    are records at levels outside `levels`.
    """

    def __init__(self, rate: float = 1.0, levels: list[str] | None = None, allow_events: list[str] | None = None):
        super().__init__()
        self.rate = max(0.0, min(1.0, float(rate)))
        self.levels = set(levels or ["INFO"])
        self.allow_events = set(allow_events or [])

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if record.levelname not in self.levels:
            return True
        if record.msg in self.allow_events:
            return True
        if self.rate >= 1.0:
            return True
        if self.rate <= 0.0:
            return False
        return random.random() < self.rate
