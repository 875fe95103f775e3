import logging
import os
import json
from typing import Optional

from .observability import get_structured_logger

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = os.getenv("LOG_FORMAT", "json").lower()  # 'json' or 'plain'

# LogRecord attributes that are never copied into the JSON line
_RESERVED = {
    "msg", "args", "exc_info", "exc_text", "stack_info", "stacklevel", "levelno", "levelname",
    "msecs", "relativeCreated", "created", "thread", "threadName", "processName", "process",
    "pathname", "filename", "module", "lineno", "funcName", "name", "taskName", "message", "asctime",
}


class JsonFormatter(logging.Formatter):
    """Emit logs as single-line JSON with common fields and context (request_id, route)."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            # Context fields added by filter (see observability._ContextFilter)
            "request_id": getattr(record, "request_id", "-"),
            "route": getattr(record, "route", "-"),
        }
        # Include extras if present (avoid non-serializable)
        for key, val in record.__dict__.items():
            if key in _RESERVED or key in ("request_id", "route"):
                continue
            try:
                json.dumps({key: val})
                base[key] = val
            except (TypeError, ValueError):
                base[key] = str(val)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, separators=(",", ":"))


class _PlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.request_id = getattr(record, "request_id", "-")
        record.route = getattr(record, "route", "-")
        return super().format(record)


def _configure_root_logger(level: str) -> logging.Logger:
    logger = logging.getLogger()
    if not logger.handlers:
        handler = logging.StreamHandler()
        if _LOG_FORMAT == "json":
            handler.setFormatter(JsonFormatter())
        else:
            fmt = "%(asctime)s | %(levelname)s | %(name)s | [%(request_id)s %(route)s] %(message)s"
            handler.setFormatter(_PlainFormatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


root_logger = _configure_root_logger(_LOG_LEVEL)


# PUBLIC_INTERFACE
def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a module logger configured with the global format and level."""
    # Attach context filter to the child logger for structured context
    return get_structured_logger(name or __name__)
