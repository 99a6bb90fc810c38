"""Package logging setup.

Log messages use an ``event key=value ...`` layout. The JSON formatter splits
that layout into an ``event`` name and a ``fields`` mapping so sinks can
filter on, say, ``latency_changed`` without parsing text.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from responsiveness.diagnostics.json_codec import dumps_text
from responsiveness.runtime.config import ResponsivenessConfig, load_config

_QUEUE_LISTENER: QueueListener | None = None
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where reporter logs go and how they are rendered."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json

    @classmethod
    def from_config(cls, config: ResponsivenessConfig) -> LoggingConfig:
        return cls(
            level_name=config.log_level,
            console_format=config.log_format,
            file_path=config.log_file,
        )


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``key=value`` message pairs lifted into fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        event, fields = split_event_message(message)
        fields.update(
            (key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRIBUTES
        )
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": event,
            "msg": message,
        }
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload)


def split_event_message(message: str) -> tuple[str, dict[str, object]]:
    """Split ``"latency_changed value=48.0 name=keydown"`` into event and fields."""
    head, _, rest = message.partition(" ")
    fields: dict[str, object] = {}
    for token in rest.split():
        key, sep, value = token.partition("=")
        if sep and key:
            fields[key] = value
    return head, fields


def configure_logging(config: LoggingConfig) -> None:
    """Install console output, plus a queued file handler when ``file_path`` is set."""
    global _QUEUE_LISTENER

    shutdown_logging()
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_formatter_for(config.console_format))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_level(config.level_name))

    if not config.file_path:
        root.addHandler(console_handler)
        return

    file_path = Path(config.file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(_formatter_for(config.file_format))

    # File writes happen off the batch-processing thread.
    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, console_handler, file_handler, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the queued file listener, if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is None:
        return
    listener = _QUEUE_LISTENER
    _QUEUE_LISTENER = None
    listener.stop()
    for handler in listener.handlers:
        handler.close()


def setup_logging(config: ResponsivenessConfig | None = None) -> bool:
    """Configure logging from ``config`` unless the host already did.

    Returns ``True`` when handlers were installed.
    """
    if logging.getLogger().handlers:
        return False
    configure_logging(LoggingConfig.from_config(config or load_config()))
    return True


def _level(name: str) -> int:
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _formatter_for(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)
