"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

One JSON object per log line, keyed by a LogEvent. Loggers are named
"logship_kafka.<component>" so hosts can route or silence them with the
standard logging configuration.

Output:
    {"timestamp": "2025-10-24T15:30:45.123456+00:00", "level": "INFO",
     "component": "kafka", "event": "stream.started",
     "message": "Streaming logs to Kafka",
     "metadata": {"topic": "logs", "brokers": ["kafka1:9092"]}}

DEBUG events (producer start, configuration, TLS, retries) are dropped
before serialization unless the logger was created with debug=True.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    JSON logger for one adapter component.

    Attributes:
        component: Component name written into every entry
        logger: Underlying stdlib logger
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        self.component = component
        self.logger_name = logger_name or f"logship_kafka.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        log_level = getattr(logging, level)
        if not self.logger.isEnabledFor(log_level):
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        # Brokers lists, paths and datetimes in metadata go through str()
        self.logger.log(
            log_level,
            json.dumps(log_entry, default=str),
            exc_info=exc_info if level == 'ERROR' else None
        )

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Internal step, emitted only with DEBUG set."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        self._log('INFO', event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log an error entry.

        The exception's type and message go into the JSON entry; the
        traceback is attached to the stdlib record for handlers that
        render it.
        """
        self._log('ERROR', event, message, metadata, exc_info)


class JSONFormatter(logging.Formatter):
    """Emit the JSON built by StructuredLogger as-is."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO,
    debug: bool = False
) -> StructuredLogger:
    """
    Create the logger for an adapter component.

    Args:
        component: Component identifier
        level: Logging level when debug is off
        debug: The adapter's DEBUG setting; forces logging.DEBUG

    Example:
        >>> logger = create_logger("kafka", debug=config.debug)
    """
    return StructuredLogger(
        component=component,
        level=logging.DEBUG if debug else level
    )
