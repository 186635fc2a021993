"""
Log Record and Outbound Message Schemas
=======================================

Bounded Context: Pipeline Data Structures

Message Flow:
    Host → LogRecord → MessageFormatter → OutboundMessage → KafkaProducer

Design:
- Immutable (frozen dataclasses)
- LogRecord exposes a template context for the formatter
- OutboundMessage is fire-and-forget; nothing tracks it after send
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class LogRecord:
    """
    One log line received from the host.

    Attributes:
        data: Raw log text
        source: Stream the line came from (e.g., "stdout", "stderr")
        time: When the host collected the line
        container: Container metadata (name, id, image, ...)
        fields: Any further structured fields

    Example:
        >>> record = LogRecord(
        ...     data="GET /health 200",
        ...     source="stdout",
        ...     container={'name': 'web'}
        ... )
    """
    data: str
    source: str = ""
    time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    container: Mapping[str, Any] = field(default_factory=dict)
    fields: Mapping[str, Any] = field(default_factory=dict)

    def template_context(self) -> Dict[str, Any]:
        """
        Variables visible to a message template.

        Extra fields sit at the top level; the named attributes take
        precedence over an extra field with the same name.
        """
        context: Dict[str, Any] = dict(self.fields)
        context.update(
            data=self.data,
            source=self.source,
            time=self.time,
            container=self.container,
            record=self,
        )
        return context

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LogRecord':
        """Deserialize from dict.

        Args:
            data: Dictionary with at least a "data" key. "time" may be an
                ISO 8601 string. Unknown keys become extra fields.

        Raises:
            ValueError: If "data" is missing, "container" is not an object
                or "time" is malformed
        """
        if 'data' not in data:
            raise ValueError("Missing required LogRecord field: 'data'")

        container = data.get('container') or {}
        if not isinstance(container, Mapping):
            raise ValueError(f"Invalid LogRecord container: {container!r}")

        extra = {
            key: value for key, value in data.items()
            if key not in ('data', 'source', 'time', 'container')
        }
        kwargs: Dict[str, Any] = {
            'data': str(data['data']),
            'source': str(data.get('source', '')),
            'container': dict(container),
            'fields': extra,
        }
        if data.get('time'):
            try:
                kwargs['time'] = datetime.fromisoformat(data['time'])
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid LogRecord time: {data['time']}") from e

        return cls(**kwargs)


@dataclass(frozen=True)
class OutboundMessage:
    """
    Message handed to the Kafka producer.

    Attributes:
        topic: Destination topic (fixed per adapter)
        value: Encoded payload
    """
    topic: str
    value: bytes
