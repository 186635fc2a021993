"""
Message Formatter
=================

Bounded Context: Record Encoding

Turns one LogRecord into one OutboundMessage.

- With a template: render through Jinja2 (StrictUndefined). A reference to a
  field the record does not have is a FormattingError, never an empty or
  partial payload.
- Without a template: the record's raw text, UTF-8 encoded, untouched.
  Lone surrogates from undecodable input bytes map back to those bytes.

Template variables:
    data, source, time, container, record, plus the record's extra fields

Example:
    >>> formatter = MessageFormatter("logs", "{{ container.name }}: {{ data }}")
    >>> formatter.format(LogRecord(data="ready", container={'name': 'web'}))
    OutboundMessage(topic='logs', value=b'web: ready')
"""

from typing import Optional

from jinja2 import Environment, StrictUndefined, Template
from jinja2.exceptions import TemplateError as JinjaTemplateError

from .errors import FormattingError, TemplateError
from .schemas import LogRecord, OutboundMessage


def compile_template(source: str) -> Template:
    """
    Compile message template source.

    Raises:
        TemplateError: If the template does not parse
    """
    env = Environment(undefined=StrictUndefined, autoescape=False)
    try:
        return env.from_string(source)
    except JinjaTemplateError as e:
        raise TemplateError(f"Couldn't parse Kafka message template. {e}") from e


def _encode(text: str) -> bytes:
    try:
        return text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError as e:
        raise FormattingError(f"payload is not encodable as UTF-8: {e}") from e


class MessageFormatter:
    """
    Formatter bound to one topic and an optional compiled template.

    Attributes:
        topic: Topic stamped on every message
        template: Compiled template, or None for raw passthrough
    """

    def __init__(self, topic: str, template: Optional[str] = None):
        self.topic = topic
        self.template = compile_template(template) if template else None

    def format(self, record: LogRecord) -> OutboundMessage:
        """
        Format a record into a message.

        Raises:
            FormattingError: If template rendering or encoding fails
        """
        if self.template is None:
            return OutboundMessage(topic=self.topic, value=_encode(record.data))

        try:
            value = _encode(self.template.render(record.template_context()))
        except Exception as e:
            raise FormattingError(f"template rendering failed: {e}") from e

        return OutboundMessage(topic=self.topic, value=value)
