"""
Message Formatter Tests
=======================

Raw passthrough and Jinja2 template rendering of log records.

Usage:
    pytest test_formatter.py
"""

from datetime import datetime, timezone

import pytest

from logship_kafka.errors import FormattingError, TemplateError
from logship_kafka.formatter import MessageFormatter
from logship_kafka.schemas import LogRecord, OutboundMessage


def _record(**kwargs) -> LogRecord:
    kwargs.setdefault("data", "GET /health 200")
    kwargs.setdefault("source", "stdout")
    kwargs.setdefault("time", datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    return LogRecord(**kwargs)


def test_raw_passthrough():
    formatter = MessageFormatter("logs")
    message = formatter.format(_record(data='{"msg": "<hi> & \\"bye\\""}'))

    assert message == OutboundMessage(topic="logs", value=b'{"msg": "<hi> & \\"bye\\""}')


def test_raw_passthrough_is_deterministic():
    formatter = MessageFormatter("logs")
    record = _record(data="héllo wörld")

    first = formatter.format(record)
    second = formatter.format(record)

    assert first.value == second.value == "héllo wörld".encode("utf-8")


def test_template_renders_record_fields():
    formatter = MessageFormatter(
        "logs", "{{ container.name }}[{{ source }}] {{ data }}"
    )
    message = formatter.format(_record(container={"name": "web"}))

    assert message.topic == "logs"
    assert message.value == b"web[stdout] GET /health 200"


def test_template_sees_extra_fields_and_record():
    formatter = MessageFormatter("logs", "{{ level }}|{{ record.data }}")
    message = formatter.format(_record(fields={"level": "warn"}))
    assert message.value == b"warn|GET /health 200"


def test_raw_passthrough_keeps_undecodable_bytes():
    """stdin decodes invalid UTF-8 with surrogateescape; the original bytes go out."""
    raw = b"bad \xff byte"
    formatter = MessageFormatter("logs")

    message = formatter.format(_record(data=raw.decode("utf-8", "surrogateescape")))

    assert message.value == raw


def test_template_keeps_undecodable_bytes():
    formatter = MessageFormatter("logs", "[{{ source }}] {{ data }}")
    data = b"\xfe\xff".decode("utf-8", "surrogateescape")

    message = formatter.format(_record(data=data))

    assert message.value == b"[stdout] \xfe\xff"


def test_unencodable_text_is_formatting_error():
    with pytest.raises(FormattingError):
        MessageFormatter("logs").format(_record(data="lone \ud800"))
    with pytest.raises(FormattingError):
        MessageFormatter("logs", "{{ data }}").format(_record(data="lone \ud800"))


def test_template_does_not_escape():
    formatter = MessageFormatter("logs", "{{ data }}")
    message = formatter.format(_record(data="<b>&</b>"))
    assert message.value == b"<b>&</b>"


def test_missing_field_is_formatting_error():
    formatter = MessageFormatter("logs", "{{ data }} {{ missing }}")
    with pytest.raises(FormattingError):
        formatter.format(_record())


def test_missing_nested_field_is_formatting_error():
    formatter = MessageFormatter("logs", "{{ container.name }}")
    with pytest.raises(FormattingError):
        formatter.format(_record(container={}))


def test_template_syntax_error():
    with pytest.raises(TemplateError) as exc:
        MessageFormatter("logs", "{{ data ")
    assert "Couldn't parse Kafka message template" in str(exc.value)


def test_record_from_dict():
    record = LogRecord.from_dict({
        "data": "boot",
        "source": "stderr",
        "time": "2025-01-02T03:04:05+00:00",
        "container": {"name": "db"},
        "level": "info",
    })

    assert record.data == "boot"
    assert record.source == "stderr"
    assert record.time.year == 2025
    assert record.container == {"name": "db"}
    assert record.fields == {"level": "info"}


def test_record_from_dict_requires_data():
    with pytest.raises(ValueError):
        LogRecord.from_dict({"source": "stdout"})


def test_record_from_dict_rejects_non_mapping_container():
    with pytest.raises(ValueError):
        LogRecord.from_dict({"data": "x", "container": 5})
