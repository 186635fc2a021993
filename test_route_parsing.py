"""
Route Address Parsing Tests
===========================

Broker/topic resolution from route addresses and options. Pure string
processing, no broker required.

Usage:
    pytest test_route_parsing.py
"""

import pytest

from logship_kafka.errors import TopicMissingError
from logship_kafka.schemas import (
    Route,
    parse_route_address,
    read_brokers,
    read_topic,
)

NO_OPTS = {}


def test_read_route_address():
    """Comma-separated brokers keep their order."""
    brokers = read_brokers("broker1:9092,broker2:9092")
    assert brokers == ["broker1:9092", "broker2:9092"]


def test_address_without_topic_or_option_is_topic_missing():
    with pytest.raises(TopicMissingError):
        parse_route_address("broker1:9092,broker2:9092", NO_OPTS)


def test_read_route_address_with_a_slash_topic():
    route = parse_route_address("broker/hello", NO_OPTS)
    assert route.brokers == ["broker"]
    assert route.topic == "hello"


def test_read_topic_option():
    route = parse_route_address("", {"topic": "hello"})
    assert route.topic == "hello"
    assert route.brokers == []


def test_slash_topic_trumps_a_topic_option():
    assert read_topic("broker/hello", {"topic": "trumped"}) == "hello"
    assert parse_route_address("broker/hello", {"topic": "trumped"}).topic == "hello"


def test_split_happens_at_first_slash_only():
    """Everything after the first "/" is the topic, commas and slashes included."""
    route = parse_route_address("k1:9092,k2:9092/logs/app,extra", NO_OPTS)
    assert route.brokers == ["k1:9092", "k2:9092"]
    assert route.topic == "logs/app,extra"


def test_empty_slash_topic_ignores_option():
    """A trailing "/" resolves to an empty topic; the option does not apply."""
    assert read_topic("broker/", {"topic": "fallback"}) == ""
    with pytest.raises(TopicMissingError):
        parse_route_address("broker/", {"topic": "fallback"})


def test_empty_topic_option_is_topic_missing():
    with pytest.raises(TopicMissingError):
        parse_route_address("broker:9092", {"topic": ""})


def test_empty_broker_tokens_dropped():
    assert read_brokers("") == []
    assert read_brokers("/topic") == []
    assert read_brokers("k1:9092,,k2:9092") == ["k1:9092", "k2:9092"]


def test_topic_missing_is_a_value_error():
    """Configuration errors surface as ValueError too."""
    with pytest.raises(ValueError):
        parse_route_address("broker", NO_OPTS)


def test_route_close_invokes_host_hook():
    calls = []
    route = Route(address="broker/topic", on_close=lambda: calls.append(1))
    route.close()
    assert calls == [1]


def test_route_close_without_hook_is_noop():
    Route(address="broker/topic").close()
