"""
Connection Establisher Tests
============================

Bounded retries with a fixed delay, using a scripted producer factory and a
recording sleep.

Usage:
    pytest test_connection.py
"""

import pytest

from logship_kafka.errors import ProducerConnectionError
from logship_kafka.producer import connect_producer

BROKERS = ["broker1:9092"]
SETTINGS = {"client.id": "logspout"}


class FlakyFactory:
    """Fails the first `failures` calls, then returns a producer object."""

    def __init__(self, failures: int):
        self.failures = failures
        self.calls = 0
        self.producer = object()

    def __call__(self, brokers, settings):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"broker unreachable (attempt {self.calls})")
        return self.producer


class RecordingSleep:
    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


def test_immediate_success_does_not_sleep():
    factory, sleep = FlakyFactory(0), RecordingSleep()

    producer = connect_producer(BROKERS, SETTINGS, retries=3, factory=factory, sleep=sleep)

    assert producer is factory.producer
    assert factory.calls == 1
    assert sleep.delays == []


@pytest.mark.parametrize("failures, retries", [(1, 3), (2, 3), (4, 5), (2, 10)])
def test_succeeds_after_failures(failures, retries):
    factory, sleep = FlakyFactory(failures), RecordingSleep()

    producer = connect_producer(
        BROKERS, SETTINGS, retries=retries, factory=factory, sleep=sleep
    )

    assert producer is factory.producer
    assert factory.calls == failures + 1
    # One delay per failed attempt, none after the successful one
    assert sleep.delays == [1.0] * failures


@pytest.mark.parametrize("failures, retries", [(3, 3), (5, 3), (1, 1)])
def test_exhausted_retries_raise_with_last_cause(failures, retries):
    factory, sleep = FlakyFactory(failures), RecordingSleep()

    with pytest.raises(ProducerConnectionError) as exc:
        connect_producer(BROKERS, SETTINGS, retries=retries, factory=factory, sleep=sleep)

    assert factory.calls == retries
    assert sleep.delays == [1.0] * (retries - 1)
    assert "Couldn't create Kafka producer" in str(exc.value)
    assert f"attempt {retries}" in str(exc.value)
    assert isinstance(exc.value.__cause__, ConnectionError)


def test_non_positive_retries_still_attempts_once():
    factory, sleep = FlakyFactory(0), RecordingSleep()
    connect_producer(BROKERS, SETTINGS, retries=0, factory=factory, sleep=sleep)
    assert factory.calls == 1


def test_custom_backoff():
    factory, sleep = FlakyFactory(2), RecordingSleep()
    connect_producer(
        BROKERS, SETTINGS, retries=3, backoff=0.25, factory=factory, sleep=sleep
    )
    assert sleep.delays == [0.25, 0.25]


def test_factory_receives_brokers_and_settings():
    seen = []

    def factory(brokers, settings):
        seen.append((brokers, settings))
        return "producer"

    connect_producer(BROKERS, SETTINGS, factory=factory, sleep=RecordingSleep())
    assert seen == [(BROKERS, SETTINGS)]
