"""
Route Schema and Address Parsing
================================

Bounded Context: Route Resolution

This module defines the route a host hands to the adapter and the pure string
parsing that turns its address into broker endpoints and a topic.

Address syntax:
    endpoint[,endpoint...][/topic]

Topic resolution:
    - Address contains "/": everything after the first "/" is the topic.
      The options mapping is ignored, even if that remainder is empty.
    - Otherwise: options["topic"].

Example:
    >>> parse_route_address("broker1:9092,broker2:9092/logs", {})
    BrokerRoute(brokers=['broker1:9092', 'broker2:9092'], topic='logs')
"""

from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional

from ..errors import TopicMissingError

TOPIC_SEPARATOR = "/"
BROKER_SEPARATOR = ","
TOPIC_OPTION = "topic"


@dataclass(frozen=True)
class Route:
    """
    Immutable description of where a route publishes.

    Attributes:
        address: Broker list, optionally suffixed with "/topic"
        options: Route options (may carry a "topic" key)
        on_close: Host hook invoked when the adapter closes the route

    Example:
        >>> route = Route(
        ...     address="kafka1:9092/app-logs",
        ...     options={},
        ...     on_close=host.close_route
        ... )
    """
    address: str
    options: Mapping[str, str] = field(default_factory=dict)
    on_close: Optional[Callable[[], None]] = field(
        default=None, compare=False, repr=False
    )

    def close(self) -> None:
        """Ask the host to stop feeding this route."""
        if self.on_close is not None:
            self.on_close()


@dataclass(frozen=True)
class BrokerRoute:
    """
    Parsed route address.

    Attributes:
        brokers: Broker endpoints in address order (may be empty)
        topic: Resolved topic name (never empty)
    """
    brokers: List[str]
    topic: str


def read_brokers(address: str) -> List[str]:
    """
    Extract broker endpoints from a route address.

    Splits the part before the first "/" on ",". Empty tokens are dropped
    ("a,,b" gives ["a", "b"]), so an empty address yields an empty list.
    logspout-kafka keeps empty tokens and hands them to the client.
    """
    head, _, _ = address.partition(TOPIC_SEPARATOR)
    return [token for token in head.split(BROKER_SEPARATOR) if token]


def read_topic(address: str, options: Mapping[str, str]) -> str:
    """
    Resolve the topic for a route.

    The embedded "/topic" suffix always wins over options["topic"].
    Returns an empty string when nothing resolves.
    """
    if TOPIC_SEPARATOR in address:
        _, _, topic = address.partition(TOPIC_SEPARATOR)
        return topic
    return options.get(TOPIC_OPTION, "") or ""


def parse_route_address(
    address: str,
    options: Optional[Mapping[str, str]] = None
) -> BrokerRoute:
    """
    Parse a route address into brokers and topic.

    Args:
        address: Route address string
        options: Route options mapping

    Returns:
        BrokerRoute with brokers (possibly empty) and topic

    Raises:
        TopicMissingError: If no topic resolves from address or options

    Note:
        An empty broker list is not an error here. Callers check it
        independently (see new_kafka_adapter).
    """
    topic = read_topic(address, options or {})
    if not topic:
        raise TopicMissingError(
            "The Kafka topic is missing. Did you specify it as a route option?"
        )
    return BrokerRoute(brokers=read_brokers(address), topic=topic)
