"""
logship_kafka Schemas
=====================

Bounded Context: Data Structures

Design:
- Frozen dataclasses (immutability)
- Type hints for all fields
- Pure parsing functions, no I/O

Public API
----------
Route:
    Route: Address + options + host close hook
    BrokerRoute: Parsed brokers and topic
    parse_route_address, read_brokers, read_topic

Records:
    LogRecord: One log line from the host
    OutboundMessage: Topic + payload bytes
"""

from .route import (
    Route,
    BrokerRoute,
    parse_route_address,
    read_brokers,
    read_topic,
)
from .record import LogRecord, OutboundMessage

__all__ = [
    'Route',
    'BrokerRoute',
    'parse_route_address',
    'read_brokers',
    'read_topic',
    'LogRecord',
    'OutboundMessage',
]
