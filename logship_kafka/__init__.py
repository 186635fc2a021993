"""
logship_kafka - Kafka Log Shipping Adapter
==========================================

Bounded Context: Publishing host log streams to Kafka

This package consumes log records handed over by a host log router and
publishes each one to a Kafka topic, with optional Jinja2 templating, TLS
client authentication and compression.

Architecture:
- schemas/: Route, LogRecord, OutboundMessage, address parsing
- producer/: Producer settings, KafkaProducer handle, connect retries
- formatter: Record → payload (template or raw passthrough)
- adapter: KafkaAdapter (stream pump) and new_kafka_adapter factory
- registry: Name → factory registry for hosting layers
- logging/: Structured JSON logging

Example:
    >>> from logship_kafka import AdapterConfig, Route, new_kafka_adapter
    >>>
    >>> route = Route(address="kafka1:9092,kafka2:9092/app-logs")
    >>> adapter = new_kafka_adapter(route, AdapterConfig.from_env())
    >>> adapter.stream(records)  # blocks until records is exhausted
"""

__version__ = "1.0.0"

# Configuration
from .config import AdapterConfig

# Errors
from .errors import (
    AdapterError,
    ConfigurationError,
    BrokersMissingError,
    TopicMissingError,
    TemplateError,
    TLSMaterialError,
    TLSAuthenticationError,
    ProducerConnectionError,
    FormattingError,
)

# Schemas
from .schemas import (
    Route,
    BrokerRoute,
    LogRecord,
    OutboundMessage,
    parse_route_address,
)

# Pipeline
from .formatter import MessageFormatter
from .adapter import KafkaAdapter, new_kafka_adapter
from .registry import AdapterRegistry, AdapterNotAvailableError

# Logging
from .logging import LogEvent, StructuredLogger, create_logger

__all__ = [
    '__version__',
    'AdapterConfig',
    'AdapterError',
    'ConfigurationError',
    'BrokersMissingError',
    'TopicMissingError',
    'TemplateError',
    'TLSMaterialError',
    'TLSAuthenticationError',
    'ProducerConnectionError',
    'FormattingError',
    'Route',
    'BrokerRoute',
    'LogRecord',
    'OutboundMessage',
    'parse_route_address',
    'MessageFormatter',
    'KafkaAdapter',
    'new_kafka_adapter',
    'AdapterRegistry',
    'AdapterNotAvailableError',
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
