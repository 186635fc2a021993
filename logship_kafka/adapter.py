"""
Kafka Log Adapter
=================

Bounded Context: Log Shipping

This module holds the adapter factory and the stream pump.

Lifecycle:
    new_kafka_adapter(route, config)
        → parse address (brokers, topic)
        → compile template
        → build producer settings (TLS, codec)
        → connect producer (bounded retries)
    adapter.stream(records)
        Running: format record → send → next record
        Stopped: input exhausted, or a record failed to format
                 (route closed first), producer closed in every case

Threading:
    One sequential consumer per adapter. A blocked send blocks the pump,
    which blocks the host's feed to this route.
"""

import threading
import time
from typing import Any, Callable, Dict, Iterable, Optional

from .config import AdapterConfig
from .errors import BrokersMissingError, ConfigurationError, FormattingError
from .formatter import MessageFormatter
from .logging import LogEvent, StructuredLogger, create_logger
from .producer import build_producer_settings, connect_producer
from .producer.connection import ProducerFactory
from .schemas import LogRecord, Route, read_brokers, parse_route_address


class KafkaAdapter:
    """
    Publishes a route's log records to one Kafka topic.

    Owns its producer for its whole lifetime. Built by new_kafka_adapter().

    Attributes:
        route: Route this adapter serves
        brokers: Broker endpoints
        topic: Destination topic
        producer: Live producer handle (send, close)
        formatter: Record → message formatter
        logger: Structured logger instance
    """

    def __init__(
        self,
        route: Route,
        brokers: list,
        topic: str,
        producer: Any,
        formatter: MessageFormatter,
        logger: StructuredLogger
    ):
        self.route = route
        self.brokers = brokers
        self.topic = topic
        self.producer = producer
        self.formatter = formatter
        self.logger = logger

        self._running = False
        self._message_count = 0
        self._stats_lock = threading.Lock()

    def stream(self, records: Iterable[LogRecord]) -> None:
        """
        Drain records into Kafka until the input ends or a record fails.

        On a formatting error the route is closed, the record is dropped and
        the loop exits. The producer is closed before returning on every
        path.

        Args:
            records: Host-fed record stream; exhaustion means the host
                closed the route
        """
        self._running = True
        self.logger.info(
            event=LogEvent.STREAM_STARTED,
            message="Streaming logs to Kafka",
            metadata={'topic': self.topic, 'brokers': self.brokers}
        )
        try:
            for record in records:
                try:
                    message = self.formatter.format(record)
                except FormattingError as e:
                    self.logger.error(
                        event=LogEvent.FORMATTING_ERROR,
                        message=f"kafka: {e}",
                        metadata={'topic': self.topic, 'source': record.source},
                        exc_info=e
                    )
                    self.route.close()
                    self.logger.info(
                        event=LogEvent.ROUTE_CLOSED,
                        message="Closed route after formatting error",
                        metadata={'topic': self.topic}
                    )
                    break

                self.producer.send(message)
                with self._stats_lock:
                    self._message_count += 1
        finally:
            self._running = False
            self.producer.close()
            self.logger.info(
                event=LogEvent.STREAM_STOPPED,
                message="Stopped streaming logs to Kafka",
                metadata={'topic': self.topic, 'message_count': self._message_count}
            )

    def is_running(self) -> bool:
        """Check if the pump is in the Running state."""
        return self._running

    def get_stats(self) -> Dict[str, Any]:
        """
        Get adapter statistics.

        Returns:
            Dictionary with message count, topic, brokers and pump state
        """
        with self._stats_lock:
            return {
                'message_count': self._message_count,
                'running': self._running,
                'topic': self.topic,
                'brokers': list(self.brokers),
            }


def new_kafka_adapter(
    route: Route,
    config: Optional[AdapterConfig] = None,
    logger: Optional[StructuredLogger] = None,
    producer_factory: Optional[ProducerFactory] = None,
    sleep: Callable[[float], None] = time.sleep
) -> KafkaAdapter:
    """
    Build a KafkaAdapter for a route.

    Args:
        route: Route address/options plus host close hook
        config: Adapter configuration (default: AdapterConfig.from_env())
        logger: Structured logger (default: component "kafka")
        producer_factory: Callable (brokers, settings) -> producer handle
        sleep: Sleep between connect attempts (injectable for tests)

    Returns:
        Connected KafkaAdapter

    Raises:
        ConfigurationError: Missing brokers/topic, bad template, bad TLS
        ProducerConnectionError: Producer not created within retries
    """
    config = config if config is not None else AdapterConfig.from_env()
    logger = logger or create_logger("kafka", debug=config.debug)

    try:
        brokers = read_brokers(route.address)
        if not brokers:
            raise BrokersMissingError(
                "The Kafka broker host:port is missing. "
                "Did you specify it as a route address?"
            )
        topic = parse_route_address(route.address, route.options).topic

        formatter = MessageFormatter(topic, config.template)

        logger.debug(
            event=LogEvent.KAFKA_PRODUCER_STARTING,
            message=f"Starting Kafka producer for address: {brokers}, topic: {topic}.",
            metadata={'brokers': brokers, 'topic': topic}
        )

        settings = build_producer_settings(config, logger=logger)
    except ConfigurationError as e:
        logger.debug(
            event=LogEvent.CONFIGURATION_ERROR,
            message=str(e),
            metadata={'address': route.address}
        )
        raise

    producer = connect_producer(
        brokers,
        settings,
        retries=config.connect_retries,
        factory=producer_factory,
        sleep=sleep,
        logger=logger,
    )

    return KafkaAdapter(
        route=route,
        brokers=brokers,
        topic=topic,
        producer=producer,
        formatter=formatter,
        logger=logger,
    )
