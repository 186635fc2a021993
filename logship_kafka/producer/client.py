"""
Kafka Producer Handle
=====================

Bounded Context: Kafka Infrastructure

This module wraps confluent_kafka.Producer behind the two operations the
adapter needs: send() and close().

Design:
- Asynchronous: produce() enqueues, librdkafka batches and flushes
- Back-pressure: a full local queue blocks send() until space frees up
- Fire-and-forget: no delivery callbacks are registered
- Connect check: cluster metadata is fetched once at creation so an
  unreachable cluster fails the attempt instead of the first send

Responsibilities:
- Producer lifecycle (create, flush on close)
- NOT responsible for: formatting, retries (see connection.py)
"""

from typing import Any, Dict, List, Optional

from confluent_kafka import Producer

from ..logging import LogEvent, StructuredLogger
from ..schemas import OutboundMessage

METADATA_TIMEOUT = 5.0
BACKPRESSURE_POLL_INTERVAL = 0.1
CLOSE_FLUSH_TIMEOUT = 10.0


class KafkaProducer:
    """
    Owned handle to a single confluent_kafka.Producer.

    Attributes:
        brokers: Bootstrap broker endpoints
        settings: librdkafka configuration (without bootstrap.servers)
        logger: Structured logger instance

    Thread Safety:
        Not shared. One handle per adapter, used from the pump only.
    """

    def __init__(
        self,
        brokers: List[str],
        settings: Dict[str, Any],
        logger: Optional[StructuredLogger] = None,
        metadata_timeout: float = METADATA_TIMEOUT
    ):
        self.brokers = list(brokers)
        self.settings = dict(settings)
        self.logger = logger
        self.metadata_timeout = metadata_timeout
        self._producer: Optional[Producer] = None
        self._closed = False

    def connect(self) -> "KafkaProducer":
        """
        Create the producer and fetch cluster metadata.

        Returns:
            self, for chaining

        Raises:
            KafkaException: On invalid configuration or unreachable cluster
        """
        conf = dict(self.settings)
        conf["bootstrap.servers"] = ",".join(self.brokers)
        producer = Producer(conf)
        producer.list_topics(timeout=self.metadata_timeout)
        self._producer = producer
        return self

    def send(self, message: OutboundMessage) -> None:
        """
        Enqueue one message, blocking while the local queue is full.

        Args:
            message: Topic and payload
        """
        if self._producer is None or self._closed:
            raise RuntimeError("Kafka producer is not connected")

        while True:
            try:
                self._producer.produce(message.topic, value=message.value)
                break
            except BufferError:
                if self.logger:
                    self.logger.debug(
                        event=LogEvent.KAFKA_PUBLISH_BACKPRESSURE,
                        message="Local producer queue full, waiting",
                        metadata={'topic': message.topic}
                    )
                self._producer.poll(BACKPRESSURE_POLL_INTERVAL)

        # Serve librdkafka events without waiting
        self._producer.poll(0)

    def close(self, timeout: float = CLOSE_FLUSH_TIMEOUT) -> None:
        """
        Flush outstanding messages and release the producer.

        Safe to call more than once.
        """
        if self._closed:
            return
        self._closed = True

        if self._producer is None:
            return

        remaining = self._producer.flush(timeout)
        self._producer = None
        if self.logger:
            self.logger.info(
                event=LogEvent.KAFKA_PRODUCER_CLOSED,
                message="Kafka producer closed",
                metadata={'brokers': self.brokers, 'undelivered': remaining}
            )


def create_producer(
    brokers: List[str],
    settings: Dict[str, Any],
    logger: Optional[StructuredLogger] = None
) -> KafkaProducer:
    """Default producer factory: a connected KafkaProducer."""
    return KafkaProducer(brokers, settings, logger=logger).connect()
