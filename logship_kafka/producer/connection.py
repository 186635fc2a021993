"""
Producer Connection Establisher
===============================

Bounded Context: Startup Resilience

Creates the producer with a bounded number of attempts and a fixed delay
between them. Broker and DNS availability at container start is often
briefly missing; a few retries absorb that without the host having to
restart the route.

Contract:
- At most `retries` attempts (values below 1 mean one attempt)
- Sleep `backoff` seconds after a failed attempt, never after the last one
- Return immediately on success
- On exhaustion raise ProducerConnectionError chained from the last cause
"""

import time
from typing import Any, Callable, Dict, List, Optional

from ..errors import ProducerConnectionError
from ..logging import LogEvent, StructuredLogger
from .client import create_producer

DEFAULT_BACKOFF = 1.0

ProducerFactory = Callable[[List[str], Dict[str, Any]], Any]


def connect_producer(
    brokers: List[str],
    settings: Dict[str, Any],
    retries: int = 3,
    backoff: float = DEFAULT_BACKOFF,
    factory: Optional[ProducerFactory] = None,
    sleep: Callable[[float], None] = time.sleep,
    logger: Optional[StructuredLogger] = None
) -> Any:
    """
    Create a live producer, retrying on failure.

    Args:
        brokers: Broker endpoints
        settings: Producer configuration from build_producer_settings()
        retries: Maximum number of attempts
        backoff: Seconds to wait between attempts
        factory: Callable (brokers, settings) -> producer handle
        sleep: Sleep function (injectable for tests)
        logger: Structured logger instance

    Returns:
        Producer handle with send() and close()

    Raises:
        ProducerConnectionError: After the last attempt fails
    """
    if factory is None:
        def factory(b, s):
            return create_producer(b, s, logger=logger)

    attempts = max(1, retries)
    last_error: Optional[Exception] = None

    for attempt in range(1, attempts + 1):
        try:
            producer = factory(brokers, settings)
        except Exception as e:
            last_error = e
            if attempt == attempts:
                break
            if logger:
                logger.debug(
                    event=LogEvent.KAFKA_CONNECT_RETRY,
                    message="Couldn't create Kafka producer. Retrying...",
                    metadata={
                        'attempt': attempt,
                        'max_attempts': attempts,
                        'error': str(e)
                    }
                )
            sleep(backoff)
            continue

        if logger:
            logger.info(
                event=LogEvent.KAFKA_CONNECTED,
                message="Kafka producer created",
                metadata={'brokers': brokers, 'attempt': attempt}
            )
        return producer

    if logger:
        logger.error(
            event=LogEvent.KAFKA_CONNECTION_ERROR,
            message="Couldn't create Kafka producer",
            metadata={'brokers': brokers, 'attempts': attempts},
            exc_info=last_error
        )
    raise ProducerConnectionError(
        f"Couldn't create Kafka producer. {last_error}"
    ) from last_error
