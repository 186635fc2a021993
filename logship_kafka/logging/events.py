"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Every structured log entry carries one of these names in its "event" key,
named <area>.<subject>[.<action>]: "kafka.connect.retry", "route.closed".
Internal producer steps are logged at DEBUG.
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - kafka.*: Kafka producer lifecycle
    - stream.*: Stream pump lifecycle
    - route.*: Signals sent back to the host route
    - error.*: Error conditions
    """

    # ========== Kafka Events ==========
    KAFKA_PRODUCER_STARTING = "kafka.producer.starting"
    """Adapter is about to create a producer for a route."""

    KAFKA_CONFIG_GENERATED = "kafka.config.generated"
    """Producer client configuration built."""

    KAFKA_TLS_ENABLED = "kafka.tls.enabled"
    """TLS client certificate loaded and enabled."""

    KAFKA_CONNECTED = "kafka.connected"
    """Producer created and cluster metadata reachable."""

    KAFKA_CONNECT_RETRY = "kafka.connect.retry"
    """Producer creation failed, another attempt follows."""

    KAFKA_PUBLISH_BACKPRESSURE = "kafka.publish.backpressure"
    """Local producer queue full, send is blocking."""

    KAFKA_PRODUCER_CLOSED = "kafka.producer.closed"
    """Producer flushed and released."""

    # ========== Stream Events ==========
    STREAM_STARTED = "stream.started"
    """Stream pump entered the Running state."""

    STREAM_STOPPED = "stream.stopped"
    """Stream pump entered the Stopped state."""

    # ========== Route Events ==========
    ROUTE_CLOSED = "route.closed"
    """Host route asked to close itself."""

    # ========== Error Events ==========
    CONFIGURATION_ERROR = "error.configuration"
    """Adapter could not be constructed from its configuration."""

    KAFKA_CONNECTION_ERROR = "error.kafka_connection"
    """Producer could not be created within the retry bound."""

    FORMATTING_ERROR = "error.formatting"
    """Log record could not be rendered into a payload."""

