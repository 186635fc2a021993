"""
Adapter Errors
==============

Bounded Context: Failure Taxonomy

Design:
- ConfigurationError: fatal at construction, adapter is not created
- ProducerConnectionError: raised only after connect retries are exhausted
- FormattingError: fatal to the current record and to the route

Publish-transport errors (broker rejects, network loss after connect) are not
represented here. The producer runs without delivery reports, so they never
reach the adapter.
"""


class AdapterError(Exception):
    """Base class for all Kafka adapter errors."""
    pass


class ConfigurationError(AdapterError, ValueError):
    """Invalid or incomplete adapter configuration."""
    pass


class BrokersMissingError(ConfigurationError):
    """Route address yields no broker endpoints."""
    pass


class TopicMissingError(ConfigurationError):
    """Neither the route address nor its options name a topic."""
    pass


class TemplateError(ConfigurationError):
    """Message template failed to compile."""
    pass


class TLSMaterialError(ConfigurationError):
    """TLS certificate or private key file could not be opened or read."""
    pass


class TLSAuthenticationError(ConfigurationError):
    """TLS certificate/private key could not be parsed into a keypair."""
    pass


class ProducerConnectionError(AdapterError):
    """Kafka producer could not be created within the retry bound."""
    pass


class FormattingError(AdapterError):
    """A log record could not be rendered into a message payload."""
    pass
