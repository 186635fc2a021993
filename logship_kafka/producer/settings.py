"""
Kafka Producer Settings
=======================

Bounded Context: Transport Configuration

This module builds the librdkafka configuration handed to
confluent_kafka.Producer.

Fixed policy:
- client.id "logspout" on every connection
- acks=1: wait for the partition leader only
- linger.ms=1000: batch and flush once per second
- No delivery callbacks: success/error reports are not consumed

Optional:
- compression.type from KAFKA_COMPRESSION_CODEC (gzip, snappy, else none)
- TLS with a single client certificate, full certificate verification
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from ..config import AdapterConfig
from ..errors import TLSAuthenticationError, TLSMaterialError
from ..logging import LogEvent, StructuredLogger

CLIENT_ID = "logspout"
REQUIRED_ACKS = 1
FLUSH_FREQUENCY_MS = 1000

COMPRESSION_NONE = "none"
COMPRESSION_CODECS = {
    "gzip": "gzip",
    "snappy": "snappy",
}


@dataclass(frozen=True)
class TLSMaterial:
    """
    Client certificate and private key, validated as a keypair.

    Both are re-encoded from the parsed objects, so text around the PEM
    blocks (e.g. "Bag Attributes" from openssl pkcs12) is dropped.

    Attributes:
        certificate_pem: PEM-encoded client certificate
        private_key_pem: PEM-encoded unencrypted PKCS8 private key
    """
    certificate_pem: str
    private_key_pem: str


def compression_codec(value: Optional[str]) -> str:
    """Map a KAFKA_COMPRESSION_CODEC value to a librdkafka codec."""
    if not value:
        return COMPRESSION_NONE
    return COMPRESSION_CODECS.get(value.strip().lower(), COMPRESSION_NONE)


def _read_file(path: str, what: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise TLSMaterialError(f"Couldn't read TLS {what} file {path}: {e}") from e


def load_tls_material(cert_file: str, key_file: str) -> TLSMaterial:
    """
    Read and parse the TLS client certificate and private key.

    Args:
        cert_file: Path to PEM certificate
        key_file: Path to PEM private key

    Returns:
        TLSMaterial with both PEM blocks

    Raises:
        TLSMaterialError: If either file cannot be opened or read
        TLSAuthenticationError: If the PEM data does not form a keypair
    """
    certificate_pem = _read_file(cert_file, "certificate")
    private_key_pem = _read_file(key_file, "private key")

    try:
        certificate = x509.load_pem_x509_certificate(certificate_pem)
        private_key = serialization.load_pem_private_key(
            private_key_pem, password=None
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise TLSAuthenticationError(
            "Couldn't establish TLS authentication keypair. "
            "Check TLS_CERT_FILE and TLS_PRIVKEY_FILE environment vars."
        ) from e

    public_format = (
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    if (certificate.public_key().public_bytes(*public_format)
            != private_key.public_key().public_bytes(*public_format)):
        raise TLSAuthenticationError(
            "Couldn't establish TLS authentication keypair. "
            "Private key does not match the certificate."
        )

    return TLSMaterial(
        certificate_pem=certificate.public_bytes(
            serialization.Encoding.PEM
        ).decode("ascii"),
        private_key_pem=private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii"),
    )


def build_producer_settings(
    config: AdapterConfig,
    logger: Optional[StructuredLogger] = None
) -> Dict[str, Any]:
    """
    Build the producer client configuration.

    Args:
        config: Adapter configuration
        logger: Structured logger for DEBUG diagnostics

    Returns:
        librdkafka configuration dict (without bootstrap.servers)

    Raises:
        TLSMaterialError, TLSAuthenticationError: On bad TLS material
    """
    if logger:
        logger.debug(
            event=LogEvent.KAFKA_CONFIG_GENERATED,
            message="Generating Kafka configuration."
        )

    settings: Dict[str, Any] = {
        "client.id": CLIENT_ID,
        "acks": REQUIRED_ACKS,
        "linger.ms": FLUSH_FREQUENCY_MS,
        "compression.type": compression_codec(config.compression_codec),
    }

    if config.tls_enabled:
        if logger:
            logger.debug(
                event=LogEvent.KAFKA_TLS_ENABLED,
                message="Enabling Kafka TLS support.",
                metadata={'cert_file': config.tls_cert_file}
            )
        material = load_tls_material(config.tls_cert_file, config.tls_privkey_file)
        settings.update({
            "security.protocol": "ssl",
            "ssl.certificate.pem": material.certificate_pem,
            "ssl.key.pem": material.private_key_pem,
            "enable.ssl.certificate.verification": True,
            "ssl.endpoint.identification.algorithm": "https",
        })

    return settings
