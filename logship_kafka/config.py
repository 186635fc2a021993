"""
Configuration schema for the Kafka adapter.

This module defines the settings read once at construction: TLS material
paths, message template, connect retries, compression codec and debug
verbosity. Everything downstream receives an AdapterConfig instead of
reading the environment itself.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import yaml

from .errors import ConfigurationError

DEFAULT_CONNECT_RETRIES = 3


def _parse_retries(value: Optional[object]) -> int:
    """KAFKA_CONNECT_RETRIES, falling back to the default when unparseable."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return DEFAULT_CONNECT_RETRIES


@dataclass(frozen=True)
class AdapterConfig:
    """
    Kafka adapter configuration.

    Immutable after construction (frozen dataclass).

    Attributes:
        tls_cert_file: Client certificate path (PEM)
        tls_privkey_file: Client private key path (PEM)
        template: Jinja2 message template source
        connect_retries: Producer creation attempts
        compression_codec: "gzip", "snappy" or anything else for none
        debug: Verbose diagnostic logging
    """

    tls_cert_file: Optional[str] = None
    tls_privkey_file: Optional[str] = None
    template: Optional[str] = None
    connect_retries: int = DEFAULT_CONNECT_RETRIES
    compression_codec: Optional[str] = None
    debug: bool = False

    def __post_init__(self):
        """Validate adapter configuration."""
        if bool(self.tls_cert_file) != bool(self.tls_privkey_file):
            raise ConfigurationError(
                "TLS_CERT_FILE and TLS_PRIVKEY_FILE must be set together, "
                f"got cert={self.tls_cert_file!r} key={self.tls_privkey_file!r}"
            )

    @property
    def tls_enabled(self) -> bool:
        return bool(self.tls_cert_file and self.tls_privkey_file)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AdapterConfig":
        """
        Build configuration from environment variables.

        Variables:
            TLS_CERT_FILE, TLS_PRIVKEY_FILE, KAFKA_TEMPLATE,
            KAFKA_CONNECT_RETRIES, KAFKA_COMPRESSION_CODEC, DEBUG
        """
        env = os.environ if environ is None else environ
        return cls(
            tls_cert_file=env.get("TLS_CERT_FILE") or None,
            tls_privkey_file=env.get("TLS_PRIVKEY_FILE") or None,
            template=env.get("KAFKA_TEMPLATE") or None,
            connect_retries=_parse_retries(env.get("KAFKA_CONNECT_RETRIES")),
            compression_codec=env.get("KAFKA_COMPRESSION_CODEC") or None,
            debug=bool(env.get("DEBUG")),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "AdapterConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            tls_cert_file: "/etc/kafka/client.pem"
            tls_privkey_file: "/etc/kafka/client.key"
            template: "{{ container.name }}: {{ data }}"
            connect_retries: 5
            compression_codec: "snappy"
            debug: false
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid adapter config in {yaml_path}: expected a mapping"
            )

        return cls(
            tls_cert_file=data.get("tls_cert_file") or None,
            tls_privkey_file=data.get("tls_privkey_file") or None,
            template=data.get("template") or None,
            connect_retries=_parse_retries(
                data.get("connect_retries", DEFAULT_CONNECT_RETRIES)
            ),
            compression_codec=data.get("compression_codec") or None,
            debug=bool(data.get("debug", False)),
        )
