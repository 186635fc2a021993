"""
Kafka Producer
==============

Bounded Context: Message Production

Design:
- settings: librdkafka configuration (client id, acks, linger, codec, TLS)
- client: KafkaProducer handle (send, close)
- connection: bounded-retry producer creation

Public API
----------
    build_producer_settings: Producer Configurator
    load_tls_material: TLS keypair loading and validation
    connect_producer: Connection Establisher
    KafkaProducer, create_producer: Default producer handle
"""

from .settings import (
    CLIENT_ID,
    TLSMaterial,
    build_producer_settings,
    compression_codec,
    load_tls_material,
)
from .client import KafkaProducer, create_producer
from .connection import connect_producer

__all__ = [
    'CLIENT_ID',
    'TLSMaterial',
    'build_producer_settings',
    'compression_codec',
    'load_tls_material',
    'KafkaProducer',
    'create_producer',
    'connect_producer',
]
