#!/usr/bin/env python3
"""
Kafka Log Adapter - Entry Point
================================

This script stands in for a host log router: it reads log records from
stdin and streams them through a registered adapter.

Usage:
    tail -F app.log | python run_adapter.py --route kafka://kafka1:9092/app-logs

    # Topic as a route option, YAML settings instead of environment
    python run_adapter.py --route "kafka://kafka1:9092?topic=app-logs" \\
        --config config/adapter.yaml < records.jsonl

Input:
    - Lines holding a JSON object with a "data" key become structured records
    - Any other line becomes a raw-text record (source "stdin")

Lifecycle:
    1. Parse route URI (adapter name, address, options)
    2. Load configuration (environment or YAML)
    3. Create adapter through the registry (connects with retries)
    4. Stream stdin until EOF or until the adapter closes the route
    5. Producer flushed and closed

Signals:
    - SIGTERM / SIGINT (Ctrl+C): stop reading input, close producer
"""

import argparse
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Dict, Iterator, Optional, TextIO, Tuple
from urllib.parse import parse_qsl, urlsplit

from logship_kafka import (
    AdapterConfig,
    AdapterError,
    AdapterNotAvailableError,
    AdapterRegistry,
    LogRecord,
    Route,
    new_kafka_adapter,
)


# ─────────────────────────────────────────────────────────────────────────────
# Logging Setup
# ─────────────────────────────────────────────────────────────────────────────

def setup_logging(log_file: Optional[Path] = None, debug: bool = False) -> logging.Logger:
    """
    Setup logging for the runner.

    Args:
        log_file: Optional path to log file
        debug: Enable DEBUG level

    Returns:
        Logger instance for the runner
    """
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
            *(
                [logging.FileHandler(log_file)]
                if log_file
                else []
            )
        ]
    )

    return logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Route and Input
# ─────────────────────────────────────────────────────────────────────────────

def parse_route_uri(uri: str) -> Tuple[str, str, Dict[str, str]]:
    """
    Split a route URI into adapter name, address and options.

    Example:
        >>> parse_route_uri("kafka://k1:9092,k2:9092/logs?x=1")
        ('kafka', 'k1:9092,k2:9092/logs', {'x': '1'})
    """
    parts = urlsplit(uri)
    if not parts.scheme:
        raise ValueError(f"Route URI needs an adapter scheme, got {uri!r}")
    address = parts.netloc + parts.path
    options = dict(parse_qsl(parts.query))
    return parts.scheme, address, options


def read_records(stream: TextIO, route_closed) -> Iterator[LogRecord]:
    """Yield one LogRecord per input line until EOF or route close."""
    for line in stream:
        if route_closed():
            return
        line = line.rstrip("\n")
        if not line:
            continue

        record = None
        if line.startswith("{"):
            try:
                record = LogRecord.from_dict(json.loads(line))
            except ValueError:
                record = None
        yield record or LogRecord(data=line, source="stdin")


def build_registry() -> AdapterRegistry:
    registry = AdapterRegistry()
    registry.register("kafka", new_kafka_adapter, "Publish log records to a Kafka topic")
    return registry


# ─────────────────────────────────────────────────────────────────────────────
# Main App
# ─────────────────────────────────────────────────────────────────────────────

class AdapterApp:
    """
    Application wrapper around one adapter and its input stream.

    Handles:
    - Configuration loading
    - Adapter creation via the registry
    - Signal handling (SIGTERM, SIGINT)
    """

    def __init__(
        self,
        route_uri: str,
        config_path: Optional[Path] = None,
        log_file: Optional[Path] = None
    ):
        self.route_uri = route_uri
        self.config_path = config_path
        self.config = (
            AdapterConfig.from_yaml(config_path) if config_path
            else AdapterConfig.from_env()
        )
        self.logger = setup_logging(log_file, debug=self.config.debug)
        self.registry = build_registry()
        self.adapter = None
        self._route_closed = False

    def _close_route(self) -> None:
        self._route_closed = True
        self.logger.warning("⚠️  Adapter closed the route")

    def setup(self) -> None:
        """Parse the route and create the adapter."""
        name, address, options = parse_route_uri(self.route_uri)
        route = Route(address=address, options=options, on_close=self._close_route)

        self.logger.info(f"🔌 Creating '{name}' adapter for {address}")
        self.adapter = self.registry.create(name, route, self.config)
        self.logger.info("✅ Adapter ready")

    def run(self, stream: TextIO = sys.stdin) -> int:
        """
        Stream input until EOF.

        Returns:
            Exit code (1 if the adapter closed the route)
        """
        if not self.adapter:
            raise RuntimeError("Adapter not initialized. Call setup() first.")

        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            self.adapter.stream(read_records(stream, lambda: self._route_closed))
        except KeyboardInterrupt:
            self.logger.info("⚠️  KeyboardInterrupt received")

        stats = self.adapter.get_stats()
        self.logger.info(f"✅ Shipped {stats['message_count']} messages to {stats['topic']}")
        return 1 if self._route_closed else 0

    def _signal_handler(self, signum, frame):
        signal_name = signal.Signals(signum).name
        self.logger.info(f"⚠️  Received signal {signal_name} ({signum})")
        raise KeyboardInterrupt


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Kafka log adapter - ship stdin log lines to Kafka",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment (when --config is not given):
  TLS_CERT_FILE, TLS_PRIVKEY_FILE   client certificate and key (both or neither)
  KAFKA_TEMPLATE                    Jinja2 message template
  KAFKA_CONNECT_RETRIES             producer connect attempts (default 3)
  KAFKA_COMPRESSION_CODEC           gzip | snappy (anything else: none)
  DEBUG                             verbose diagnostics
        """
    )

    parser.add_argument(
        '--route',
        required=True,
        help='Route URI, e.g. kafka://kafka1:9092,kafka2:9092/topic'
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to adapter configuration YAML file'
    )

    parser.add_argument(
        '--log-file',
        type=Path,
        default=None,
        help='Also write runner logs to this file'
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if args.config and not args.config.exists():
        print(f"❌ Error: Configuration file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    try:
        app = AdapterApp(
            route_uri=args.route,
            config_path=args.config,
            log_file=args.log_file
        )
        app.setup()
    except (AdapterError, AdapterNotAvailableError, ValueError) as e:
        print(f"❌ Fatal error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(app.run())


if __name__ == '__main__':
    main()
