"""
AdapterRegistry - Explicit adapter registration for hosts

Bounded Context: Host integration
Responsibilities:
  - Register adapter factories under a name (e.g., "kafka")
  - Validate adapter existence before construction
  - Provide introspection (available_adapters, get_help)

The registry is an ordinary object owned by the hosting layer. Nothing in
the adapter itself looks it up.

Threading: Thread-safe (uses lock for write operations)
"""

from typing import Callable, Dict, Set
import threading

from .config import AdapterConfig
from .schemas import Route


class AdapterNotAvailableError(Exception):
    """Raised when a route names an unregistered adapter"""
    pass


class AdapterRegistry:
    """
    Registry of adapter factories.

    Example:
        registry = AdapterRegistry()
        registry.register('kafka', new_kafka_adapter, "Publish logs to Kafka")

        adapter = registry.create('kafka', route, config)
        adapter.stream(records)
    """

    def __init__(self):
        self._factories: Dict[str, Callable] = {}
        self._descriptions: Dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, name: str, factory: Callable, description: str) -> None:
        """
        Register an adapter factory.

        Args:
            name: Adapter name, as used in route URIs
            factory: Callable (route, config) -> adapter
            description: Human-readable description for help text

        Raises:
            ValueError: If name already registered
        """
        with self._lock:
            if name in self._factories:
                raise ValueError(f"Adapter '{name}' already registered")

            self._factories[name] = factory
            self._descriptions[name] = description

    def create(self, name: str, route: Route, config: AdapterConfig):
        """
        Construct the adapter registered under name.

        Raises:
            AdapterNotAvailableError: If name not registered
        """
        if name not in self._factories:
            raise AdapterNotAvailableError(
                f"Adapter '{name}' not available. "
                f"Available adapters: {', '.join(sorted(self.available_adapters))}"
            )

        return self._factories[name](route, config)

    def is_available(self, name: str) -> bool:
        return name in self._factories

    @property
    def available_adapters(self) -> Set[str]:
        """Snapshot of registered adapter names."""
        return set(self._factories.keys())

    def get_help(self) -> Dict[str, str]:
        return dict(self._descriptions)
