import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class Container:
    """Process-wide registry of long-lived collaborators.

    Filled once during application startup and cleared on shutdown.
    """

    def __init__(self):
        self._services: Dict[str, Any] = {}

    def register(self, name: str, service: Any) -> None:
        logger.debug("Registering %s -> %s", name, type(service).__name__)
        self._services[name] = service

    def get(self, name: str) -> Any:
        try:
            return self._services[name]
        except KeyError:
            raise LookupError(f"No service registered under '{name}'") from None

    def clear(self) -> None:
        self._services.clear()


container = Container()
