# ndmeta/core/registry.py
import logging
from threading import RLock
from typing import Any, Callable, Dict, Hashable, List

InfoFactory = Callable[[Any], Any]

logger = logging.getLogger(__name__)


class InfoRegistry:
    """Minimal thread-safe registry mapping info kinds to store-bound factories."""

    def __init__(self):
        self._lock = RLock()
        self._factories: Dict[Hashable, InfoFactory] = {}

    def register_info(self, kind: Hashable, factory: InfoFactory) -> None:
        """Register factory building the info object for ``kind``."""
        with self._lock:
            if kind in self._factories:
                logger.debug(f"Replacing info factory for kind '{kind}'")
            self._factories[kind] = factory
            logger.debug(
                f"Registered info factory "
                f"{getattr(factory, '__name__', repr(factory))} for kind '{kind}'"
            )

    def get_info_factory(self, kind: Hashable) -> InfoFactory:
        """Get info factory."""
        with self._lock:
            if kind not in self._factories:
                available = list(self._factories.keys())
                raise ValueError(
                    f"No info registered for kind '{kind}'. Available: {available}"
                )
            return self._factories[kind]

    def available_kinds(self) -> List[Hashable]:
        with self._lock:
            return list(self._factories.keys())


# Global registry instance
_registry = InfoRegistry()


# Simple public interface
def get_info_factory(kind: Hashable) -> InfoFactory:
    return _registry.get_info_factory(kind)


def available_info_kinds() -> List[Hashable]:
    return _registry.available_kinds()


def register_info(kind: Hashable):
    """Decorator for info registration.

    The decorated class or function is called with the store to bind to.
    """

    def decorator(factory: InfoFactory):
        _registry.register_info(kind, factory)
        return factory

    return decorator
