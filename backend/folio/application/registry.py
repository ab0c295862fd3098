"""Backend registry — a string-keyed service locator for content backends.

The composition root creates one registry, registers backends during startup,
then calls ``freeze()``. After that the table is a read-only snapshot, so
lookups from concurrent requests need no locking.

Keys follow a colon-delimited namespace convention::

    folio:apps:article-reader
    folio:apps:article-printer
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from folio.domain.exceptions import (
    BackendNotRegisteredError,
    InvalidBackendError,
    RegistryFrozenError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

READER = "reader"
PRINTER = "printer"


def backend_key(namespace: str, resource: str, role: str) -> str:
    """Build ``"<namespace>:<resource>-<role>"``."""
    return f"{namespace}:{resource}-{role}"


class BackendRegistry:
    """Maps registry keys to opaque backend instances."""

    def __init__(self) -> None:
        self._backends: dict[str, Any] | Mapping[str, Any] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, key: str, instance: Any) -> None:
        """Register ``instance`` under ``key``. The last registration wins."""
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{key}': registry is frozen")
        if key in self._backends:
            logger.info("Replacing backend registered for '%s'", key)
        self._backends[key] = instance  # type: ignore[index]
        logger.debug("Registered backend %s for '%s'", type(instance).__name__, key)

    def freeze(self) -> None:
        """Take a read-only snapshot of the table. Further registration fails."""
        if not self._frozen:
            self._backends = MappingProxyType(dict(self._backends))
            self._frozen = True
            logger.info("Backend registry frozen with %d key(s)", len(self._backends))

    def keys(self) -> list[str]:
        return sorted(self._backends)

    def open(self, key: str) -> Any:
        """Return the instance registered under ``key`` without any capability check."""
        try:
            return self._backends[key]
        except KeyError:
            raise BackendNotRegisteredError(key) from None

    def resolve(self, key: str, capability: type[T]) -> T:
        """Return the instance under ``key`` if it implements ``capability``."""
        instance = self.open(key)
        if not isinstance(instance, capability):
            raise InvalidBackendError(key, capability.__name__)
        return instance
