from __future__ import annotations

import threading
from importlib import metadata
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional

from ._logging import get_component_logger
from .selector import Factory
from .types import ErrorCategory, SelectorError

Contributor = Callable[["VersionBindings"], None]

_UNSET = object()


class _SingletonFactory:
    """Builds its instance on first call, then keeps returning it."""

    def __init__(self, version: Hashable, factory: Factory[Any]):
        self._version = version
        self._factory = factory
        self._instance: Any = _UNSET
        self._building = False
        self._lock = threading.RLock()

    def __call__(self) -> Any:
        if self._instance is _UNSET:
            with self._lock:
                if self._instance is _UNSET:
                    # Only the building thread can get here while _building is set.
                    if self._building:
                        raise SelectorError(
                            ErrorCategory.CIRCULAR_BINDING,
                            f'Singleton for version "{self._version}" requested itself while building',
                        )
                    self._building = True
                    try:
                        self._instance = self._factory()
                    finally:
                        self._building = False
        return self._instance


class VersionBindings:
    """
    Collects one factory per supported version.

    Usage:
        bindings = VersionBindings()
        bindings.register(Version(7), Es7Adapter)
        bindings.install(es8_plugin.register)           # contributor(bindings)
        bindings.discover("myapp.search_adapters")       # entry points
        selector = VersionSelector(detected, bindings.build())
    """

    def __init__(self, logger: Optional[Any] = None):
        self._factories: Dict[Hashable, Factory[Any]] = {}
        self._logger = get_component_logger("VersionBindings", logger)

    def register(self, version: Hashable, factory: Factory[Any]) -> "VersionBindings":
        if version in self._factories:
            raise SelectorError(
                ErrorCategory.DUPLICATE_BINDING,
                f'Duplicate binding for version "{version}"',
            )
        self._factories[version] = factory
        self._logger.debug("version_binding_registered", version=str(version))
        return self

    def register_singleton(self, version: Hashable, factory: Factory[Any]) -> "VersionBindings":
        return self.register(version, _SingletonFactory(version, factory))

    def install(self, contributor: Contributor) -> "VersionBindings":
        contributor(self)
        return self

    def discover(self, group: str) -> "VersionBindings":
        """Install every contributor published under an entry point group."""
        for entry_point in metadata.entry_points(group=group):
            contributor = entry_point.load()
            self._logger.info(
                "version_bindings_plugin_loaded",
                group=group,
                plugin=entry_point.name,
            )
            self.install(contributor)
        return self

    def versions(self) -> List[Hashable]:
        return list(self._factories)

    def build(self) -> Mapping[Hashable, Factory[Any]]:
        return MappingProxyType(dict(self._factories))

    def __contains__(self, version: object) -> bool:
        return version in self._factories

    def __len__(self) -> int:
        return len(self._factories)
