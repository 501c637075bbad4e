from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Generic, Hashable, Mapping, Optional, TypeVar

from ._logging import get_component_logger
from .types import MissingImplementation

T = TypeVar("T")

Factory = Callable[[], T]


class VersionSelector(Generic[T]):
    """
    Resolve the implementation bound to a detected version.

    Usage:
        bindings = {Version(7): Es7Adapter, Version(8): Es8Adapter}
        selector = VersionSelector(Version(7), bindings)
        adapter = selector.resolve()  # Es7Adapter()

    Lookup is by exact equality on the version key. Every resolve() call
    invokes the bound factory again; whether that yields a shared instance
    is up to the factory.
    """

    def __init__(
        self,
        version: Hashable,
        bindings: Mapping[Hashable, Factory[T]],
        logger: Optional[Any] = None,
    ):
        self._version = version
        self._bindings = MappingProxyType(bindings) if isinstance(bindings, dict) else bindings
        self._logger = get_component_logger("VersionSelector", logger)

    @property
    def version(self) -> Hashable:
        return self._version

    def resolve(self) -> T:
        factory = self._bindings.get(self._version)
        if factory is None:
            self._logger.debug("version_selector_missing_implementation", version=str(self._version))
            raise MissingImplementation(self._version)
        return factory()

    def __repr__(self) -> str:
        return f"VersionSelector(version={self._version!r}, bindings={len(self._bindings)})"
