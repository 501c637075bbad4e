"""Startup wiring: detect the remote version once and bind a selector to it.

Usage:
    bindings = VersionBindings().discover("myapp.search_adapters")
    selector = await create_selector(bindings, HttpVersionDetector("http://es:9200"))
    adapter = selector.resolve()

Environment:
    VERSIONSELECT_VERSION        fixed version, skips detection
    VERSIONSELECT_PROBE_URL      probe URL used when no detector is passed
    VERSIONSELECT_PROBE_TIMEOUT  probe timeout in seconds (default 5.0)
    VERSIONSELECT_MAJOR_ONLY     key on the major release line (default true)
    VERSIONSELECT_STRICT         fail at wiring time on a missing binding
"""

from __future__ import annotations

from typing import Any, Hashable, Mapping, Optional, Union

from . import settings
from ._logging import get_component_logger
from .bindings import VersionBindings
from .detector import HttpVersionDetector, VersionDetector
from .selector import Factory, VersionSelector
from .types import ErrorCategory, MissingImplementation, SelectorError, Version


async def detect_version(
    detector: Optional[VersionDetector] = None,
    logger: Optional[Any] = None,
) -> Version:
    log = get_component_logger("VersionWiring", logger)

    override = settings.get_version_override()
    if override is not None:
        version = Version.parse(override)
        if settings.is_major_only():
            version = version.major_line()
        log.info("version_override_applied", version=str(version))
        return version

    if detector is None:
        probe_url = settings.get_probe_url()
        if probe_url is None:
            raise SelectorError(
                ErrorCategory.DETECTION,
                "No version detector given and VERSIONSELECT_PROBE_URL is not set",
            )
        detector = HttpVersionDetector(
            probe_url,
            timeout=settings.get_probe_timeout(),
            major_only=settings.is_major_only(),
            logger=logger,
        )

    return await detector.detect()


async def create_selector(
    bindings: Union[VersionBindings, Mapping[Hashable, Factory[Any]]],
    detector: Optional[VersionDetector] = None,
    logger: Optional[Any] = None,
) -> VersionSelector[Any]:
    log = get_component_logger("VersionWiring", logger)

    registry = bindings.build() if isinstance(bindings, VersionBindings) else bindings
    version = await detect_version(detector, logger=logger)

    if settings.is_strict() and version not in registry:
        log.error(
            "version_wiring_incomplete",
            version=str(version),
            bound_versions=sorted(str(v) for v in registry),
        )
        raise MissingImplementation(version)

    log.info("version_selector_created", version=str(version), bindings=len(registry))
    return VersionSelector(version, registry, logger=logger)
