"""Structured logging helpers for versionselect.

Components take an optional injected logger; without one they use the
default structlog logger.
"""

import structlog
from typing import Any, Optional


def get_component_logger(component: str, logger: Optional[Any] = None) -> Any:
    """Get logger bound to a component name.

    Args:
        component: Component name (e.g., "VersionSelector", "HttpVersionDetector")
        logger: Optional injected logger. If None, uses default structlog logger.

    Returns:
        Logger bound to the component name
    """
    base = logger or structlog.get_logger()
    return base.bind(component=component)
