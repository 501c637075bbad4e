from .types import (
    ErrorCategory,
    MissingImplementation,
    SelectorError,
    Version,
)
from .selector import VersionSelector
from .bindings import VersionBindings
from .detector import HttpVersionDetector, StaticVersionDetector, VersionDetector
from .wiring import create_selector, detect_version

__all__ = [
    # Types
    "ErrorCategory",
    "MissingImplementation",
    "SelectorError",
    "Version",
    # Selector
    "VersionSelector",
    # Bindings
    "VersionBindings",
    # Detection
    "VersionDetector",
    "StaticVersionDetector",
    "HttpVersionDetector",
    # Wiring
    "create_selector",
    "detect_version",
]
