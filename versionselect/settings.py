from __future__ import annotations

import math
import os
from typing import Optional


_TRUE = {"1", "true", "yes"}
_FALSE = {"0", "false", "no"}

DEFAULT_PROBE_TIMEOUT = 5.0


def _env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    lowered = val.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


def _env_str(name: str) -> Optional[str]:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    return val.strip()


def get_version_override() -> Optional[str]:
    """Fixed version to use instead of probing the remote system."""
    return _env_str("VERSIONSELECT_VERSION")


def get_probe_url() -> Optional[str]:
    return _env_str("VERSIONSELECT_PROBE_URL")


def get_probe_timeout() -> float:
    val = _env_str("VERSIONSELECT_PROBE_TIMEOUT")
    if val is None:
        return DEFAULT_PROBE_TIMEOUT
    try:
        timeout = float(val)
    except ValueError:
        return DEFAULT_PROBE_TIMEOUT
    if not math.isfinite(timeout) or timeout <= 0:
        return DEFAULT_PROBE_TIMEOUT
    return timeout


def is_major_only() -> bool:
    return _env_bool("VERSIONSELECT_MAJOR_ONLY", True)


def is_strict() -> bool:
    return _env_bool("VERSIONSELECT_STRICT", False)
