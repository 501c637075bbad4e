from __future__ import annotations

from importlib import metadata


def _version(pkg: str) -> str:
    try:
        return metadata.version(pkg)
    except metadata.PackageNotFoundError:
        return "unknown"


def run_selftest() -> bool:
    """
    Lightweight import/dep check; no network calls.
    """
    try:
        import httpx  # noqa: F401
        print(f"versionselect selftest: httpx {_version('httpx')}")
    except ImportError as exc:
        print(f"versionselect selftest: missing httpx ({exc})")
        return False

    try:
        import structlog  # noqa: F401
        print(f"versionselect selftest: structlog {_version('structlog')}")
    except ImportError as exc:
        print(f"versionselect selftest: missing structlog ({exc})")
        return False

    try:
        from versionselect.bindings import VersionBindings  # noqa: F401
        from versionselect.detector import HttpVersionDetector  # noqa: F401
        from versionselect.selector import VersionSelector  # noqa: F401
        from versionselect.wiring import create_selector  # noqa: F401
        print("versionselect selftest: core imports ok")
    except ImportError as exc:
        print(f"versionselect selftest: import failed ({exc})")
        return False

    print("versionselect selftest: ok")
    return True


if __name__ == "__main__":
    run_selftest()
