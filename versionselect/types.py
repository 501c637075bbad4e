from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Optional


class ErrorCategory(str, Enum):
    MISSING_IMPLEMENTATION = "missing_implementation"
    DUPLICATE_BINDING = "duplicate_binding"
    CIRCULAR_BINDING = "circular_binding"
    DETECTION = "detection"
    PARSE = "parse"


@dataclass
class SelectorError(Exception):
    category: ErrorCategory
    message: str
    raw: Optional[Any] = None

    def __str__(self) -> str:
        return f"{self.category.value}: {self.message}"


class MissingImplementation(SelectorError):
    """
    No factory is bound for the detected version.

    Raised as a deployment defect: the set of version-specific
    implementations wired into the registry is incomplete.
    """

    def __init__(self, version: Hashable):
        super().__init__(
            ErrorCategory.MISSING_IMPLEMENTATION,
            f'Incomplete implementation for version "{version}".',
        )
        self.version = version


_VERSION_RE = re.compile(
    r"^[vV]?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?(?:[-+].*)?$"
)


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> "Version":
        """
        Parse "7", "7.10", "7.10.2" (optionally "v"-prefixed).

        Pre-release and build suffixes ("-SNAPSHOT", "+build.1") are ignored.
        """
        match = _VERSION_RE.match(str(text).strip())
        if match is None:
            raise SelectorError(ErrorCategory.PARSE, f'Invalid version "{text}"', raw=text)
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
        )

    def major_line(self) -> "Version":
        return Version(self.major)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
