from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Self

_VERSION_PATTERN = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:[-+].*)?$")


@dataclass(frozen=True, order=True)
class Version:
    """
    A format version as (major, minor, patch).
    """

    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def from_string(cls, data: str) -> Self:
        """
        Parse a version string like ``"2.0.0"``, ``"2.1"`` or ``"2"``. Missing components
        default to zero and any pre-release / build suffix is ignored.
        """
        match = _VERSION_PATTERN.match(data.strip())
        if match is None:
            raise ValueError(f"Invalid version string. Got {data!r}.")
        major, minor, patch = (int(v) if v is not None else 0 for v in match.groups())
        return cls(major, minor, patch)

    def is_compatible(self, other: Version) -> bool:
        """Two versions are compatible when they share a major version."""
        return self.major == other.major

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def default_version() -> Version:
    """The version reported for a container without root metadata."""
    from zarrkv.core.config import config

    return Version.from_string(str(config.get("version.default")))
