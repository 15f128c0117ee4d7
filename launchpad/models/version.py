"""Version data models"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any

from ..api.exceptions import InvalidVersionError
from ..constants import (
    VERSION_COMPONENT_MAX,
    TAG_PREFIX,
    LANE_BETA,
    LANE_BETA_PATCH,
    LANE_BETA_MINOR,
)


class BumpKind(Enum):
    """Which semantic component a deploy increments"""
    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"

    @property
    def lane(self) -> str:
        """fastlane lane that uploads this kind of bump"""
        return _LANES[self]

    @property
    def description(self) -> str:
        """Human-readable action name"""
        if self is BumpKind.PATCH:
            return "patch version bump"
        if self is BumpKind.MINOR:
            return "minor version bump"
        return "build number increment"


_LANES = {
    BumpKind.NONE: LANE_BETA,
    BumpKind.PATCH: LANE_BETA_PATCH,
    BumpKind.MINOR: LANE_BETA_MINOR,
}


@dataclass(frozen=True)
class Version:
    """Marketing version plus build number

    ``major``, ``minor`` and ``patch`` are non-negative; ``build`` is at
    least 1. Every field stays within a signed 32-bit integer.
    """
    major: int
    minor: int
    patch: int
    build: int = 1

    def __post_init__(self):
        for name in ("major", "minor", "patch", "build"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidVersionError(f"Version {name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidVersionError(f"Version {name} must be non-negative, got {value}")
            if value > VERSION_COMPONENT_MAX:
                raise InvalidVersionError(
                    f"Version {name} exceeds {VERSION_COMPONENT_MAX}: {value}"
                )
        if self.build < 1:
            raise InvalidVersionError(f"Build number must be at least 1, got {self.build}")

    @property
    def marketing(self) -> str:
        """Semantic part, e.g. ``1.2.3``"""
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def tag_name(self) -> str:
        """Source-control tag recording this release"""
        return f"{TAG_PREFIX}{self.marketing}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'major': self.major,
            'minor': self.minor,
            'patch': self.patch,
            'build': self.build
        }

    def __str__(self) -> str:
        return f"{self.marketing} ({self.build})"
