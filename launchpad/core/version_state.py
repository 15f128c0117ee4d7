"""Next-version computation"""

from ..api.exceptions import InvalidVersionError
from ..constants import VERSION_COMPONENT_MAX
from ..models.version import Version, BumpKind


def _increment(value: int, name: str) -> int:
    if value >= VERSION_COMPONENT_MAX:
        raise InvalidVersionError(f"Cannot increment {name}: {value} is at the maximum")
    return value + 1


def compute_next(current: Version, bump: BumpKind) -> Version:
    """
    Compute the version the next upload carries

    The build number always increments by one. ``PATCH`` increments the
    patch component; ``MINOR`` increments minor and resets patch to 0.
    Major is never changed.

    Args:
        current: Version currently in the project
        bump: Component to bump

    Returns:
        New Version

    Raises:
        InvalidVersionError: If a component would exceed its maximum
    """
    build = _increment(current.build, "build number")

    if bump is BumpKind.MINOR:
        return Version(current.major, _increment(current.minor, "minor"), 0, build)
    if bump is BumpKind.PATCH:
        return Version(current.major, current.minor, _increment(current.patch, "patch"), build)
    return Version(current.major, current.minor, current.patch, build)


class VersionState:
    """Current and next version of one deploy

    Holds no I/O; callers persist ``next`` themselves.
    """

    def __init__(self, current: Version, bump: BumpKind = BumpKind.NONE):
        self.current = current
        self.bump = bump
        self.next = compute_next(current, bump)

    @property
    def lane(self) -> str:
        return self.bump.lane

    def __repr__(self) -> str:
        return f"VersionState({self.current} -> {self.next}, bump={self.bump.value})"
