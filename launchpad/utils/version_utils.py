"""Version management utilities"""

from typing import Optional, Tuple

from packaging.version import parse, Version, InvalidVersion

from ..constants import UPLOADED_VERSION_PATTERN


def parse_version(version_str: str) -> Optional[Version]:
    """
    Parse version string

    Args:
        version_str: Version string

    Returns:
        Version object or None if invalid
    """
    try:
        return parse(version_str)
    except InvalidVersion:
        return None


def parse_marketing_version(version_str: str) -> Optional[Tuple[int, int, int]]:
    """
    Parse an Xcode marketing version into (major, minor, patch)

    Xcode accepts one to three dot-separated integers; missing parts
    are treated as 0.

    Args:
        version_str: Marketing version, e.g. ``1.2`` or ``1.2.3``

    Returns:
        Tuple of three integers or None if invalid
    """
    version = parse_version(version_str.strip().strip('"'))
    if version is None or version.is_prerelease or version.is_postrelease:
        return None
    if version.epoch or version.local or len(version.release) > 3:
        return None

    release = list(version.release) + [0, 0]
    return release[0], release[1], release[2]


def extract_uploaded_version(line: str) -> Optional[str]:
    """
    Find a version like ``1.0.0`` or ``1.0.0 (123)`` in a line of output

    Args:
        line: Output line

    Returns:
        Version string or None
    """
    match = UPLOADED_VERSION_PATTERN.search(line)
    if not match:
        return None

    version, build = match.group(1), match.group(2)
    if build:
        return f"{version} ({build})"
    return version
