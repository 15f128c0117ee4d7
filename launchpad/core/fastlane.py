"""fastlane discovery, Fastfile inspection and lane environment"""

import re
import shutil
import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from ..constants import (
    FASTLANE_TOOL,
    FASTFILE_CANDIDATES,
    LANE_PATTERN,
    LANE_BLOCK_PATTERN,
    VERSION_BUMP_ACTION_PATTERN,
    ENV_ASC_KEY_ID,
    ENV_ASC_ISSUER_ID,
    ENV_ASC_KEY_FILEPATH,
    ENV_FASTLANE_SETTINGS_TIMEOUT,
    FASTLANE_XCODEBUILD_SETTINGS_TIMEOUT,
)
from ..models.config import AppleCredentials
from ..utils.version_utils import extract_uploaded_version

FASTLANE_VERSION_LINE = re.compile(r"^fastlane (\d+(?:\.\d+)+)\s*$", re.MULTILINE)


def fastfile_candidates(project_root: Union[str, Path], ios_path: str) -> List[Path]:
    """Fastfile locations in search order"""
    root = Path(project_root)
    return [root / pattern.format(ios_path=ios_path) for pattern in FASTFILE_CANDIDATES]


def find_fastfile(project_root: Union[str, Path], ios_path: str) -> Optional[Path]:
    """First existing Fastfile, or None"""
    for candidate in fastfile_candidates(project_root, ios_path):
        if candidate.is_file():
            return candidate
    return None


def parse_lanes(fastfile_content: str) -> Set[str]:
    """Names of every ``lane :name do`` declaration"""
    return {match.group('name') for match in LANE_PATTERN.finditer(fastfile_content)}


def missing_lanes(fastfile_content: str, required: Iterable[str]) -> List[str]:
    """Required lanes the Fastfile does not declare, in ``required`` order"""
    declared = parse_lanes(fastfile_content)
    return [lane for lane in required if lane not in declared]


def lane_bodies(fastfile_content: str) -> Dict[str, str]:
    """Map each lane and private lane to the source up to the next declaration

    Full-line comments are dropped first.
    """
    content = "\n".join(
        line for line in fastfile_content.splitlines()
        if not line.lstrip().startswith("#")
    )
    matches = list(LANE_BLOCK_PATTERN.finditer(content))
    bodies = {}
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(content)
        bodies[match.group('name')] = content[match.end():end]
    return bodies


def self_bumping_lanes(fastfile_content: str, lanes: Iterable[str]) -> List[str]:
    """Lanes from ``lanes`` that run a version bump action

    A lane counts when its body calls ``increment_build_number`` or
    ``increment_version_number``, directly or through another lane it calls.
    """
    bodies = lane_bodies(fastfile_content)
    bumping = {name for name, body in bodies.items() if VERSION_BUMP_ACTION_PATTERN.search(body)}

    changed = True
    while changed:
        changed = False
        for name, body in bodies.items():
            if name in bumping:
                continue
            if any(re.search(rf"\b{re.escape(callee)}\b", body) for callee in bumping):
                bumping.add(name)
                changed = True

    return [lane for lane in lanes if lane in bumping]


def lane_environment(credentials: AppleCredentials) -> Dict[str, str]:
    """Environment fastlane needs to authenticate with App Store Connect"""
    return {
        ENV_ASC_KEY_ID: credentials.key_id,
        ENV_ASC_ISSUER_ID: credentials.issuer_id,
        ENV_ASC_KEY_FILEPATH: credentials.expanded_key_path,
        ENV_FASTLANE_SETTINGS_TIMEOUT: FASTLANE_XCODEBUILD_SETTINGS_TIMEOUT,
    }


def last_reported_version(output: Iterable[str]) -> Optional[str]:
    """Last version string seen on a line mentioning a version or build"""
    reported = None
    for line in output:
        lowered = line.lower()
        if "version" in lowered or "build" in lowered or "successfully uploaded" in lowered:
            version = extract_uploaded_version(line)
            if version:
                reported = version
    return reported


class Fastlane:
    """Locate and query the fastlane executable"""

    @staticmethod
    def path() -> Optional[str]:
        """Absolute path of fastlane, or None if not on PATH"""
        return shutil.which(FASTLANE_TOOL)

    @staticmethod
    def version() -> Optional[str]:
        """Installed fastlane version, or None if not installed

        fastlane prints ``fastlane X.Y.Z`` after its installation path;
        when no such line is found ``installed`` is returned.
        """
        path = Fastlane.path()
        if path is None:
            return None

        try:
            result = subprocess.run(
                [path, "--version"],
                capture_output=True,
                text=True
            )
        except OSError:
            return None

        if result.returncode != 0:
            return None

        match = FASTLANE_VERSION_LINE.search(result.stdout)
        return match.group(1) if match else "installed"
