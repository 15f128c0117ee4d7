"""Read and write the version fields of an Xcode project"""

import logging
import re
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from .xcode import find_project
from ..api.exceptions import ProjectNotFoundError, InvalidVersionError, IOFailureError
from ..constants import PBXPROJ_FILE
from ..models.version import Version
from ..utils.version_utils import parse_marketing_version

BUILD_SETTINGS_START = re.compile(r"buildSettings\s*=\s*\{")
MARKETING_VERSION_FIELD = re.compile(r'MARKETING_VERSION = "?([^";]*)"?;')
BUILD_NUMBER_FIELD = re.compile(r'CURRENT_PROJECT_VERSION = "?([^";]*)"?;')


def _find_matching_brace(text: str, start: int) -> int:
    """Index of the brace closing the one at ``start``, or -1"""
    depth = 0
    for pos in range(start, len(text)):
        if text[pos] == '{':
            depth += 1
        elif text[pos] == '}':
            depth -= 1
            if depth == 0:
                return pos
    return -1


def iter_build_settings(content: str) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) of the body of every buildSettings block"""
    for match in BUILD_SETTINGS_START.finditer(content):
        open_brace = match.end() - 1
        close_brace = _find_matching_brace(content, open_brace)
        if close_brace != -1:
            yield open_brace + 1, close_brace


class ProjectVersionStore:
    """MARKETING_VERSION and CURRENT_PROJECT_VERSION in project.pbxproj

    Only build configurations of the target with ``bundle_id`` are read
    and written. With an empty ``bundle_id`` every configuration that
    carries both fields is used.
    """

    def __init__(self, ios_path: Union[str, Path], bundle_id: str = ""):
        self.ios_path = Path(ios_path)
        self.bundle_id = bundle_id
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def pbxproj_path(self) -> Path:
        project = find_project(self.ios_path)
        if project is None:
            raise ProjectNotFoundError(str(self.ios_path))
        path = project / PBXPROJ_FILE
        if not path.is_file():
            raise ProjectNotFoundError(str(project), hint=f"{PBXPROJ_FILE} is missing from {project.name}")
        return path

    def _belongs_to_target(self, block: str) -> bool:
        if not self.bundle_id:
            return bool(MARKETING_VERSION_FIELD.search(block) and BUILD_NUMBER_FIELD.search(block))
        pattern = r'PRODUCT_BUNDLE_IDENTIFIER = "?' + re.escape(self.bundle_id) + r'"?;'
        return re.search(pattern, block) is not None

    def _read_content(self, path: Path) -> str:
        try:
            return path.read_text(encoding='utf-8')
        except OSError as e:
            raise IOFailureError(f"Cannot read {path}: {e}")

    def _target_blocks(self, content: str) -> List[Tuple[int, int]]:
        blocks = [
            (start, end) for start, end in iter_build_settings(content)
            if self._belongs_to_target(content[start:end])
        ]
        if not blocks:
            target = f"bundle id {self.bundle_id}" if self.bundle_id else "any target"
            raise InvalidVersionError(f"No build settings with version fields for {target}")
        return blocks

    def read(self) -> Version:
        """Read the current version

        When build configurations disagree the highest version wins.

        Raises:
            ProjectNotFoundError: If there is no .xcodeproj
            InvalidVersionError: If the fields are missing or malformed
            IOFailureError: If the file cannot be read
        """
        path = self.pbxproj_path
        content = self._read_content(path)

        versions = []
        for start, end in self._target_blocks(content):
            block = content[start:end]
            marketing_match = MARKETING_VERSION_FIELD.search(block)
            build_match = BUILD_NUMBER_FIELD.search(block)
            if not marketing_match or not build_match:
                continue

            parts = parse_marketing_version(marketing_match.group(1))
            if parts is None:
                raise InvalidVersionError(f"Invalid MARKETING_VERSION: {marketing_match.group(1)}")
            build = build_match.group(1).strip()
            if not build.isdigit():
                raise InvalidVersionError(f"Invalid CURRENT_PROJECT_VERSION: {build}")

            versions.append(Version(parts[0], parts[1], parts[2], max(int(build), 1)))

        if not versions:
            raise InvalidVersionError(f"MARKETING_VERSION or CURRENT_PROJECT_VERSION missing in {path}")

        if len(set(versions)) > 1:
            self.logger.warning(
                f"Build configurations disagree on version: {', '.join(sorted({str(v) for v in versions}))}"
            )

        return max(versions, key=lambda v: (v.major, v.minor, v.patch, v.build))

    def write(self, version: Version) -> None:
        """Write ``version`` into every matching build configuration

        Raises:
            ProjectNotFoundError: If there is no .xcodeproj
            InvalidVersionError: If no matching build settings exist
            IOFailureError: If the file cannot be written
        """
        path = self.pbxproj_path
        content = self._read_content(path)

        # Rewrite from the end so earlier offsets stay valid
        for start, end in reversed(self._target_blocks(content)):
            block = content[start:end]
            block = MARKETING_VERSION_FIELD.sub(f"MARKETING_VERSION = {version.marketing};", block)
            block = BUILD_NUMBER_FIELD.sub(f"CURRENT_PROJECT_VERSION = {version.build};", block)
            content = content[:start] + block + content[end:]

        try:
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise IOFailureError(f"Cannot write {path}: {e}")

        self.logger.info(f"Wrote version {version} to {path}")
