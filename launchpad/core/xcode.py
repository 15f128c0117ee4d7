"""Xcode project discovery and xcodebuild queries"""

import subprocess
from pathlib import Path
from typing import List, Optional, Union

from ..api.exceptions import ProjectNotFoundError, ToolchainMissingError, LaunchpadError
from ..constants import (
    XCODEBUILD_TOOL,
    XCODE_WORKSPACE_SUFFIX,
    XCODE_PROJECT_SUFFIX,
    IOS_PATH_CANDIDATES,
    HINT_INSTALL_XCODE,
)


def find_workspace(path: Path) -> Optional[Path]:
    """Find a user workspace directly inside ``path``

    The ``project.xcworkspace`` embedded in every .xcodeproj is ignored.
    """
    if not path.is_dir():
        return None
    for entry in sorted(path.iterdir()):
        if entry.name.endswith(XCODE_WORKSPACE_SUFFIX) and not entry.name.startswith("project."):
            return entry
    return None


def find_project(path: Path) -> Optional[Path]:
    """Find an .xcodeproj directly inside ``path``"""
    if not path.is_dir():
        return None
    for entry in sorted(path.iterdir()):
        if entry.name.endswith(XCODE_PROJECT_SUFFIX):
            return entry
    return None


def find_descriptor(path: Path) -> Optional[Path]:
    """Workspace if there is one, else project"""
    return find_workspace(path) or find_project(path)


def detect_ios_path(root: Union[str, Path] = ".") -> Optional[str]:
    """Find the first candidate directory holding an Xcode workspace or project

    Returns:
        Candidate as written in IOS_PATH_CANDIDATES, or None
    """
    root = Path(root)
    for candidate in IOS_PATH_CANDIDATES:
        if find_descriptor(root / candidate):
            return candidate
    return None


def parse_schemes(output: str) -> List[str]:
    """Extract scheme names from ``xcodebuild -list`` output"""
    schemes = []
    in_schemes = False

    for line in output.splitlines():
        trimmed = line.strip()

        if trimmed == "Schemes:":
            in_schemes = True
            continue

        if in_schemes:
            if not trimmed or trimmed.endswith(':'):
                break
            schemes.append(trimmed)

    return schemes


def parse_bundle_id(output: str) -> Optional[str]:
    """Extract PRODUCT_BUNDLE_IDENTIFIER from ``-showBuildSettings`` output"""
    for line in output.splitlines():
        if "PRODUCT_BUNDLE_IDENTIFIER" in line and '=' in line:
            return line.split('=', 1)[1].strip()
    return None


class Xcode:
    """Thin wrapper around xcodebuild"""

    @staticmethod
    def _run(args: List[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [XCODEBUILD_TOOL, *args],
                capture_output=True,
                text=True
            )
        except FileNotFoundError:
            raise ToolchainMissingError("Xcode", hint=HINT_INSTALL_XCODE)

    @staticmethod
    def _descriptor_args(ios_path: Union[str, Path]) -> List[str]:
        path = Path(ios_path)
        workspace = find_workspace(path)
        if workspace:
            return ["-workspace", str(workspace)]
        project = find_project(path)
        if project:
            return ["-project", str(project)]
        raise ProjectNotFoundError(str(ios_path))

    @staticmethod
    def version() -> Optional[str]:
        """First line of ``xcodebuild -version``, or None if unavailable"""
        try:
            result = Xcode._run(["-version"])
        except ToolchainMissingError:
            return None

        if result.returncode != 0:
            return None
        lines = result.stdout.splitlines()
        return lines[0].strip() if lines else None

    @staticmethod
    def list_schemes(ios_path: Union[str, Path]) -> List[str]:
        """List available schemes in an Xcode project"""
        result = Xcode._run(["-list", *Xcode._descriptor_args(ios_path)])

        if result.returncode != 0:
            raise LaunchpadError(f"xcodebuild -list failed: {result.stderr.strip()}")

        return parse_schemes(result.stdout)

    @staticmethod
    def get_bundle_id(ios_path: Union[str, Path], scheme: str) -> Optional[str]:
        """Get bundle identifier for a scheme"""
        result = Xcode._run(
            ["-showBuildSettings", "-scheme", scheme, *Xcode._descriptor_args(ios_path)]
        )

        if result.returncode != 0:
            return None

        return parse_bundle_id(result.stdout)
