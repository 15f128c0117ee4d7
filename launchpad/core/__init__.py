"""Core functionality for launchpad"""

from .path_resolver import PathResolver, find_project_root
from .version_state import VersionState, compute_next
from .version_store import ProjectVersionStore
from .xcode import Xcode
from .fastlane import Fastlane
from .preflight import PreflightChecker
from .process_runner import ProcessRunner
from .tag_manager import TagManager
from .orchestrator import DeployOrchestrator

__all__ = [
    "PathResolver",
    "find_project_root",
    "VersionState",
    "compute_next",
    "ProjectVersionStore",
    "Xcode",
    "Fastlane",
    "PreflightChecker",
    "ProcessRunner",
    "TagManager",
    "DeployOrchestrator",
]
