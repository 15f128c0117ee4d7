"""launchpad - ship iOS builds to TestFlight from the command line.

Checks the toolchain, credentials and repository, bumps the Xcode project
version, runs a fastlane lane to build and upload, then tags the release.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Exceptions
from .api.exceptions import (
    LaunchpadError,
    ConfigMissingError,
    ConfigInvalidError,
    ToolchainMissingError,
    CredentialMissingError,
    ProjectNotFoundError,
    LaneMissingError,
    LaneBumpsVersionError,
    WorkingTreeDirtyError,
    InvalidVersionError,
    TagExistsError,
    ProcessFailedError,
    IOFailureError,
)

# Data models
from .models import (
    Version,
    BumpKind,
    ProjectConfig,
    GlobalConfig,
    DeployOptions,
    CheckResult,
    DeployStage,
    DeploySuccess,
    DeployFailure,
)

# Core API
from .api.deployer import Deployer, deploy
from .core.orchestrator import DeployOrchestrator

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main classes
    "Deployer",
    "DeployOrchestrator",

    # Core API functions
    "deploy",

    # Data models
    "Version",
    "BumpKind",
    "ProjectConfig",
    "GlobalConfig",
    "DeployOptions",
    "CheckResult",
    "DeployStage",
    "DeploySuccess",
    "DeployFailure",

    # Exceptions
    "LaunchpadError",
    "ConfigMissingError",
    "ConfigInvalidError",
    "ToolchainMissingError",
    "CredentialMissingError",
    "ProjectNotFoundError",
    "LaneMissingError",
    "LaneBumpsVersionError",
    "WorkingTreeDirtyError",
    "InvalidVersionError",
    "TagExistsError",
    "ProcessFailedError",
    "IOFailureError",
]
