"""API layer for launchpad

The Deployer facade lives in :mod:`launchpad.api.deployer`.
"""

from .exceptions import (
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
    TagCreateError,
    TagPushError,
    ProcessFailedError,
    IOFailureError,
)

__all__ = [
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
    "TagCreateError",
    "TagPushError",
    "ProcessFailedError",
    "IOFailureError",
]
