# launchpad/models/__init__.py
"""Data models for launchpad"""

from .version import Version, BumpKind
from .config import AppleCredentials, GlobalConfig, ProjectConfig, DeployOptions
from .result import (
    CheckResult,
    PreflightReport,
    ProcessResult,
    DeployStage,
    DeploySuccess,
    DeployFailure,
    DeployOutcome,
)

__all__ = [
    # Version models
    "Version",
    "BumpKind",

    # Config models
    "AppleCredentials",
    "GlobalConfig",
    "ProjectConfig",
    "DeployOptions",

    # Result models
    "CheckResult",
    "PreflightReport",
    "ProcessResult",
    "DeployStage",
    "DeploySuccess",
    "DeployFailure",
    "DeployOutcome",
]
