"""Pre-deploy environment validation"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .fastlane import Fastlane, find_fastfile, missing_lanes, self_bumping_lanes
from .path_resolver import PathResolver
from .xcode import Xcode, find_descriptor, detect_ios_path
from ..api.exceptions import (
    LaunchpadError,
    ConfigMissingError,
    ToolchainMissingError,
    CredentialMissingError,
    ProjectNotFoundError,
    LaneMissingError,
    LaneBumpsVersionError,
    WorkingTreeDirtyError,
)
from ..constants import (
    ErrorCode,
    REQUIRED_LANES,
    HINT_INSTALL_XCODE,
    HINT_INSTALL_FASTLANE,
    HINT_RUN_INIT,
    PROJECT_CONFIG_FILE,
)
from ..models.config import ProjectConfig, GlobalConfig, DeployOptions
from ..models.result import CheckResult, PreflightReport
from ..utils.git_utils import get_git_status


def _failed(name: str, error: LaunchpadError) -> CheckResult:
    return CheckResult(
        name=name,
        passed=False,
        detail=str(error),
        error_code=error.error_code,
        hint=error.hint
    )


class PreflightChecker:
    """Run every precondition check before a deploy mutates anything

    All checks run and are reported together. The working tree check is
    the only one a flag can skip.
    """

    CHECK_XCODE = "Xcode"
    CHECK_FASTLANE = "fastlane"
    CHECK_PROJECT = "Project"
    CHECK_CREDENTIALS = "Apple API key"
    CHECK_LANES = "Fastfile"
    CHECK_GIT = "Git status"

    def __init__(self, project_root: Union[str, Path]):
        self.project_root = Path(project_root)
        self.path_resolver = PathResolver(self.project_root)
        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self,
            config: Optional[ProjectConfig],
            options: DeployOptions,
            global_config: Optional[GlobalConfig] = None) -> PreflightReport:
        """Run all checks in order

        Args:
            config: Project config, None when the project is not initialized
            options: Deploy options; ``skip_git_check`` drops the git check
            global_config: Apple credentials, None when not configured

        Returns:
            PreflightReport with one result per check that ran
        """
        checks: List[CheckResult] = [
            self.check_xcode(),
            self.check_fastlane(),
            self.check_project(config),
            self.check_credentials(global_config),
            self.check_lanes(config),
        ]

        if options.skip_git_check:
            self.logger.info("Skipping git working tree check")
        else:
            checks.append(self.check_working_tree())

        report = PreflightReport(checks=checks)
        for check in report.failures:
            self.logger.debug(f"Preflight check failed: {check.name}: {check.detail}")
        return report

    def check_xcode(self) -> CheckResult:
        version = Xcode.version()
        if version is None:
            return _failed(self.CHECK_XCODE, ToolchainMissingError("Xcode", hint=HINT_INSTALL_XCODE))
        return CheckResult(self.CHECK_XCODE, True, version)

    def check_fastlane(self) -> CheckResult:
        version = Fastlane.version()
        if version is None:
            return _failed(self.CHECK_FASTLANE, ToolchainMissingError("fastlane", hint=HINT_INSTALL_FASTLANE))
        return CheckResult(self.CHECK_FASTLANE, True, version)

    def check_project(self, config: Optional[ProjectConfig]) -> CheckResult:
        """The configured (or detected) directory holds a workspace or project"""
        if config is None:
            detected = detect_ios_path(self.project_root)
            hint = HINT_RUN_INIT
            if detected:
                hint += f" (Xcode project detected in '{detected}')"
            return _failed(
                self.CHECK_PROJECT,
                ConfigMissingError(f"{PROJECT_CONFIG_FILE} not found", hint=hint)
            )

        descriptor = find_descriptor(self.path_resolver.resolve(config.ios_path))
        if descriptor is None:
            return _failed(self.CHECK_PROJECT, ProjectNotFoundError(config.ios_path))

        return CheckResult(
            self.CHECK_PROJECT,
            True,
            f"{config.ios_path}/{descriptor.name} (scheme: {config.scheme})"
        )

    def check_credentials(self, global_config: Optional[GlobalConfig]) -> CheckResult:
        """Credentials are configured and the key file is readable"""
        if global_config is None:
            return _failed(self.CHECK_CREDENTIALS, CredentialMissingError("Not configured"))

        key_path = global_config.apple.expanded_key_path
        if not os.path.isfile(key_path):
            return _failed(
                self.CHECK_CREDENTIALS,
                CredentialMissingError(f"Key file not found: {key_path}")
            )
        if not os.access(key_path, os.R_OK):
            return _failed(
                self.CHECK_CREDENTIALS,
                CredentialMissingError(f"Key file not readable: {key_path}")
            )

        return CheckResult(self.CHECK_CREDENTIALS, True, f"Configured ({global_config.apple.key_id})")

    def check_lanes(self, config: Optional[ProjectConfig]) -> CheckResult:
        """A Fastfile declares every required lane and none of them bumps the version"""
        ios_path = config.ios_path if config else (detect_ios_path(self.project_root) or ".")

        fastfile = find_fastfile(self.project_root, ios_path)
        if fastfile is None:
            return _failed(
                self.CHECK_LANES,
                ConfigMissingError("Fastfile not found", hint=HINT_RUN_INIT)
            )

        try:
            content = fastfile.read_text(encoding='utf-8')
        except OSError as e:
            return CheckResult(self.CHECK_LANES, False, f"Cannot read {fastfile}: {e}",
                               ErrorCode.IO_FAILURE)

        relative = str(self.path_resolver.get_relative_to_root(fastfile))
        missing = missing_lanes(content, REQUIRED_LANES)
        if missing:
            return _failed(self.CHECK_LANES, LaneMissingError(missing, relative))

        bumping = self_bumping_lanes(content, REQUIRED_LANES)
        if bumping:
            return _failed(self.CHECK_LANES, LaneBumpsVersionError(bumping, relative))

        return CheckResult(self.CHECK_LANES, True, relative)

    def check_working_tree(self) -> CheckResult:
        """No uncommitted or untracked changes"""
        try:
            status = get_git_status(self.project_root)
        except FileNotFoundError:
            return _failed(self.CHECK_GIT, ToolchainMissingError("git", hint="install git"))
        except subprocess.CalledProcessError as e:
            return CheckResult(self.CHECK_GIT, False, f"git status failed: {e}",
                               ErrorCode.WORKING_TREE_DIRTY)

        if not status['is_git_repo']:
            return CheckResult(
                self.CHECK_GIT,
                False,
                "Not a git repository",
                ErrorCode.WORKING_TREE_DIRTY,
                "run 'git init' and commit, or pass --skip-git-check"
            )

        if not status['is_clean']:
            return _failed(self.CHECK_GIT, WorkingTreeDirtyError(status['uncommitted_files']))

        return CheckResult(self.CHECK_GIT, True, f"Clean working tree on branch '{status['branch']}'")
