"""Deployer API for deploy operations"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..core.orchestrator import DeployOrchestrator
from ..core.path_resolver import PathResolver
from ..core.preflight import PreflightChecker
from ..core.process_runner import OutputSink, ProcessRunner
from ..models import (
    CheckResult,
    DeployOptions,
    DeployOutcome,
    DeployFailure,
    DeployStage,
    PreflightReport,
)
from ..services.config_service import ConfigService
from .exceptions import LaunchpadError


class Deployer:
    """Deployer class for deploy operations

    Loads the project and global configuration once, then wires the
    pipeline components together. A configuration file that cannot be
    loaded is reported as a failed preflight check instead of raising.
    """

    def __init__(self,
                 project_root: Optional[Union[str, Path]] = None,
                 sink: Optional[OutputSink] = None):
        """
        Initialize deployer

        Args:
            project_root: Project root; discovered from the working
                directory when omitted
            sink: Receives each line of fastlane output as it arrives
        """
        self.path_resolver = PathResolver(project_root)
        self.project_root = self.path_resolver.project_root
        self.config_service = ConfigService(self.path_resolver)
        self.checker = PreflightChecker(self.project_root)
        self.sink = sink
        self.logger = logging.getLogger(self.__class__.__name__)

        self.load_errors: List[CheckResult] = []
        self.config = self._load(self.config_service.load_project_config, PreflightChecker.CHECK_PROJECT)
        self.global_config = self._load(self.config_service.load_global_config,
                                        PreflightChecker.CHECK_CREDENTIALS)

    def _load(self, loader, check_name: str):
        try:
            return loader()
        except LaunchpadError as e:
            self.logger.debug(f"Configuration error: {e}")
            self.load_errors.append(CheckResult(
                name=check_name,
                passed=False,
                detail=str(e),
                error_code=e.error_code,
                hint=e.hint
            ))
            return None

    def check(self, options: Optional[DeployOptions] = None) -> PreflightReport:
        """
        Run the preflight checks without deploying

        Args:
            options: Deploy options; by default the git check is skipped

        Returns:
            PreflightReport: One result per check that ran
        """
        if options is None:
            options = DeployOptions(skip_git_check=True)

        report = self.checker.run(self.config, options, self.global_config)

        # A config file that failed to load replaces the check it feeds
        overrides = {error.name: error for error in self.load_errors}
        report.checks = [overrides.get(check.name, check) for check in report.checks]
        return report

    def deploy(self, options: DeployOptions) -> DeployOutcome:
        """
        Run the full deploy pipeline

        Args:
            options: Resolved command line options

        Returns:
            DeployOutcome: DeploySuccess or DeployFailure
        """
        if self.load_errors:
            report = self.check(options)
            first = report.failures[0]
            return DeployFailure(
                stage=DeployStage.PREFLIGHT,
                reason=report.summary(),
                error_code=first.error_code,
                hint=first.hint,
                checks=report.checks
            )

        orchestrator = DeployOrchestrator(
            self.project_root,
            self.config,
            self.global_config,
            checker=self.checker,
            runner=ProcessRunner(self.sink)
        )
        return orchestrator.run(options)


def deploy(patch: bool = False,
           minor: bool = False,
           skip_git_check: bool = False,
           no_tag: bool = False,
           project_root: Optional[Union[str, Path]] = None) -> DeployOutcome:
    """
    Deploy the project in ``project_root`` to TestFlight

    This is a convenience function that creates a Deployer instance
    and runs the pipeline.

    Args:
        patch: Bump the patch version
        minor: Bump the minor version (wins over ``patch``)
        skip_git_check: Do not require a clean working tree
        no_tag: Do not create a release tag
        project_root: Project root; discovered when omitted

    Returns:
        DeployOutcome: DeploySuccess or DeployFailure
    """
    options = DeployOptions.from_flags(
        patch=patch,
        minor=minor,
        skip_git_check=skip_git_check,
        no_tag=no_tag
    )
    return Deployer(project_root).deploy(options)
