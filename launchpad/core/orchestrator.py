"""End-to-end deploy pipeline"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from .fastlane import Fastlane, lane_environment, last_reported_version
from .path_resolver import PathResolver
from .preflight import PreflightChecker
from .process_runner import ProcessRunner
from .tag_manager import TagManager
from .version_state import VersionState
from .version_store import ProjectVersionStore
from ..api.exceptions import (
    LaunchpadError,
    ToolchainMissingError,
    ProcessFailedError,
    TagExistsError,
    TagPushError,
)
from ..constants import (
    ARTIFACT_PATTERNS,
    HINT_INSTALL_FASTLANE,
    HINT_RETRY_DEPLOY,
    TAG_MESSAGE_TEMPLATE,
)
from ..models.config import ProjectConfig, GlobalConfig, DeployOptions
from ..models.result import (
    DeployStage,
    DeploySuccess,
    DeployFailure,
    DeployOutcome,
)
from ..models.version import Version


class DeployOrchestrator:
    """Preflight, version bump, upload, then tag and clean up

    Nothing is mutated unless every preflight check passes. A persisted
    version bump is never reverted; a failure after it reports the bumped
    version so the operator can decide what to do with it. Tagging and
    cleanup only run after a successful upload and never turn it into a
    failure.
    """

    def __init__(self,
                 project_root: Union[str, Path],
                 config: Optional[ProjectConfig],
                 global_config: Optional[GlobalConfig],
                 checker: Optional[PreflightChecker] = None,
                 version_store: Optional[ProjectVersionStore] = None,
                 runner: Optional[ProcessRunner] = None,
                 tag_manager: Optional[TagManager] = None):
        self.project_root = Path(project_root)
        self.config = config
        self.global_config = global_config
        self.checker = checker or PreflightChecker(self.project_root)
        self.runner = runner or ProcessRunner()
        self.tag_manager = tag_manager or TagManager(self.project_root)
        self._version_store = version_store
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def ios_dir(self) -> Path:
        return PathResolver(self.project_root).resolve(self.config.ios_path)

    @property
    def version_store(self) -> ProjectVersionStore:
        if self._version_store is None:
            self._version_store = ProjectVersionStore(self.ios_dir, self.config.bundle_id)
        return self._version_store

    def run(self, options: DeployOptions) -> DeployOutcome:
        """Run one deploy to completion

        Args:
            options: Resolved command line options

        Returns:
            DeploySuccess or DeployFailure naming the stage that stopped
        """
        report = self.checker.run(self.config, options, self.global_config)
        if not report.passed:
            failures = report.failures
            return DeployFailure(
                stage=DeployStage.PREFLIGHT,
                reason=report.summary(),
                error_code=failures[0].error_code,
                hint=failures[0].hint,
                checks=report.checks
            )

        try:
            state = self._bump_version(options)
        except LaunchpadError as e:
            return DeployFailure(
                stage=DeployStage.VERSION_BUMP,
                reason=str(e),
                error_code=e.error_code,
                hint=e.hint
            )

        try:
            output = self._invoke(state)
        except ProcessFailedError as e:
            return DeployFailure(
                stage=DeployStage.INVOKE,
                reason=str(e),
                error_code=e.error_code,
                hint=HINT_RETRY_DEPLOY,
                output=e.output,
                version=state.next
            )
        except LaunchpadError as e:
            return DeployFailure(
                stage=DeployStage.INVOKE,
                reason=str(e),
                error_code=e.error_code,
                hint=e.hint,
                version=state.next
            )

        outcome = DeploySuccess(
            version=state.next,
            uploaded_version=last_reported_version(output)
        )

        if self.config.git_tag and not options.no_tag:
            self._tag_release(state.next, outcome)
        else:
            self.logger.info("Skipping release tag")

        if self.config.clean_artifacts:
            outcome.removed_artifacts = self._clean_artifacts(outcome)

        return outcome

    def _bump_version(self, options: DeployOptions) -> VersionState:
        current = self.version_store.read()
        state = VersionState(current, options.bump)
        self.logger.info(f"Version: {state.current} -> {state.next} ({options.bump.description})")
        self.version_store.write(state.next)
        return state

    def _invoke(self, state: VersionState) -> List[str]:
        tool = Fastlane.path()
        if tool is None:
            raise ToolchainMissingError("fastlane", hint=HINT_INSTALL_FASTLANE)

        self.logger.info(f"Running fastlane {state.lane}")
        result = self.runner.invoke(
            tool,
            state.lane,
            env_vars=lane_environment(self.global_config.apple),
            cwd=self.ios_dir
        )

        if not result.success:
            raise ProcessFailedError(result.exit_code, "\n".join(result.output))

        return result.output

    def _tag_release(self, version: Version, outcome: DeploySuccess) -> None:
        tag = version.tag_name
        try:
            self.tag_manager.create_tag(tag, TAG_MESSAGE_TEMPLATE.format(tag=tag))
        except TagExistsError as e:
            self._warn(outcome, f"{e}; release was not tagged")
            return
        except LaunchpadError as e:
            self._warn(outcome, str(e))
            return

        outcome.tag_created = True
        outcome.tag_name = tag

        if not self.config.push_tags:
            return

        try:
            self.tag_manager.push_tag(tag, self.config.remote)
        except TagPushError as e:
            self._warn(outcome, f"{e} ({e.hint})")
            return

        outcome.tag_pushed = True

    def _clean_artifacts(self, outcome: DeploySuccess) -> List[str]:
        removed = []
        directories = {self.ios_dir.resolve(), self.project_root.resolve()}

        for directory in sorted(directories):
            for pattern in ARTIFACT_PATTERNS:
                for artifact in sorted(directory.glob(pattern)):
                    if not artifact.is_file():
                        continue
                    try:
                        artifact.unlink()
                    except OSError as e:
                        self._warn(outcome, f"Could not remove {artifact}: {e}")
                        continue
                    self.logger.debug(f"Removed {artifact}")
                    removed.append(str(artifact))

        return removed

    def _warn(self, outcome: DeploySuccess, message: str) -> None:
        self.logger.warning(message)
        outcome.warnings.append(message)
