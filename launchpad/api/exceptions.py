"""Exception definitions for launchpad API"""

from ..constants import (
    ErrorCode,
    HINT_RUN_SETUP,
    HINT_RUN_INIT,
    HINT_COMMIT_CHANGES,
    HINT_REMOVE_LANE_BUMPS,
)


class LaunchpadError(Exception):
    """Base exception for launchpad

    Every error carries an error code and, where one exists, a remediation
    hint shown to the operator next to the message.
    """

    def __init__(self, message: str, error_code: str = None, hint: str = None):
        super().__init__(message)
        self.error_code = error_code
        self.hint = hint


class ConfigMissingError(LaunchpadError):
    """A required configuration file does not exist"""

    def __init__(self, message: str, hint: str = HINT_RUN_INIT):
        super().__init__(message, ErrorCode.CONFIG_MISSING, hint)


class ConfigInvalidError(LaunchpadError):
    """A configuration file exists but cannot be used"""

    def __init__(self, message: str, hint: str = None):
        super().__init__(message, ErrorCode.CONFIG_INVALID, hint)


class ToolchainMissingError(LaunchpadError):
    """A required command line tool is not installed"""

    def __init__(self, tool: str, hint: str = None):
        super().__init__(f"{tool} not found", ErrorCode.TOOLCHAIN_MISSING, hint)
        self.tool = tool


class CredentialMissingError(LaunchpadError):
    """App Store Connect credentials are not configured or unreadable"""

    def __init__(self, message: str, hint: str = HINT_RUN_SETUP):
        super().__init__(message, ErrorCode.CREDENTIAL_MISSING, hint)


class ProjectNotFoundError(LaunchpadError):
    """No Xcode workspace or project at the expected location"""

    def __init__(self, path: str, hint: str = None):
        if hint is None:
            hint = "check project.ios_path or run: launchpad init --ios-path <dir>"
        super().__init__(f"No Xcode project found at: {path}", ErrorCode.PROJECT_NOT_FOUND, hint)
        self.path = path


class LaneMissingError(LaunchpadError):
    """The Fastfile does not declare every required lane"""

    def __init__(self, missing_lanes, fastfile: str = None):
        lanes = ", ".join(missing_lanes)
        message = f"Missing lanes: {lanes}"
        if fastfile:
            message += f" (in {fastfile})"
        super().__init__(
            message,
            ErrorCode.LANE_MISSING,
            "add the lanes to your Fastfile, or delete it and run: launchpad init"
        )
        self.missing_lanes = list(missing_lanes)


class LaneBumpsVersionError(LaunchpadError):
    """Required lanes change the project version themselves"""

    def __init__(self, lanes, fastfile: str = None):
        message = f"Lanes bump the version on their own: {', '.join(lanes)}"
        if fastfile:
            message += f" (in {fastfile})"
        super().__init__(message, ErrorCode.LANE_BUMPS_VERSION, HINT_REMOVE_LANE_BUMPS)
        self.lanes = list(lanes)


class WorkingTreeDirtyError(LaunchpadError):
    """Uncommitted changes in the working tree"""

    def __init__(self, files=None):
        self.files = list(files or [])
        message = "Git working directory is not clean"
        if self.files:
            message += f" ({len(self.files)} changed)"
        super().__init__(message, ErrorCode.WORKING_TREE_DIRTY, HINT_COMMIT_CHANGES)


class InvalidVersionError(LaunchpadError):
    """Version value is malformed or out of range"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_VERSION)


class TagExistsError(LaunchpadError):
    """A tag with the requested name already exists"""

    def __init__(self, tag: str):
        super().__init__(
            f"Tag already exists: {tag}",
            ErrorCode.TAG_EXISTS,
            f"delete it with 'git tag -d {tag}' if it is stale, then tag manually"
        )
        self.tag = tag


class TagCreateError(LaunchpadError):
    """git refused to create a tag"""

    def __init__(self, tag: str, detail: str):
        super().__init__(f"Failed to create tag {tag}: {detail}", ErrorCode.TAG_CREATE_FAILED)
        self.tag = tag


class TagPushError(LaunchpadError):
    """A local tag could not be pushed to the remote"""

    def __init__(self, tag: str, remote: str, detail: str):
        super().__init__(
            f"Failed to push tag {tag} to {remote}: {detail}",
            ErrorCode.TAG_PUSH_FAILED,
            f"push it later with: git push {remote} {tag}"
        )
        self.tag = tag
        self.remote = remote


class ProcessFailedError(LaunchpadError):
    """The automation tool exited with a non-zero status"""

    def __init__(self, exit_code: int, output: str = ""):
        super().__init__(f"fastlane exited with status {exit_code}", ErrorCode.PROCESS_FAILED)
        self.exit_code = exit_code
        self.output = output


class IOFailureError(LaunchpadError):
    """Filesystem operation failed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.IO_FAILURE)
