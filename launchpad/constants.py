"""Global constants for launchpad"""

import re

APP_NAME = "launchpad"
LOG_FORMAT = "%(message)s"

# Project identification
PROJECT_CONFIG_FILE = ".launchpad.yaml"
PROJECT_CONFIG_EXAMPLE_FILE = ".launchpad.yaml.example"

# Global configuration
GLOBAL_CONFIG_DIR_NAME = ".launchpad"
GLOBAL_CONFIG_FILE = "config.yaml"
GLOBAL_KEYS_DIR = "keys"
API_KEY_FILE_PATTERN = "AuthKey_{key_id}.p8"

# Candidate directories for the iOS project, in detection order
IOS_PATH_CANDIDATES = ["ios", ".", "App", "app"]

# Xcode project descriptors
XCODE_WORKSPACE_SUFFIX = ".xcworkspace"
XCODE_PROJECT_SUFFIX = ".xcodeproj"
PBXPROJ_FILE = "project.pbxproj"

# Toolchain
XCODEBUILD_TOOL = "xcodebuild"
FASTLANE_TOOL = "fastlane"
FASTLANE_XCODEBUILD_SETTINGS_TIMEOUT = "180"

# Fastfile locations, relative to the project root; {ios_path} is substituted
FASTFILE_CANDIDATES = [
    "{ios_path}/fastlane/Fastfile",
    "{ios_path}/Fastfile",
    "fastlane/Fastfile",
    "Fastfile",
]

# Lanes
LANE_BETA = "beta"
LANE_BETA_PATCH = "beta_patch"
LANE_BETA_MINOR = "beta_minor"
REQUIRED_LANES = [LANE_BETA, LANE_BETA_PATCH, LANE_BETA_MINOR]

# Build artifacts removed after a successful deploy
ARTIFACT_PATTERNS = ["*.ipa", "*.app.dSYM.zip"]

# Git
DEFAULT_REMOTE = "origin"
TAG_PREFIX = "v"
TAG_MESSAGE_TEMPLATE = "Release {tag}"

# Version fields never exceed a signed 32-bit integer
VERSION_COMPONENT_MAX = 2 ** 31 - 1

# Number of captured output lines shown with a failed automation run
FAILURE_OUTPUT_TAIL = 10

# Error codes
class ErrorCode:
    CONFIG_MISSING = "LP001"
    CONFIG_INVALID = "LP002"
    TOOLCHAIN_MISSING = "LP003"
    CREDENTIAL_MISSING = "LP004"
    PROJECT_NOT_FOUND = "LP005"
    LANE_MISSING = "LP006"
    WORKING_TREE_DIRTY = "LP007"
    INVALID_VERSION = "LP008"
    TAG_EXISTS = "LP009"
    PROCESS_FAILED = "LP010"
    IO_FAILURE = "LP011"
    TAG_CREATE_FAILED = "LP012"
    TAG_PUSH_FAILED = "LP013"
    LANE_BUMPS_VERSION = "LP014"

# Environment variables
ENV_CONFIG_DIR = "LAUNCHPAD_CONFIG_DIR"
ENV_APPLE_KEY_ID = "APPLE_API_KEY_ID"
ENV_APPLE_ISSUER_ID = "APPLE_API_ISSUER_ID"
ENV_APPLE_KEY_PATH = "APPLE_API_KEY_PATH"

# Environment passed to fastlane
ENV_ASC_KEY_ID = "APP_STORE_CONNECT_API_KEY_KEY_ID"
ENV_ASC_ISSUER_ID = "APP_STORE_CONNECT_API_KEY_ISSUER_ID"
ENV_ASC_KEY_FILEPATH = "APP_STORE_CONNECT_API_KEY_KEY_FILEPATH"
ENV_FASTLANE_SETTINGS_TIMEOUT = "FASTLANE_XCODEBUILD_SETTINGS_TIMEOUT"

# Validation patterns
UPLOADED_VERSION_PATTERN = re.compile(r"(\d+\.\d+\.\d+)(?:\s*\((\d+)\))?")
LANE_PATTERN = re.compile(r"^\s*lane\s+:(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s+do\b", re.MULTILINE)
LANE_BLOCK_PATTERN = re.compile(
    r"^\s*(?:private_)?lane\s+:(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s+do\b", re.MULTILINE
)
VERSION_BUMP_ACTION_PATTERN = re.compile(r"\b(?:increment_build_number|increment_version_number)\b")

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
EMOJI_ROCKET = "🚀"

# Remediation hints
HINT_RUN_SETUP = "run: launchpad setup"
HINT_RUN_INIT = "run: launchpad init"
HINT_INSTALL_XCODE = "run: xcode-select --install"
HINT_INSTALL_FASTLANE = "run: brew install fastlane"
HINT_COMMIT_CHANGES = "commit or stash your changes, or pass --skip-git-check"
HINT_RETRY_DEPLOY = "fix the error above and run 'launchpad deploy' again; nothing is retried automatically"
HINT_REMOVE_LANE_BUMPS = (
    "remove increment_build_number and increment_version_number from these lanes; "
    "launchpad sets the version before it calls them"
)

# Messages templates
MSG_DEPLOY_SUCCESS = f"{EMOJI_SUCCESS} Successfully deployed version {{version}}"
MSG_TAG_CREATED = f"{EMOJI_SUCCESS} Created tag {{tag}}"
MSG_TAG_PUSHED = f"{EMOJI_SUCCESS} Pushed {{tag}} to {{remote}}"
