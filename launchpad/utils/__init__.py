"""Utility functions for launchpad"""

from .git_utils import (
    is_git_repository,
    get_current_branch,
    get_head_commit,
    get_git_status,
    get_uncommitted_files,
    get_remote_url,
    tag_exists,
)

from .version_utils import (
    parse_version,
    parse_marketing_version,
    extract_uploaded_version,
)

__all__ = [
    # Git utilities
    'is_git_repository',
    'get_current_branch',
    'get_head_commit',
    'get_git_status',
    'get_uncommitted_files',
    'get_remote_url',
    'tag_exists',

    # Version utilities
    'parse_version',
    'parse_marketing_version',
    'extract_uploaded_version',
]
