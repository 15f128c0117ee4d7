"""Git operation utilities"""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple


def _git(path: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ['git', *args],
        cwd=path,
        capture_output=True,
        text=True
    )


def is_git_repository(path: Path) -> bool:
    """
    Check if directory is a Git repository

    Args:
        path: Directory path

    Returns:
        True if it's a Git repository
    """
    try:
        return _git(path, 'rev-parse', '--is-inside-work-tree').returncode == 0
    except FileNotFoundError:
        return False


def get_current_branch(path: Path) -> Optional[str]:
    """
    Get current Git branch

    Args:
        path: Repository path

    Returns:
        Branch name or None
    """
    try:
        result = _git(path, 'rev-parse', '--abbrev-ref', 'HEAD')
    except FileNotFoundError:
        return None
    return result.stdout.strip() if result.returncode == 0 else None


def get_head_commit(path: Path) -> Optional[str]:
    """
    Get the full hash of HEAD

    Args:
        path: Repository path

    Returns:
        Commit hash or None
    """
    try:
        result = _git(path, 'rev-parse', 'HEAD')
    except FileNotFoundError:
        return None
    return result.stdout.strip() if result.returncode == 0 else None


def get_uncommitted_files(path: Path) -> List[str]:
    """
    Get list of files with uncommitted changes, including untracked files

    Args:
        path: Repository path

    Returns:
        List of file paths as reported by ``git status --porcelain``

    Raises:
        FileNotFoundError: If git is not installed
        subprocess.CalledProcessError: If git status fails
    """
    result = _git(path, 'status', '--porcelain')
    result.check_returncode()

    files = []
    for line in result.stdout.splitlines():
        if line.strip():
            files.append(line[3:])
    return files


def get_git_status(path: Path) -> Dict[str, object]:
    """
    Get Git repository status

    Args:
        path: Repository path

    Returns:
        Dictionary with status information
    """
    status = {
        'is_git_repo': False,
        'branch': None,
        'uncommitted_files': [],
        'is_clean': False
    }

    if not is_git_repository(path):
        return status

    status['is_git_repo'] = True
    status['branch'] = get_current_branch(path)
    status['uncommitted_files'] = get_uncommitted_files(path)
    status['is_clean'] = not status['uncommitted_files']

    return status


def tag_exists(path: Path, tag: str) -> bool:
    """
    Check whether a tag exists locally

    Args:
        path: Repository path
        tag: Tag name

    Returns:
        True if the tag exists
    """
    result = _git(path, 'rev-parse', '--verify', '--quiet', f'refs/tags/{tag}')
    return result.returncode == 0


def create_annotated_tag(path: Path, tag: str, message: str) -> Tuple[bool, str]:
    """
    Create an annotated tag at HEAD

    Args:
        path: Repository path
        tag: Tag name
        message: Tag message

    Returns:
        Tuple of (success, stderr)
    """
    result = _git(path, 'tag', '-a', tag, '-m', message)
    return result.returncode == 0, result.stderr.strip()


def push_tag(path: Path, tag: str, remote: str) -> Tuple[bool, str]:
    """
    Push a single tag to a remote

    Args:
        path: Repository path
        tag: Tag name
        remote: Remote name

    Returns:
        Tuple of (success, stderr)
    """
    result = _git(path, 'push', remote, f'refs/tags/{tag}')
    return result.returncode == 0, result.stderr.strip()


def get_remote_url(path: Path, remote: str = 'origin') -> Optional[str]:
    """
    Get Git remote URL

    Args:
        path: Repository path
        remote: Remote name

    Returns:
        Remote URL or None
    """
    try:
        result = _git(path, 'remote', 'get-url', remote)
    except FileNotFoundError:
        return None
    return result.stdout.strip() if result.returncode == 0 else None
