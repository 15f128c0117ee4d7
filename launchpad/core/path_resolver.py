"""Path resolution module for launchpad"""

import os
from pathlib import Path
from typing import Optional, Union

from ..constants import (
    PROJECT_CONFIG_FILE,
    PROJECT_CONFIG_EXAMPLE_FILE,
    GLOBAL_CONFIG_DIR_NAME,
    GLOBAL_CONFIG_FILE,
    GLOBAL_KEYS_DIR,
    ENV_CONFIG_DIR,
)


def find_project_root(start_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Walk up from ``start_path`` to the directory holding .launchpad.yaml

    Args:
        start_path: Starting directory (defaults to the working directory)

    Returns:
        Project root or None if no config file is found
    """
    current = Path(start_path or Path.cwd()).resolve()

    for directory in [current, *current.parents]:
        if (directory / PROJECT_CONFIG_FILE).is_file():
            return directory

    return None


def get_global_config_dir() -> Path:
    """Directory holding the global config and copied API keys

    ``LAUNCHPAD_CONFIG_DIR`` overrides the default ``~/.launchpad``.
    """
    custom = os.environ.get(ENV_CONFIG_DIR)
    if custom:
        return Path(custom).expanduser()

    return Path.home() / GLOBAL_CONFIG_DIR_NAME


class PathResolver:
    """Resolves paths within a launchpad project"""

    def __init__(self, project_root: Optional[Union[str, Path]] = None):
        """Initialize path resolver

        Args:
            project_root: Root directory of the project. When omitted the
                directory holding .launchpad.yaml above the working
                directory is used, else the working directory itself.
        """
        if project_root is None:
            project_root = find_project_root() or Path.cwd()
        self.project_root = Path(project_root).resolve()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to project root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Resolved absolute path
        """
        path = Path(path).expanduser()

        if path.is_absolute():
            return path

        return (self.project_root / path).resolve()

    def get_project_config_path(self) -> Path:
        return self.project_root / PROJECT_CONFIG_FILE

    def get_project_config_example_path(self) -> Path:
        return self.project_root / PROJECT_CONFIG_EXAMPLE_FILE

    def get_gitignore_path(self) -> Path:
        return self.project_root / ".gitignore"

    @staticmethod
    def get_global_config_path() -> Path:
        return get_global_config_dir() / GLOBAL_CONFIG_FILE

    @staticmethod
    def get_keys_dir() -> Path:
        return get_global_config_dir() / GLOBAL_KEYS_DIR

    def get_relative_to_root(self, path: Union[str, Path]) -> Path:
        """Get path relative to project root

        Args:
            path: Absolute path

        Returns:
            Relative path, or the path unchanged if outside the project
        """
        try:
            return Path(path).resolve().relative_to(self.project_root)
        except ValueError:
            return Path(path)
