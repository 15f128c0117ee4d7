"""Configuration management service"""

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..api.exceptions import ConfigInvalidError, IOFailureError
from ..core.path_resolver import PathResolver
from ..models.config import AppleCredentials, GlobalConfig, ProjectConfig
from ..constants import (
    ENV_APPLE_KEY_ID,
    ENV_APPLE_ISSUER_ID,
    ENV_APPLE_KEY_PATH,
    PROJECT_CONFIG_FILE,
)


class ConfigService:
    """Service for loading and saving launchpad configuration

    Project settings live in .launchpad.yaml at the project root; Apple
    credentials live in the global config directory. Both are read once
    per invocation.
    """

    def __init__(self, path_resolver: Optional[PathResolver] = None):
        """Initialize config service

        Args:
            path_resolver: Resolver for the project; defaults to the
                project containing the working directory
        """
        self.path_resolver = path_resolver or PathResolver()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def project_config_path(self) -> Path:
        return self.path_resolver.get_project_config_path()

    @property
    def global_config_path(self) -> Path:
        return self.path_resolver.get_global_config_path()

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise IOFailureError(f"Cannot read {path}: {e}")

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigInvalidError(f"Invalid YAML in {path}: {e}")

        return data or {}

    def _write_yaml(self, path: Path, data: Dict[str, Any]) -> None:
        try:
            if path.exists():
                shutil.copy2(path, path.with_name(path.name + '.bak'))
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise IOFailureError(f"Cannot write {path}: {e}")

    def load_project_config(self) -> Optional[ProjectConfig]:
        """Load project configuration

        Returns:
            ProjectConfig, or None if .launchpad.yaml does not exist

        Raises:
            ConfigInvalidError: If the file cannot be parsed
        """
        path = self.project_config_path
        if not path.exists():
            return None

        config = ProjectConfig.from_dict(self._read_yaml(path))
        self.logger.debug(f"Loaded {PROJECT_CONFIG_FILE} from {path.parent}")
        return config

    def save_project_config(self, config: ProjectConfig) -> Path:
        """Write .launchpad.yaml

        Returns:
            Path written
        """
        path = self.project_config_path
        self._write_yaml(path, config.to_dict())
        return path

    def load_global_config(self) -> Optional[GlobalConfig]:
        """Load Apple credentials

        The APPLE_API_KEY_ID, APPLE_API_ISSUER_ID and APPLE_API_KEY_PATH
        environment variables win over the file when all three are set.

        Returns:
            GlobalConfig, or None if nothing is configured

        Raises:
            ConfigInvalidError: If the file cannot be parsed
        """
        env_values = [os.environ.get(name) for name in (
            ENV_APPLE_KEY_ID, ENV_APPLE_ISSUER_ID, ENV_APPLE_KEY_PATH
        )]
        if all(env_values):
            self.logger.debug("Using Apple credentials from environment")
            key_id, issuer_id, key_path = env_values
            return GlobalConfig(apple=AppleCredentials(key_id, issuer_id, key_path))

        path = self.global_config_path
        if not path.exists():
            return None

        return GlobalConfig.from_dict(self._read_yaml(path))

    def save_global_config(self, config: GlobalConfig) -> Path:
        """Write the global config file

        Returns:
            Path written
        """
        path = self.global_config_path
        self._write_yaml(path, config.to_dict())
        try:
            path.chmod(0o600)
        except OSError as e:
            self.logger.warning(f"Could not restrict permissions on {path}: {e}")
        return path
