"""Configuration data models"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Any

from .version import BumpKind
from ..api.exceptions import ConfigInvalidError
from ..constants import DEFAULT_REMOTE, PROJECT_CONFIG_FILE

FIX_PROJECT_CONFIG_HINT = f"fix {PROJECT_CONFIG_FILE} or delete it and run: launchpad init"


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return ``data[name]`` as a mapping; an absent or empty section is ``{}``"""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigInvalidError(
            f"{PROJECT_CONFIG_FILE}: '{name}' must be a mapping, got {type(section).__name__}",
            hint=FIX_PROJECT_CONFIG_HINT
        )
    return section


def _flag(deploy_data: Dict[str, Any], key: str, default: bool = True) -> bool:
    value = deploy_data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigInvalidError(
            f"{PROJECT_CONFIG_FILE}: deploy.{key} must be true or false, got {value!r}",
            hint=FIX_PROJECT_CONFIG_HINT
        )
    return value


@dataclass(frozen=True)
class AppleCredentials:
    """App Store Connect API key reference

    The key file itself is never read here; only its location is kept.
    """
    key_id: str
    issuer_id: str
    key_path: str

    @property
    def expanded_key_path(self) -> str:
        """Key path with ``~`` expanded"""
        return os.path.expanduser(self.key_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'key_id': self.key_id,
            'issuer_id': self.issuer_id,
            'key_path': self.key_path
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppleCredentials':
        """Create from dictionary"""
        if not isinstance(data, dict):
            raise ConfigInvalidError(
                "Apple credentials must be a mapping",
                hint="run: launchpad setup"
            )
        missing = [k for k in ('key_id', 'issuer_id', 'key_path') if not data.get(k)]
        if missing:
            raise ConfigInvalidError(
                f"Apple credentials missing: {', '.join(missing)}",
                hint="run: launchpad setup"
            )
        return cls(
            key_id=str(data['key_id']),
            issuer_id=str(data['issuer_id']),
            key_path=str(data['key_path'])
        )


@dataclass(frozen=True)
class GlobalConfig:
    """Machine-wide configuration stored under ~/.launchpad"""
    apple: AppleCredentials

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {'apple': self.apple.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GlobalConfig':
        """Create from dictionary"""
        if not isinstance(data, dict) or not isinstance(data.get('apple'), dict):
            raise ConfigInvalidError(
                "Global config has no 'apple' section",
                hint="run: launchpad setup"
            )
        return cls(apple=AppleCredentials.from_dict(data['apple']))


@dataclass(frozen=True)
class ProjectConfig:
    """Project configuration data model

    This represents the configuration stored in .launchpad.yaml. It is
    loaded once per invocation and never mutated by a deploy.
    """
    ios_path: str
    scheme: str
    bundle_id: str = ""
    git_tag: bool = True
    push_tags: bool = True
    clean_artifacts: bool = True
    remote: str = DEFAULT_REMOTE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create ProjectConfig from dictionary

        Args:
            data: Configuration dictionary with ``project`` and ``deploy`` sections

        Returns:
            ProjectConfig instance

        Raises:
            ConfigInvalidError: If required keys are missing
        """
        if not isinstance(data, dict):
            raise ConfigInvalidError(f"{PROJECT_CONFIG_FILE} must contain a mapping")

        project_data = _section(data, 'project')
        deploy_data = _section(data, 'deploy')

        missing = [k for k in ('ios_path', 'scheme') if not project_data.get(k)]
        if missing:
            raise ConfigInvalidError(
                f"{PROJECT_CONFIG_FILE} is missing project.{', project.'.join(missing)}",
                hint=FIX_PROJECT_CONFIG_HINT
            )

        return cls(
            ios_path=str(project_data['ios_path']),
            scheme=str(project_data['scheme']),
            bundle_id=str(project_data.get('bundle_id') or ""),
            git_tag=_flag(deploy_data, 'git_tag'),
            push_tags=_flag(deploy_data, 'push_tags'),
            clean_artifacts=_flag(deploy_data, 'clean_artifacts'),
            remote=str(deploy_data.get('remote') or DEFAULT_REMOTE)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'project': {
                'ios_path': self.ios_path,
                'scheme': self.scheme,
                'bundle_id': self.bundle_id
            },
            'deploy': {
                'git_tag': self.git_tag,
                'push_tags': self.push_tags,
                'clean_artifacts': self.clean_artifacts,
                'remote': self.remote
            }
        }


@dataclass(frozen=True)
class DeployOptions:
    """Flags resolved from the command line for one deploy"""
    bump: BumpKind = BumpKind.NONE
    skip_git_check: bool = False
    no_tag: bool = False

    @classmethod
    def from_flags(cls,
                   patch: bool = False,
                   minor: bool = False,
                   skip_git_check: bool = False,
                   no_tag: bool = False) -> 'DeployOptions':
        """Build options from raw flags

        When both ``patch`` and ``minor`` are requested the coarser bump
        (minor) is used.
        """
        if patch and minor:
            logging.getLogger("DeployOptions").warning(
                "Both --patch and --minor given; using --minor"
            )

        if minor:
            bump = BumpKind.MINOR
        elif patch:
            bump = BumpKind.PATCH
        else:
            bump = BumpKind.NONE

        return cls(bump=bump, skip_git_check=skip_git_check, no_tag=no_tag)
