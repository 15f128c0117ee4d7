"""Operation result models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, Union

from .version import Version


class DeployStage(Enum):
    """Pipeline stage a deploy can fail in"""
    PREFLIGHT = "preflight"
    VERSION_BUMP = "version_bump"
    INVOKE = "invoke"


@dataclass
class CheckResult:
    """Outcome of a single preflight check"""
    name: str
    passed: bool
    detail: Optional[str] = None
    error_code: Optional[str] = None
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'name': self.name,
            'passed': self.passed
        }

        if self.detail:
            data['detail'] = self.detail
        if self.error_code:
            data['error_code'] = self.error_code
        if self.hint:
            data['hint'] = self.hint

        return data


@dataclass
class PreflightReport:
    """Ordered results of every check that ran"""
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True when every check that ran passed"""
        return all(check.passed for check in self.checks)

    @property
    def failures(self) -> List[CheckResult]:
        """Checks that did not pass"""
        return [check for check in self.checks if not check.passed]

    def names(self) -> List[str]:
        return [check.name for check in self.checks]

    def summary(self) -> str:
        """One line per failure, with its remediation hint"""
        lines = []
        for check in self.failures:
            line = f"{check.name}: {check.detail or 'failed'}"
            if check.hint:
                line += f" ({check.hint})"
            lines.append(line)
        return "\n".join(lines)


@dataclass
class ProcessResult:
    """Exit status and captured output of an automation run"""
    exit_code: int
    output: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def tail(self, lines: int) -> str:
        """Last ``lines`` lines of captured output"""
        return "\n".join(self.output[-lines:])


@dataclass
class DeploySuccess:
    """Deploy finished: the build was uploaded"""
    version: Version
    tag_created: bool = False
    tag_name: Optional[str] = None
    tag_pushed: bool = False
    uploaded_version: Optional[str] = None
    removed_artifacts: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    success = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'success': True,
            'version': self.version.to_dict(),
            'tag_created': self.tag_created,
            'tag_name': self.tag_name,
            'tag_pushed': self.tag_pushed,
            'uploaded_version': self.uploaded_version,
            'removed_artifacts': self.removed_artifacts,
            'warnings': self.warnings
        }


@dataclass
class DeployFailure:
    """Deploy stopped at ``stage``"""
    stage: DeployStage
    reason: str
    error_code: Optional[str] = None
    hint: Optional[str] = None
    output: str = ""
    checks: List[CheckResult] = field(default_factory=list)
    version: Optional[Version] = None

    success = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'success': False,
            'stage': self.stage.value,
            'reason': self.reason
        }

        if self.error_code:
            data['error_code'] = self.error_code
        if self.hint:
            data['hint'] = self.hint
        if self.checks:
            data['checks'] = [c.to_dict() for c in self.checks]
        if self.version:
            data['version'] = self.version.to_dict()

        return data


DeployOutcome = Union[DeploySuccess, DeployFailure]
