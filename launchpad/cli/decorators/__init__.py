"""CLI decorators"""

from .project import ensure_no_project, with_deployer

__all__ = [
    'ensure_no_project',
    'with_deployer',
]
