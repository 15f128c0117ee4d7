"""CLI commands"""

from . import setup
from . import init
from . import doctor
from . import deploy

__all__ = [
    "setup",
    "init",
    "doctor",
    "deploy",
]
