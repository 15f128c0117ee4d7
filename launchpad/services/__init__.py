"""Business logic services for launchpad"""

from .config_service import ConfigService

__all__ = [
    "ConfigService",
]
