"""CLI utilities"""

from .output import (
    console,
    format_check_report,
    format_deploy_outcome,
    print_error,
    print_warning,
)

__all__ = [
    'console',
    'format_check_report',
    'format_deploy_outcome',
    'print_error',
    'print_warning',
]
