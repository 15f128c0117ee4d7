"""Files written into user projects by ``launchpad init``"""

from pathlib import Path
from typing import Dict, List

TEMPLATES_DIR = Path(__file__).parent

FASTFILE_TEMPLATE = "fastlane/Fastfile"
PROJECT_CONFIG_EXAMPLE_TEMPLATE = "project/launchpad.yaml.example"

SCHEME_PLACEHOLDER = "{{SCHEME}}"


def load_template(relative_path: str) -> str:
    """
    Read a bundled template

    Args:
        relative_path: Path below the templates directory, e.g. ``fastlane/Fastfile``

    Raises:
        FileNotFoundError: The template is not part of the installation
    """
    return (TEMPLATES_DIR / relative_path).read_text(encoding='utf-8')


def list_templates() -> Dict[str, List[str]]:
    """Map each template category to its template names"""
    return {
        category.name: sorted(
            f.name for f in category.iterdir()
            if f.is_file() and not f.name.startswith('_')
        )
        for category in TEMPLATES_DIR.iterdir()
        if category.is_dir() and not category.name.startswith('_')
    }


def render_fastfile(scheme: str) -> str:
    """Fastfile declaring the beta lanes for ``scheme``"""
    return load_template(FASTFILE_TEMPLATE).replace(SCHEME_PLACEHOLDER, scheme)


def render_project_config_example() -> str:
    return load_template(PROJECT_CONFIG_EXAMPLE_TEMPLATE)


__all__ = [
    'TEMPLATES_DIR',
    'FASTFILE_TEMPLATE',
    'PROJECT_CONFIG_EXAMPLE_TEMPLATE',
    'load_template',
    'list_templates',
    'render_fastfile',
    'render_project_config_example',
]
