"""Project context decorators for CLI commands"""

from functools import wraps
from typing import Callable

import click

from ..utils.output import console
from ...api.deployer import Deployer
from ...constants import PROJECT_CONFIG_FILE, EMOJI_WARNING


def ensure_no_project(func: Callable) -> Callable:
    """Decorator that refuses to run where .launchpad.yaml already exists

    The check looks at the working directory only, so a nested app inside
    a configured monorepo can still be initialized.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        config_path = ctx.obj.cwd / PROJECT_CONFIG_FILE

        if config_path.exists():
            console.print(
                f"{EMOJI_WARNING} {PROJECT_CONFIG_FILE} already exists in {ctx.obj.cwd}\n"
                f"Delete it first to re-initialize."
            )
            ctx.exit(1)

        return func(*args, **kwargs)

    return wrapper


def with_deployer(func: Callable) -> Callable:
    """Decorator that passes a Deployer for the current project

    The command receives it as the ``deployer`` keyword argument. Output
    from fastlane is streamed through the shared console.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        deployer = Deployer(ctx.obj.project_root, sink=_console_sink)

        if ctx.obj.debug:
            console.print(f"[dim]Project root: {deployer.project_root}[/dim]")

        kwargs['deployer'] = deployer
        return func(*args, **kwargs)

    return wrapper


def _console_sink(line: str) -> None:
    console.out(line, highlight=False)
