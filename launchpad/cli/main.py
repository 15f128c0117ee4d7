"""Main CLI entry point for launchpad"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, LOG_FORMAT
from ..core.path_resolver import PathResolver, find_project_root
from .utils.output import console
from .commands import setup, init, doctor, deploy


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route log records through rich; -d shows DEBUG, -v shows INFO"""
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    handler = RichHandler(
        console=console,
        show_time=debug,
        show_path=debug,
        rich_tracebacks=True,
        tracebacks_suppress=[click]
    )
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler], force=True)


class Context:
    """CLI context object with lazy project lookup

    The project root is only searched for when a command asks for it, so
    ``setup`` works anywhere.
    """

    def __init__(self, cwd: Optional[Path] = None):
        self.cwd = Path(cwd or Path.cwd()).resolve()
        self.verbose: bool = False
        self.debug: bool = False
        self._project_root: Optional[Path] = None
        self._path_resolver: Optional[PathResolver] = None

    @property
    def project_root(self) -> Path:
        """Directory holding .launchpad.yaml, else the working directory"""
        if self._project_root is None:
            self._project_root = find_project_root(self.cwd) or self.cwd
        return self._project_root

    @property
    def path_resolver(self) -> PathResolver:
        if self._path_resolver is None:
            self._path_resolver = PathResolver(self.project_root)
        return self._path_resolver


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress log output')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """launchpad - Ship iOS builds to TestFlight

    Validates your toolchain, credentials and repository, bumps the Xcode
    project version, runs fastlane to build and upload, then tags the
    release in git.

    Start with 'launchpad setup' once per machine and 'launchpad init'
    once per project.
    """
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


for command in (setup.setup, init.init, doctor.doctor, deploy.deploy):
    cli.add_command(command)


def main():
    """Run the CLI and translate the outcome into a process exit status

    Ctrl-C exits with 130. Unexpected errors exit with 1, with a traceback
    under --debug.
    """
    try:
        exit_code = cli.main(prog_name=APP_NAME, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except (KeyboardInterrupt, click.Abort):
        console.print("\n[yellow]Cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if {'-d', '--debug'} & set(sys.argv[1:]):
            console.print_exception()
        sys.exit(1)

    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
