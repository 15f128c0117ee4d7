"""System diagnostic command"""

import sys

import click

from ..decorators import with_deployer
from ..utils.output import console, format_check_report
from ...constants import EMOJI_ERROR, EMOJI_SUCCESS
from ...models import DeployOptions


@click.command()
@click.option('--git', 'check_git', is_flag=True,
              help='Also require a clean git working tree')
@with_deployer
def doctor(check_git, deployer):
    """Check that this machine and project are ready to deploy

    Runs the same checks as 'launchpad deploy' without changing anything.

    Examples:

        # Toolchain, credentials, project and Fastfile
        launchpad doctor

        # Include the git working tree check
        launchpad doctor --git
    """
    console.print("[bold]launchpad diagnostics[/bold]\n")

    report = deployer.check(DeployOptions(skip_git_check=not check_git))
    console.print(format_check_report(report, title="Diagnostic Results"))

    failures = report.failures
    if failures:
        console.print(f"\n[red]{EMOJI_ERROR} {len(failures)} check(s) failed[/red]")
        sys.exit(1)

    console.print(f"\n[green]{EMOJI_SUCCESS} All checks passed![/green]")
