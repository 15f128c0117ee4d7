"""Deploy command"""

import click

from ..decorators import with_deployer
from ..utils.output import console, format_deploy_outcome
from ...constants import EMOJI_ROCKET
from ...models import DeployOptions


@click.command()
@click.option('--patch', is_flag=True, help='Bump the patch version (1.2.3 -> 1.2.4)')
@click.option('--minor', is_flag=True, help='Bump the minor version (1.2.3 -> 1.3.0)')
@click.option('--skip-git-check', is_flag=True, help='Deploy with uncommitted changes')
@click.option('--no-tag', is_flag=True, help='Do not create a release tag')
@click.pass_context
@with_deployer
def deploy(ctx, patch, minor, skip_git_check, no_tag, deployer):
    """Build and upload a new TestFlight build

    The build number is always incremented. Without --patch or --minor the
    marketing version is left as is.

    Examples:

        # New build of the current version
        launchpad deploy

        # Bug-fix release
        launchpad deploy --patch

        # Feature release, without tagging
        launchpad deploy --minor --no-tag
    """
    options = DeployOptions.from_flags(
        patch=patch,
        minor=minor,
        skip_git_check=skip_git_check,
        no_tag=no_tag
    )

    console.print(f"{EMOJI_ROCKET} Deploying to TestFlight ({options.bump.description})\n")

    outcome = deployer.deploy(options)

    console.print()
    remote = deployer.config.remote if deployer.config else None
    format_deploy_outcome(outcome, verbose=ctx.obj.verbose or ctx.obj.debug, remote=remote)

    if not outcome.success:
        ctx.exit(1)
