"""Initialize command for setting up a project for launchpad"""

import subprocess
from pathlib import Path
from typing import Optional

import click
from rich.prompt import Prompt, Confirm

from ..decorators import ensure_no_project
from ..utils.output import console, print_error, print_warning
from ...api.exceptions import LaunchpadError
from ...constants import (
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    EMOJI_ROCKET,
    PROJECT_CONFIG_FILE,
    PROJECT_CONFIG_EXAMPLE_FILE,
    REQUIRED_LANES,
    HINT_REMOVE_LANE_BUMPS,
)
from ...core.fastlane import Fastlane, find_fastfile, missing_lanes, self_bumping_lanes
from ...core.path_resolver import PathResolver
from ...core.xcode import Xcode, detect_ios_path
from ...models import ProjectConfig
from ...services.config_service import ConfigService
from ...templates import render_fastfile, render_project_config_example

DEFAULT_BUNDLE_ID = "com.example.app"


@click.command()
@click.option('--ios-path', help='Directory holding the .xcworkspace or .xcodeproj')
@click.option('--scheme', help='Xcode scheme to build')
@click.option('--bundle-id', help='Bundle identifier of the app target')
@click.option('--yes', '-y', 'non_interactive', is_flag=True,
              help='Accept detected values without prompting')
@click.pass_context
@ensure_no_project
def init(ctx, ios_path, scheme, bundle_id, non_interactive):
    """Initialize launchpad in the current directory

    Detects the Xcode project, scheme and bundle identifier, writes
    .launchpad.yaml and creates a Fastfile with the beta lanes when the
    project has none.

    Examples:
        launchpad init
        launchpad init --ios-path ios --scheme MyApp -y
    """
    project_root = ctx.obj.cwd

    console.print(f"{EMOJI_ROCKET} [bold]Initializing launchpad[/bold]\n")

    # fastlane
    if not ensure_fastlane(non_interactive):
        ctx.exit(1)

    # iOS project
    if not ios_path:
        ios_path = detect_ios_path(project_root)
        if not ios_path:
            print_error("No iOS project found in current directory (use --ios-path)")
            ctx.exit(1)
    elif not (project_root / ios_path).is_dir():
        print_error(f"Directory not found: {ios_path}")
        ctx.exit(1)
    console.print(f"{EMOJI_SUCCESS} Found iOS project at: {ios_path}")

    ios_dir = project_root / ios_path

    # Scheme
    if not scheme:
        try:
            scheme = select_scheme(ios_dir, non_interactive)
        except LaunchpadError as e:
            print_error(str(e))
            ctx.exit(1)

    # Bundle identifier
    if not bundle_id:
        bundle_id = detect_bundle_id(ios_dir, scheme, non_interactive)

    # Tagging
    if non_interactive:
        console.print(f"{EMOJI_SUCCESS} Git tagging: enabled (default)")
        git_tag, push_tags = True, True
    else:
        git_tag = Confirm.ask("Create git tags after deploy?", default=True)
        push_tags = git_tag and Confirm.ask("Push tags to remote?", default=True)

    config = ProjectConfig(
        ios_path=ios_path,
        scheme=scheme,
        bundle_id=bundle_id,
        git_tag=git_tag,
        push_tags=push_tags
    )

    path_resolver = PathResolver(project_root)
    try:
        ConfigService(path_resolver).save_project_config(config)
    except LaunchpadError as e:
        print_error(f"Failed to write {PROJECT_CONFIG_FILE}", e)
        ctx.exit(1)
    console.print(f"{EMOJI_SUCCESS} Created {PROJECT_CONFIG_FILE}")

    example_path = path_resolver.get_project_config_example_path()
    if not example_path.exists():
        example_path.write_text(render_project_config_example(), encoding='utf-8')
        console.print(f"{EMOJI_SUCCESS} Created {PROJECT_CONFIG_EXAMPLE_FILE} (for team reference)")

    ensure_fastfile(project_root, ios_path, scheme, non_interactive)

    gitignore = path_resolver.get_gitignore_path()
    if gitignore.exists() and not non_interactive:
        if Confirm.ask(f"Add {PROJECT_CONFIG_FILE} to .gitignore?", default=False):
            add_to_gitignore(gitignore, PROJECT_CONFIG_FILE)

    console.print(f"\n{EMOJI_SUCCESS} [bold]Setup complete![/bold]")
    console.print("\nNext steps:")
    console.print("1. launchpad doctor    verify the setup")
    console.print("2. launchpad deploy    upload a build to TestFlight")


def ensure_fastlane(non_interactive: bool) -> bool:
    """Offer to install fastlane with Homebrew when it is missing

    Returns:
        True if fastlane is available afterwards
    """
    if Fastlane.path():
        console.print(f"{EMOJI_SUCCESS} fastlane found")
        return True

    print_warning("fastlane not found")

    if not non_interactive and not Confirm.ask("Install fastlane with Homebrew?", default=True):
        print_error("fastlane is required (install it with: brew install fastlane)")
        return False

    console.print("Running: brew install fastlane")
    try:
        with console.status("Installing fastlane..."):
            result = subprocess.run(
                ["brew", "install", "fastlane"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL
            )
    except FileNotFoundError:
        print_error("Homebrew not found; install fastlane manually (https://docs.fastlane.tools)")
        return False

    if result.returncode != 0:
        print_error("Failed to install fastlane via brew (try manually: brew install fastlane)")
        return False

    console.print(f"{EMOJI_SUCCESS} fastlane installed")
    return True


def select_scheme(ios_dir: Path, non_interactive: bool) -> str:
    """Pick the scheme to build

    Raises:
        LaunchpadError: If xcodebuild fails or lists no schemes
    """
    schemes = Xcode.list_schemes(ios_dir)

    if not schemes:
        raise LaunchpadError("Could not detect Xcode scheme. Use --scheme to specify.")

    if len(schemes) == 1:
        console.print(f"{EMOJI_SUCCESS} Detected scheme: {schemes[0]}")
        return schemes[0]

    if non_interactive:
        console.print(f"{EMOJI_SUCCESS} Using scheme: {schemes[0]} (first of {len(schemes)})")
        return schemes[0]

    console.print("Multiple schemes found:")
    for index, name in enumerate(schemes, 1):
        console.print(f"  {index}. {name}")
    choice = Prompt.ask(
        "Select scheme",
        choices=[str(i) for i in range(1, len(schemes) + 1)],
        default="1"
    )
    return schemes[int(choice) - 1]


def detect_bundle_id(ios_dir: Path, scheme: str, non_interactive: bool) -> str:
    detected: Optional[str] = None
    try:
        detected = Xcode.get_bundle_id(ios_dir, scheme)
    except LaunchpadError as e:
        print_warning(f"Could not read build settings: {e}")

    detected = detected or DEFAULT_BUNDLE_ID

    if non_interactive:
        console.print(f"{EMOJI_SUCCESS} Using bundle ID: {detected}")
        return detected

    return Prompt.ask("Bundle identifier", default=detected)


def ensure_fastfile(project_root: Path, ios_path: str, scheme: str, non_interactive: bool) -> None:
    """Create a Fastfile with the beta lanes unless one exists"""
    existing = find_fastfile(project_root, ios_path)

    if existing:
        relative = existing.relative_to(project_root)
        content = existing.read_text(encoding='utf-8')
        missing = missing_lanes(content, REQUIRED_LANES)
        bumping = self_bumping_lanes(content, REQUIRED_LANES)
        if missing:
            console.print(
                f"{EMOJI_WARNING} Fastfile at {relative} is missing lanes: {', '.join(missing)}"
            )
        if bumping:
            print_warning(
                f"Fastfile at {relative} bumps the version in: {', '.join(bumping)}; "
                f"{HINT_REMOVE_LANE_BUMPS}"
            )
        if not missing and not bumping:
            console.print(f"{EMOJI_SUCCESS} Fastfile found at: {relative}")
        return

    print_warning(f"Fastfile not found in {ios_path}/fastlane/")

    if not non_interactive and not Confirm.ask("Create Fastfile with required lanes?", default=True):
        print_warning(f"Add the lanes {', '.join(REQUIRED_LANES)} to your Fastfile before deploying")
        return

    fastfile = project_root / ios_path / "fastlane" / "Fastfile"
    fastfile.parent.mkdir(parents=True, exist_ok=True)
    fastfile.write_text(render_fastfile(scheme), encoding='utf-8')
    console.print(f"{EMOJI_SUCCESS} Created {fastfile.relative_to(project_root)}")


def add_to_gitignore(gitignore: Path, entry: str) -> None:
    content = gitignore.read_text(encoding='utf-8')
    if entry in content.splitlines():
        return

    if content and not content.endswith("\n"):
        content += "\n"
    gitignore.write_text(content + entry + "\n", encoding='utf-8')
    console.print(f"{EMOJI_SUCCESS} Added {entry} to .gitignore")
