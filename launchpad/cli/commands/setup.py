"""Machine setup command for App Store Connect credentials"""

import shutil
from pathlib import Path

import click
from rich.prompt import Prompt, Confirm

from .doctor import doctor
from ..utils.output import console, print_error, print_warning
from ...api.exceptions import LaunchpadError
from ...constants import API_KEY_FILE_PATTERN, EMOJI_SUCCESS, EMOJI_ARROW
from ...models import AppleCredentials, GlobalConfig
from ...services.config_service import ConfigService


@click.command()
@click.option('--key-id', help='App Store Connect API key ID')
@click.option('--issuer-id', help='App Store Connect issuer ID')
@click.option('--key-path', help='Path to the AuthKey_<id>.p8 file')
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing configuration')
@click.pass_context
def setup(ctx, key_id, issuer_id, key_path, force):
    """Configure App Store Connect API credentials

    The .p8 key is copied into the launchpad config directory so the
    original download can be deleted. Run once per machine.

    Create a key at https://appstoreconnect.apple.com/access/api

    Examples:
        launchpad setup
        launchpad setup --key-id ABC123 --issuer-id 69a6de... --key-path ~/Downloads/AuthKey_ABC123.p8
    """
    service = ConfigService(ctx.obj.path_resolver)

    console.print("[bold cyan]launchpad setup[/bold cyan]\n")

    if service.global_config_path.exists() and not force:
        if not Confirm.ask("Existing config found. Overwrite?", default=False):
            console.print("Setup cancelled")
            ctx.exit(0)

    if not key_id:
        key_id = Prompt.ask("API Key ID")
    if not issuer_id:
        issuer_id = Prompt.ask("Issuer ID")
    if not key_path:
        key_path = Prompt.ask("Path to .p8 key file")

    key_id, issuer_id, key_path = key_id.strip(), issuer_id.strip(), key_path.strip()
    if not key_id or not issuer_id or not key_path:
        print_error("Key ID, issuer ID and key path are all required")
        ctx.exit(1)

    source = Path(key_path).expanduser()
    if not source.is_file():
        print_warning(f"Key file not found at {source}")
        if not Confirm.ask("Continue anyway?", default=False):
            console.print("Setup cancelled")
            ctx.exit(1)
        stored_key_path = key_path
    else:
        try:
            stored_key_path = str(copy_api_key(source, key_id, ctx.obj.path_resolver.get_keys_dir()))
        except OSError as e:
            print_error("Failed to copy key file", e)
            ctx.exit(1)
        console.print(f"{EMOJI_SUCCESS} Copied key to {stored_key_path}")

    config = GlobalConfig(apple=AppleCredentials(key_id, issuer_id, stored_key_path))

    try:
        saved_path = service.save_global_config(config)
    except LaunchpadError as e:
        print_error("Failed to save configuration", e)
        ctx.exit(1)

    console.print(f"{EMOJI_SUCCESS} Configuration saved to {saved_path}\n")

    console.print(f"{EMOJI_ARROW} Running diagnostics...\n")
    try:
        ctx.invoke(doctor)
    except SystemExit:
        print_warning("Some checks failed; fix them before deploying")


def copy_api_key(source: Path, key_id: str, keys_dir: Path) -> Path:
    """Copy a .p8 key into ``keys_dir`` as AuthKey_<key_id>.p8

    Returns:
        Destination path
    """
    keys_dir.mkdir(parents=True, exist_ok=True)
    destination = keys_dir / API_KEY_FILE_PATTERN.format(key_id=key_id)
    shutil.copyfile(source, destination)
    destination.chmod(0o600)
    return destination
