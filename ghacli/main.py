"""ghacli entry points."""

import getpass
from pathlib import Path
from typing import Optional

import click
import keyring
import tomllib
from keyring.errors import PasswordDeleteError

from . import ssl_trust
from .config_click import register_config_commands
from .run_click import register_run_commands
from .utils import format_success, get_host


def get_version() -> str:
    """Get version from _version.py (built binary) or pyproject.toml (development)."""
    try:
        from ._version import __version__  # type: ignore[import-not-found]

        return __version__
    except ImportError:
        try:
            pyproject_path = Path(__file__).parent.parent / "pyproject.toml"

            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)

            return pyproject_data["project"]["version"]
        except (OSError, KeyError, tomllib.TOMLDecodeError):
            return "unknown"


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """GitHub Actions CLI (ghacli) - work with Actions runs from the terminal."""  # noqa: D403
    if version:
        click.echo(f"ghacli version {get_version()}")
        ctx.exit()
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(hidden=True, name="_ca-info")
def ca_info() -> None:
    """Show where TLS CA certificates come from."""
    if ssl_trust.OS_TRUST_INJECTED:
        click.echo(f"CA Source: system (reason={ssl_trust.OS_TRUST_REASON})")
        return
    bundle = ssl_trust.custom_ca_bundle()
    if bundle:
        click.echo(f"CA Source: custom-pem ({bundle})")
    else:
        click.echo(f"CA Source: certifi (reason={ssl_trust.OS_TRUST_REASON})")


@cli.command()
@click.option("--hostname", help="GitHub hostname (default: github.com or GH_HOST)")
@click.option("--token", help="Personal access token")
def login(hostname: Optional[str], token: Optional[str]) -> None:
    """Store a GitHub token for a host in the system keyring."""
    host = (hostname or get_host()).strip().lower()
    if not host:
        raise click.ClickException("Hostname cannot be empty.")

    if not token:
        token = getpass.getpass(f"Paste your token for {host}: ")
    assert isinstance(token, str)
    if not token.strip():
        click.echo("Token cannot be empty.")
        raise click.ClickException("Token cannot be empty.")

    keyring.set_password("ghacli", host, token.strip())
    format_success(f"Token for {host} stored securely.")


@cli.command()
@click.option("--hostname", help="GitHub hostname (default: github.com or GH_HOST)")
def logout(hostname: Optional[str]) -> None:
    """Remove the stored token for a host."""
    host = (hostname or get_host()).strip().lower()
    try:
        keyring.delete_password("ghacli", host)
    except PasswordDeleteError:
        click.echo(f"No token stored for {host}.")
        return
    click.echo(f"Token for {host} removed from system keyring.")


register_config_commands(cli)
register_run_commands(cli)
