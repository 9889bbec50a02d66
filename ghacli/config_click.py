"""CLI commands for managing ghacli configuration."""

import json
import sys
from typing import Any

import click
from tabulate import tabulate

from .config import (
    KNOWN_KEYS,
    get_config_file_path,
    get_config_value,
    load_config,
    remove_config_value,
    set_config_value,
)
from .utils import ExitCodes, format_success


def register_config_commands(cli: Any) -> None:
    """Register the 'config' command group and its subcommands."""

    @cli.group()
    def config() -> None:
        """Manage ghacli configuration.

        Known keys: host (default GitHub hostname), repo (default
        [HOST/]OWNER/REPO), prompt (enabled or disabled).
        """
        pass

    @config.command(name="get")
    @click.argument("key")
    def get_value(key: str) -> None:
        """Print the value of a configuration key."""
        value = get_config_value(key)
        if value is None:
            click.echo(f"✗ '{key}' is not set.", err=True)
            sys.exit(ExitCodes.NOT_FOUND)
        click.echo(value)

    @config.command(name="set")
    @click.argument("key", type=click.Choice(sorted(KNOWN_KEYS)))
    @click.argument("value")
    def set_value(key: str, value: str) -> None:
        """Set a configuration key."""
        try:
            set_config_value(key, value)
        except ValueError as exc:
            click.echo(f"✗ {exc}", err=True)
            sys.exit(ExitCodes.INVALID_INPUT)
        except RuntimeError as exc:
            click.echo(f"✗ {exc}", err=True)
            sys.exit(ExitCodes.GENERAL_ERROR)
        format_success(f"Set {key} = {value}")

    @config.command(name="unset")
    @click.argument("key")
    def unset_value(key: str) -> None:
        """Remove a configuration key."""
        if remove_config_value(key):
            format_success(f"Removed {key}")
        else:
            click.echo(f"'{key}' was not set.")

    @config.command(name="list")
    @click.option(
        "--format",
        "-f",
        type=click.Choice(["table", "json"]),
        default="table",
        help="Output format",
    )
    def list_values(format: str) -> None:
        """List all configuration values."""
        values = load_config()

        if format == "json":
            click.echo(json.dumps(values, indent=2))
            return

        if not values:
            click.echo("No configuration values set.")
            click.echo(f"\nConfiguration file: {get_config_file_path()}")
            return

        rows = [[key, value] for key, value in sorted(values.items())]
        click.echo(tabulate(rows, headers=["KEY", "VALUE"], tablefmt="github"))
