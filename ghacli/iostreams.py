"""Terminal capability checks, colors, and progress output for ghacli."""

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

import click

from .config import is_prompt_disabled


def _isatty(stream: Any) -> bool:
    try:
        return bool(stream.isatty())
    except (OSError, AttributeError, ValueError):
        return False


class ColorScheme:
    """Applies colors and icons when enabled, plain text otherwise."""

    def __init__(self, enabled: bool) -> None:
        """Initialize the scheme.

        Args:
            enabled: Whether ANSI styling is emitted
        """
        self.enabled = enabled

    def _style(self, text: str, **styles: Any) -> str:
        return click.style(text, **styles) if self.enabled else text

    def success_icon(self) -> str:
        """Return the icon shown before success lines."""
        return self._style("✓", fg="green")

    def warning_icon(self) -> str:
        """Return the icon shown before warnings."""
        return self._style("!", fg="yellow")

    def failure_icon(self) -> str:
        """Return the icon shown before failures."""
        return self._style("X", fg="red")

    def cyan(self, text: str) -> str:
        """Return text in cyan."""
        return self._style(text, fg="cyan")

    def gray(self, text: str) -> str:
        """Return text dimmed."""
        return self._style(text, fg="bright_black")

    def yellow(self, text: str) -> str:
        """Return text in yellow."""
        return self._style(text, fg="yellow")


@dataclass
class IOStreams:
    """What the current terminal session supports.

    Commands consult this instead of calling isatty() themselves, so tests
    can simulate an interactive terminal by constructing one directly.
    """

    stdin_tty: bool = False
    stdout_tty: bool = False
    stderr_tty: bool = False
    color_enabled: bool = False
    prompt_disabled: bool = False

    def is_stdout_tty(self) -> bool:
        """Return True if stdout is attached to a terminal."""
        return self.stdout_tty

    def can_prompt(self) -> bool:
        """Return True if interactive prompts may be shown."""
        if self.prompt_disabled:
            return False
        return self.stdin_tty and self.stdout_tty

    def color_scheme(self) -> ColorScheme:
        """Return the color scheme for this session."""
        return ColorScheme(self.color_enabled)

    @contextmanager
    def progress_indicator(self, label: str = "Loading") -> Iterator[None]:
        """Show a progress line on stderr for the duration of a blocking call.

        The line is cleared on every exit path. Nothing is written when stderr
        is not a terminal.
        """
        if not self.stderr_tty:
            yield
            return
        click.echo(f"{label}…", err=True, nl=False)
        try:
            yield
        finally:
            click.echo("\r\033[K", err=True, nl=False, color=True)


def get_io_streams() -> IOStreams:
    """Build an IOStreams from the real process streams and environment."""
    stdout_tty = _isatty(sys.stdout)
    prompt_disabled = (
        os.getenv("GHACLI_NON_INTERACTIVE") == "true"
        or bool(os.getenv("GH_PROMPT_DISABLED"))
        or is_prompt_disabled()
    )
    return IOStreams(
        stdin_tty=_isatty(sys.stdin),
        stdout_tty=stdout_tty,
        stderr_tty=_isatty(sys.stderr),
        color_enabled=stdout_tty and "NO_COLOR" not in os.environ,
        prompt_disabled=prompt_disabled,
    )
