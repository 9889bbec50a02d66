"""Repository resolution for ghacli commands.

The target repository is taken, in order, from the ``-R/--repo`` option, the
``GH_REPO`` environment variable, the ``repo`` config key, and finally the
``origin`` remote of the git checkout in the current directory.
"""

import os
import re
import subprocess
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from .config import get_config_value
from .utils import get_host

_SCP_LIKE_REMOTE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")


@dataclass
class Repo:
    """A GitHub repository on a given host."""

    owner: str
    name: str
    host: str

    @property
    def full_name(self) -> str:
        """Return the ``owner/name`` form used in API paths."""
        return f"{self.owner}/{self.name}"


def parse_repo(value: str, default_host: Optional[str] = None) -> Repo:
    """Parse ``OWNER/REPO``, ``HOST/OWNER/REPO`` or a repository URL.

    Args:
        value: The repository string
        default_host: Host used when the string does not name one

    Returns:
        Parsed repository

    Raises:
        ValueError: If the value is not in a recognised format
    """
    text = value.strip()
    if "://" in text:
        parsed = urlparse(text)
        if not parsed.hostname:
            raise ValueError(f"invalid repository URL '{value}'")
        return _repo_from_path(parsed.hostname, parsed.path, value)

    parts = text.split("/")
    if len(parts) == 2 and all(parts):
        return Repo(owner=parts[0], name=parts[1], host=default_host or get_host())
    if len(parts) == 3 and all(parts):
        return Repo(owner=parts[1], name=parts[2], host=parts[0])
    raise ValueError(f'expected the "[HOST/]OWNER/REPO" format, got "{value}"')


def parse_remote_url(url: str) -> Repo:
    """Parse a git remote URL, either URL-style or scp-like ``git@host:owner/repo``."""
    text = url.strip()
    if "://" in text:
        return parse_repo(text)
    match = _SCP_LIKE_REMOTE.match(text)
    if not match:
        raise ValueError(f"unrecognised git remote URL '{url}'")
    return _repo_from_path(match.group("host"), match.group("path"), url)


def _repo_from_path(host: str, path: str, original: str) -> Repo:
    parts = [p for p in path.strip("/").split("/") if p]
    if len(parts) != 2:
        raise ValueError(f"cannot determine repository from '{original}'")
    name = parts[1]
    if name.endswith(".git"):
        name = name[:-4]
    return Repo(owner=parts[0], name=name, host=host.lower())


def _origin_remote_url() -> str:
    proc = subprocess.run(  # noqa: S603,S607
        ["git", "remote", "get-url", "origin"],
        capture_output=True,
        text=True,
        check=False,
    )
    if proc.returncode != 0:
        raise ValueError("not a git repository with an 'origin' remote; use --repo")
    return proc.stdout.strip()


def resolve_base_repo(override: Optional[str] = None) -> Repo:
    """Resolve the repository a command operates on.

    Args:
        override: Value of the ``-R/--repo`` option, if given

    Returns:
        The resolved repository

    Raises:
        ValueError: If no repository can be determined
    """
    if override:
        return parse_repo(override)

    env_repo = os.environ.get("GH_REPO")
    if env_repo:
        return parse_repo(env_repo)

    configured = get_config_value("repo")
    if configured:
        return parse_repo(configured)

    try:
        return parse_remote_url(_origin_remote_url())
    except OSError as exc:
        raise ValueError(f"unable to run git: {exc}") from exc
