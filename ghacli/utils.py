"""Shared utility functions for the GitHub Actions CLI."""

import os
from typing import Any, Dict, Optional

import click
import keyring
import requests

from .config import load_config

DEFAULT_HOST = "github.com"
REQUEST_TIMEOUT = 30


class ExitCodes:
    """Standard exit codes for CLI operations."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_INPUT = 2
    NOT_FOUND = 3
    PERMISSION_DENIED = 4
    NETWORK_ERROR = 5


class CommandError(Exception):
    """An error that ends a command with a message and an exit code."""

    def __init__(self, message: str, exit_code: int = ExitCodes.GENERAL_ERROR) -> None:
        """Initialize the error.

        Args:
            message: Message shown to the user
            exit_code: Process exit code to use
        """
        super().__init__(message)
        self.exit_code = exit_code


def get_status_code(exc: BaseException) -> Optional[int]:
    """Return the HTTP status code carried by a requests error, if any."""
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code
    return None


def exit_code_for_error(exc: BaseException) -> int:
    """Map a transport or HTTP error to a CLI exit code.

    Args:
        exc: The exception raised by a request

    Returns:
        One of the ExitCodes values
    """
    status = get_status_code(exc)
    if status == 404:
        return ExitCodes.NOT_FOUND
    if status in (401, 403):
        return ExitCodes.PERMISSION_DENIED
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return ExitCodes.NETWORK_ERROR
    return ExitCodes.GENERAL_ERROR


def format_success(message: str) -> None:
    """Format success messages consistently."""
    click.echo(f"✓ {message}")


def is_debug() -> bool:
    """Return True when request tracing is enabled via GHACLI_DEBUG."""
    return os.environ.get("GHACLI_DEBUG", "").lower() in ("1", "true", "yes")


# --- Host and credentials ---
def get_host() -> str:
    """Return the GitHub hostname from GH_HOST, the config file, or the default."""
    host = os.environ.get("GH_HOST")
    if not host:
        host = load_config().get("host")
    return host or DEFAULT_HOST


def get_base_url(host: Optional[str] = None) -> str:
    """Return the REST API root for a host, always ending with a slash.

    github.com is served from api.github.com; Enterprise Server hosts serve the
    API under /api/v3.
    """
    host = (host or get_host()).lower()
    if host in ("github.com", "api.github.com"):
        return "https://api.github.com/"
    if host.startswith("http://") or host.startswith("https://"):
        return host.rstrip("/") + "/api/v3/"
    return f"https://{host}/api/v3/"


def get_api_token(host: Optional[str] = None) -> str:
    """Retrieve the API token from the environment or the keyring."""
    host = host or get_host()
    token = os.environ.get("GH_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if not token:
        token = keyring.get_password("ghacli", host)
    if not token:
        click.echo(
            f"Error: no token found for {host}. Please set the GH_TOKEN "
            "environment variable or run 'ghacli login'.",
            err=True,
        )
        raise click.ClickException("API token not found.")
    return token


def get_headers(host: Optional[str] = None) -> Dict[str, str]:
    """Return headers for GitHub REST API requests."""
    return {
        "Authorization": f"Bearer {get_api_token(host)}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def get_ssl_verify() -> bool:
    """Return SSL verification setting from environment variable. Defaults to True."""
    env = os.environ.get("GHACLI_SSL_VERIFY")
    if env is not None:
        return env.lower() not in ("0", "false", "no")
    return True


# --- API Request Utilities ---
def make_api_request(
    method: str,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    host: Optional[str] = None,
) -> requests.Response:
    """Make an API request with the standard headers, TLS setting and timeout.

    Request bodies are never sent; the Actions endpoints used here take none.

    Args:
        method: HTTP method, GET or POST
        url: API endpoint URL
        params: Query string parameters
        host: Hostname used to pick credentials

    Returns:
        Response object

    Raises:
        requests.RequestException: For non-2xx responses and transport failures
        ValueError: For an unsupported method
    """
    headers = get_headers(host)
    ssl_verify = get_ssl_verify()

    if method.upper() == "GET":
        resp = requests.get(
            url,
            headers=headers,
            params=params,
            verify=ssl_verify,
            timeout=REQUEST_TIMEOUT,
        )
    elif method.upper() == "POST":
        resp = requests.post(
            url,
            headers=headers,
            params=params,
            verify=ssl_verify,
            timeout=REQUEST_TIMEOUT,
        )
    else:
        raise ValueError(f"Unsupported HTTP method: {method}")

    if is_debug():
        click.echo(f"* {method.upper()} {url} -> {resp.status_code}", err=True)

    resp.raise_for_status()
    return resp
