"""Test utilities for ghacli unit tests."""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from unittest.mock import MagicMock

import requests

from ghacli.iostreams import IOStreams
from ghacli.repo import Repo

TEST_REPO = Repo(owner="octo", name="hello", host="github.com")
API_ROOT = "https://api.github.com/repos/octo/hello/actions"

Route = Union[Dict[str, Any], Exception, Callable[[Optional[Dict[str, Any]]], Dict[str, Any]]]


def tty_streams(can_prompt: bool = True) -> IOStreams:
    """Return IOStreams for an interactive terminal without colors."""
    return IOStreams(stdin_tty=can_prompt, stdout_tty=True, stderr_tty=False)


def pipe_streams() -> IOStreams:
    """Return IOStreams for redirected input and output."""
    return IOStreams()


def mock_response(data: Any, status_code: int = 200) -> Any:
    """Create a mock HTTP response."""
    resp: Any = MagicMock()
    resp.json.return_value = data
    resp.status_code = status_code
    return resp


def http_error(status_code: int, reason: str = "Error") -> requests.HTTPError:
    """Create a requests.HTTPError carrying a response with the given status."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    return requests.HTTPError(f"{status_code} Client Error: {reason}", response=resp)


class FakeApi:
    """Stand-in for make_api_request that routes by method and URL suffix.

    Route values may be a JSON payload, an exception to raise, or a callable
    taking the query params and returning a payload.
    """

    def __init__(self, routes: Dict[Tuple[str, str], Route]) -> None:
        """Initialize with a mapping of (method, url suffix) to results."""
        self.routes = routes
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    def __call__(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        host: Optional[str] = None,
    ) -> Any:
        """Record the call and return the routed result."""
        self.calls.append((method, url, params))
        for (route_method, suffix), result in self.routes.items():
            if route_method == method and url.endswith(suffix):
                if isinstance(result, Exception):
                    raise result
                if callable(result):
                    return mock_response(result(params))
                return mock_response(result)
        raise AssertionError(f"unexpected request: {method} {url}")

    def urls(self, method: Optional[str] = None) -> List[str]:
        """Return requested URLs, optionally only for one method."""
        return [url for m, url, _ in self.calls if method is None or m == method]
