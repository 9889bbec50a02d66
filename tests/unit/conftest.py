"""Unit test configuration - runs before any test collection or imports.

Forces the keyring null backend so no test touches a real OS keychain, and
stubs out requests so no test makes a real HTTP call.
"""

from typing import Any, Dict, Optional

import keyring
import pytest
from keyring.backends.null import Keyring as NullKeyring

# Must happen before any test triggers a keyring lookup.
keyring.set_keyring(NullKeyring())


class MockResponse:
    """Mock HTTP response for preventing real network calls."""

    def __init__(self, json_data: Optional[Dict[str, Any]] = None, status_code: int = 200) -> None:
        """Initialize mock response.

        Args:
            json_data: JSON data to return from json() method
            status_code: HTTP status code
        """
        self._json_data = json_data or {}
        self.status_code = status_code
        self.text = ""

    def json(self) -> Dict[str, Any]:
        """Return the JSON data."""
        return self._json_data

    def raise_for_status(self) -> None:
        """Raise an exception if status code indicates an error."""
        pass


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Keep tests independent of the developer's token, host, and config file."""
    for name in (
        "GH_TOKEN",
        "GITHUB_TOKEN",
        "GH_HOST",
        "GH_REPO",
        "GH_PROMPT_DISABLED",
        "GHACLI_NON_INTERACTIVE",
        "GHACLI_DEBUG",
        "GHACLI_SSL_VERIFY",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


@pytest.fixture(autouse=True)
def mock_network_calls(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent real HTTP calls from ghacli modules during unit tests.

    Individual tests override these with their own mocks.
    """

    def mock_requests_method(*args: Any, **kwargs: Any) -> MockResponse:
        """Return empty mock response for any unpatched HTTP call."""
        return MockResponse()

    monkeypatch.setattr("requests.get", mock_requests_method)
    monkeypatch.setattr("requests.post", mock_requests_method)
