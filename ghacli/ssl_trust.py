"""Use the operating system trust store for HTTPS requests.

GitHub Enterprise Server installs are often behind corporate TLS roots that
the bundled certifi file does not know about. `truststore` makes the `ssl`
module, and so `requests`, verify against the OS store instead.

An explicit CA bundle (REQUESTS_CA_BUNDLE or SSL_CERT_FILE) is left alone.

Environment Variables:
    GHACLI_DISABLE_OS_TRUST=1  -> Skip injection entirely (use certifi)
    GHACLI_FORCE_OS_TRUST=1    -> Raise on any injection failure
    GHACLI_DEBUG_OS_TRUST=1    -> Print traceback on injection errors
"""

from __future__ import annotations

import os
import sys
import traceback
from typing import Optional

OS_TRUST_INJECTED: bool = False
OS_TRUST_REASON: str = "not-attempted"

CA_BUNDLE_VARS = ("REQUESTS_CA_BUNDLE", "SSL_CERT_FILE")

__all__ = ["custom_ca_bundle", "inject_os_trust", "OS_TRUST_INJECTED", "OS_TRUST_REASON"]


def _flag(name: str) -> bool:
    return os.environ.get(name) == "1"


def custom_ca_bundle() -> Optional[str]:
    """Return the CA bundle path named in the environment, if any."""
    for name in CA_BUNDLE_VARS:
        path = os.environ.get(name)
        if path:
            return path
    return None


def _skip_reason() -> Optional[str]:
    if _flag("GHACLI_DISABLE_OS_TRUST"):
        return "disabled-env"
    if custom_ca_bundle():
        return "custom-bundle"
    return None


def inject_os_trust() -> None:
    """Point TLS verification at the system certificate store.

    Records the outcome in OS_TRUST_INJECTED and OS_TRUST_REASON.
    """
    global OS_TRUST_INJECTED, OS_TRUST_REASON
    OS_TRUST_INJECTED = False

    reason = _skip_reason()
    if reason:
        OS_TRUST_REASON = reason
        return

    try:
        import truststore

        truststore.inject_into_ssl()
    except Exception as exc:
        if _flag("GHACLI_FORCE_OS_TRUST"):
            raise
        sys.stderr.write(
            f"[ghacli] Info: system trust store injection skipped: "
            f"{exc.__class__.__name__}: {exc}.\n"
        )
        if _flag("GHACLI_DEBUG_OS_TRUST"):
            traceback.print_exc()
        OS_TRUST_REASON = f"error:{exc.__class__.__name__}"
        return

    OS_TRUST_INJECTED = True
    OS_TRUST_REASON = "injected:ssl"
