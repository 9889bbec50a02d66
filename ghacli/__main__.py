"""Entry point for the ghacli application.

Performs system trust store injection (via truststore) before loading the main CLI.
Environment controls:
    GHACLI_DISABLE_OS_TRUST=1  -> skip injection
    GHACLI_FORCE_OS_TRUST=1    -> raise if injection fails
    GHACLI_DEBUG_OS_TRUST=1    -> show traceback on injection failure
"""

from __future__ import annotations

# Absolute import so this also works when run as a standalone script
from ghacli.ssl_trust import inject_os_trust  # noqa: E402,I100,I202

# Inject before importing the CLI so requests sees the patched SSL configuration.
inject_os_trust()

from ghacli.main import cli  # noqa: E402,I100,I202


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
