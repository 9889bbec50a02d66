"""Write ghacli/_version.py so frozen builds can report their version.

Usage:
    python scripts/update_version.py            # use [project].version
    python scripts/update_version.py 1.2.3      # use an explicit version
"""

import sys
from pathlib import Path

import tomllib

PROJECT_ROOT = Path(__file__).parent.parent
VERSION_FILE = PROJECT_ROOT / "ghacli" / "_version.py"

TEMPLATE = '''"""Version information for ghacli."""

# This file is auto-generated. Do not edit manually.
__version__ = "{version}"
'''


def read_project_version() -> str:
    """Return the version declared in pyproject.toml."""
    with open(PROJECT_ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)["project"]["version"]


def main() -> None:
    """Write the version file from the command line or pyproject.toml."""
    try:
        version = sys.argv[1] if len(sys.argv) > 1 else read_project_version()
        VERSION_FILE.write_text(TEMPLATE.format(version=version), encoding="utf-8")
    except (OSError, KeyError, tomllib.TOMLDecodeError) as exc:
        print(f"Error updating {VERSION_FILE.name}: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Wrote {VERSION_FILE.relative_to(PROJECT_ROOT)} with version {version}")


if __name__ == "__main__":
    main()
