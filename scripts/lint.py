"""Run the style, formatting and type checks used in CI.

Usage:
    python scripts/lint.py          # check only
    python scripts/lint.py --fix    # let black rewrite files, then check the rest

Steps, in order: ni-python-styleguide lint, black, mypy on the ghacli package.
Every step runs even if an earlier one fails; the exit code is non-zero if any
step failed.
"""

from __future__ import annotations

import subprocess
import sys
from typing import List, Tuple


def _steps(fix: bool) -> List[Tuple[str, List[str]]]:
    black_args = ["."] if fix else ["--check", "."]
    return [
        ("styleguide", [sys.executable, "-m", "ni_python_styleguide", "lint"]),
        ("black", [sys.executable, "-m", "black", *black_args]),
        ("mypy", [sys.executable, "-m", "mypy", "ghacli"]),
    ]


def main() -> None:
    """Run every lint step and exit with the combined status."""
    fix = "--fix" in sys.argv[1:]
    failed = []
    for name, cmd in _steps(fix):
        proc = subprocess.run(cmd, stdout=sys.stdout, stderr=sys.stderr)  # noqa: S603
        if proc.returncode != 0:
            failed.append(name)

    if failed:
        print(f"Failed: {', '.join(failed)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
