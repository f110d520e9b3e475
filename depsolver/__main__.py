"""
Executable module for depsolver.

Running ``python -m depsolver`` is equivalent to ``depsolver``.
"""

from __future__ import annotations

import sys

from depsolver.constants import EXIT_ERROR


def _print_startup_error(exc: ImportError) -> None:
    sys.stderr.write("depsolver CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Run the CLI and return its exit code."""
    try:
        # Imported here so a broken installation gets a readable report
        from depsolver.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return EXIT_ERROR

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
