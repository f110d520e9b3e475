"""
Command-line entry point for depsolver.

The ``depsolver`` group owns the process-wide concerns (color, logging,
configuration file) and hands a :class:`~depsolver.context.DepSolverContext`
to its subcommands. Exit statuses are listed in :func:`main`.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from depsolver.config import load_config
from depsolver.__version__ import __version__
from depsolver.context import DepSolverContext
from depsolver.exceptions import ConfigError, DepSolverError
from depsolver.utils.console import print_error, print_warning, reconfigure_console
from depsolver.utils.logger import get_logger, level_for_verbosity, setup_logging
from depsolver.constants import (
    EXIT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SOLVED,
    EXIT_USAGE,
)

logger = get_logger("cli")


def _apply_color_preference(color: bool) -> None:
    """Export ``NO_COLOR`` and rebuild the consoles to match ``color``."""
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="DEPSOLVER_CONFIG",
    help="Configuration file (default: depsolver.toml or pyproject.toml).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log search progress to stderr (-v info, -vv debug).",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="DEPSOLVER_COLOR",
    help="Colorize terminal output.",
)
@click.version_option(__version__, prog_name="depsolver", message="%(prog)s %(version)s")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """depsolver: plan the cheapest install/uninstall sequence.

    \b
    Example:
      depsolver solve repository.json initial.json constraints.json
      depsolver -v solve repo.json init.json cons.json --format table

    Run ``depsolver solve --help`` for the solver options.
    """
    _apply_color_preference(color)

    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("depsolver %s, log level %s", __version__, logging.getLevelName(level))

    try:
        settings = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        ctx.exit(EXIT_ERROR)

    state = DepSolverContext()
    state.config_path = config or settings.source_path
    state.verbose = verbose
    state.color = color
    state.config = settings
    ctx.obj = state

    logger.debug("Configuration source: %s", state.config_path or "<defaults>")


try:
    from depsolver.commands.solve import solve

    cli.add_command(solve)
except ImportError as exc:
    sys.stderr.write(f"FATAL: Failed to import CLI commands: {exc}\n")
    sys.exit(EXIT_ERROR)


def main() -> int:
    """Run the ``depsolver`` command and return its exit status.

    Returns:
        Exit code:
            0   Plan found
            1   Malformed input, unreadable file or internal error
            2   Usage error (Click)
            3   No solution
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
    except click.UsageError as exc:
        exc.show()
        return EXIT_USAGE
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("Interrupted")
        return EXIT_INTERRUPTED
    except DepSolverError as exc:
        print_error(str(exc))
        logger.debug("Error details: %s", exc.details or "<none>", exc_info=True)
        return EXIT_ERROR
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return EXIT_ERROR

    return result if isinstance(result, int) else EXIT_SOLVED


if __name__ == "__main__":
    sys.exit(main())
