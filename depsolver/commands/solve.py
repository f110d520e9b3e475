"""Solve command implementation for depsolver.

Reads a repository, an initial state and a constraint list, runs the plan
search, and prints the cheapest command sequence found.

Typical usage::

    # JSON plan on stdout (default)
    $ depsolver solve repository.json initial.json constraints.json
    [
      "+b=1.0",
      "+a=1.0"
    ]

    # Human-readable table with per-step costs
    $ depsolver solve repository.json initial.json constraints.json -f table

    # Give up after ten seconds, checking the deadline at every step
    $ depsolver solve repo.json init.json cons.json --time-budget 10000 --strict-deadline

Exit status: 0 when a plan was found, 3 when no goal state was reached,
1 on malformed input.
"""

from __future__ import annotations

import click
from pathlib import Path
from typing import Dict, List, Optional

from depsolver.config import DepSolverConfig
from depsolver.constants import (
    EXIT_ERROR,
    EXIT_NO_SOLUTION,
    EXIT_SOLVED,
    ON_UNRESOLVED_CHOICES,
)
from depsolver.context import DepSolverContext, pass_context
from depsolver.core import (
    SearchOptions,
    SearchOutcome,
    SearchResult,
    SolverEngine,
    command_cost,
    dump_plan,
    load_problem,
)
from depsolver.exceptions import DepSolverError
from depsolver.utils import (
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    safe_write_file,
)

logger = get_logger("commands.solve")

_INPUT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.command()
@click.argument("repository", type=_INPUT_FILE)
@click.argument("initial", type=_INPUT_FILE)
@click.argument("constraints", type=_INPUT_FILE)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["json", "table", "simple"], case_sensitive=False),
    default="json",
    help="Output format for the plan.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Also write the plan as a JSON array to this file.",
)
@click.option(
    "--time-budget",
    type=click.IntRange(min=1),
    default=None,
    metavar="MS",
    help="Wall-clock search budget in milliseconds.",
)
@click.option(
    "--strict-deadline/--no-strict-deadline",
    default=None,
    help="Check the time budget before every expansion.",
)
@click.option(
    "--full-revalidation/--incremental-validation",
    default=None,
    help="Re-check every package's dependencies in each state.",
)
@click.option(
    "--prune-by-cost/--no-prune-by-cost",
    default=None,
    help="Abandon branches that can no longer beat the best plan.",
)
@click.option(
    "--on-unresolved",
    type=click.Choice(list(ON_UNRESOLVED_CHOICES)),
    default=None,
    help="Treat initial entries missing from the catalog as absent or as an error.",
)
@pass_context
def solve(
    ctx: DepSolverContext,
    repository: Path,
    initial: Path,
    constraints: Path,
    output_format: str,
    output: Optional[Path],
    time_budget: Optional[int],
    strict_deadline: Optional[bool],
    full_revalidation: Optional[bool],
    prune_by_cost: Optional[bool],
    on_unresolved: Optional[str],
) -> None:
    """Find the cheapest plan from INITIAL to a state meeting CONSTRAINTS.

    REPOSITORY is a JSON array of packages, INITIAL a JSON array of
    ``name`` / ``name=version`` strings, and CONSTRAINTS a JSON array of
    ``+requirement`` / ``-requirement`` strings.

    Installing a package costs its size; every uninstall costs a large
    fixed penalty, so removals are used only when unavoidable.
    """
    click_ctx = click.get_current_context()
    config = ctx.config or DepSolverConfig()

    options = config.to_search_options(
        time_budget_ms=time_budget,
        strict_deadline=strict_deadline,
        full_revalidation=full_revalidation,
        prune_by_cost=prune_by_cost,
    )
    logger.debug("Search options: %s", options)

    try:
        problem = load_problem(
            repository,
            initial,
            constraints,
            on_unresolved=on_unresolved or config.on_unresolved,
        )
        engine = SolverEngine(problem.catalog, problem.constraints, options)
        result = engine.solve(problem.initial_state)

        if result.solved and output is not None:
            safe_write_file(output, dump_plan(result.plan) + "\n")
            logger.info("Plan written to %s", output)

    except DepSolverError as exc:
        print_error(str(exc))
        logger.debug("Solve failed", exc_info=True)
        click_ctx.exit(EXIT_ERROR)

    if not result.solved:
        _report_no_solution(result)
        click_ctx.exit(EXIT_NO_SOLUTION)

    if output_format == "table":
        _display_table(result, options)
    elif output_format == "simple":
        _display_simple(result)
    else:
        print(dump_plan(result.plan))

    if result.timed_out:
        print_warning(
            f"Time budget of {options.time_budget_ms} ms exhausted; "
            "the plan may not be the cheapest"
        )

    click_ctx.exit(EXIT_SOLVED)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _report_no_solution(result: SearchResult) -> None:
    if result.outcome is SearchOutcome.TIMED_OUT:
        print_warning(
            f"No solution found within the time budget "
            f"({result.states_explored} states explored)"
        )
    else:
        print_warning("No solution found.")


def _build_rows(result: SearchResult, options: SearchOptions) -> List[Dict[str, str]]:
    rows = []
    for step, command in enumerate(result.commands, start=1):
        action = "install" if command.install else "uninstall"
        rows.append(
            {
                "Step": str(step),
                "Command": str(command),
                "Action": f"[{action}]{action}[/{action}]",
                "Cost": str(
                    command_cost(command, uninstall_penalty=options.uninstall_penalty)
                ),
            }
        )
    return rows


def _display_table(result: SearchResult, options: SearchOptions) -> None:
    """Render the plan as a Rich table followed by a cost summary."""
    if not result.commands:
        print_success("Initial state already satisfies all constraints")
        return

    print_table(
        _build_rows(result, options),
        title="Plan",
        column_styles={
            "Step": {"justify": "right"},
            "Cost": {"justify": "right"},
            "Command": {"no_wrap": True},
        },
    )
    get_raw_console().print(
        f"Total cost: [bold]{result.cost}[/bold] "
        f"({len(result.commands)} command(s), {result.states_explored} states explored)"
    )


def _display_simple(result: SearchResult) -> None:
    """Print one command per line, suitable for piping."""
    for command in result.plan:
        click.echo(command)
