"""
depsolver: minimum-cost install/uninstall planning

depsolver computes the cheapest sequence of ``+name=version`` /
``-name=version`` commands that turns an initial set of installed packages
into one satisfying a list of "must be present" / "must be absent"
constraints, respecting every package's dependencies and conflicts.

Typical library usage::

    from depsolver import load_problem, SolverEngine

    problem = load_problem("repository.json", "initial.json", "constraints.json")
    result = SolverEngine(problem.catalog, problem.constraints).solve(
        problem.initial_state
    )
    print(result.plan)
"""

from __future__ import annotations

from depsolver.__version__ import __version__
from depsolver.core import (
    Catalog,
    Problem,
    SearchOptions,
    SearchOutcome,
    SearchResult,
    SolverEngine,
    load_problem,
    solve,
)

__author__ = "depsolver Contributors"
__license__ = "Apache-2.0"
__description__ = "Minimum-cost install/uninstall planning over a package catalog."

__all__ = [
    "__version__",
    "Catalog",
    "Problem",
    "SearchOptions",
    "SearchOutcome",
    "SearchResult",
    "SolverEngine",
    "load_problem",
    "solve",
]
