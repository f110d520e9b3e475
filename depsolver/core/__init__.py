"""
Core functionality exports for depsolver.

    from depsolver.core import SolverEngine, SearchOptions, load_problem
"""

from __future__ import annotations

from depsolver.core.catalog import Catalog
from depsolver.core.cost import command_cost, plan_cost
from depsolver.core.loader import Problem, dump_plan, load_problem
from depsolver.core.validity import is_goal, is_valid
from depsolver.core.search import (
    SearchOptions,
    SearchOutcome,
    SearchResult,
    SolverEngine,
    solve,
)

__all__ = [
    "Catalog",
    "Problem",
    "SolverEngine",
    "SearchOptions",
    "SearchOutcome",
    "SearchResult",
    "command_cost",
    "dump_plan",
    "is_goal",
    "is_valid",
    "load_problem",
    "plan_cost",
    "solve",
]
