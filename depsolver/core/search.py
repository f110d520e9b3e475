"""Exhaustive plan search for depsolver.

The engine explores configuration states reachable from the initial state
by installing or uninstalling one catalog package at a time, and keeps the
cheapest command log that reaches a goal state.

Search order and bookkeeping:

1. States are expanded depth-first. Children of a state are generated by
   walking the catalog in order: a package not yet installed is installed,
   an installed one is uninstalled, unless a pruning rule forbids the move.
2. The set of states on the *current path* is tracked to break cycles.
   A state leaves the set when its subtree is finished, so the same
   configuration can be reached again later through a cheaper log.
3. Invalid states (see :mod:`depsolver.core.validity`) are not expanded.
4. At a goal state the log is priced. Only a strictly cheaper log replaces
   the best one, so among equal-cost plans the first found wins and the
   output is deterministic for fixed inputs.
5. The time budget is cooperative. By default it is only consulted when a
   goal state fails to improve on the best plan; with ``strict_deadline``
   it is consulted before every expansion.

The search is an anytime algorithm: when the budget runs out it returns the
best plan seen so far, which may not be optimal.

Typical usage::

    engine = SolverEngine(catalog, constraints, SearchOptions(time_budget_ms=5_000))
    result = engine.solve(initial_state)

    if result.solved:
        print(result.plan)       # ['+b=1.0', '+a=1.0']
"""

from __future__ import annotations

import math
import time
from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Sequence, Set, Tuple

from depsolver.constants import (
    DEFAULT_FULL_REVALIDATION,
    DEFAULT_GUARD_UNINSTALL_OF_INSTALLED,
    DEFAULT_PROTECT_PINNED,
    DEFAULT_PRUNE_BY_COST,
    DEFAULT_SKIP_REINSTALL_AFTER_UNINSTALL,
    DEFAULT_STRICT_DEADLINE,
    DEFAULT_TIME_BUDGET_MS,
    DEFAULT_UNINSTALL_PENALTY,
)
from depsolver.core.catalog import Catalog
from depsolver.core.cost import command_cost
from depsolver.core.state import State, describe, install, uninstall
from depsolver.core.validity import is_goal, is_valid
from depsolver.models.command import Command, Constraint, is_pinned
from depsolver.models.package import Package
from depsolver.utils.logger import get_logger

logger = get_logger("search")

# Public API
__all__ = [
    "SolverEngine",
    "SearchOptions",
    "SearchContext",
    "SearchOutcome",
    "SearchResult",
    "solve",
]

Log = Tuple[Command, ...]


# ---------------------------------------------------------------------------
# Options and results
# ---------------------------------------------------------------------------


class SearchOutcome(Enum):
    """How a search ended."""

    SOLVED = "solved"
    # Every reachable state was explored and none was a goal
    UNSATISFIABLE = "unsatisfiable"
    # The budget ran out before any goal state was found
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class SearchOptions:
    """Tuning knobs for :class:`SolverEngine`.

    Attributes:
        time_budget_ms: Wall-clock budget for the whole search.
        uninstall_penalty: Cost charged for every uninstall command.
        full_revalidation: Check every package's dependencies in each
            state, instead of only the most recently added package's.
        strict_deadline: Check the budget before every expansion rather
            than only at non-improving goal states.
        prune_by_cost: Abandon a branch once its cost already reaches the
            best plan's cost.
        skip_reinstall_after_uninstall: Never install a package the current
            log has already uninstalled.
        guard_uninstall_of_installed: Never uninstall a package the current
            log has already installed, unless the log is still shorter than
            the constraint list.
        protect_pinned: Never uninstall a package named exactly by a ``+``
            constraint (and by no ``-`` constraint).
    """

    time_budget_ms: int = DEFAULT_TIME_BUDGET_MS
    uninstall_penalty: int = DEFAULT_UNINSTALL_PENALTY
    full_revalidation: bool = DEFAULT_FULL_REVALIDATION
    strict_deadline: bool = DEFAULT_STRICT_DEADLINE
    prune_by_cost: bool = DEFAULT_PRUNE_BY_COST
    skip_reinstall_after_uninstall: bool = DEFAULT_SKIP_REINSTALL_AFTER_UNINSTALL
    guard_uninstall_of_installed: bool = DEFAULT_GUARD_UNINSTALL_OF_INSTALLED
    protect_pinned: bool = DEFAULT_PROTECT_PINNED


@dataclass
class SearchResult:
    """Outcome of a search.

    Attributes:
        outcome: Why the search stopped.
        commands: Winning command log, in application order (empty when
            unsolved).
        state: Final configuration of the winning plan, if any.
        cost: Cost of the winning plan, if any.
        timed_out: Whether the time budget cut the search short. A solved
            result with ``timed_out`` set may be suboptimal.
        states_explored: Number of valid states visited.
        goals_found: Number of goal states reached (improving or not).
        elapsed_ms: Wall-clock duration of the search.
    """

    outcome: SearchOutcome
    commands: Log = ()
    state: Optional[State] = None
    cost: Optional[int] = None
    timed_out: bool = False
    states_explored: int = 0
    goals_found: int = 0
    elapsed_ms: float = 0.0

    @property
    def solved(self) -> bool:
        return self.outcome is SearchOutcome.SOLVED

    @property
    def plan(self) -> List[str]:
        """The winning plan as command strings."""
        return [str(command) for command in self.commands]


# ---------------------------------------------------------------------------
# Per-run bookkeeping
# ---------------------------------------------------------------------------


@dataclass
class SearchContext:
    """Mutable state of one :meth:`SolverEngine.solve` call.

    Kept apart from the engine so that an engine can be reused and every
    run starts from a clean slate.
    """

    started_at: float
    on_path: Set[State] = field(default_factory=set)
    best_state: Optional[State] = None
    best_commands: Optional[Log] = None
    best_cost: float = math.inf
    terminated: bool = False
    states_explored: int = 0
    goals_found: int = 0


@dataclass
class _Frame:
    """A state whose children are being generated."""

    state: State
    commands: Log
    cost: int
    # packages the log has installed / uninstalled so far
    installed: FrozenSet[Package] = frozenset()
    removed: FrozenSet[Package] = frozenset()
    next_index: int = 0


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class SolverEngine:
    """Depth-first branch search for the cheapest install/uninstall plan.

    The recursion of a textbook DFS is replaced by an explicit stack of
    frames, each holding a state and the index of the next catalog package
    to try, so deep plans never hit Python's recursion limit.

    Args:
        catalog: The package catalog. Its order fixes the search order.
        constraints: Constraints the final state must satisfy.
        options: Search tuning; defaults to :class:`SearchOptions`.
        clock: Monotonic clock in seconds, injectable for tests.
    """

    def __init__(
        self,
        catalog: Catalog,
        constraints: Sequence[Constraint],
        options: Optional[SearchOptions] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.catalog = catalog
        self.constraints: Tuple[Constraint, ...] = tuple(constraints)
        self.options = options or SearchOptions()
        self._clock = clock
        self._pinned: FrozenSet[Package] = frozenset(
            p for p in catalog if is_pinned(p, self.constraints)
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def solve(self, initial: State) -> SearchResult:
        """Search for the cheapest plan from ``initial`` to a goal state.

        Args:
            initial: Initial configuration. May contain ``None`` slots for
                unresolved entries, which make it invalid.

        Returns:
            A :class:`SearchResult`; unsatisfiable instances are a normal
            outcome, not an exception.
        """
        ctx = SearchContext(started_at=self._clock())
        logger.info(
            "Searching from %s over %d package(s) with %d constraint(s)",
            describe(initial),
            len(self.catalog),
            len(self.constraints),
        )

        stack: List[_Frame] = []
        self._enter(ctx, stack, _Frame(state=initial, commands=(), cost=0))

        catalog_size = len(self.catalog)
        while stack and not ctx.terminated:
            frame = stack[-1]
            if frame.next_index >= catalog_size:
                stack.pop()
                ctx.on_path.discard(frame.state)
                continue

            package = self.catalog[frame.next_index]
            frame.next_index += 1

            child = self._step(frame, package)
            if child is not None:
                self._enter(ctx, stack, child)

        return self._build_result(ctx)

    # ------------------------------------------------------------------
    # Search steps
    # ------------------------------------------------------------------

    def _enter(self, ctx: SearchContext, stack: List[_Frame], frame: _Frame) -> None:
        """Visit ``frame.state``: reject it, record it as a goal, or push it."""
        if ctx.terminated:
            return
        if self.options.strict_deadline and self._budget_exhausted(ctx):
            return
        state = frame.state
        if state in ctx.on_path:
            return
        if self.options.prune_by_cost and frame.cost >= ctx.best_cost:
            return
        if not is_valid(state, full_revalidation=self.options.full_revalidation):
            return

        ctx.states_explored += 1

        if is_goal(state, self.constraints):
            ctx.goals_found += 1
            if frame.cost < ctx.best_cost:
                ctx.best_state = state
                ctx.best_commands = frame.commands
                ctx.best_cost = frame.cost
                logger.debug(
                    "New best plan: cost %d, %d command(s) after %d state(s)",
                    frame.cost,
                    len(frame.commands),
                    ctx.states_explored,
                )
            else:
                self._budget_exhausted(ctx)
            return

        ctx.on_path.add(state)
        stack.append(frame)

    def _step(self, frame: _Frame, package: Package) -> Optional[_Frame]:
        """Return the child frame reached by toggling ``package``, or ``None``."""
        options = self.options
        commands = frame.commands

        if package not in frame.state:
            if options.skip_reinstall_after_uninstall and package in frame.removed:
                return None
            return _Frame(
                state=install(frame.state, package),
                commands=commands + (Command(True, package),),
                cost=frame.cost + package.size,
                installed=frame.installed | {package},
                removed=frame.removed,
            )

        if (
            options.guard_uninstall_of_installed
            and len(commands) >= len(self.constraints)
            and package in frame.installed
        ):
            return None
        if options.protect_pinned and package in self._pinned:
            return None

        command = Command(False, package)
        return _Frame(
            state=uninstall(frame.state, package),
            commands=commands + (command,),
            cost=frame.cost
            + command_cost(command, uninstall_penalty=options.uninstall_penalty),
            installed=frame.installed,
            removed=frame.removed | {package},
        )

    def _budget_exhausted(self, ctx: SearchContext) -> bool:
        """Set the termination flag once the time budget has elapsed."""
        if self._elapsed_ms(ctx) > self.options.time_budget_ms:
            if not ctx.terminated:
                logger.warning(
                    "Time budget of %d ms exhausted after %d state(s); "
                    "stopping with the best plan found so far",
                    self.options.time_budget_ms,
                    ctx.states_explored,
                )
            ctx.terminated = True
        return ctx.terminated

    def _elapsed_ms(self, ctx: SearchContext) -> float:
        return (self._clock() - ctx.started_at) * 1000.0

    def _build_result(self, ctx: SearchContext) -> SearchResult:
        elapsed = self._elapsed_ms(ctx)

        if ctx.best_commands is not None:
            outcome = SearchOutcome.SOLVED
        elif ctx.terminated:
            outcome = SearchOutcome.TIMED_OUT
        else:
            outcome = SearchOutcome.UNSATISFIABLE

        logger.info(
            "Search %s: %d state(s) explored, %d goal(s) reached in %.0f ms",
            outcome.value,
            ctx.states_explored,
            ctx.goals_found,
            elapsed,
        )

        return SearchResult(
            outcome=outcome,
            commands=ctx.best_commands or (),
            state=ctx.best_state,
            cost=None if ctx.best_commands is None else int(ctx.best_cost),
            timed_out=ctx.terminated,
            states_explored=ctx.states_explored,
            goals_found=ctx.goals_found,
            elapsed_ms=elapsed,
        )


def solve(
    catalog: Catalog,
    initial: State,
    constraints: Sequence[Constraint],
    options: Optional[SearchOptions] = None,
) -> SearchResult:
    """Convenience wrapper around :meth:`SolverEngine.solve`."""
    return SolverEngine(catalog, constraints, options).solve(initial)
