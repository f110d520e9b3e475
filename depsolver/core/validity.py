"""
State validity and goal checking.

Both predicates are pure functions of their arguments.

Dependency checking is incremental: only the clauses of the *last* package
in a state are checked, against the packages before it. States grow one
package at a time during search, so every earlier package was checked when
it was appended. After an uninstall the last position simply holds
whichever package now ends the tuple, and that package is the one checked.
``full_revalidation`` switches to checking every package against all the
others instead.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from depsolver.core.state import State
from depsolver.models.command import Constraint
from depsolver.models.package import Package


def _clauses_satisfied(package: Package, others: Sequence[Package]) -> bool:
    return all(
        any(req.matches(other) for req in clause for other in others)
        for clause in package.clauses
    )


def _has_conflict(state: State) -> bool:
    for package in state:
        if not package.conflict_requirements:
            continue
        for other in state:
            if other is not package and package.conflicts_with(other):
                return True
    return False


def is_valid(state: State, *, full_revalidation: bool = False) -> bool:
    """Return whether ``state`` is internally consistent.

    An empty state is valid. A state containing an absent slot (an
    unresolved initial entry) is never valid.

    Args:
        state: Configuration state to check.
        full_revalidation: Check the dependencies of every package, not
            only the last one.
    """
    if not state:
        return True
    if any(package is None for package in state):
        return False

    if full_revalidation:
        for i, package in enumerate(state):
            if not _clauses_satisfied(package, state[:i] + state[i + 1 :]):
                return False
    elif not _clauses_satisfied(state[-1], state[:-1]):
        return False

    return not _has_conflict(state)


def is_goal(state: State, constraints: Iterable[Constraint]) -> bool:
    """Return whether ``state`` satisfies every constraint."""
    return all(constraint.is_satisfied_by(state) for constraint in constraints)
