"""
Configuration states.

A state is a plain tuple of package references in the order they were
added. Tuples compare element-wise, so two states holding the same
packages in a different order are different states; the search relies on
this when it tracks the states on its current path. ``None`` marks an
initial-state entry that could not be resolved against the catalog.
"""

from __future__ import annotations

from typing import Optional, Tuple

from depsolver.models.package import Package

State = Tuple[Optional[Package], ...]


def install(state: State, package: Package) -> State:
    """Return ``state`` with ``package`` appended."""
    return state + (package,)


def uninstall(state: State, package: Package) -> State:
    """Return ``state`` without the first occurrence of ``package``."""
    index = state.index(package)
    return state[:index] + state[index + 1 :]


def describe(state: State) -> str:
    """Render a state for log messages."""
    return "[" + ", ".join("<absent>" if p is None else p.spec for p in state) + "]"
