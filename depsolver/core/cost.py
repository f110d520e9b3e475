"""
Plan cost model.

Installing a package costs its ``size``. Uninstalling costs a flat penalty
regardless of size, so plans that remove packages are only chosen when no
removal-free plan exists.
"""

from __future__ import annotations

from typing import Iterable

from depsolver.constants import DEFAULT_UNINSTALL_PENALTY
from depsolver.models.command import Command


def command_cost(
    command: Command, *, uninstall_penalty: int = DEFAULT_UNINSTALL_PENALTY
) -> int:
    """Return the cost of a single command."""
    return command.package.size if command.install else uninstall_penalty


def plan_cost(
    commands: Iterable[Command],
    *,
    uninstall_penalty: int = DEFAULT_UNINSTALL_PENALTY,
) -> int:
    """Return the total cost of a command log.

    Examples:
        One install of size 50 plus one uninstall costs ``1_000_050``.
    """
    return sum(
        command_cost(command, uninstall_penalty=uninstall_penalty)
        for command in commands
    )
