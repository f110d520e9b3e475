"""
Shared context object for depsolver CLI commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

import click

if TYPE_CHECKING:
    from depsolver.config import DepSolverConfig


class DepSolverContext:
    """Global context object for depsolver CLI commands.

    Created once per invocation by the ``depsolver`` group and handed to
    subcommands through Click's context.

    Attributes:
        config_path: Path of the loaded configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, or ``None`` before loading.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional["DepSolverConfig"] = None


#: Click decorator for injecting :class:`DepSolverContext` into commands.
pass_context = click.make_pass_decorator(DepSolverContext, ensure=True)
