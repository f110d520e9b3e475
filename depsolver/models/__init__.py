"""
Unified data model exports for depsolver.

Example:
    >>> from depsolver.models import Package, Requirement, Command, Constraint
"""

from __future__ import annotations

from depsolver.models.package import Package
from depsolver.models.requirement import Requirement
from depsolver.models.command import (
    Command,
    Constraint,
    is_pinned,
    parse_state_entry,
)

__all__ = [
    "Package",
    "Requirement",
    "Command",
    "Constraint",
    "is_pinned",
    "parse_state_entry",
]
