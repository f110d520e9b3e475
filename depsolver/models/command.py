"""
Command and constraint codec for depsolver.

Plans, constraints and initial-state entries share one small grammar::

    command     := sign name ["=" version]
    constraint  := sign requirement
    state entry := name ["=" version]
    sign        := "+" | "-"

A command always refers to a concrete catalog package; a constraint is a
signed :class:`~depsolver.models.requirement.Requirement` that the final
configuration must (``+``) or must not (``-``) satisfy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from depsolver.constants import INSTALL_SIGN, UNINSTALL_SIGN
from depsolver.exceptions import FormatError
from depsolver.models.package import Package
from depsolver.models.requirement import Requirement


@dataclass(frozen=True)
class Command:
    """A single install or uninstall step of a plan.

    Attributes:
        install: ``True`` for ``+``, ``False`` for ``-``.
        package: The catalog package acted on.
    """

    install: bool
    package: Package

    @property
    def sign(self) -> str:
        return INSTALL_SIGN if self.install else UNINSTALL_SIGN

    def __str__(self) -> str:
        return f"{self.sign}{self.package.spec}"


@dataclass(frozen=True)
class Constraint:
    """A signed requirement on the final configuration.

    A versioned ``=`` constraint compares through the version comparator,
    so ``+a=1.00`` is met by ``a`` 1.0; initial-state entries instead
    name a catalog version by its exact string.

    Attributes:
        present: ``True`` for "must be installed", ``False`` for "must be
            absent".
        requirement: The requirement to test installed packages against.
    """

    present: bool
    requirement: Requirement

    @classmethod
    def parse(cls, text: str) -> "Constraint":
        """Parse ``+name[<op>version]`` or ``-name[<op>version]``.

        Raises:
            FormatError: Not a string, missing sign, or a malformed
                requirement body.
        """
        if not isinstance(text, str):
            raise FormatError(
                f"Constraint must be a string, got {type(text).__name__}",
                value=repr(text),
            )
        if not text or text[0] not in (INSTALL_SIGN, UNINSTALL_SIGN):
            raise FormatError(
                f"Constraint {text!r} must start with '+' or '-'", value=text
            )

        return cls(
            present=text[0] == INSTALL_SIGN,
            requirement=Requirement.parse(text[1:]),
        )

    def is_satisfied_by(self, state: Iterable[Optional[Package]]) -> bool:
        """Check this constraint against the packages of a state."""
        found = any(
            package is not None and self.requirement.matches(package)
            for package in state
        )
        return found if self.present else not found

    def names_exactly(self, package: Package) -> bool:
        """True when this constraint spells out exactly ``package``.

        That is ``name=version`` with this package's version, or the bare
        name when the package has no version.
        """
        req = self.requirement
        if req.name != package.name:
            return False
        if not package.version:
            return req.operator is None
        return req.operator == "=" and req.version == package.version

    def __str__(self) -> str:
        sign = INSTALL_SIGN if self.present else UNINSTALL_SIGN
        return f"{sign}{self.requirement}"


def is_pinned(package: Package, constraints: Iterable[Constraint]) -> bool:
    """Return True if ``package`` is protected from uninstallation.

    A package is pinned when some ``+`` constraint names it exactly and no
    ``-`` constraint names it exactly.
    """
    wanted = False
    for constraint in constraints:
        if constraint.names_exactly(package):
            if not constraint.present:
                return False
            wanted = True
    return wanted


def parse_state_entry(text: str) -> Tuple[str, Optional[str]]:
    """Split an initial-state entry into ``(name, version)``.

    ``version`` is ``None`` for a bare name.

    Raises:
        FormatError: Not a string, or an empty name.
    """
    if not isinstance(text, str):
        raise FormatError(
            f"Initial state entry must be a string, got {type(text).__name__}",
            value=repr(text),
        )

    name, sep, version = text.partition("=")
    if not name:
        raise FormatError(f"Initial state entry {text!r} has no name", value=text)
    return name, (version if sep else None)
