"""
Requirement data model for depsolver.

A requirement is the text used in dependency clauses, conflict lists and
constraints: either a bare ``name`` (any version) or ``name<op>version``
with ``<op>`` one of ``>=``, ``<=``, ``>``, ``<``, ``=``.
"""

from __future__ import annotations

from functools import lru_cache
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from depsolver.constants import REQUIREMENT_OPERATORS
from depsolver.exceptions import FormatError
from depsolver.utils.version_utils import compare_versions, parse_version

if TYPE_CHECKING:
    from depsolver.models.package import Package


@dataclass(frozen=True)
class Requirement:
    """
    A parsed requirement string.

    Attributes:
        name: Package name the requirement refers to.
        operator: Comparison operator, or ``None`` for a bare name.
        version: Version operand, or ``None`` for a bare name.
    """

    name: str
    operator: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Requirement":
        """
        Parse requirement text, reusing earlier results for identical text.

        Operators are looked up by substring in the order ``>=``, ``<=``,
        ``>``, ``<``, ``=`` and the text is split on the first occurrence of
        the operator found.

        Raises:
            FormatError: Empty name, empty version, or a version that is
                not dotted integers.
        """
        return _parse_cached(text)

    def matches(self, package: "Package") -> bool:
        """
        Return whether ``package`` satisfies this requirement.

        A package with an empty version never satisfies a requirement
        that carries a version operand.
        """
        if package.name != self.name:
            return False
        if self.operator is None:
            return True
        if not package.version:
            return False

        comparison = compare_versions(package.version, self.version)
        if self.operator == ">=":
            return comparison >= 0
        if self.operator == "<=":
            return comparison <= 0
        if self.operator == ">":
            return comparison > 0
        if self.operator == "<":
            return comparison < 0
        return comparison == 0

    def __str__(self) -> str:
        if self.operator is None:
            return self.name
        return f"{self.name}{self.operator}{self.version}"


@lru_cache(maxsize=None)
def _parse_cached(text: str) -> Requirement:
    if not isinstance(text, str):
        raise FormatError(
            f"Requirement must be a string, got {type(text).__name__}",
            value=repr(text),
        )

    for operator in REQUIREMENT_OPERATORS:
        if operator in text:
            name, _, version = text.partition(operator)
            break
    else:
        if not text:
            raise FormatError("Empty requirement", value=text)
        return Requirement(name=text)

    if not name:
        raise FormatError(f"Requirement {text!r} has no package name", value=text)
    if not version:
        raise FormatError(f"Requirement {text!r} has no version", value=text)

    parse_version(version)
    return Requirement(name=name, operator=operator, version=version)
