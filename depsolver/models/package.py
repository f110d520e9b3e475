"""
Package data model for depsolver.

A :class:`Package` is one immutable catalog record. Packages are compared
and hashed by identity: the search keys configuration states on the exact
catalog objects they contain, so two records are never conflated even if
a catalog happens to list the same name and version twice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from depsolver.exceptions import FormatError
from depsolver.models.requirement import Requirement
from depsolver.utils.version_utils import parse_version


@dataclass(frozen=True, eq=False)
class Package:
    """
    A catalog package.

    Attributes:
        name: Package name.
        version: Dotted-integer version string (may be empty).
        size: Non-negative install cost.
        depends: Dependency clauses. Every clause must be satisfied; a clause
            is satisfied when any one of its requirement strings matches.
        conflicts: Requirement strings that no other installed package may
            match.
    """

    name: str
    version: str
    size: int = 0
    depends: Tuple[Tuple[str, ...], ...] = ()
    conflicts: Tuple[str, ...] = ()

    _clauses: Tuple[Tuple[Requirement, ...], ...] = field(
        init=False, repr=False, compare=False
    )
    _conflict_reqs: Tuple[Requirement, ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Freeze nested sequences and pre-parse every requirement."""
        depends = tuple(tuple(clause) for clause in self.depends)
        conflicts = tuple(self.conflicts)
        object.__setattr__(self, "depends", depends)
        object.__setattr__(self, "conflicts", conflicts)
        object.__setattr__(
            self,
            "_clauses",
            tuple(tuple(Requirement.parse(r) for r in clause) for clause in depends),
        )
        object.__setattr__(
            self, "_conflict_reqs", tuple(Requirement.parse(r) for r in conflicts)
        )

    @property
    def spec(self) -> str:
        """``name=version``, or just ``name`` when the version is empty."""
        return f"{self.name}={self.version}" if self.version else self.name

    @property
    def clauses(self) -> Tuple[Tuple[Requirement, ...], ...]:
        """Parsed dependency clauses (AND of ORs)."""
        return self._clauses

    @property
    def conflict_requirements(self) -> Tuple[Requirement, ...]:
        """Parsed conflict requirements."""
        return self._conflict_reqs

    def conflicts_with(self, other: "Package") -> bool:
        """Return True if any of this package's conflicts matches ``other``."""
        return any(req.matches(other) for req in self._conflict_reqs)

    @classmethod
    def from_dict(
        cls, record: Mapping[str, Any], *, index: Optional[int] = None
    ) -> "Package":
        """
        Build a package from a decoded catalog record.

        ``depends`` and ``conflicts`` default to empty when missing; ``name``,
        ``version`` and ``size`` are required.

        Raises:
            FormatError: Missing field, wrong type, negative size, malformed
                version or requirement string.
        """
        if not isinstance(record, Mapping):
            raise FormatError(
                f"Catalog record must be an object, got {type(record).__name__}",
                record=index,
            )

        for key in ("name", "version", "size"):
            if key not in record:
                raise FormatError(
                    f"Catalog record is missing {key!r}", record=index, field=key
                )

        name = record["name"]
        if not isinstance(name, str) or not name:
            raise FormatError(
                "Package name must be a non-empty string",
                record=index,
                field="name",
                value=repr(name),
            )

        version = record["version"]
        if not isinstance(version, str):
            raise FormatError(
                "Package version must be a string",
                record=index,
                field="version",
                value=repr(version),
            )
        if version:
            try:
                parse_version(version)
            except FormatError as exc:
                raise FormatError(
                    exc.message, record=index, field="version", value=version
                ) from exc

        size = record["size"]
        # bool is an int subclass; reject it explicitly
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise FormatError(
                "Package size must be a non-negative integer",
                record=index,
                field="size",
                value=repr(size),
            )

        depends = record.get("depends") or []
        if not isinstance(depends, list) or not all(
            isinstance(clause, list) and all(isinstance(r, str) for r in clause)
            for clause in depends
        ):
            raise FormatError(
                "depends must be an array of arrays of strings",
                record=index,
                field="depends",
            )

        conflicts = record.get("conflicts") or []
        if not isinstance(conflicts, list) or not all(
            isinstance(r, str) for r in conflicts
        ):
            raise FormatError(
                "conflicts must be an array of strings",
                record=index,
                field="conflicts",
            )

        try:
            return cls(
                name=name,
                version=version,
                size=size,
                depends=depends,
                conflicts=conflicts,
            )
        except FormatError as exc:
            raise FormatError(
                f"Package {name}: {exc.message}",
                record=index,
                value=exc.value,
            ) from exc

    def __str__(self) -> str:
        return self.spec
