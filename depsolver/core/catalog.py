"""Read-only package catalog for depsolver."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional, Sequence

from depsolver.constants import DEFAULT_ON_UNRESOLVED
from depsolver.exceptions import ResolutionError
from depsolver.models.command import parse_state_entry
from depsolver.models.package import Package
from depsolver.core.state import State
from depsolver.utils.logger import get_logger

logger = get_logger("catalog")


class Catalog:
    """Immutable, ordered collection of every known package.

    Catalog order is significant: the search tries packages in this order,
    and name-only lookups return the first match.

    Args:
        packages: Packages in catalog order.
    """

    __slots__ = ("_packages",)

    def __init__(self, packages: Iterable[Package]) -> None:
        self._packages = tuple(packages)

    @classmethod
    def from_records(cls, records: Sequence[Any]) -> "Catalog":
        """Build a catalog from decoded JSON records.

        Raises:
            FormatError: Any record is malformed.
        """
        return cls(Package.from_dict(record, index=i) for i, record in enumerate(records))

    @property
    def packages(self) -> tuple:
        return self._packages

    def find(self, name: str, version: Optional[str] = None) -> Optional[Package]:
        """Return the first package named ``name`` (and ``version`` if given)."""
        for package in self._packages:
            if package.name == name and (version is None or package.version == version):
                return package
        return None

    def resolve_state(
        self,
        entries: Iterable[str],
        *,
        on_unresolved: str = DEFAULT_ON_UNRESOLVED,
    ) -> State:
        """Resolve initial-state entries into a configuration state.

        ``name`` picks the first package with that name, ``name=version``
        the exact record. An entry matching nothing becomes an absent slot
        (``None``), which no later validity check accepts, unless
        ``on_unresolved`` is ``"error"``.

        Raises:
            FormatError: An entry is not a string or has no name.
            ResolutionError: An entry is unresolved and ``on_unresolved``
                is ``"error"``.
        """
        resolved: List[Optional[Package]] = []
        for entry in entries:
            name, version = parse_state_entry(entry)
            package = self.find(name, version)
            if package is None:
                if on_unresolved == "error":
                    raise ResolutionError(
                        f"Initial state entry {entry!r} is not in the catalog",
                        entry=entry,
                    )
                logger.warning("Initial state entry %r is not in the catalog", entry)
            resolved.append(package)
        return tuple(resolved)

    def __iter__(self) -> Iterator[Package]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __getitem__(self, index: int) -> Package:
        return self._packages[index]

    def __repr__(self) -> str:
        return f"Catalog(packages={len(self._packages)})"
