"""Input document loading for depsolver.

A problem is described by three JSON documents:

- the **repository**: an array of package records
  (``name``, ``version``, ``size``, ``depends``, ``conflicts``);
- the **initial state**: an array of ``name`` / ``name=version`` strings;
- the **constraints**: an array of ``+requirement`` / ``-requirement``
  strings.

Every malformed document is reported as a
:class:`~depsolver.exceptions.FormatError` carrying the file path.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple, TypeVar

from depsolver.constants import DEFAULT_ON_UNRESOLVED
from depsolver.core.catalog import Catalog
from depsolver.core.state import State
from depsolver.exceptions import FormatError
from depsolver.models.command import Constraint
from depsolver.utils.filesystem import PathLike, safe_read_file
from depsolver.utils.logger import get_logger

logger = get_logger("loader")

T = TypeVar("T")


@dataclass(frozen=True)
class Problem:
    """A fully parsed planning problem."""

    catalog: Catalog
    initial_state: State
    constraints: Tuple[Constraint, ...]


def _read_json_array(path: PathLike, what: str) -> List[Any]:
    """Read ``path`` and return its top-level JSON array."""
    text = safe_read_file(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(
            f"Invalid JSON in {what} file: {exc.msg} at line {exc.lineno}",
            file_path=str(path),
        ) from exc

    if not isinstance(data, list):
        raise FormatError(
            f"The {what} document must be a JSON array, got {type(data).__name__}",
            file_path=str(path),
        )
    return data


def _in_file(path: PathLike, parse: Callable[[], T]) -> T:
    """Run ``parse`` and attach ``path`` to any :class:`FormatError` it raises."""
    try:
        return parse()
    except FormatError as exc:
        if exc.file_path is not None:
            raise
        raise FormatError(
            exc.message,
            file_path=str(path),
            record=exc.record,
            field=exc.field,
            value=exc.value,
        ) from exc


def load_catalog(path: PathLike) -> Catalog:
    """Load the repository document into a :class:`Catalog`."""
    records = _read_json_array(path, "repository")
    catalog = _in_file(path, lambda: Catalog.from_records(records))
    logger.info("Loaded %d package(s) from %s", len(catalog), path)
    return catalog


def load_initial_entries(path: PathLike) -> List[str]:
    """Load the initial-state document as raw entries."""
    entries = _read_json_array(path, "initial state")
    for index, entry in enumerate(entries):
        if not isinstance(entry, str):
            raise FormatError(
                "Initial state entries must be strings",
                file_path=str(path),
                record=index,
                value=repr(entry),
            )
    return entries


def load_constraints(path: PathLike) -> Tuple[Constraint, ...]:
    """Load the constraints document."""
    entries = _read_json_array(path, "constraints")
    constraints = []
    for index, entry in enumerate(entries):
        try:
            constraints.append(Constraint.parse(entry))
        except FormatError as exc:
            raise FormatError(
                exc.message, file_path=str(path), record=index, value=exc.value
            ) from exc
    logger.info("Loaded %d constraint(s) from %s", len(constraints), path)
    return tuple(constraints)


def load_problem(
    repository: PathLike,
    initial: PathLike,
    constraints: PathLike,
    *,
    on_unresolved: str = DEFAULT_ON_UNRESOLVED,
) -> Problem:
    """Load and cross-resolve all three documents.

    Raises:
        FileOperationError: A file cannot be read.
        FormatError: A document is malformed.
        ResolutionError: An initial entry is unresolved and
            ``on_unresolved`` is ``"error"``.
    """
    catalog = load_catalog(repository)
    entries = load_initial_entries(initial)
    state = _in_file(
        initial,
        lambda: catalog.resolve_state(entries, on_unresolved=on_unresolved),
    )
    return Problem(
        catalog=catalog,
        initial_state=state,
        constraints=load_constraints(constraints),
    )


def dump_plan(commands: List[str]) -> str:
    """Serialize a plan as a pretty-printed JSON array."""
    return json.dumps(commands, indent=2)


__all__ = [
    "Problem",
    "load_catalog",
    "load_initial_entries",
    "load_constraints",
    "load_problem",
    "dump_plan",
]
