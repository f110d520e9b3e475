"""Solver settings read from TOML.

Settings live either in a dedicated ``depsolver.toml`` under a
``[depsolver]`` table, or in the project's ``pyproject.toml`` under
``[tool.depsolver]``. The file is chosen as follows:

1. the path given with ``--config`` / ``DEPSOLVER_CONFIG`` (must exist);
2. ``depsolver.toml`` in the working directory;
3. ``pyproject.toml`` in the working directory, if it has the table.

Values from the file override the built-in defaults, and options given
on the command line override both.

Example (``depsolver.toml``)::

    [depsolver]
    time_budget_ms = 10000
    strict_deadline = true
    on_unresolved = "error"
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple
from dataclasses import dataclass, field, fields

from depsolver.exceptions import ConfigError
from depsolver.utils.logger import get_logger
from depsolver.core.search import SearchOptions
from depsolver.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_FULL_REVALIDATION,
    DEFAULT_GUARD_UNINSTALL_OF_INSTALLED,
    DEFAULT_ON_UNRESOLVED,
    DEFAULT_PROTECT_PINNED,
    DEFAULT_PRUNE_BY_COST,
    DEFAULT_SKIP_REINSTALL_AFTER_UNINSTALL,
    DEFAULT_STRICT_DEADLINE,
    DEFAULT_TIME_BUDGET_MS,
    DEFAULT_UNINSTALL_PENALTY,
    ON_UNRESOLVED_CHOICES,
)

logger = get_logger("config")

_BOOL_OPTIONS = (
    "full_revalidation",
    "strict_deadline",
    "prune_by_cost",
    "skip_reinstall_after_uninstall",
    "guard_uninstall_of_installed",
    "protect_pinned",
)

# option name -> smallest accepted value
_INT_OPTIONS = {
    "time_budget_ms": 1,
    "uninstall_penalty": 0,
}

# key path of the settings table inside each kind of file
_TABLE_DEPSOLVER = ("depsolver",)
_TABLE_PYPROJECT = ("tool", "depsolver")


@dataclass
class DepSolverConfig:
    """Solver settings after validation.

    Every field has a default, so a missing or empty table is fine.

    Attributes:
        time_budget_ms: Wall-clock search budget in milliseconds.
        uninstall_penalty: Cost charged per uninstall command.
        full_revalidation: Re-check every package's dependencies per state.
        strict_deadline: Check the budget before every expansion.
        prune_by_cost: Abandon branches that can no longer beat the best.
        skip_reinstall_after_uninstall: Pruning heuristic, see
            :class:`~depsolver.core.search.SearchOptions`.
        guard_uninstall_of_installed: Pruning heuristic.
        protect_pinned: Pruning heuristic.
        on_unresolved: ``"absent"`` or ``"error"`` for initial-state
            entries missing from the catalog.
        source_path: File the settings came from; ``None`` for defaults.
    """

    time_budget_ms: int = DEFAULT_TIME_BUDGET_MS
    uninstall_penalty: int = DEFAULT_UNINSTALL_PENALTY
    full_revalidation: bool = DEFAULT_FULL_REVALIDATION
    strict_deadline: bool = DEFAULT_STRICT_DEADLINE
    prune_by_cost: bool = DEFAULT_PRUNE_BY_COST
    skip_reinstall_after_uninstall: bool = DEFAULT_SKIP_REINSTALL_AFTER_UNINSTALL
    guard_uninstall_of_installed: bool = DEFAULT_GUARD_UNINSTALL_OF_INSTALLED
    protect_pinned: bool = DEFAULT_PROTECT_PINNED
    on_unresolved: str = DEFAULT_ON_UNRESOLVED

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return the option values without ``source_path``."""
        return {
            f.name: getattr(self, f.name) for f in fields(self) if f.name != "source_path"
        }

    def to_search_options(self, **overrides: Any) -> SearchOptions:
        """Build :class:`SearchOptions`, letting non-``None`` overrides win.

        Args:
            **overrides: Option values from the command line; ``None``
                means "not given".
        """
        values = {
            name: getattr(self, name)
            for name in (*_INT_OPTIONS, *_BOOL_OPTIONS)
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SearchOptions(**values)


def _table_path_for(path: Path) -> Tuple[str, ...]:
    return _TABLE_PYPROJECT if path.name == "pyproject.toml" else _TABLE_DEPSOLVER


def _lookup(raw: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[Dict[str, Any]]:
    """Follow ``keys`` through nested tables; ``None`` if any is missing."""
    node: Any = raw
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def _auto_candidates(directory: Path) -> Iterator[Path]:
    yield directory / CONFIG_FILE_NAME
    pyproject = directory / "pyproject.toml"
    if pyproject.is_file():
        # Only a pyproject.toml that actually configures depsolver counts;
        # a broken one is left for other tools to complain about.
        try:
            raw = _read_toml(pyproject)
        except ConfigError:
            return
        if _lookup(raw, _TABLE_PYPROJECT) is not None:
            yield pyproject


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Locate the settings file, following the order in the module docs.

    Args:
        explicit_path: Path given by the user; it must name a file.

    Returns:
        The chosen file, or ``None`` when defaults apply.

    Raises:
        ConfigError: ``explicit_path`` does not name a file.
    """
    if explicit_path is not None:
        if not explicit_path.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        return explicit_path.resolve()

    for candidate in _auto_candidates(Path.cwd()):
        if candidate.is_file():
            logger.debug("Discovered configuration file %s", candidate)
            return candidate

    return None


def load_config(config_path: Optional[Path] = None) -> DepSolverConfig:
    """Discover, read and validate the solver settings.

    Args:
        config_path: Explicit settings file; auto-discovered when ``None``.

    Raises:
        ConfigError: The file is unreadable, not TOML, or holds unknown
            keys or invalid values.
    """
    path = discover_config_file(config_path)
    if path is None:
        logger.debug("No configuration file, using built-in defaults")
        return DepSolverConfig()

    logger.info("Reading configuration from %s", path)
    table = _lookup(_read_toml(path), _table_path_for(path))

    if table is None:
        logger.debug("%s has no depsolver table, using built-in defaults", path.name)
        config = DepSolverConfig()
    elif not isinstance(table, dict):
        raise ConfigError(
            "The depsolver settings must be a TOML table",
            config_path=str(path),
        )
    else:
        config = _parse_section(table, config_path=str(path))

    config.source_path = path
    logger.debug("Effective configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Parse ``path`` as TOML, wrapping failures in :class:`ConfigError`."""
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"{path.name} is not valid TOML: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> DepSolverConfig:
    """Validate a ``[depsolver]`` / ``[tool.depsolver]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types, or out-of-range values.
    """
    def invalid(option: str, message: str) -> ConfigError:
        return ConfigError(message, config_path=config_path, option=option)

    unknown = set(section) - {*_BOOL_OPTIONS, *_INT_OPTIONS, "on_unresolved"}
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = DepSolverConfig()

    for name in _BOOL_OPTIONS:
        if name in section:
            val = section[name]
            if not isinstance(val, bool):
                raise invalid(name, f"{name} must be true or false, got {val!r}")
            setattr(config, name, val)

    for name, minimum in _INT_OPTIONS.items():
        if name in section:
            val = section[name]
            # bool is an int subclass; reject it explicitly
            if isinstance(val, bool) or not isinstance(val, int):
                raise invalid(name, f"{name} must be an integer, got {val!r}")
            if val < minimum:
                raise invalid(name, f"{name} must be at least {minimum}, got {val}")
            setattr(config, name, val)

    if "on_unresolved" in section:
        val = section["on_unresolved"]
        if val not in ON_UNRESOLVED_CHOICES:
            raise invalid(
                "on_unresolved",
                f"on_unresolved must be one of {', '.join(ON_UNRESOLVED_CHOICES)}, "
                f"got {val!r}",
            )
        config.on_unresolved = val

    return config
