"""
Custom exception hierarchy for depsolver.

This module defines structured exception types used across depsolver.
All exceptions inherit from :class:`DepSolverError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

An unsatisfiable instance or an expired time budget is *not* an error;
those are reported through :class:`~depsolver.core.search.SearchResult`.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class DepSolverError(Exception):
    """Base exception for all depsolver errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class FormatError(DepSolverError):
    """Raised when an input document or value is malformed.

    Covers invalid JSON, missing or ill-typed catalog fields, malformed
    requirement and command strings, and non-integer version components.

    Args:
        message: Error description.
        file_path: File the value was read from.
        record: Index of the offending record within its array.
        field: Name of the offending field.
        value: Raw offending value, truncated for safety.
    """

    __slots__ = ("file_path", "record", "field", "value")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        record: Optional[int] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", file_path)
        _add_if(details, "record", record)
        _add_if(details, "field", field)

        if value is not None:
            details["value"] = _truncate(value)

        super().__init__(message, details)

        self.file_path = file_path
        self.record = record
        self.field = field
        self.value = value


class ResolutionError(DepSolverError):
    """Raised when an initial-state entry names no catalog package.

    Only raised when unresolved entries are configured to be fatal;
    otherwise they become absent slots in the initial state.

    Args:
        message: Error description.
        entry: The unresolved initial-state entry.
    """

    __slots__ = ("entry",)

    def __init__(self, message: str, *, entry: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "entry", entry)

        super().__init__(message, details)

        self.entry = entry


class FileOperationError(DepSolverError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(DepSolverError):
    """Raised when a configuration file is missing, unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
