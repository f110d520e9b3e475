"""
Utility helpers for depsolver.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers
- Version comparison helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from depsolver.utils.filesystem import safe_read_file, safe_write_file

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from depsolver.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from depsolver.utils.console import (
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from depsolver.utils.version_utils import compare_versions, parse_version

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    "level_for_verbosity",
    # Filesystem
    "safe_read_file",
    "safe_write_file",
    # Version utilities
    "compare_versions",
    "parse_version",
]
