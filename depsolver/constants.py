"""
Centralized constants for depsolver.

This module defines immutable values used across depsolver, including
search defaults, input limits, process exit codes, and logging formats.
All values are intended to be treated as read-only.
"""

from typing import Final, Tuple

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

#: Dedicated configuration file looked up in the working directory.
CONFIG_FILE_NAME: Final[str] = "depsolver.toml"

# ---------------------------------------------------------------------------
# Search defaults
# ---------------------------------------------------------------------------

#: Wall-clock budget for a single search, in milliseconds.
DEFAULT_TIME_BUDGET_MS: Final[int] = 60_000

#: Cost charged for every uninstall command, regardless of package size.
DEFAULT_UNINSTALL_PENALTY: Final[int] = 1_000_000

#: Re-check every package's dependencies instead of only the last one added.
DEFAULT_FULL_REVALIDATION: Final[bool] = False

#: Check the deadline before every expansion, not only at goal states.
DEFAULT_STRICT_DEADLINE: Final[bool] = False

#: Abandon a branch once its partial cost can no longer beat the best plan.
DEFAULT_PRUNE_BY_COST: Final[bool] = False

#: Never re-install a package already uninstalled earlier on the same path.
DEFAULT_SKIP_REINSTALL_AFTER_UNINSTALL: Final[bool] = True

#: Only uninstall a package installed earlier on the path while the plan is
#: shorter than the constraint list.
DEFAULT_GUARD_UNINSTALL_OF_INSTALLED: Final[bool] = True

#: Never consider uninstalling a package pinned by a ``+name=version``
#: constraint.
DEFAULT_PROTECT_PINNED: Final[bool] = True

#: Policy for initial-state entries that name no catalog package.
DEFAULT_ON_UNRESOLVED: Final[str] = "absent"

#: Accepted values for the unresolved-entry policy.
ON_UNRESOLVED_CHOICES: Final[Tuple[str, ...]] = ("absent", "error")

# ---------------------------------------------------------------------------
# Requirement and command grammar
# ---------------------------------------------------------------------------

#: Comparison operators, in detection order. Two-character operators must
#: come first so ``a>=1`` is never split on ``>`` or ``=``.
REQUIREMENT_OPERATORS: Final[Tuple[str, ...]] = (">=", "<=", ">", "<", "=")

#: Sign prefix of install commands and "must be present" constraints.
INSTALL_SIGN: Final[str] = "+"

#: Sign prefix of uninstall commands and "must be absent" constraints.
UNINSTALL_SIGN: Final[str] = "-"

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

#: A plan was found.
EXIT_SOLVED: Final[int] = 0

#: Malformed input, configuration problem, or unexpected failure.
EXIT_ERROR: Final[int] = 1

#: Command-line usage error (raised by Click).
EXIT_USAGE: Final[int] = 2

#: No goal state was reached (unsatisfiable, or budget expired first).
EXIT_NO_SOLUTION: Final[int] = 3

#: Interrupted by the user.
EXIT_INTERRUPTED: Final[int] = 130

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading input documents.
MAX_FILE_SIZE: Final[int] = 50 * 1024 * 1024  # 50 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
