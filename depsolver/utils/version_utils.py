"""
Version comparison utilities for depsolver.

Catalog versions are dotted sequences of non-negative integers. They are
compared component-wise from the left; when one version is a prefix of the
other the shorter one sorts first, so ``1.2 < 1.2.0 < 1.2.1``. Trailing
zeros are significant and are never normalized away.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Tuple

from depsolver.exceptions import FormatError

_COMPONENT_RE = re.compile(r"[0-9]+")


@lru_cache(maxsize=4096)
def parse_version(version: str) -> Tuple[int, ...]:
    """Split a dotted version string into its integer components.

    Args:
        version: Version text such as ``"1.10.2"``.

    Returns:
        Tuple of integer components.

    Raises:
        FormatError: A component is empty or not made of ASCII digits.

    Examples:
        >>> parse_version("1.10.2")
        (1, 10, 2)
    """
    components = []
    for part in version.split("."):
        if not _COMPONENT_RE.fullmatch(part):
            raise FormatError(
                f"Invalid version component {part!r} in {version!r}",
                field="version",
                value=version,
            )
        components.append(int(part))
    return tuple(components)


def compare_versions(left: str, right: str) -> int:
    """Order two dotted-integer versions.

    Returns:
        ``-1`` if ``left`` sorts before ``right``, ``1`` if after, ``0`` if
        both have identical components.

    Examples:
        >>> compare_versions("1.2", "1.2.0")
        -1
        >>> compare_versions("2", "1.9")
        1
    """
    lhs = parse_version(left)
    rhs = parse_version(right)
    # Tuple ordering already puts a strict prefix first
    return (lhs > rhs) - (lhs < rhs)
