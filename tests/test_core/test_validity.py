"""Unit tests for depsolver.core.validity.

Test Coverage:
- Empty and absent-slot states
- Incremental dependency checking of the last package only
- OR clauses and AND of clauses
- Conflicts regardless of position
- Full revalidation mode
- Goal checking
"""

from __future__ import annotations

import pytest

from depsolver.core.validity import is_goal, is_valid
from depsolver.models.command import Constraint
from depsolver.models.package import Package


@pytest.mark.unit
class TestIsValid:
    """Tests for is_valid."""

    def test_empty_state_is_valid(self) -> None:
        assert is_valid(())

    def test_absent_slot_is_invalid(self) -> None:
        a = Package(name="a", version="1")

        assert not is_valid((a, None))
        assert not is_valid((None,))

    def test_unmet_dependency_of_last_package(self) -> None:
        b = Package(name="b", version="1")
        a = Package(name="a", version="1", depends=[["b"]])

        assert not is_valid((a,))
        assert is_valid((b, a))

    def test_last_after_uninstall_is_the_tail_package(self) -> None:
        """Removing the tail makes the new tail's clauses the ones checked."""
        b = Package(name="b", version="1")
        a = Package(name="a", version="1", depends=[["b"]])

        # b (the dependency) removed from the middle: a is still last
        assert not is_valid((a,))
        # a's dependency removed but a is no longer last: accepted
        c = Package(name="c", version="1")
        assert is_valid((a, c))

    def test_only_last_package_is_checked(self) -> None:
        """Earlier packages are assumed to have been checked when appended."""
        a = Package(name="a", version="1", depends=[["missing"]])
        c = Package(name="c", version="1")

        assert is_valid((a, c))

    def test_full_revalidation_checks_every_package(self) -> None:
        a = Package(name="a", version="1", depends=[["missing"]])
        c = Package(name="c", version="1")

        assert not is_valid((a, c), full_revalidation=True)

    def test_full_revalidation_accepts_any_order(self) -> None:
        b = Package(name="b", version="1")
        a = Package(name="a", version="1", depends=[["b"]])

        assert is_valid((a, b), full_revalidation=True)

    def test_or_clause(self) -> None:
        c = Package(name="c", version="2.5")
        a = Package(name="a", version="1", depends=[["b", "c>=2"]])

        assert is_valid((c, a))

    def test_and_of_clauses(self) -> None:
        b = Package(name="b", version="1")
        c = Package(name="c", version="1")
        a = Package(name="a", version="1", depends=[["b"], ["c"]])

        assert not is_valid((b, a))
        assert is_valid((b, c, a))

    def test_versioned_dependency(self) -> None:
        b1 = Package(name="b", version="1.0")
        a = Package(name="a", version="1", depends=[["b>1.0"]])

        assert not is_valid((b1, a))

    @pytest.mark.parametrize("order", ["ab", "ba", "axb", "bxa"])
    def test_conflict_anywhere_is_invalid(self, order: str) -> None:
        packages = {
            "a": Package(name="a", version="1", conflicts=["b"]),
            "b": Package(name="b", version="1"),
            "x": Package(name="x", version="1"),
        }

        assert not is_valid(tuple(packages[ch] for ch in order))

    def test_self_conflict_is_ignored(self) -> None:
        """A package never conflicts with itself."""
        a = Package(name="a", version="1", conflicts=["a"])

        assert is_valid((a,))

    def test_conflict_with_other_version_of_same_name(self) -> None:
        a1 = Package(name="a", version="1", conflicts=["a"])
        a2 = Package(name="a", version="2")

        assert not is_valid((a1, a2))


@pytest.mark.unit
class TestIsGoal:
    """Tests for is_goal."""

    def test_install_and_absent_constraints(self) -> None:
        a1 = Package(name="a", version="1.0")
        a2 = Package(name="a", version="2.0")
        b = Package(name="b", version="1.0")
        constraints = [Constraint.parse("+a=1.0"), Constraint.parse("-b")]

        assert is_goal((a1,), constraints)
        assert not is_goal((a1, b), constraints)
        assert not is_goal((a2,), constraints)
        assert not is_goal((), constraints)

    def test_no_constraints_is_always_goal(self) -> None:
        assert is_goal((), [])

    def test_contradictory_constraints(self) -> None:
        a = Package(name="a", version="1.0")
        constraints = [Constraint.parse("+a"), Constraint.parse("-a")]

        assert not is_goal((), constraints)
        assert not is_goal((a,), constraints)
