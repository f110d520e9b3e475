"""Unit tests for depsolver.models.requirement.

Test Coverage:
- Operator detection order (two-character operators first)
- Bare-name requirements
- Matching semantics for every operator
- Malformed requirement text
"""

from __future__ import annotations

import pytest

from depsolver.exceptions import FormatError
from depsolver.models.package import Package
from depsolver.models.requirement import Requirement


def _pkg(name: str, version: str) -> Package:
    return Package(name=name, version=version, size=1)


@pytest.mark.unit
class TestRequirementParse:
    """Tests for Requirement.parse."""

    def test_bare_name(self) -> None:
        req = Requirement.parse("requests")

        assert req.name == "requests"
        assert req.operator is None
        assert req.version is None

    @pytest.mark.parametrize(
        "text, operator, version",
        [
            ("a>=1.0", ">=", "1.0"),
            ("a<=1.0", "<=", "1.0"),
            ("a>1.0", ">", "1.0"),
            ("a<1.0", "<", "1.0"),
            ("a=1.0", "=", "1.0"),
        ],
    )
    def test_operators(self, text: str, operator: str, version: str) -> None:
        req = Requirement.parse(text)

        assert req.name == "a"
        assert req.operator == operator
        assert req.version == version

    def test_two_char_operator_not_split_on_equals(self) -> None:
        """``a>=1.0`` must not become name ``a>`` with operator ``=``."""
        req = Requirement.parse("a>=1.0")

        assert req.name == "a"
        assert req.operator == ">="

    def test_parse_is_cached(self) -> None:
        assert Requirement.parse("cached>=2") is Requirement.parse("cached>=2")

    @pytest.mark.parametrize("text", ["", ">=1.0", "a=", "a<", "a>=x"])
    def test_malformed_raises(self, text: str) -> None:
        with pytest.raises(FormatError):
            Requirement.parse(text)

    def test_str_round_trips_text(self) -> None:
        assert str(Requirement.parse("a<=2.1")) == "a<=2.1"
        assert str(Requirement.parse("a")) == "a"


@pytest.mark.unit
class TestRequirementMatches:
    """Tests for Requirement.matches."""

    def test_bare_name_matches_any_version(self) -> None:
        req = Requirement.parse("a")

        assert req.matches(_pkg("a", "0.1"))
        assert req.matches(_pkg("a", "99"))
        assert not req.matches(_pkg("b", "1"))

    def test_greater_or_equal(self) -> None:
        req = Requirement.parse("a>=1.0")

        assert req.matches(_pkg("a", "1.0"))
        assert req.matches(_pkg("a", "2.0"))
        assert not req.matches(_pkg("a", "0.9"))

    def test_less_or_equal(self) -> None:
        req = Requirement.parse("a<=1.0")

        assert req.matches(_pkg("a", "1.0"))
        assert req.matches(_pkg("a", "0.9"))
        assert not req.matches(_pkg("a", "1.0.1"))

    def test_strictly_greater(self) -> None:
        req = Requirement.parse("a>1.0")

        assert req.matches(_pkg("a", "1.0.0"))
        assert not req.matches(_pkg("a", "1.0"))

    def test_strictly_less(self) -> None:
        req = Requirement.parse("a<1.0")

        assert req.matches(_pkg("a", "0.9.9"))
        assert not req.matches(_pkg("a", "1.0"))

    def test_equal_is_numeric(self) -> None:
        req = Requirement.parse("a=1.0")

        assert req.matches(_pkg("a", "1.0"))
        assert not req.matches(_pkg("a", "1.0.0"))

    def test_name_mismatch_never_matches(self) -> None:
        assert not Requirement.parse("a>=1").matches(_pkg("b", "2"))

    def test_unversioned_package_fails_versioned_requirement(self) -> None:
        pkg = Package(name="a", version="", size=1)

        assert Requirement.parse("a").matches(pkg)
        assert not Requirement.parse("a>=1").matches(pkg)
