"""Unit tests for depsolver.core.cost."""

from __future__ import annotations

import pytest

from depsolver.core.cost import command_cost, plan_cost
from depsolver.models.command import Command
from depsolver.models.package import Package


@pytest.mark.unit
class TestPlanCost:
    """Tests for plan_cost and command_cost."""

    def test_install_costs_size(self) -> None:
        pkg = Package(name="a", version="1", size=42)

        assert command_cost(Command(True, pkg)) == 42

    def test_uninstall_costs_penalty_regardless_of_size(self) -> None:
        small = Package(name="a", version="1", size=1)
        large = Package(name="b", version="1", size=10_000)

        assert command_cost(Command(False, small)) == 1_000_000
        assert command_cost(Command(False, large)) == 1_000_000

    def test_install_plus_uninstall(self) -> None:
        a = Package(name="a", version="1", size=50)
        b = Package(name="b", version="1", size=7)

        assert plan_cost([Command(True, a), Command(False, b)]) == 1_000_050

    def test_installs_only(self) -> None:
        packages = [
            Package(name=n, version="1", size=s)
            for n, s in (("a", 10), ("b", 20), ("c", 30))
        ]

        assert plan_cost(Command(True, p) for p in packages) == 60

    def test_empty_plan(self) -> None:
        assert plan_cost([]) == 0

    def test_custom_penalty(self) -> None:
        a = Package(name="a", version="1", size=3)

        assert plan_cost([Command(False, a)], uninstall_penalty=7) == 7
