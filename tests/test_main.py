from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from depsolver.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    """Tests for the ``python -m depsolver`` entry point."""

    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 3, 130],
        ids=["solved", "error", "no-solution", "interrupted"],
    )
    def test_returns_cli_exit_code(self, exit_code: int) -> None:
        fake_cli = MagicMock()
        fake_cli.main = MagicMock(return_value=exit_code)

        with patch.dict(sys.modules, {"depsolver.cli": fake_cli}):
            assert main() == exit_code

        fake_cli.main.assert_called_once_with()

    def test_import_failure_returns_error(self, capsys: pytest.CaptureFixture) -> None:
        """A broken installation is reported on stderr with exit status 1."""
        # A None entry in sys.modules makes the import raise ImportError
        with patch.dict(sys.modules, {"depsolver.cli": None}):
            result = main()

        assert result == 1
        captured = capsys.readouterr()
        assert "could not be started" in captured.err
        assert "ImportError:" in captured.err
        assert captured.out == ""


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error."""

    def test_writes_python_version_and_error(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        _print_startup_error(ImportError("No module named 'rich'"))

        captured = capsys.readouterr()
        assert f"Python version : {sys.version}" in captured.err
        assert "ImportError: No module named 'rich'" in captured.err
        assert captured.out == ""
