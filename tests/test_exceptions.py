from __future__ import annotations

import pytest

from depsolver.exceptions import (
    ConfigError,
    DepSolverError,
    FileOperationError,
    FormatError,
    ResolutionError,
)


@pytest.mark.unit
class TestDepSolverError:
    """Tests for the base exception."""

    def test_message_only(self) -> None:
        exc = DepSolverError("boom")

        assert str(exc) == "boom"
        assert exc.details == {}

    def test_details_are_rendered(self) -> None:
        exc = DepSolverError("boom", {"a": 1, "b": "x"})

        assert str(exc) == "boom (a=1, b=x)"

    def test_details_are_copied(self) -> None:
        source = {"a": 1}
        exc = DepSolverError("boom", source)
        exc.details["b"] = 2

        assert source == {"a": 1}

    def test_repr(self) -> None:
        assert repr(DepSolverError("boom")) == "DepSolverError(message='boom', details={})"

    @pytest.mark.parametrize(
        "exc_type",
        [FormatError, ResolutionError, FileOperationError, ConfigError],
    )
    def test_hierarchy(self, exc_type: type) -> None:
        assert issubclass(exc_type, DepSolverError)


@pytest.mark.unit
class TestFormatError:
    """Tests for FormatError."""

    def test_only_given_fields_appear(self) -> None:
        exc = FormatError("Missing field", record=2, field="name")

        assert exc.details == {"record": 2, "field": "name"}
        assert exc.file_path is None
        assert str(exc) == "Missing field (record=2, field=name)"

    def test_file_path_comes_first(self) -> None:
        exc = FormatError("Bad", file_path="repo.json", record=0)

        assert str(exc) == "Bad (file=repo.json, record=0)"

    def test_long_value_is_truncated_in_details(self) -> None:
        value = "x" * 500
        exc = FormatError("Bad", value=value)

        assert exc.details["value"] == "x" * 200 + "..."
        assert exc.value == value


@pytest.mark.unit
class TestOtherErrors:
    """Tests for the remaining exception types."""

    def test_resolution_error(self) -> None:
        exc = ResolutionError("Unknown package", entry="zzz=1")

        assert exc.entry == "zzz=1"
        assert str(exc) == "Unknown package (entry=zzz=1)"

    def test_file_operation_error(self) -> None:
        cause = PermissionError("denied")
        exc = FileOperationError(
            "Cannot read", file_path="/x", operation="read", original_error=cause
        )

        assert exc.original_error is cause
        assert exc.details == {
            "path": "/x",
            "operation": "read",
            "original_error": "denied",
        }

    def test_config_error(self) -> None:
        exc = ConfigError("Bad value", config_path="depsolver.toml", option="x")

        assert exc.option == "x"
        assert str(exc) == "Bad value (path=depsolver.toml, option=x)"
