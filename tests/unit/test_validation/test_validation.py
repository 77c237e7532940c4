"""
Unit tests for the exception taxonomy and input validators.
"""

import logging

import pytest

from jailcell.validation import (
    CellNotFoundError,
    ErrorSeverity,
    JailcellError,
    ParseError,
    ToolInvocationError,
    ValidationError,
    handle_cli_error,
    handle_error,
    validate_cell_id,
    validate_cell_name,
    validate_executable,
    validate_load_address,
)


@pytest.mark.unit
class TestExceptions:
    """Test cases for the exception types."""

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            ToolInvocationError("bad"),
            ParseError("bad"),
            CellNotFoundError(3),
        ],
    )
    def test_common_base(self, error):
        assert isinstance(error, JailcellError)

    def test_parse_error_message(self):
        error = ParseError("cell id is not a number", line_number=4, field_name="id", value="x")
        assert str(error) == "line 4: cell id is not a number"
        assert error.field_name == "id"

    def test_cell_not_found_is_warning(self):
        assert CellNotFoundError("vm-a").severity == ErrorSeverity.WARNING


@pytest.mark.unit
class TestHandleError:
    """Test cases for the error handling helpers."""

    def test_reraise(self, caplog):
        error = ToolInvocationError("exit status 1")
        with pytest.raises(ToolInvocationError):
            handle_error(error, "cell list")
        assert "Error in cell list: exit status 1" in caplog.text

    def test_log_only(self, caplog):
        with caplog.at_level(logging.INFO):
            handle_error(ParseError("bad"), "refresh", severity="info", reraise=False)
        assert "Error in refresh: bad" in caplog.text

    def test_cli_error_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ToolInvocationError("boom"), "list", exit_code=3)
        assert exc_info.value.code == 3


@pytest.mark.unit
class TestValidators:
    """Test cases for the input validators."""

    @pytest.mark.parametrize("name", ["RootCell", "apic-demo", "x" * 24])
    def test_valid_cell_names(self, name):
        assert validate_cell_name(name) == name

    @pytest.mark.parametrize("name", ["", "two words", "x" * 25, None])
    def test_invalid_cell_names(self, name):
        with pytest.raises(ValidationError):
            validate_cell_name(name)

    def test_cell_id(self):
        assert validate_cell_id("7") == 7
        with pytest.raises(ValidationError):
            validate_cell_id(True)
        with pytest.raises(ValidationError):
            validate_cell_id(-2)

    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0x0"), (4096, "0x1000"), ("0x1000", "0x1000"), (" 0XF0000 ", "0xf0000")],
    )
    def test_load_address(self, value, expected):
        assert validate_load_address(value) == expected

    @pytest.mark.parametrize("value", ["-0x10", "ten", ""])
    def test_invalid_load_address(self, value):
        with pytest.raises(ValidationError):
            validate_load_address(value)

    def test_executable(self, temp_dir):
        script = temp_dir / "tool"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o755)
        assert validate_executable(script) == str(script)
        with pytest.raises(ValidationError):
            validate_executable(temp_dir / "missing")
        with pytest.raises(ValidationError):
            validate_executable(temp_dir)
