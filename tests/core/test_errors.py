"""Tests for error types and codes."""

import pytest

from stylecomplete.core.errors import (
    ConfigError,
    ErrorCode,
    StyleCompleteError,
    SymbolReadError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.SYMBOL_READ_FAILED, 3000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestStyleCompleteError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = StyleCompleteError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = StyleCompleteError(code=ErrorCode.SYMBOL_READ_FAILED, message="Something broke")

        assert str(error) == "[3001] SYMBOL_READ_FAILED: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        with pytest.raises(StyleCompleteError) as exc_info:
            raise ConfigError.file_not_found("/missing.yaml")

        assert exc_info.value.error_name == "CONFIG_FILE_NOT_FOUND"


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            ("parse_error", {"path": "/foo", "reason": "bad yaml"}, ErrorCode.CONFIG_PARSE_ERROR),
            (
                "invalid_value",
                {"field": "completion.lookback_lines", "value": 0, "reason": "too small"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
            ("file_not_found", {"path": "/missing"}, ErrorCode.CONFIG_FILE_NOT_FOUND),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        error = getattr(ConfigError, factory)(**kwargs)

        assert error.code == expected_code

    def test_given_invalid_value_when_created_then_value_stringified(self) -> None:
        error = ConfigError.invalid_value("completion.lookback_lines", 0, "too small")

        assert error.details == {
            "field": "completion.lookback_lines",
            "value": "0",
            "reason": "too small",
        }


class TestSymbolReadError:
    """SymbolReadError tests."""

    def test_given_read_failure_when_created_then_retryable_with_path(self) -> None:
        """Read failures are retryable: the next change event may succeed."""
        error = SymbolReadError.read_failed("/app/a.css", "Permission denied")

        assert error.code == ErrorCode.SYMBOL_READ_FAILED
        assert error.retryable is True
        assert error.details == {"path": "/app/a.css", "reason": "Permission denied"}
        assert "/app/a.css" in error.message
