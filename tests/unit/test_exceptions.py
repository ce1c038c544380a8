"""Tests for custom exceptions."""

from src.utils.exceptions import (
    ConfigurationError,
    MetricsError,
    NotFoundError,
    ParsingError,
)


class TestMetricsError:
    """Test base exception."""

    def test_defaults(self) -> None:
        error = MetricsError("Something failed")
        assert str(error) == "Something failed"
        assert error.message == "Something failed"
        assert error.code == "MetricsError"
        assert error.details == {}

    def test_custom_code_and_details(self) -> None:
        error = MetricsError("Bad", code="E1", details={"key": "value"})
        assert error.code == "E1"
        assert error.details == {"key": "value"}

    def test_subclass_code(self) -> None:
        error = ConfigurationError("Missing setting")
        assert isinstance(error, MetricsError)
        assert error.code == "ConfigurationError"


class TestParsingError:
    """Test ParsingError."""

    def test_details(self) -> None:
        error = ParsingError(
            "Cannot parse", file_path="src/User.php", line_number=12, language="php"
        )
        assert error.details == {
            "file_path": "src/User.php",
            "line_number": 12,
            "language": "php",
        }

    def test_without_details(self) -> None:
        assert ParsingError("Cannot parse").details == {}


class TestNotFoundError:
    """Test NotFoundError."""

    def test_details(self) -> None:
        error = NotFoundError(
            "Missing", resource_type="declaration", resource_id="App\\User"
        )
        assert error.details["resource_type"] == "declaration"
        assert error.details["resource_id"] == "App\\User"
