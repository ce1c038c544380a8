"""Custom exceptions for the PHP metrics extractor."""

from typing import Any, Dict, Optional


class MetricsError(Exception):
    """Base exception for metrics extraction errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(MetricsError):
    """Configuration related errors."""
    pass


class ParsingError(MetricsError):
    """Code parsing errors."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
        language: Optional[str] = None,
    ):
        super().__init__(message)
        if file_path:
            self.details["file_path"] = file_path
        if line_number:
            self.details["line_number"] = line_number
        if language:
            self.details["language"] = language


class NotFoundError(MetricsError):
    """Resource not found errors."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ):
        super().__init__(message)
        if resource_type:
            self.details["resource_type"] = resource_type
        if resource_id:
            self.details["resource_id"] = resource_id
