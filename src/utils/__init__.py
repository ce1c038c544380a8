"""Utility modules for the PHP metrics extractor."""

from src.utils.exceptions import (
    ConfigurationError,
    MetricsError,
    NotFoundError,
    ParsingError,
)

__all__ = [
    "ConfigurationError",
    "MetricsError",
    "NotFoundError",
    "ParsingError",
]
