"""Configuration models for the PHP metrics extractor."""

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field, ValidationError

from src.config import settings
from src.utils.exceptions import ConfigurationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field("text", pattern="^(json|text)$")
    file_enabled: bool = Field(False, description="Enable file logging")
    file_path: Path = Field(Path("logs/phpmetrics.log"), description="Log file path")
    file_rotation: str = Field("daily", description="Log rotation schedule")
    file_retention_days: int = Field(7, ge=1, description="Log retention in days")
    console_colorized: bool = Field(False, description="Colorize console output")


class AnalysisConfig(BaseModel):
    """Fact extraction configuration."""

    render_bodies: bool = Field(
        True, description="Store the rendered source of each analyzed method"
    )
    max_body_length: int = Field(
        0, ge=0, description="Truncate rendered bodies to this many characters (0 = no limit)"
    )


def _build(model: type[ModelT], section: str) -> ModelT:
    values = dict(settings.get(section) or {})
    try:
        return model(**values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid [{section}] settings",
            details={"section": section, "errors": e.errors(include_url=False)},
        ) from e


def get_logging_config() -> LoggingConfig:
    """Build the logging configuration from settings."""
    return _build(LoggingConfig, "logging")


def get_analysis_config() -> AnalysisConfig:
    """Build the analysis configuration from settings."""
    return _build(AnalysisConfig, "analysis")
