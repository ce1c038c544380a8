"""Shared pytest fixtures and configuration."""

from collections.abc import Callable

import pytest

from src.analysis.pipeline import analyze_source
from src.metrics.store import InMemoryMetricsStore
from src.parser.treesitter_parser import PHPParser


@pytest.fixture(scope="session")
def php_parser() -> PHPParser:
    """Create PHP parser fixture."""
    return PHPParser()


@pytest.fixture
def analyze_php(php_parser: PHPParser) -> Callable[[str], InMemoryMetricsStore]:
    """Parse, register and analyze a PHP snippet."""

    def _analyze(code: str) -> InMemoryMetricsStore:
        return analyze_source(code, parser=php_parser)

    return _analyze
