"""Parse, register and analyze PHP sources in one call."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.analysis.traversal import Render, analyze, render_source
from src.logger import get_logger
from src.metrics.collector import register_declarations
from src.metrics.store import InMemoryMetricsStore
from src.parser.php_names import NameOf, name_of
from src.parser.treesitter_parser import PHPParser

if TYPE_CHECKING:
    from pathlib import Path

    from src.models import AnalysisConfig

logger = get_logger(__name__)


def analyze_source(
    content: bytes | str,
    metrics: InMemoryMetricsStore | None = None,
    *,
    parser: PHPParser | None = None,
    resolve_name: NameOf = name_of,
    render: Render = render_source,
    config: AnalysisConfig | None = None,
) -> InMemoryMetricsStore:
    """Extract the facts of one PHP source into a metrics store.

    Declarations and methods found in the source are registered first, so
    the returned store holds a record for each of them.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    if metrics is None:
        metrics = InMemoryMetricsStore()
    parser = parser or PHPParser()

    tree = parser.parse_content(content)
    register_declarations(tree.root_node, metrics, resolve_name)
    analyze(tree, metrics, resolve_name, render, config)
    return metrics


def analyze_file(
    file_path: Path,
    metrics: InMemoryMetricsStore | None = None,
    *,
    parser: PHPParser | None = None,
    resolve_name: NameOf = name_of,
    render: Render = render_source,
    config: AnalysisConfig | None = None,
) -> InMemoryMetricsStore:
    """Extract the facts of one PHP file into a metrics store."""
    parser = parser or PHPParser()
    if metrics is None:
        metrics = InMemoryMetricsStore()

    tree = parser.parse_file(file_path)
    register_declarations(tree.root_node, metrics, resolve_name)
    traversal = analyze(tree, metrics, resolve_name, render, config)
    logger.info(
        "file_analyzed",
        file_path=str(file_path),
        declarations=traversal.declarations_analyzed,
        methods=traversal.methods_analyzed,
    )
    return metrics
