"""TreeSitter parser for PHP sources."""

from __future__ import annotations

from typing import TYPE_CHECKING

import tree_sitter
import tree_sitter_php as tsphp

from src.logger import get_logger
from src.utils.exceptions import ParsingError

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)


class TreeSitterParser:
    """Base TreeSitter parser."""

    def __init__(self, language: tree_sitter.Language | None = None) -> None:
        self.language: tree_sitter.Language | None = language
        if language is not None:
            self.parser = tree_sitter.Parser(language)
        else:
            self.parser = tree_sitter.Parser()

    def parse_file(self, file_path: Path) -> tree_sitter.Tree:
        """Parse a file and return the syntax tree."""
        try:
            with file_path.open("rb") as f:
                content = f.read()
        except OSError as e:
            msg = f"Cannot read {file_path}: {e}"
            raise ParsingError(msg, file_path=str(file_path)) from e
        return self.parse_content(content)

    def parse_content(self, content: bytes) -> tree_sitter.Tree:
        """Parse content and return the syntax tree."""
        if not self.language:
            msg = "Language not set for parser"
            raise ValueError(msg)

        tree = self.parser.parse(content)
        if tree.root_node.has_error:
            # tree-sitter recovers from syntax errors; keep going with the partial tree
            logger.warning(
                "syntax_errors_in_source",
                root_type=tree.root_node.type,
                preview=content[:100].decode("utf-8", errors="ignore"),
            )
        return tree

    def get_node_text(self, node: tree_sitter.Node, content: bytes) -> str:
        """Get text content of a node."""
        return content[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    def get_node_location(self, node: tree_sitter.Node) -> tuple[int, int]:
        """Get start and end line numbers of a node."""
        return node.start_point[0] + 1, node.end_point[0] + 1

    def find_nodes_by_type(
        self,
        node: tree_sitter.Node,
        node_type: str,
        max_depth: int | None = None,
    ) -> list[tree_sitter.Node]:
        """Find all nodes of a specific type."""
        results = []

        def traverse(n: tree_sitter.Node, depth: int = 0) -> None:
            if max_depth is not None and depth > max_depth:
                return

            if n.type == node_type:
                results.append(n)

            for child in n.children:
                traverse(child, depth + 1)

        traverse(node)
        return results


class PHPParser(TreeSitterParser):
    """PHP-specific TreeSitter parser."""

    def __init__(self) -> None:
        super().__init__(tree_sitter.Language(tsphp.language_php()))
