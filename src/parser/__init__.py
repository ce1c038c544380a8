"""PHP parsing module using TreeSitter."""

from src.parser.php_names import is_organized_structure, name_of, node_text
from src.parser.treesitter_parser import PHPParser, TreeSitterParser

__all__ = [
    "PHPParser",
    "TreeSitterParser",
    "is_organized_structure",
    "name_of",
    "node_text",
]
