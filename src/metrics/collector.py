"""Register declaration and method records before fact extraction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.logger import get_logger
from src.metrics.facts import DeclarationKind
from src.metrics.store import DeclarationMetric, InMemoryMetricsStore, MethodMetric
from src.parser.php_names import ORGANIZED_STRUCTURES, NameOf, name_of, node_text

if TYPE_CHECKING:
    import tree_sitter

logger = get_logger(__name__)


def iter_nodes(root: tree_sitter.Node):
    """Yield nodes in pre-order, children left to right."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def register_declarations(
    root: tree_sitter.Node,
    metrics: InMemoryMetricsStore,
    resolve_name: NameOf = name_of,
) -> list[DeclarationMetric]:
    """Create empty records for every named class, interface and trait.

    Each declaration gets one method record per ``method_declaration`` among
    its direct members. Anonymous classes have no stable name and are not
    registered.
    """
    registered = []
    for node in iter_nodes(root):
        if node.type not in ORGANIZED_STRUCTURES:
            continue
        qualified_name = resolve_name(node)
        if qualified_name is None:
            continue

        declaration = metrics.add(
            DeclarationMetric(
                qualified_name, DeclarationKind(ORGANIZED_STRUCTURES[node.type])
            )
        )
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type == "method_declaration":
                    method_name = node_text(member.child_by_field_name("name"))
                    if method_name:
                        declaration.add_method(MethodMetric(method_name))
        registered.append(declaration)

    logger.debug("declarations_registered", count=len(registered))
    return registered
