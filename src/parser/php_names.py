"""Name resolution helpers for PHP syntax nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import tree_sitter

# Named, member-bearing type definitions
ORGANIZED_STRUCTURES = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "trait_declaration": "trait",
}

# Reference-shaped nodes whose source text is their name
REFERENCE_NODES = {
    "name",
    "qualified_name",
    "relative_scope",
    "variable_name",
}


class NameOf(Protocol):
    """Strategy rendering a name for a declaration or reference node."""

    def __call__(self, node: tree_sitter.Node) -> str | None: ...


def node_text(node: tree_sitter.Node | None) -> str:
    """Get text content of a node."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="ignore")


def is_anonymous_class(node: tree_sitter.Node) -> bool:
    """Check whether a node declares a class without a stable name.

    Newer grammars wrap ``new class {}`` in an ``anonymous_class`` node,
    older ones put the class body straight into ``object_creation_expression``.
    """
    if node.type == "anonymous_class":
        return True
    if node.type == "object_creation_expression":
        return any(
            child.type in ("anonymous_class", "declaration_list")
            for child in node.children
        )
    return False


def is_organized_structure(node: tree_sitter.Node) -> bool:
    """Check whether a node opens a class, interface or trait scope."""
    if node.type in ORGANIZED_STRUCTURES or node.type == "anonymous_class":
        return True
    # Only the older grammar keeps the anonymous body on the creation node
    return node.type == "object_creation_expression" and any(
        child.type == "declaration_list" for child in node.children
    )


def namespace_of(node: tree_sitter.Node) -> str | None:
    """Find the namespace a node is declared in.

    Handles both braced namespaces (``namespace Foo { ... }``), where the
    declaration is a descendant of the namespace node, and statement
    namespaces (``namespace Foo;``), which apply to the following siblings.
    """
    top = node
    parent = node.parent
    while parent is not None and parent.type != "program":
        if parent.type == "namespace_definition":
            return node_text(parent.child_by_field_name("name")) or None
        top = parent
        parent = parent.parent

    if parent is None:
        return None

    namespace = None
    for sibling in parent.children:
        if sibling == top:
            break
        if (
            sibling.type == "namespace_definition"
            and sibling.child_by_field_name("body") is None
        ):
            namespace = node_text(sibling.child_by_field_name("name")) or None
    return namespace


def name_of(node: tree_sitter.Node | None) -> str | None:
    """Render the qualified or simple name of a node.

    Declarations resolve to their namespaced name (``App\\Service\\Mailer``),
    reference nodes to their literal text. Anything else, anonymous classes
    included, has no stable name and yields ``None``.
    """
    if node is None:
        return None

    if node.type in ORGANIZED_STRUCTURES:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        name = node_text(name_node)
        namespace = namespace_of(node)
        return f"{namespace}\\{name}" if namespace else name

    if node.type in REFERENCE_NODES:
        return node_text(node) or None

    if node.type == "named_type" and node.named_children:
        return name_of(node.named_children[0])

    return None
