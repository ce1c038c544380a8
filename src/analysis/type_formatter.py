"""Render declared PHP types as canonical signature strings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.parser.php_names import node_text

if TYPE_CHECKING:
    import tree_sitter

MIXED = "mixed"

LITERAL_TYPES = {"name", "qualified_name", "primitive_type", "bottom_type"}


def format_type(node: tree_sitter.Node | None) -> str:
    """Format a type node.

    ``?A`` for nullable types, members joined with ``|`` for unions and ``&``
    for intersections, literal text for names and built-ins. Missing or
    unrecognised types format as ``mixed``.
    """
    if node is None:
        return MIXED

    if node.type == "union_type":
        return _join(node, "|")

    if node.type == "intersection_type":
        return _join(node, "&")

    if node.type == "disjunctive_normal_form_type":
        parts = []
        for member in node.named_children:
            text = format_type(member)
            parts.append(f"({text})" if member.type == "intersection_type" else text)
        return "|".join(parts) if parts else MIXED

    if node.type == "optional_type":
        if not node.named_children:
            return MIXED
        return "?" + format_type(node.named_children[0])

    if node.type == "named_type":
        if not node.named_children:
            return node_text(node) or MIXED
        return format_type(node.named_children[0])

    if node.type in LITERAL_TYPES:
        return node_text(node) or MIXED

    return MIXED


def _join(node: tree_sitter.Node, separator: str) -> str:
    members = [format_type(member) for member in node.named_children]
    return separator.join(members) if members else MIXED
