"""Extract structural facts from class, interface and trait declarations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.analysis.type_formatter import format_type
from src.logger import get_logger
from src.metrics.facts import (
    ConstantFact,
    DeclarationFacts,
    DeclarationKind,
    PropertyFact,
    Visibility,
)
from src.parser.php_names import ORGANIZED_STRUCTURES, node_text

if TYPE_CHECKING:
    import tree_sitter

    from src.metrics.store import DeclarationMetric

logger = get_logger(__name__)

MIXIN_NAME_NODES = ("name", "qualified_name")

TYPE_NODES = {
    "union_type",
    "intersection_type",
    "disjunctive_normal_form_type",
    "optional_type",
    "named_type",
    "primitive_type",
    "bottom_type",
}


def get_visibility(node: tree_sitter.Node) -> Visibility:
    """Visibility of a member declaration.

    Public wins over protected, protected over private. A member without a
    visibility modifier is public.
    """
    modifiers = [
        node_text(child).lower()
        for child in node.children
        if child.type == "visibility_modifier"
    ]
    if not modifiers:
        return Visibility.PUBLIC
    for visibility in (Visibility.PUBLIC, Visibility.PROTECTED, Visibility.PRIVATE):
        if any(text.startswith(visibility.value) for text in modifiers):
            return visibility
    return Visibility.PUBLIC


def is_static(node: tree_sitter.Node) -> bool:
    return any(child.type == "static_modifier" for child in node.children)


def _variable_name(node: tree_sitter.Node) -> str:
    """Property name without the ``$`` sigil."""
    for child in node.named_children:
        if child.type == "variable_name":
            for part in child.named_children:
                if part.type == "name":
                    return node_text(part)
            return node_text(child).lstrip("$")
    return ""


def _extract_mixins(stmt: tree_sitter.Node) -> list[str]:
    return [
        node_text(child)
        for child in stmt.named_children
        if child.type in MIXIN_NAME_NODES
    ]


def _declared_type(stmt: tree_sitter.Node) -> tree_sitter.Node | None:
    type_node = stmt.child_by_field_name("type")
    if type_node is not None:
        return type_node
    return next((c for c in stmt.named_children if c.type in TYPE_NODES), None)


def _extract_properties(stmt: tree_sitter.Node) -> list[PropertyFact]:
    type_signature = format_type(_declared_type(stmt))
    visibility = get_visibility(stmt)
    static = is_static(stmt)

    properties = []
    for element in stmt.named_children:
        if element.type != "property_element":
            continue
        name = _variable_name(element)
        if name:
            properties.append(
                PropertyFact(
                    name=name,
                    visibility=visibility,
                    type_signature=type_signature,
                    is_static=static,
                )
            )
    return properties


def _extract_constants(stmt: tree_sitter.Node) -> list[ConstantFact]:
    visibility = get_visibility(stmt)
    constants = []
    for element in stmt.named_children:
        if element.type != "const_element":
            continue
        for part in element.named_children:
            if part.type == "name":
                constants.append(ConstantFact(name=node_text(part), visibility=visibility))
                break
    return constants


def extract_structure(node: tree_sitter.Node) -> DeclarationFacts:
    """Derive kind, mixins, properties and constants of a declaration.

    Only the direct members of the declaration body are inspected; method
    bodies are left to the behavioural extractor.
    """
    facts = DeclarationFacts(kind=DeclarationKind(ORGANIZED_STRUCTURES.get(node.type, "class")))

    body = node.child_by_field_name("body")
    if body is None:
        return facts

    for stmt in body.named_children:
        if stmt.type == "use_declaration":
            facts.mixins.extend(_extract_mixins(stmt))
        elif stmt.type == "property_declaration":
            facts.properties.extend(_extract_properties(stmt))
        elif stmt.type == "const_declaration":
            facts.constants.extend(_extract_constants(stmt))

    return facts


def apply_structure(record: DeclarationMetric, facts: DeclarationFacts) -> None:
    """Overwrite the structural fields of a declaration record."""
    record.kind = facts.kind
    record.mixins = list(facts.mixins)
    record.properties = list(facts.properties)
    record.constants = list(facts.constants)
    logger.debug(
        "structure_extracted",
        declaration=record.name,
        kind=facts.kind.value,
        mixins=len(facts.mixins),
        properties=len(facts.properties),
        constants=len(facts.constants),
    )
