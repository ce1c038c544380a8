"""Single-pass traversal driving scope tracking and fact extraction."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from src.analysis.behavior_extractor import BehaviorExtractor
from src.analysis.scope import MethodContext, ScopeContextStack
from src.analysis.structure_extractor import apply_structure, extract_structure
from src.logger import get_logger
from src.models import AnalysisConfig, get_analysis_config
from src.parser.php_names import (
    ORGANIZED_STRUCTURES,
    NameOf,
    is_organized_structure,
    name_of,
    node_text,
)

if TYPE_CHECKING:
    import tree_sitter

    from src.metrics.store import MetricsStore

logger = get_logger(__name__)

Render = Callable[["tree_sitter.Node"], str]


def render_source(node: tree_sitter.Node) -> str:
    """Render a node as its source text."""
    return node_text(node)


def _is_anonymous_body(node: tree_sitter.Node) -> bool:
    parent = node.parent
    return (
        node.type == "declaration_list"
        and parent is not None
        and parent.type not in ORGANIZED_STRUCTURES
        and is_organized_structure(parent)
    )


class FactTraversal:
    """Walk one syntax tree and record facts into a metrics store.

    The walk is iterative: each node is entered in pre-order and left in
    post-order. Entering a class, interface or trait pushes a scope frame;
    entering a method of a known declaration starts fresh fact buffers;
    every other node inside a method goes to the behavioural extractor.
    Leaving a method flushes its buffers, leaving a declaration pops its
    frame and records its structure. An anonymous class opens its unnamed
    frame only at its body, so its constructor arguments still belong to
    the enclosing method.
    """

    def __init__(
        self,
        metrics: MetricsStore,
        resolve_name: NameOf = name_of,
        render: Render = render_source,
        config: AnalysisConfig | None = None,
    ) -> None:
        self.metrics = metrics
        self.resolve_name = resolve_name
        self.render = render
        self.config = config or get_analysis_config()
        self.behavior = BehaviorExtractor(resolve_name)
        self.scope = ScopeContextStack()
        self.methods_analyzed = 0
        self.declarations_analyzed = 0

    def analyze(self, tree: tree_sitter.Tree | tree_sitter.Node) -> None:
        """Traverse the tree once."""
        root = getattr(tree, "root_node", tree)
        self.scope = ScopeContextStack()
        self.methods_analyzed = 0
        self.declarations_analyzed = 0

        stack: list[tuple[tree_sitter.Node, bool]] = [(root, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                self._leave(node)
                continue
            self._enter(node)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))

        if self.scope.depth:
            logger.warning("scope_stack_not_empty", open_scopes=self.scope.names)

        logger.debug(
            "traversal_complete",
            declarations=self.declarations_analyzed,
            methods=self.methods_analyzed,
        )

    def _enter(self, node: tree_sitter.Node) -> None:
        if node.type in ORGANIZED_STRUCTURES:
            self._enter_structure(node)
            return

        if _is_anonymous_body(node):
            # Constructor arguments precede the body and stay in the method
            self.scope.push(node, None, None)
            return

        if node.type == "method_declaration" and self.scope.current is not None:
            self._enter_method(node)
            return

        if self.scope.method is not None:
            self.behavior.observe(node, self.scope.method)

    def _enter_structure(self, node: tree_sitter.Node) -> None:
        name = self.resolve_name(node)
        record = self.metrics.lookup(name) if name else None
        if name and record is None:
            logger.debug("declaration_not_in_store", declaration=name)
        self.scope.push(node, name, record)

    def _enter_method(self, node: tree_sitter.Node) -> None:
        frame = self.scope.current
        if frame is None or frame.record is None:
            return

        method_name = node_text(node.child_by_field_name("name"))
        record = frame.record.get_method(method_name)
        if record is None:
            logger.debug(
                "method_not_in_store", declaration=frame.name, method=method_name
            )
            return
        self.scope.enter_method(node, record)

    def _leave(self, node: tree_sitter.Node) -> None:
        method = self.scope.method
        if method is not None and method.node == node:
            self._flush_method(self.scope.leave_method())
            return

        frame = self.scope.current
        if frame is not None and frame.node == node:
            self.scope.pop()
            if frame.record is not None:
                apply_structure(frame.record, extract_structure(node))
                self.declarations_analyzed += 1

    def _flush_method(self, method: MethodContext) -> None:
        method.record.set_facts(
            calls=method.calls,
            property_reads=list(method.property_reads),
            property_writes=list(method.property_writes),
            instantiations=method.instantiations,
            closures=method.closures,
            dynamic_calls=method.dynamic_calls,
            events=method.events,
            queue_calls=method.queue_calls,
            body=self._render_body(method.node),
        )
        self.methods_analyzed += 1

    def _render_body(self, node: tree_sitter.Node) -> str:
        if not self.config.render_bodies:
            return ""
        body = self.render(node)
        if self.config.max_body_length and len(body) > self.config.max_body_length:
            return body[: self.config.max_body_length]
        return body


def analyze(
    tree: tree_sitter.Tree | tree_sitter.Node,
    metrics: MetricsStore,
    resolve_name: NameOf = name_of,
    render: Render = render_source,
    config: AnalysisConfig | None = None,
) -> FactTraversal:
    """Record the facts of one syntax tree into ``metrics``."""
    traversal = FactTraversal(metrics, resolve_name, render, config)
    traversal.analyze(tree)
    return traversal
