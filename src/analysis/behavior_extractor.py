"""Extract behavioural facts from the nodes of a method body."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from src.analysis.heuristics import is_event_dispatch, is_queue_dispatch
from src.metrics.facts import (
    SELF_CALLER,
    CallEdge,
    ClosureFact,
    ClosureKind,
    DynamicCallFact,
    DynamicCallKind,
    EventFact,
    InstantiationFact,
    QueueCallFact,
)
from src.parser.php_names import NameOf, is_anonymous_class, name_of, node_text

if TYPE_CHECKING:
    import tree_sitter

    from src.analysis.scope import MethodContext

# Free functions that can invoke arbitrary callables
REFLECTIVE_FUNCTIONS = frozenset(
    {"call_user_func", "call_user_func_array", "array_map", "array_filter"}
)

# Nodes that name a class without evaluating anything
CLASS_REFERENCE_NODES = ("name", "qualified_name", "relative_scope")

PARAMETER_NODES = ("simple_parameter", "variadic_parameter", "property_promotion_parameter")

FIELD_ACCESS_NODES = ("member_access_expression", "nullsafe_member_access_expression")


def _line(node: tree_sitter.Node) -> int:
    return node.start_point[0] + 1


def _is_self_reference(node: tree_sitter.Node | None) -> bool:
    return (
        node is not None
        and node.type == "variable_name"
        and node_text(node) == SELF_CALLER
    )


def _literal_name(node: tree_sitter.Node | None) -> str | None:
    """Member name if it is written as a plain identifier."""
    if node is not None and node.type == "name":
        return node_text(node)
    return None


def _arguments(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    args = node.child_by_field_name("arguments")
    if args is None:
        args = next((c for c in node.named_children if c.type == "arguments"), None)
    if args is None:
        return []
    return [c for c in args.named_children if c.type == "argument"]


def _argument_value(argument: tree_sitter.Node) -> tree_sitter.Node | None:
    # Named arguments put the parameter name first, the value last
    named = argument.named_children
    return named[-1] if named else None


def is_chained_instantiation(node: tree_sitter.Node) -> bool:
    """Whether an instantiation is the head of a fluent call chain.

    Chain detection is not implemented; every instantiation reports
    ``False``.
    """
    return False


class BehaviorExtractor:
    """Classify method body nodes into behavioural facts.

    Each node type maps to exactly one handler, so a node contributes to at
    most one fact category. Names that cannot be read off the syntax degrade
    to dynamic call facts where such a category exists and are dropped
    otherwise.
    """

    def __init__(self, resolve_name: NameOf = name_of) -> None:
        self.resolve_name = resolve_name
        self._handlers: dict[str, Callable[[tree_sitter.Node, MethodContext], None]] = {
            "member_call_expression": self._instance_call,
            "nullsafe_member_call_expression": self._instance_call,
            "scoped_call_expression": self._static_call,
            "function_call_expression": self._function_call,
            "object_creation_expression": self._instantiation,
            "anonymous_function": self._closure,
            "anonymous_function_creation_expression": self._closure,
            "arrow_function": self._arrow_function,
            "member_access_expression": self._field_read,
            "nullsafe_member_access_expression": self._field_read,
            "assignment_expression": self._field_write,
            "reference_assignment_expression": self._field_write,
            "augmented_assignment_expression": self._field_write,
        }

    def observe(self, node: tree_sitter.Node, method: MethodContext) -> None:
        handler = self._handlers.get(node.type)
        if handler is not None:
            handler(node, method)

    # -- naming -------------------------------------------------------------

    def _receiver_name(self, node: tree_sitter.Node) -> str:
        if node.type == "variable_name":
            return node_text(node)
        return self.resolve_name(node) or node_text(node)

    def _class_reference(self, node: tree_sitter.Node | None) -> str | None:
        if node is None or node.type not in CLASS_REFERENCE_NODES:
            return None
        return self.resolve_name(node)

    def _created_class(self, node: tree_sitter.Node) -> str | None:
        """Class name of a ``new`` expression, if it is written literally."""
        if is_anonymous_class(node):
            return None
        for child in node.named_children:
            if child.type in CLASS_REFERENCE_NODES:
                return self._class_reference(child)
            if child.type != "attribute_list":
                # new $class, new ($factory()), ...
                return None
        return None

    def _inferred_type(self, node: tree_sitter.Node | None) -> str | None:
        """Type of a constructor argument, when the syntax gives it away."""
        if node is None:
            return None
        if node.type == "object_creation_expression":
            return self._created_class(node)
        if node.type == "class_constant_access_expression":
            # `class` may surface as a name node or as a bare keyword token
            if node.named_children and node_text(node.children[-1]).lower() == "class":
                return self._class_reference(node.named_children[0])
            return None
        if node.type == "scoped_call_expression":
            return self._class_reference(node.child_by_field_name("scope"))
        return None

    def _payload_class(self, node: tree_sitter.Node) -> str | None:
        args = _arguments(node)
        if not args:
            return None
        value = _argument_value(args[0])
        if value is None or value.type != "object_creation_expression":
            return None
        return self._created_class(value)

    # -- handlers -----------------------------------------------------------

    def _instance_call(self, node: tree_sitter.Node, method: MethodContext) -> None:
        receiver = node.child_by_field_name("object")
        if receiver is None:
            return
        caller = self._receiver_name(receiver)
        name_node = node.child_by_field_name("name")
        method_name = _literal_name(name_node)

        if method_name is not None:
            method.calls.append(CallEdge(caller=caller, method=method_name))
            return

        method.dynamic_calls.append(
            DynamicCallFact(
                kind=DynamicCallKind.DYNAMIC_METHOD,
                detail=node_text(name_node),
                caller=caller,
                arg_count=len(_arguments(node)),
            )
        )

    def _static_call(self, node: tree_sitter.Node, method: MethodContext) -> None:
        scope = node.child_by_field_name("scope")
        caller = (self.resolve_name(scope) if scope is not None else None) or node_text(scope)
        name_node = node.child_by_field_name("name")
        method_name = _literal_name(name_node)

        if method_name is None:
            method.dynamic_calls.append(
                DynamicCallFact(
                    kind=DynamicCallKind.DYNAMIC_STATIC,
                    detail=node_text(name_node),
                    caller=caller,
                    arg_count=len(_arguments(node)),
                )
            )
            return

        method.calls.append(CallEdge(caller=caller, method=method_name))

        event = is_event_dispatch(caller, method_name)
        queue = is_queue_dispatch(caller, method_name)
        if not (event or queue):
            return

        payload = self._payload_class(node)
        if event:
            method.events.append(
                EventFact(caller=caller, method=method_name, line=_line(node), event=payload)
            )
        if queue:
            method.queue_calls.append(
                QueueCallFact(caller=caller, method=method_name, line=_line(node), job=payload)
            )

    def _function_call(self, node: tree_sitter.Node, method: MethodContext) -> None:
        function = node.child_by_field_name("function")
        if function is None or function.type not in ("name", "qualified_name"):
            return
        function_name = node_text(function).lstrip("\\")
        if function_name.lower() not in REFLECTIVE_FUNCTIONS:
            return

        method.dynamic_calls.append(
            DynamicCallFact(
                kind=DynamicCallKind.FUNC_CALL,
                detail=function_name,
                arg_count=len(_arguments(node)),
            )
        )

    def _instantiation(self, node: tree_sitter.Node, method: MethodContext) -> None:
        class_name = self._created_class(node)
        if class_name is None:
            return

        args = _arguments(node)
        deps = []
        for argument in args:
            dep = self._inferred_type(_argument_value(argument))
            if dep is not None:
                deps.append(dep)

        method.instantiations.append(
            InstantiationFact(
                class_name=class_name, arg_count=len(args), constructor_deps=deps
            )
        )

    def _closure(self, node: tree_sitter.Node, method: MethodContext) -> None:
        captured = []
        for child in node.named_children:
            if child.type != "anonymous_function_use_clause":
                continue
            for use in child.named_children:
                variable = use
                if use.type == "by_ref":
                    variable = next(
                        (v for v in use.named_children if v.type == "variable_name"), None
                    )
                if variable is not None and variable.type == "variable_name":
                    captured.append(node_text(variable).lstrip("$"))

        method.closures.append(
            ClosureFact(
                kind=ClosureKind.CLOSURE,
                param_count=self._param_count(node),
                captured_vars=captured,
            )
        )

    def _arrow_function(self, node: tree_sitter.Node, method: MethodContext) -> None:
        # Captures of arrow functions are implicit and not enumerated
        method.closures.append(
            ClosureFact(kind=ClosureKind.ARROW, param_count=self._param_count(node))
        )

    def _param_count(self, node: tree_sitter.Node) -> int:
        params = node.child_by_field_name("parameters")
        if params is None:
            params = next(
                (c for c in node.named_children if c.type == "formal_parameters"), None
            )
        if params is None:
            return 0
        return sum(1 for p in params.named_children if p.type in PARAMETER_NODES)

    def _field_read(self, node: tree_sitter.Node, method: MethodContext) -> None:
        if not _is_self_reference(node.child_by_field_name("object")):
            return
        field_name = _literal_name(node.child_by_field_name("name"))
        if field_name is not None:
            method.property_reads.setdefault(field_name)

    def _field_write(self, node: tree_sitter.Node, method: MethodContext) -> None:
        target = node.child_by_field_name("left")
        if target is None or target.type not in FIELD_ACCESS_NODES:
            return
        if not _is_self_reference(target.child_by_field_name("object")):
            return
        field_name = _literal_name(target.child_by_field_name("name"))
        if field_name is not None:
            method.property_writes.setdefault(field_name)
