"""Fact records harvested from PHP syntax trees."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class DeclarationKind(str, Enum):
    """Kinds of organized structures."""

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"


class Visibility(str, Enum):
    """Member visibility."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class ClosureKind(str, Enum):
    """Inline function forms."""

    CLOSURE = "closure"
    ARROW = "arrow"


class DynamicCallKind(str, Enum):
    """Calls whose target is only known at run time."""

    DYNAMIC_METHOD = "dynamic_method"
    DYNAMIC_STATIC = "dynamic_static"
    FUNC_CALL = "func_call"


# Marker used as the caller of calls made through the implicit self reference
SELF_CALLER = "$this"


@dataclass
class PropertyFact:
    """A declared property."""

    name: str
    visibility: Visibility
    type_signature: str = "mixed"
    is_static: bool = False


@dataclass
class ConstantFact:
    """A declared class constant."""

    name: str
    visibility: Visibility


@dataclass
class CallEdge:
    """A resolved method call inside a method body."""

    caller: str
    method: str


@dataclass
class InstantiationFact:
    """A ``new ClassName(...)`` expression.

    ``constructor_deps`` only lists argument types that can be read off the
    syntax: ``new X``, ``X::class`` and ``X::factory()`` arguments.
    """

    class_name: str
    arg_count: int
    constructor_deps: list[str] = field(default_factory=list)


@dataclass
class ClosureFact:
    """A closure or arrow function literal."""

    kind: ClosureKind
    param_count: int
    captured_vars: list[str] = field(default_factory=list)


@dataclass
class DynamicCallFact:
    """A call whose target name cannot be determined statically."""

    kind: DynamicCallKind
    detail: str
    caller: str | None = None
    arg_count: int | None = None


@dataclass
class EventFact:
    """A static call that looks like an event dispatch."""

    caller: str
    method: str
    line: int
    event: str | None = None


@dataclass
class QueueCallFact:
    """A static call that looks like a queued job dispatch."""

    caller: str
    method: str
    line: int
    job: str | None = None


@dataclass
class DeclarationFacts:
    """Structural facts of one class, interface or trait."""

    kind: DeclarationKind
    mixins: list[str] = field(default_factory=list)
    properties: list[PropertyFact] = field(default_factory=list)
    constants: list[ConstantFact] = field(default_factory=list)


def fact_to_dict(fact: Any) -> dict[str, Any]:
    """Convert a fact dataclass to a plain dictionary."""
    data = asdict(fact)
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in data.items()
    }
