"""Per-declaration metric records and the stores that own them."""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from src.logger import get_logger
from src.metrics.facts import (
    CallEdge,
    ClosureFact,
    ConstantFact,
    DeclarationKind,
    DynamicCallFact,
    EventFact,
    InstantiationFact,
    PropertyFact,
    QueueCallFact,
    fact_to_dict,
)
from src.utils.exceptions import NotFoundError

logger = get_logger(__name__)


class MethodMetric:
    """Facts harvested from one method body.

    Every collection is replaced as a whole when the method is analyzed
    again, so repeated analysis never accumulates duplicates.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[CallEdge] = []
        self.property_reads: list[str] = []
        self.property_writes: list[str] = []
        self.instantiations: list[InstantiationFact] = []
        self.closures: list[ClosureFact] = []
        self.dynamic_calls: list[DynamicCallFact] = []
        self.events: list[EventFact] = []
        self.queue_calls: list[QueueCallFact] = []
        self.body: str = ""

    def get_name(self) -> str:
        return self.name

    def set_facts(
        self,
        *,
        calls: list[CallEdge],
        property_reads: list[str],
        property_writes: list[str],
        instantiations: list[InstantiationFact],
        closures: list[ClosureFact],
        dynamic_calls: list[DynamicCallFact],
        events: list[EventFact],
        queue_calls: list[QueueCallFact],
        body: str,
    ) -> None:
        """Replace all behavioural facts of this method."""
        self.calls = list(calls)
        self.property_reads = list(dict.fromkeys(property_reads))
        self.property_writes = list(dict.fromkeys(property_writes))
        self.instantiations = list(instantiations)
        self.closures = list(closures)
        self.dynamic_calls = list(dynamic_calls)
        self.events = list(events)
        self.queue_calls = list(queue_calls)
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "calls": [fact_to_dict(c) for c in self.calls],
            "propertyReads": list(self.property_reads),
            "propertyWrites": list(self.property_writes),
            "instantiations": [fact_to_dict(i) for i in self.instantiations],
            "closures": [fact_to_dict(c) for c in self.closures],
            "dynamicCalls": [fact_to_dict(d) for d in self.dynamic_calls],
            "events": [fact_to_dict(e) for e in self.events],
            "queueCalls": [fact_to_dict(q) for q in self.queue_calls],
            "body": self.body,
        }


class DeclarationMetric:
    """Facts for one class, interface or trait, keyed by qualified name."""

    def __init__(
        self, name: str, kind: DeclarationKind = DeclarationKind.CLASS
    ) -> None:
        self.name = name
        self.kind = kind
        self.mixins: list[str] = []
        self.properties: list[PropertyFact] = []
        self.constants: list[ConstantFact] = []
        self.methods: dict[str, MethodMetric] = {}

    def get_name(self) -> str:
        return self.name

    def get_methods(self) -> list[MethodMetric]:
        return list(self.methods.values())

    def get_method(self, name: str) -> MethodMetric | None:
        """Find a method record by name.

        PHP method names are case-insensitive, so an exact match is preferred
        and a case-insensitive one accepted.
        """
        if name in self.methods:
            return self.methods[name]
        lowered = name.lower()
        for method_name, metric in self.methods.items():
            if method_name.lower() == lowered:
                return metric
        return None

    def add_method(self, method: MethodMetric) -> MethodMetric:
        """Register a method record, keeping an existing one of the same name."""
        return self.methods.setdefault(method.name, method)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "type": self.kind.value,
            "traits": list(self.mixins),
            "properties": [fact_to_dict(p) for p in self.properties],
            "constants": [fact_to_dict(c) for c in self.constants],
            "methods": [m.to_dict() for m in self.methods.values()],
        }


@runtime_checkable
class MetricsStore(Protocol):
    """Lookup capability the extractors depend on."""

    def lookup(self, qualified_name: str) -> DeclarationMetric | None: ...


class InMemoryMetricsStore:
    """Metrics store backed by an insertion-ordered dictionary."""

    def __init__(self) -> None:
        self._declarations: dict[str, DeclarationMetric] = {}

    def __len__(self) -> int:
        return len(self._declarations)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._declarations

    def lookup(self, qualified_name: str) -> DeclarationMetric | None:
        return self._declarations.get(qualified_name)

    def get(self, qualified_name: str) -> DeclarationMetric:
        """Strict lookup raising when the declaration is unknown."""
        declaration = self.lookup(qualified_name)
        if declaration is None:
            msg = f"Declaration not found: {qualified_name}"
            raise NotFoundError(
                msg, resource_type="declaration", resource_id=qualified_name
            )
        return declaration

    def add(self, declaration: DeclarationMetric) -> DeclarationMetric:
        """Register a declaration record, keeping an existing one of the same name."""
        existing = self._declarations.get(declaration.name)
        if existing is not None:
            logger.debug("declaration_already_registered", declaration=declaration.name)
            return existing
        self._declarations[declaration.name] = declaration
        return declaration

    def all(self) -> list[DeclarationMetric]:
        return list(self._declarations.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "declarations": [d.to_dict() for d in self._declarations.values()],
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize all records to JSON."""
        return json.dumps(self.to_dict(), indent=indent)
