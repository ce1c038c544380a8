"""Metric records and fact types."""

from src.metrics.collector import register_declarations
from src.metrics.facts import (
    SELF_CALLER,
    CallEdge,
    ClosureFact,
    ClosureKind,
    ConstantFact,
    DeclarationFacts,
    DeclarationKind,
    DynamicCallFact,
    DynamicCallKind,
    EventFact,
    InstantiationFact,
    PropertyFact,
    QueueCallFact,
    Visibility,
)
from src.metrics.store import (
    DeclarationMetric,
    InMemoryMetricsStore,
    MethodMetric,
    MetricsStore,
)

__all__ = [
    "SELF_CALLER",
    "CallEdge",
    "ClosureFact",
    "ClosureKind",
    "ConstantFact",
    "DeclarationFacts",
    "DeclarationKind",
    "DeclarationMetric",
    "DynamicCallFact",
    "DynamicCallKind",
    "EventFact",
    "InMemoryMetricsStore",
    "InstantiationFact",
    "MethodMetric",
    "MetricsStore",
    "PropertyFact",
    "QueueCallFact",
    "Visibility",
    "register_declarations",
]
