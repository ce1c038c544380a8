"""Lexical context tracking during traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import tree_sitter

    from src.metrics.store import DeclarationMetric, MethodMetric


@dataclass
class MethodContext:
    """The method currently being analyzed and its fact buffers."""

    node: tree_sitter.Node
    record: MethodMetric
    calls: list = field(default_factory=list)
    property_reads: dict[str, None] = field(default_factory=dict)
    property_writes: dict[str, None] = field(default_factory=dict)
    instantiations: list = field(default_factory=list)
    closures: list = field(default_factory=list)
    dynamic_calls: list = field(default_factory=list)
    events: list = field(default_factory=list)
    queue_calls: list = field(default_factory=list)


@dataclass
class ScopeFrame:
    """One open class, interface or trait.

    ``name`` is ``None`` for anonymous classes, whose methods are never
    attributed to a declaration. ``suspended`` holds the method that was
    active when the structure opened, restored when it closes.
    """

    node: tree_sitter.Node
    name: str | None
    record: DeclarationMetric | None
    suspended: MethodContext | None = None


class ScopeContextStack:
    """Chain of open organized structures plus the current method."""

    def __init__(self) -> None:
        self._frames: list[ScopeFrame] = []
        self.method: MethodContext | None = None
        self.pushes = 0
        self.pops = 0

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def current(self) -> ScopeFrame | None:
        return self._frames[-1] if self._frames else None

    @property
    def names(self) -> list[str | None]:
        return [frame.name for frame in self._frames]

    def push(
        self,
        node: tree_sitter.Node,
        name: str | None,
        record: DeclarationMetric | None,
    ) -> ScopeFrame:
        frame = ScopeFrame(node=node, name=name, record=record, suspended=self.method)
        self._frames.append(frame)
        self.method = None
        self.pushes += 1
        return frame

    def pop(self) -> ScopeFrame:
        frame = self._frames.pop()
        self.method = frame.suspended
        self.pops += 1
        return frame

    def enter_method(self, node: tree_sitter.Node, record: MethodMetric) -> MethodContext:
        """Start a method with empty buffers."""
        self.method = MethodContext(node=node, record=record)
        return self.method

    def leave_method(self) -> MethodContext | None:
        method, self.method = self.method, None
        return method
