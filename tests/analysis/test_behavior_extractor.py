"""Tests for behavioural fact extraction inside method bodies."""

from collections.abc import Callable

from src.analysis.behavior_extractor import BehaviorExtractor, is_chained_instantiation
from src.analysis.scope import MethodContext
from src.metrics.facts import (
    CallEdge,
    ClosureKind,
    DynamicCallKind,
    EventFact,
    InstantiationFact,
    QueueCallFact,
)
from src.metrics.store import InMemoryMetricsStore, MethodMetric

Analyze = Callable[[str], InMemoryMetricsStore]


def _method(analyze_php: Analyze, body: str, name: str = "run") -> MethodMetric:
    """Analyze ``body`` as the only method of class ``Subject``."""
    code = f"<?php\nclass Subject\n{{\n    public function {name}($input)\n    {{\n{body}\n    }}\n}}\n"
    store = analyze_php(code)
    method = store.lookup("Subject").get_method(name)
    assert method is not None
    return method


class TestCalls:
    """Tests for instance and static call edges."""

    def test_instance_calls(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            """
        $this->validate();
        $input->normalize();
        $this->repository->persist($input);
""",
        )

        assert method.calls == [
            CallEdge("$this", "validate"),
            CallEdge("$input", "normalize"),
            CallEdge("$this->repository", "persist"),
        ]
        assert method.dynamic_calls == []

    def test_nullsafe_call(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        $input?->profile();")

        assert method.calls == [CallEdge("$input", "profile")]

    def test_static_calls(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            """
        Cache::forget('users');
        self::boot();
        parent::run($input);
""",
        )

        assert method.calls == [
            CallEdge("Cache", "forget"),
            CallEdge("self", "boot"),
            CallEdge("parent", "run"),
        ]
        assert method.events == []
        assert method.queue_calls == []

    def test_dynamic_method_name(self, analyze_php: Analyze) -> None:
        """A variable method name yields a dynamic fact and no call edge."""
        method = _method(analyze_php, "        $this->$input(1, 2);")

        assert method.calls == []
        assert len(method.dynamic_calls) == 1
        fact = method.dynamic_calls[0]
        assert fact.kind is DynamicCallKind.DYNAMIC_METHOD
        assert fact.caller == "$this"
        assert fact.detail == "$input"
        assert fact.arg_count == 2

    def test_dynamic_static_name(self, analyze_php: Analyze) -> None:
        """A variable static method name yields a dynamic fact and no call edge."""
        method = _method(analyze_php, "        Foo::$input(1);")

        assert method.calls == []
        assert len(method.dynamic_calls) == 1
        fact = method.dynamic_calls[0]
        assert fact.kind is DynamicCallKind.DYNAMIC_STATIC
        assert fact.caller == "Foo"
        assert fact.detail == "$input"
        assert fact.arg_count == 1

    def test_dynamic_static_name_skips_heuristics(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        Queue::{$input}(new SendEmailJob());")

        assert method.calls == []
        assert method.queue_calls == []
        assert method.events == []

    def test_calls_keep_source_order_and_duplicates(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            """
        $this->log();
        $this->log();
""",
        )

        assert method.calls == [CallEdge("$this", "log"), CallEdge("$this", "log")]


class TestReflectiveCalls:
    """Tests for free functions that invoke arbitrary callables."""

    def test_reflective_functions(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            """
        call_user_func([$this, 'handle'], $input);
        array_filter($input);
""",
        )

        assert [(f.kind, f.detail, f.arg_count) for f in method.dynamic_calls] == [
            (DynamicCallKind.FUNC_CALL, "call_user_func", 2),
            (DynamicCallKind.FUNC_CALL, "array_filter", 1),
        ]

    def test_ordinary_functions_are_ignored(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        strlen($input);\n        count($input);")

        assert method.dynamic_calls == []
        assert method.calls == []


class TestDispatchHeuristics:
    """Tests for event and queue dispatch detection."""

    def test_event_dispatch(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        Dispatcher::fire(new UserRegistered());")

        assert method.calls == [CallEdge("Dispatcher", "fire")]
        assert method.events == [
            EventFact(caller="Dispatcher", method="fire", line=6, event="UserRegistered")
        ]
        assert method.queue_calls == []

    def test_queue_dispatch(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        Queue::push(new SendEmailJob());")

        assert method.calls == [CallEdge("Queue", "push")]
        assert method.queue_calls == [
            QueueCallFact(caller="Queue", method="push", line=6, job="SendEmailJob")
        ]
        assert method.events == []

    def test_payload_must_be_instantiation(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        Event::dispatch($input);")

        assert len(method.events) == 1
        assert method.events[0].event is None

    def test_both_heuristics_can_match(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        EventQueue::dispatch(new OrderShipped());")

        assert [e.event for e in method.events] == ["OrderShipped"]
        assert [q.job for q in method.queue_calls] == ["OrderShipped"]

    def test_instance_dispatch_is_not_an_event(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        $this->dispatcher->fire(new UserRegistered());")

        assert method.events == []
        assert method.calls == [CallEdge("$this->dispatcher", "fire")]


class TestInstantiations:
    """Tests for ``new`` expressions and constructor dependencies."""

    def test_constructor_dependencies(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        $m = new Mailer(Config::class, $injectedLogger);")

        assert method.instantiations == [
            InstantiationFact(class_name="Mailer", arg_count=2, constructor_deps=["Config"])
        ]

    def test_nested_instantiations(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php, "        $c = new Client(new Transport(), Http::factory(), 'x');"
        )

        assert method.instantiations == [
            InstantiationFact("Client", 3, ["Transport", "Http"]),
            InstantiationFact("Transport", 0, []),
        ]

    def test_named_arguments(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        $m = new Mailer(logger: new Logger());")

        assert method.instantiations[0].constructor_deps == ["Logger"]

    def test_dynamic_class_is_skipped(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        $obj = new $input();")

        assert method.instantiations == []


class TestClosures:
    """Tests for closures and arrow functions."""

    def test_closure_captures(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            "        $f = function ($a, $b) use ($input, &$total) { return $a; };",
        )

        assert len(method.closures) == 1
        closure = method.closures[0]
        assert closure.kind is ClosureKind.CLOSURE
        assert closure.param_count == 2
        assert closure.captured_vars == ["input", "total"]

    def test_arrow_function(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        $f = fn($x) => $x * 2;")

        assert len(method.closures) == 1
        assert method.closures[0].kind is ClosureKind.ARROW
        assert method.closures[0].param_count == 1
        assert method.closures[0].captured_vars == []

    def test_calls_inside_closures_belong_to_method(self, analyze_php: Analyze) -> None:
        method = _method(analyze_php, "        $f = function () { $this->flush(); };")

        assert method.calls == [CallEdge("$this", "flush")]


class TestPropertyAccess:
    """Tests for reads and writes of ``$this`` properties."""

    def test_reads_and_writes(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            """
        $this->name = $input;
        $x = $this->email;
        $this->count += 1;
        $y = $input->other;
""",
        )

        assert method.property_writes == ["name", "count"]
        assert "email" in method.property_reads
        assert "other" not in method.property_reads

    def test_dynamic_field_names_are_dropped(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            """
        $x = $this->$input;
        $this->$input = 1;
        $this->{'a'} = 2;
""",
        )

        assert method.property_reads == []
        assert method.property_writes == []

    def test_no_duplicates(self, analyze_php: Analyze) -> None:
        method = _method(
            analyze_php,
            """
        $a = $this->email;
        $b = $this->email;
        $this->email = $a;
        $this->email = $b;
""",
        )

        assert method.property_reads.count("email") == 1
        assert method.property_writes == ["email"]


def test_chained_instantiation_is_never_reported(php_parser) -> None:
    tree = php_parser.parse_content(b"<?php\n(new Builder())->build();\n")
    [creation] = php_parser.find_nodes_by_type(tree.root_node, "object_creation_expression")

    assert is_chained_instantiation(creation) is False


class _DetachedCall:
    """Member call node whose receiver could not be parsed."""

    type = "member_call_expression"
    named_children: list = []

    def child_by_field_name(self, name: str) -> None:
        return None


def test_call_without_receiver_is_skipped() -> None:
    method = MethodContext(node=None, record=MethodMetric("run"))

    BehaviorExtractor().observe(_DetachedCall(), method)

    assert method.calls == []
    assert method.dynamic_calls == []
