"""Name-based heuristics for event and queue dispatch.

These predicates only look at the class reference and method name of a
static call. They are best effort: a dispatcher with an unusual name is
missed, and a match is never upgraded into a resolved target.
"""

EVENT_CLASS_MARKERS = ("event", "dispatcher")
EVENT_METHODS = frozenset({"dispatch", "fire"})

QUEUE_CLASS_MARKER = "queue"
QUEUE_SERVICE_MARKER = "queueserv"
QUEUE_METHODS = frozenset({"push", "later", "dispatch"})


def is_event_dispatch(class_name: str, method_name: str) -> bool:
    """``Event::dispatch(...)``, ``Dispatcher::fire(...)`` and the like."""
    lowered = class_name.lower()
    return method_name in EVENT_METHODS and any(
        marker in lowered for marker in EVENT_CLASS_MARKERS
    )


def is_queue_dispatch(class_name: str, method_name: str) -> bool:
    """``Queue::push(...)``, ``Bus::queue(...)``, ``QueueService::send(...)``."""
    if method_name == "queue":
        return True
    lowered = class_name.lower()
    if QUEUE_SERVICE_MARKER in lowered:
        return True
    return QUEUE_CLASS_MARKER in lowered and method_name in QUEUE_METHODS
