from typing import Any, Iterable, Optional, Tuple


class GraphError(Exception):
    """
    Base error for graph operations

    Carries the graph the failed operation received and the offending
    component name. The graph itself is left untouched.
    """

    def __init__(self, message: str, graph: Any = None, name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.graph = graph
        self.name = name

    def __str__(self) -> str:
        return self.message


class ComponentNotFound(GraphError, KeyError):
    """Raised when an operation requires a component that does not exist"""

    def __init__(self, name: str, graph: Any = None, available: Optional[Iterable[str]] = None):
        if available is None and graph is not None:
            available = graph.names()
        message = f"Component '{name}' not found. Available: {sorted(available or [])}"
        super().__init__(message, graph=graph, name=name)


class DuplicateComponent(GraphError, ValueError):
    """Raised when adding a component whose name is already taken"""

    def __init__(self, name: str, graph: Any = None, existing: Any = None):
        kind = f" ({existing.kind.value})" if existing is not None else ""
        message = f"Component '{name}' already exists{kind}"
        super().__init__(message, graph=graph, name=name)
        self.existing = existing


class WrongKind(GraphError, ValueError):
    """
    Raised when a component's kind does not allow the requested edit

    `component` is the offending component, `expected` the kinds the
    edit would have accepted in its place.
    """

    def __init__(
        self,
        name: str,
        component: Any,
        expected: Iterable[Any],
        reason: str,
        graph: Any = None
    ):
        self.expected: Tuple[Any, ...] = tuple(expected)
        allowed = ", ".join(kind.value for kind in self.expected)
        message = f"Component '{name}' is a {component.kind.value} (expected {allowed}): {reason}"
        super().__init__(message, graph=graph, name=name)
        self.component = component
        self.reason = reason
