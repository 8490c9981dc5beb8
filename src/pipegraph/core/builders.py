"""
Pipeline configuration builder for easy setup.

ConfigBuilder: chainable front end over the PipelineGraph edit operations.
"""

from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional
from pathlib import Path
import logging

from .factory import save_yaml
from .graph import PipelineGraph, UpdateResult
from .models import Component, Identifier
from .serialization import begin_config, to_config

logger = logging.getLogger(__name__)


class ConfigBuilder:
    """
    Chainable configuration builder.

    Holds the current graph value and swaps it for the result of each edit.
    Graphs obtained earlier through `builder.graph` are never changed.
    Every replaced graph is kept for `undo`; pass `max_history` to keep only
    the most recent ones, otherwise the history grows with each edit.

    Usage:
        builder = ConfigBuilder(settings={"data_dir": "/var/lib/pipeline"})
        builder.sources.add("in", type="file", include=["/var/log/*.log"])
        builder.transforms.add("parse", inputs=["in"], type="json")
        builder.sinks.add("out", inputs=["parse"], type="console")
        builder.inject_after("in", "sample", {"type": "sample", "rate": 10})
        config = builder.get_config()
        builder.save("pipeline.yaml")
    """

    class SourceBuilder:
        """Source section builder"""

        def __init__(self, parent):
            self.parent = parent

        def add(self, name: Identifier, config: Optional[Dict[Any, Any]] = None, **settings) -> "ConfigBuilder":
            """Add a source; keyword arguments are merged into its settings"""
            config = {**(config or {}), **settings}
            return self.parent._apply(lambda g: g.add_source(name, config))

    class TransformBuilder:
        """Transform section builder"""

        def __init__(self, parent):
            self.parent = parent

        def add(
            self,
            name: Identifier,
            inputs: Iterable[Identifier] = (),
            config: Optional[Dict[Any, Any]] = None,
            **settings
        ) -> "ConfigBuilder":
            """Add a transform consuming from `inputs`"""
            config = {**(config or {}), **settings}
            return self.parent._apply(lambda g: g.add_transform(name, inputs, config))

    class SinkBuilder:
        """Sink section builder"""

        def __init__(self, parent):
            self.parent = parent

        def add(
            self,
            name: Identifier,
            inputs: Iterable[Identifier] = (),
            config: Optional[Dict[Any, Any]] = None,
            **settings
        ) -> "ConfigBuilder":
            """Add a sink consuming from `inputs`"""
            config = {**(config or {}), **settings}
            return self.parent._apply(lambda g: g.add_sink(name, inputs, config))

    def __init__(
        self,
        settings: Optional[Dict[Any, Any]] = None,
        graph: Optional[PipelineGraph] = None,
        max_history: Optional[int] = None
    ):
        if max_history is not None and max_history < 0:
            raise ValueError(f"max_history must be >= 0, got {max_history}")

        if graph is not None and settings:
            graph = graph.model_copy(update={"settings": {**graph.settings, **settings}})
        self._graph = graph if graph is not None else begin_config(settings)
        self._history: Deque[PipelineGraph] = deque(maxlen=max_history)

        # Initialize builders
        self.sources = self.SourceBuilder(self)
        self.transforms = self.TransformBuilder(self)
        self.sinks = self.SinkBuilder(self)

    @property
    def graph(self) -> PipelineGraph:
        """Current graph snapshot"""
        return self._graph

    @property
    def history(self) -> List[PipelineGraph]:
        """Snapshots preceding the current graph, oldest first"""
        return list(self._history)

    def _apply(self, edit: Callable[[PipelineGraph], PipelineGraph]) -> "ConfigBuilder":
        graph = edit(self._graph)
        self._history.append(self._graph)
        self._graph = graph
        return self

    def undo(self) -> "ConfigBuilder":
        """Return to the graph before the last edit"""
        if not self._history:
            raise IndexError("Nothing to undo")
        self._graph = self._history.pop()
        return self

    def set_setting(self, key: Any, value: Any) -> "ConfigBuilder":
        """Set a global (top-level) setting"""
        return self._apply(
            lambda g: g.model_copy(update={"settings": {**g.settings, key: value}})
        )

    def link(self, name_a: Identifier, name_b: Identifier) -> "ConfigBuilder":
        return self._apply(lambda g: g.link(name_a, name_b))

    def unlink(self, name_a: Identifier, name_b: Identifier) -> "ConfigBuilder":
        return self._apply(lambda g: g.unlink(name_a, name_b))

    def inject_before(
        self,
        downstream: Identifier,
        name: Identifier,
        config: Optional[Dict[Any, Any]] = None
    ) -> "ConfigBuilder":
        """Insert a transform in front of `downstream`"""
        return self._apply(lambda g: g.inject_transform_before(downstream, name, config))

    def inject_after(
        self,
        upstream: Identifier,
        name: Identifier,
        config: Optional[Dict[Any, Any]] = None
    ) -> "ConfigBuilder":
        """Insert a transform behind `upstream`"""
        return self._apply(lambda g: g.inject_transform_after(upstream, name, config))

    def remove(self, name: Identifier) -> "ConfigBuilder":
        return self._apply(lambda g: g.remove_component(name))

    def update(
        self,
        name: Identifier,
        f: Callable[[Optional[Component]], UpdateResult]
    ) -> "ConfigBuilder":
        return self._apply(lambda g: g.update_component(name, f))

    def rename(self, old: Identifier, new: Identifier) -> "ConfigBuilder":
        return self._apply(lambda g: g.rename_component(old, new))

    def get_config(self) -> Dict[Any, Any]:
        """
        Get pipeline configuration as Python dictionary.

        Returns:
            dict: Complete pipeline configuration
        """
        return self.build()

    def build(self) -> Dict[Any, Any]:
        """Build pipeline configuration dictionary"""
        return to_config(self._graph)

    def save(self, filepath: str | Path) -> None:
        """Save configuration to YAML file"""
        report = self._graph.validate_topology()
        for error in report.errors:
            logger.warning(f"Saving graph with topology error: {error}")

        save_yaml(self.build(), filepath)
