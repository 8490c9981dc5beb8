"""
Pipeline topology graph and its edit operations.

Every operation returns a new PipelineGraph and leaves the receiver as it
was, so edits can be chained and older snapshots stay usable:

    graph = (
        begin_config({"data_dir": "/var/lib/pipeline"})
        .add_source("in", {"type": "file"})
        .add_sink("out", ["in"], {"type": "console"})
        .inject_transform_after("in", "parse", {"type": "json"})
    )
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
import logging

from .errors import ComponentNotFound, DuplicateComponent, WrongKind
from .models import Component, ComponentKind, Identifier, canonical_name, canonical_names

logger = logging.getLogger(__name__)


UpdateResult = Union[Component, Mapping[Any, Any], None]

CONSUMER_KINDS = (ComponentKind.TRANSFORM, ComponentKind.SINK)
PRODUCER_KINDS = (ComponentKind.SOURCE, ComponentKind.TRANSFORM)


@dataclass
class ValidationResult:
    """Result of graph validation: errors (broken topology) and warnings"""

    errors: List[str]
    warnings: List[str]

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


class PipelineGraph(BaseModel):
    """
    Immutable pipeline topology

    - settings: top-level options not tied to any component
    - components: canonical name -> Component
    """
    model_config = ConfigDict(frozen=True)

    settings: Dict[Any, Any] = Field(
        default_factory=dict,
        description="Global settings merged into the serialized document"
    )

    components: Dict[str, Component] = Field(
        default_factory=dict,
        description="Components keyed by canonical name"
    )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __contains__(self, name: Identifier) -> bool:
        return canonical_name(name) in self.components

    def __len__(self) -> int:
        return len(self.components)

    def get(self, name: Identifier) -> Optional[Component]:
        return self.components.get(canonical_name(name))

    def names(self, kind: Optional[ComponentKind] = None) -> List[str]:
        """Sorted component names, optionally restricted to one kind"""
        if kind is None:
            return sorted(self.components)
        kind = ComponentKind(kind)
        return sorted(n for n, c in self.components.items() if c.kind == kind)

    def require(self, name: Identifier) -> Component:
        """Get a component or raise ComponentNotFound"""
        key = canonical_name(name)
        component = self.components.get(key)
        if component is None:
            raise ComponentNotFound(key, graph=self)
        return component

    def upstream(self, name: Identifier) -> List[str]:
        """Names the component consumes from"""
        return self.require(name).sorted_inputs()

    def downstream(self, name: Identifier) -> List[str]:
        """Names of components consuming from the component"""
        key = canonical_name(name)
        self.require(key)
        return sorted(n for n, c in self.components.items() if key in c.inputs)

    def validate_topology(self) -> ValidationResult:
        """
        Report topology problems without enforcing anything

        Errors: inputs naming missing components, edges running against
        the kind order (e.g. a sink feeding a transform).
        Warnings: sources with inputs, transforms/sinks without inputs.
        """
        errors: List[str] = []
        warnings: List[str] = []

        for name in sorted(self.components):
            component = self.components[name]

            if component.kind == ComponentKind.SOURCE and component.inputs:
                warnings.append(f"Source '{name}' has inputs: {component.sorted_inputs()}")
            elif component.kind != ComponentKind.SOURCE and not component.inputs:
                warnings.append(f"{component.kind.value.capitalize()} '{name}' has no inputs")

            for input_name in component.sorted_inputs():
                upstream = self.components.get(input_name)
                if upstream is None:
                    errors.append(f"'{name}' consumes from missing component '{input_name}'")
                elif upstream.kind.order > component.kind.order:
                    errors.append(
                        f"'{name}' ({component.kind.value}) consumes from "
                        f"'{input_name}' ({upstream.kind.value})"
                    )

        return ValidationResult(errors=errors, warnings=warnings)

    def to_config(self) -> Dict[Any, Any]:
        """Serialize into the section-grouped configuration document"""
        from .serialization import to_config
        return to_config(self)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _with_components(self, components: Dict[str, Component]) -> "PipelineGraph":
        return self.model_copy(update={"components": components})

    def _add(
        self,
        kind: ComponentKind,
        name: Identifier,
        inputs: Iterable[Identifier],
        config: Optional[Dict[Any, Any]]
    ) -> "PipelineGraph":
        key = canonical_name(name)
        if key in self.components:
            raise DuplicateComponent(key, graph=self, existing=self.components[key])

        component = Component(kind=kind, inputs=canonical_names(inputs), config=config)
        logger.debug(f"Adding {kind.value} '{key}' (inputs: {component.sorted_inputs()})")

        components = dict(self.components)
        components[key] = component
        return self._with_components(components)

    def add_source(self, name: Identifier, config: Optional[Dict[Any, Any]] = None) -> "PipelineGraph":
        """Add a source; sources never take inputs"""
        return self._add(ComponentKind.SOURCE, name, (), config)

    def add_transform(
        self,
        name: Identifier,
        inputs: Iterable[Identifier] = (),
        config: Optional[Dict[Any, Any]] = None
    ) -> "PipelineGraph":
        """Add a transform consuming from `inputs` (kind order not checked)"""
        return self._add(ComponentKind.TRANSFORM, name, inputs, config)

    def add_sink(
        self,
        name: Identifier,
        inputs: Iterable[Identifier] = (),
        config: Optional[Dict[Any, Any]] = None
    ) -> "PipelineGraph":
        """Add a sink consuming from `inputs` (kind order not checked)"""
        return self._add(ComponentKind.SINK, name, inputs, config)

    # ------------------------------------------------------------------
    # Edge editing
    # ------------------------------------------------------------------

    def link(self, name_a: Identifier, name_b: Identifier) -> "PipelineGraph":
        """
        Connect two components, lower kind feeding higher kind

        Argument order does not matter across kinds. For two components of
        the same kind the first argument is upstream. Two sources cannot be
        linked since a source never consumes from anything.
        """
        key_a, key_b = canonical_name(name_a), canonical_name(name_b)
        component_a = self.require(key_a)
        component_b = self.require(key_b)

        if component_b.kind.order < component_a.kind.order:
            (key_a, component_a), (key_b, component_b) = (key_b, component_b), (key_a, component_a)

        if component_b.kind == ComponentKind.SOURCE:
            raise WrongKind(
                key_b, component_b, CONSUMER_KINDS,
                "a source cannot consume from other components", graph=self
            )

        logger.debug(f"Linking '{key_a}' -> '{key_b}'")

        components = dict(self.components)
        components[key_b] = component_b.with_inputs(component_b.inputs | {key_a})
        return self._with_components(components)

    def unlink(self, name_a: Identifier, name_b: Identifier) -> "PipelineGraph":
        """Remove the edge between two components in either direction"""
        key_a, key_b = canonical_name(name_a), canonical_name(name_b)
        component_a = self.require(key_a)
        component_b = self.require(key_b)

        logger.debug(f"Unlinking '{key_a}' <-> '{key_b}'")

        components = dict(self.components)
        components[key_a] = component_a.with_inputs(component_a.inputs - {key_b})
        components[key_b] = components[key_b].with_inputs(components[key_b].inputs - {key_a})
        return self._with_components(components)

    def replace_input(self, name: Identifier, old: Identifier, new: Identifier) -> "PipelineGraph":
        """Swap `old` for `new` in a component's inputs; no-op when `old` is absent"""
        key = canonical_name(name)
        old_key, new_key = canonical_name(old), canonical_name(new)
        component = self.require(key)

        if old_key not in component.inputs:
            return self

        components = dict(self.components)
        components[key] = component.with_inputs((component.inputs - {old_key}) | {new_key})
        return self._with_components(components)

    def inject_transform_before(
        self,
        downstream: Identifier,
        new_name: Identifier,
        config: Optional[Dict[Any, Any]] = None
    ) -> "PipelineGraph":
        """
        Insert a transform in front of `downstream`

        The new transform takes over all of downstream's inputs and becomes
        its only input.
        """
        key = canonical_name(downstream)
        component = self.require(key)

        if component.kind == ComponentKind.SOURCE:
            raise WrongKind(
                key, component, CONSUMER_KINDS,
                "cannot inject a transform before a source", graph=self
            )

        new_key = canonical_name(new_name)
        graph = self.add_transform(new_key, component.inputs, config)

        logger.debug(f"Injected transform '{new_key}' before '{key}'")

        components = dict(graph.components)
        components[key] = component.with_inputs([new_key])
        return graph._with_components(components)

    def inject_transform_after(
        self,
        upstream: Identifier,
        new_name: Identifier,
        config: Optional[Dict[Any, Any]] = None
    ) -> "PipelineGraph":
        """
        Insert a transform behind `upstream`

        The new transform consumes from upstream, and every component that
        consumed from upstream consumes from the new transform instead.
        """
        key = canonical_name(upstream)
        component = self.require(key)

        if component.kind == ComponentKind.SINK:
            raise WrongKind(
                key, component, PRODUCER_KINDS,
                "cannot inject a transform after a sink", graph=self
            )

        new_key = canonical_name(new_name)
        consumers = [name for name in self.downstream(key) if name != key]
        graph = self.add_transform(new_key, [key], config)

        for consumer in consumers:
            graph = graph.replace_input(consumer, key, new_key)

        logger.debug(f"Injected transform '{new_key}' after '{key}' (consumers: {consumers})")
        return graph

    # ------------------------------------------------------------------
    # Whole-component editing
    # ------------------------------------------------------------------

    def remove_component(self, name: Identifier) -> "PipelineGraph":
        """Delete a component and every reference to it; absent names are fine"""
        key = canonical_name(name)

        components = {}
        for other_name, other in self.components.items():
            if other_name == key:
                continue
            if key in other.inputs:
                other = other.with_inputs(other.inputs - {key})
            components[other_name] = other

        if key in self.components:
            logger.debug(f"Removed component '{key}'")
        return self._with_components(components)

    def update_component(
        self,
        name: Identifier,
        f: Callable[[Optional[Component]], UpdateResult]
    ) -> "PipelineGraph":
        """
        Replace a component with `f(current)`

        `current` is None when the name is absent. Returning None removes the
        component the same way remove_component does. The replacement may
        change kind; nothing checks that existing edges still make sense.
        """
        key = canonical_name(name)
        replacement = f(self.components.get(key))

        if replacement is None:
            return self.remove_component(key)

        if isinstance(replacement, Component):
            replacement = Component(
                kind=replacement.kind,
                inputs=replacement.inputs,
                config=replacement.config
            )
        else:
            replacement = Component.model_validate(replacement)

        logger.debug(f"Updated component '{key}' ({replacement.kind.value})")

        components = dict(self.components)
        components[key] = replacement
        return self._with_components(components)

    def rename_component(self, old: Identifier, new: Identifier) -> "PipelineGraph":
        """Move a component to a new name and repoint every reference to it"""
        old_key, new_key = canonical_name(old), canonical_name(new)
        component = self.require(old_key)

        if old_key == new_key:
            return self
        if new_key in self.components:
            raise DuplicateComponent(new_key, graph=self, existing=self.components[new_key])

        components = {}
        for other_name, other in self.components.items():
            if other_name == old_key:
                other_name, other = new_key, component
            if old_key in other.inputs:
                other = other.with_inputs((other.inputs - {old_key}) | {new_key})
            components[other_name] = other

        logger.debug(f"Renamed component '{old_key}' -> '{new_key}'")
        return self._with_components(components)
