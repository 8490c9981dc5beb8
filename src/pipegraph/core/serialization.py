"""
Conversion between PipelineGraph and the configuration document.

Document shape:
```yaml
    data_dir: /var/lib/pipeline      # global settings
    sources:
      in: {type: file}
    transforms:
      parse: {type: json, inputs: [in]}
    sinks:
      out: {type: console, inputs: [parse]}
```
"""

from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, Field, model_validator
import logging

from .graph import PipelineGraph
from .models import ComponentKind

logger = logging.getLogger(__name__)


SOURCES = ComponentKind.SOURCE.section
TRANSFORMS = ComponentKind.TRANSFORM.section
SINKS = ComponentKind.SINK.section
SECTION_KEYS = (SOURCES, TRANSFORMS, SINKS)

INPUTS_KEY = "inputs"


def _empty_entries(value: Any) -> Any:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {name: ({} if entry is None else entry) for name, entry in value.items()}
    return value


class ConsumerEntry(BaseModel):
    """
    Transform or sink entry: settings plus the names it consumes from

    Built from the raw entry mapping; `inputs` is split off and the
    remaining keys, whatever their type, are kept as settings.
    """

    inputs: List[str] = Field(
        default_factory=list,
        description="Names of upstream components"
    )

    settings: Dict[Any, Any] = Field(
        default_factory=dict,
        description="Component settings without `inputs`"
    )

    @model_validator(mode="before")
    @classmethod
    def _split_inputs(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        settings = dict(value)
        inputs = settings.pop(INPUTS_KEY, None)
        return {"inputs": [] if inputs is None else inputs, "settings": settings}


class ConfigDocument(BaseModel):
    """
    Shape check for an incoming configuration document

    Top-level keys besides the three sections are collected into
    `settings` and become the graph's global settings.
    """

    settings: Dict[Any, Any] = Field(default_factory=dict)

    sources: Dict[str, Dict[Any, Any]] = Field(default_factory=dict)
    transforms: Dict[str, ConsumerEntry] = Field(default_factory=dict)
    sinks: Dict[str, ConsumerEntry] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _split_settings(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        document = {"settings": {k: v for k, v in value.items() if k not in SECTION_KEYS}}
        for key in SECTION_KEYS:
            if key in value:
                document[key] = _empty_entries(value[key])
        return document


def begin_config(settings: Optional[Mapping[Any, Any]] = None) -> PipelineGraph:
    """Start an empty graph carrying the given global settings"""
    return PipelineGraph(settings=dict(settings or {}))


def to_config(graph: PipelineGraph) -> Dict[Any, Any]:
    """
    Flatten a graph into the configuration document

    Global settings come first, then one section per kind. Transforms and
    sinks get an `inputs` list in lexicographic order; sources are emitted
    with their settings only.
    """
    document: Dict[Any, Any] = deepcopy(dict(graph.settings))
    sections: Dict[str, Dict[str, Any]] = {kind.section: {} for kind in ComponentKind.ordered()}

    for name in sorted(graph.components):
        component = graph.components[name]
        entry = deepcopy(component.config)

        if component.kind != ComponentKind.SOURCE:
            entry[INPUTS_KEY] = component.sorted_inputs()

        sections[component.kind.section][name] = entry

    document.update(sections)
    return document


def from_config(document: Mapping[Any, Any]) -> PipelineGraph:
    """
    Rebuild a graph from a configuration document

    Sections are applied sources, then transforms, then sinks, so name
    clashes surface as DuplicateComponent exactly as with direct adds.
    Source entries are kept verbatim as config.
    """
    parsed = ConfigDocument.model_validate(dict(document))

    graph = begin_config(parsed.settings)

    for name, entry in parsed.sources.items():
        graph = graph.add_source(name, deepcopy(entry))

    for name, entry in parsed.transforms.items():
        graph = graph.add_transform(name, entry.inputs, deepcopy(entry.settings))

    for name, entry in parsed.sinks.items():
        graph = graph.add_sink(name, entry.inputs, deepcopy(entry.settings))

    logger.debug(
        f"Loaded graph: {len(parsed.sources)} sources, "
        f"{len(parsed.transforms)} transforms, {len(parsed.sinks)} sinks"
    )
    return graph
