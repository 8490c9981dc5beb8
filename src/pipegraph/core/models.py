from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


Identifier = Union[str, Enum]


def canonical_name(identifier: Identifier) -> str:
    """
    Normalize a component identifier to its canonical string form

    Examples:
        "foo"       -> "foo"
        ":foo"      -> "foo"
        Names.FOO   -> Names.FOO.value (or .name for non-string values)
    """
    if isinstance(identifier, Enum):
        value = identifier.value
        name = value if isinstance(value, str) else identifier.name
    elif isinstance(identifier, str):
        name = identifier[1:] if identifier.startswith(":") else identifier
    else:
        raise TypeError(
            f"Component identifier must be a string or enum member, "
            f"got {type(identifier).__name__}: {identifier!r}"
        )

    if not name:
        raise ValueError(f"Empty component identifier: {identifier!r}")
    return name


def canonical_names(identifiers: Iterable[Identifier]) -> FrozenSet[str]:
    """Normalize a collection of identifiers into a set of canonical names"""
    if isinstance(identifiers, (str, Enum)):
        identifiers = [identifiers]
    return frozenset(canonical_name(i) for i in identifiers)


class ComponentKind(str, Enum):
    """Component category, ordered source < transform < sink"""
    SOURCE = "source"
    TRANSFORM = "transform"
    SINK = "sink"

    @property
    def order(self) -> int:
        return _KIND_ORDER[self]

    @property
    def section(self) -> str:
        """Document section key holding components of this kind"""
        return f"{self.value}s"

    @classmethod
    def ordered(cls) -> list:
        return sorted(cls, key=lambda kind: kind.order)


_KIND_ORDER = {
    ComponentKind.SOURCE: 0,
    ComponentKind.TRANSFORM: 1,
    ComponentKind.SINK: 2,
}


class Component(BaseModel):
    """
    Single named node of the pipeline graph

    The graph owns the name; a component only knows what it is,
    what it consumes from, and its opaque settings.
    """
    model_config = ConfigDict(frozen=True)

    kind: ComponentKind = Field(..., description="source, transform or sink")

    inputs: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Canonical names of the components this one consumes from"
    )

    config: Dict[Any, Any] = Field(
        default_factory=dict,
        description="Component settings, never inspected by the graph"
    )

    @field_validator("inputs", mode="before")
    @classmethod
    def _canonicalize_inputs(cls, value: Any) -> FrozenSet[str]:
        if value is None:
            return frozenset()
        return canonical_names(value)

    @field_validator("config", mode="before")
    @classmethod
    def _default_config(cls, value: Any) -> Any:
        return {} if value is None else value

    def with_inputs(self, inputs: Iterable[Identifier]) -> "Component":
        """Copy of this component with a new input set"""
        return self.model_copy(update={"inputs": canonical_names(inputs)})

    def sorted_inputs(self) -> list[str]:
        return sorted(self.inputs)
