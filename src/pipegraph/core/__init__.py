from .models import (
    Component,
    ComponentKind,
    Identifier,
    canonical_name,
    canonical_names
)
from .errors import (
    GraphError,
    ComponentNotFound,
    DuplicateComponent,
    WrongKind
)
from .graph import PipelineGraph, ValidationResult
from .serialization import (
    ConfigDocument,
    SECTION_KEYS,
    begin_config,
    to_config,
    from_config
)
from .factory import GraphFactory, load_yaml, save_yaml
from .builders import ConfigBuilder

__all__ = [
    'Component',
    'ComponentKind',
    'Identifier',
    'canonical_name',
    'canonical_names',

    'GraphError',
    'ComponentNotFound',
    'DuplicateComponent',
    'WrongKind',

    'PipelineGraph',
    'ValidationResult',

    'ConfigDocument',
    'SECTION_KEYS',
    'begin_config',
    'to_config',
    'from_config',

    'GraphFactory',
    'load_yaml',
    'save_yaml',

    'ConfigBuilder',
]
