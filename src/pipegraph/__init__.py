"""
pipegraph - Pipeline Topology Editor
Build and edit source -> transform -> sink graphs as immutable values and
flatten them into section-grouped configuration documents.
"""

__version__ = "0.1.0"

from pipegraph.core import (
    Component,
    ComponentKind,
    canonical_name,
    GraphError,
    ComponentNotFound,
    DuplicateComponent,
    WrongKind,
    PipelineGraph,
    ValidationResult,
    ConfigDocument,
    begin_config,
    to_config,
    from_config,
    GraphFactory,
    load_yaml,
    save_yaml,
    ConfigBuilder,
)

__all__ = [
    'Component',
    'ComponentKind',
    'canonical_name',
    'GraphError',
    'ComponentNotFound',
    'DuplicateComponent',
    'WrongKind',
    'PipelineGraph',
    'ValidationResult',
    'ConfigDocument',
    'begin_config',
    'to_config',
    'from_config',
    'GraphFactory',
    'load_yaml',
    'save_yaml',
    'ConfigBuilder',
]
