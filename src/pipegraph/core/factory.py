from pathlib import Path
from typing import Any, Mapping
import yaml
import logging

from .graph import PipelineGraph
from .serialization import from_config, to_config

logger = logging.getLogger(__name__)


def load_yaml(path: str | Path) -> dict:
    """Load YAML configuration file"""
    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Configuration file '{path}' must contain a mapping, got {type(data).__name__}"
        )
    return data


def save_yaml(document: Mapping[Any, Any], path: str | Path) -> Path:
    """Write a configuration document to a YAML file"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.safe_dump(dict(document), f, default_flow_style=False, sort_keys=False)

    logger.info(f"Configuration saved to {path}")
    return path


class GraphFactory:
    """Factory for creating graphs from configuration documents"""

    @staticmethod
    def create_from_yaml(config_path: str | Path) -> PipelineGraph:
        """
        Create graph from YAML config

        Example config:
            data_dir: "/var/lib/pipeline"
            sources:
              in: {type: "file", include: ["/var/log/*.log"]}
            transforms:
              parse: {type: "json", inputs: ["in"]}
            sinks:
              out: {type: "console", inputs: ["parse"]}
        """
        graph = from_config(load_yaml(config_path))
        logger.info(f"Loaded {len(graph)} components from {config_path}")
        return graph

    @staticmethod
    def create_from_dict(config_dict: Mapping[Any, Any]) -> PipelineGraph:
        """
        Create graph from dict (for programmatic use)

        Same as create_from_yaml but accepts dict instead of file path
        """
        return from_config(config_dict)

    @staticmethod
    def save(graph: PipelineGraph, config_path: str | Path) -> Path:
        """Serialize graph and write it as YAML"""
        return save_yaml(to_config(graph), config_path)
