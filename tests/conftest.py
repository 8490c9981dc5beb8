"""
Pytest configuration and shared fixtures for pipegraph tests.
"""

import pytest
from typing import Dict, Any


# ============================================================
# DOCUMENT FIXTURES
# ============================================================

@pytest.fixture
def global_settings() -> Dict[str, Any]:
    """Top-level settings not tied to any component."""
    return {
        "data_dir": "/var/lib/pipeline",
        "api": {"enabled": True, "address": "127.0.0.1:8686"},
    }


@pytest.fixture
def pipeline_document(global_settings) -> Dict[str, Any]:
    """Serialized document with one component of each kind plus a fan-in sink."""
    return {
        **global_settings,
        "sources": {
            "app_logs": {"type": "file", "include": ["/var/log/app/*.log"]},
            "metrics": {"type": "host_metrics"},
        },
        "transforms": {
            "parse": {"type": "remap", "source": ". = parse_json!(.message)", "inputs": ["app_logs"]},
        },
        "sinks": {
            "console": {"type": "console", "encoding": {"codec": "json"}, "inputs": ["parse"]},
            "archive": {"type": "aws_s3", "bucket": "logs", "inputs": ["metrics", "parse"]},
        },
    }


# ============================================================
# GRAPH FIXTURES
# ============================================================

@pytest.fixture
def empty_graph():
    """Graph with no settings and no components."""
    from pipegraph.core.serialization import begin_config
    return begin_config()


@pytest.fixture
def simple_graph():
    """s1 -> t1 -> k1"""
    from pipegraph.core.serialization import begin_config
    return (
        begin_config()
        .add_source("s1", {})
        .add_transform("t1", ["s1"], {})
        .add_sink("k1", ["t1"], {})
    )


@pytest.fixture
def fan_out_graph():
    """s1 feeds t1 and k2 directly; t1 feeds k1."""
    from pipegraph.core.serialization import begin_config
    return (
        begin_config({"data_dir": "/tmp"})
        .add_source("s1", {"type": "stdin"})
        .add_transform("t1", ["s1"], {"type": "filter"})
        .add_sink("k1", ["t1"], {"type": "console"})
        .add_sink("k2", ["s1"], {"type": "blackhole"})
    )


@pytest.fixture
def pipeline_graph(pipeline_document):
    """Graph loaded from pipeline_document."""
    from pipegraph.core.serialization import from_config
    return from_config(pipeline_document)
