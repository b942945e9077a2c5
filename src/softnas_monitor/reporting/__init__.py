"""Reporting module - graph metadata and mackerel-agent output."""

from __future__ import annotations

from softnas_monitor.reporting.graphdef import (
    GRAPH_DEFINITIONS,
    POOL_IOPS_GRAPH,
    build_graph_definition,
    pool_metrics,
)
from softnas_monitor.reporting.mackerel import (
    format_meta,
    format_metric_lines,
    graph_definition_payload,
    meta_requested,
)

__all__ = [
    "GRAPH_DEFINITIONS",
    "POOL_IOPS_GRAPH",
    "build_graph_definition",
    "format_meta",
    "format_metric_lines",
    "graph_definition_payload",
    "meta_requested",
    "pool_metrics",
]
