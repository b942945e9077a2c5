"""Render plugin output in the mackerel-agent plugin format.

Metric lines:  ``<prefix>.<graph>.<metric>\\t<value>\\t<epoch>``
Meta block:    ``# mackerel-agent-plugin`` followed by the JSON graph definition,
printed instead of metric lines when mackerel-agent sets
MACKEREL_AGENT_PLUGIN_META=1.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Mapping
from typing import Any

from softnas_monitor.core.constants import PLUGIN_META_ENV, PLUGIN_META_HEADER
from softnas_monitor.core.schemas import GraphDefinition

logger = logging.getLogger(__name__)


def meta_requested(environ: Mapping[str, str] | None = None) -> bool:
    """True when mackerel-agent asks for graph metadata."""
    env = os.environ if environ is None else environ
    return env.get(PLUGIN_META_ENV, "") == "1"


def format_metric_lines(
    metrics: Mapping[str, float],
    graphs: Mapping[str, GraphDefinition],
    prefix: str,
    timestamp: int | None = None,
) -> list[str]:
    """Render one line per reported metric, in graph-definition order.

    Metrics without a graph series are not reported.
    """
    now = int(time.time()) if timestamp is None else timestamp
    lines: list[str] = []
    reported: set[str] = set()
    for graph_name, graph in graphs.items():
        for metric in graph.metrics:
            if metric.name not in metrics:
                continue
            value = float(metrics[metric.name])
            lines.append(f"{prefix}.{graph_name}.{metric.name}\t{value:f}\t{now}")
            reported.add(metric.name)

    unreported = sorted(set(metrics) - reported)
    if unreported:
        logger.debug(f"Metrics without a graph definition: {', '.join(unreported)}")
    return lines


def graph_definition_payload(
    graphs: Mapping[str, GraphDefinition], prefix: str
) -> dict[str, Any]:
    """Build the JSON document mackerel-agent expects for graph metadata."""
    payload: dict[str, Any] = {}
    for graph_name, graph in graphs.items():
        if not graph.metrics:
            continue
        payload[f"{prefix}.{graph_name}"] = {
            "label": graph.label,
            "unit": graph.unit,
            "metrics": [metric.model_dump() for metric in graph.metrics],
        }
    return {"graphs": payload}


def format_meta(graphs: Mapping[str, GraphDefinition], prefix: str) -> str:
    """Render the meta block announcing the graph definition."""
    return PLUGIN_META_HEADER + "\n" + json.dumps(graph_definition_payload(graphs, prefix))
