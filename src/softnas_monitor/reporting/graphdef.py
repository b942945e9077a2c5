"""Graph metadata handed to mackerel-agent.

GRAPH_DEFINITIONS is built once at import and is read-only. Pool series
depend on discovery, so `build_graph_definition` returns a new mapping with
the `pooliops` graph filled in for the pools of the current cycle.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from softnas_monitor.core.schemas import GraphDefinition, GraphMetric
from softnas_monitor.metrics.units import metric_name

POOL_IOPS_GRAPH = "pooliops"


def _used_free(prefix: str, stacked: bool = False) -> tuple[GraphMetric, ...]:
    return (
        GraphMetric(name=f"{prefix}_used", label="Used", stacked=stacked),
        GraphMetric(name=f"{prefix}_free", label="Free", stacked=stacked),
    )


GRAPH_DEFINITIONS: Mapping[str, GraphDefinition] = MappingProxyType(
    {
        "storagename": GraphDefinition(
            label="SoftNas Storage Size",
            unit="bytes",
            metrics=_used_free("storagename"),
        ),
        "storagedata": GraphDefinition(
            label="SoftNas Storage Usage",
            unit="percentage",
            metrics=_used_free("storagedata"),
        ),
        "memoryname": GraphDefinition(
            label="SoftNas Cache Memory Size",
            unit="bytes",
            metrics=_used_free("memoryname", stacked=True),
        ),
        "memorydata": GraphDefinition(
            label="SoftNas Cache Memory Usage",
            unit="percentage",
            metrics=_used_free("memorydata", stacked=True),
        ),
        "numberofarccache": GraphDefinition(
            label="SoftNas ARC Cache",
            unit="float",
            metrics=(
                GraphMetric(name="arc_hits", label="Hits"),
                GraphMetric(name="arc_miss", label="Miss"),
                GraphMetric(name="arc_read", label="Read"),
            ),
        ),
        POOL_IOPS_GRAPH: GraphDefinition(
            label="SoftNas Read/Write Pool IOPS",
            unit="iops",
            metrics=(),
        ),
    }
)


def pool_metrics(pools: Iterable[str]) -> tuple[GraphMetric, ...]:
    """Read/write IOPS series for each pool, in discovery order.

    Series names use `metric_name(pool)`; labels keep the pool name as listed.
    """
    metrics: list[GraphMetric] = []
    for pool in pools:
        key = metric_name(pool)
        metrics.append(GraphMetric(name=f"{key}_read_iops", label=f"{pool} Read_IOPS"))
        metrics.append(GraphMetric(name=f"{key}_write_iops", label=f"{pool} Write_IOPS"))
    return tuple(metrics)


def build_graph_definition(pools: Iterable[str] = ()) -> dict[str, GraphDefinition]:
    """Return the graph definition for a cycle that discovered `pools`.

    Args:
        pools: Pool names in discovery order

    Returns:
        New mapping of graph name to definition; GRAPH_DEFINITIONS is untouched
    """
    graphs = dict(GRAPH_DEFINITIONS)
    base = graphs[POOL_IOPS_GRAPH]
    graphs[POOL_IOPS_GRAPH] = base.model_copy(update={"metrics": base.metrics + pool_metrics(pools)})
    return graphs
