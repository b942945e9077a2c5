"""Metrics module - softnas-cmd collectors and value normalization.

Provides collector implementations:
- OverviewCollector: storage and cache-memory capacity
- PerfmonCollector: ARC counters averaged over the perfmon window
- PoolIOCollector: per-pool read/write IOPS

Shared utilities:
- units: size-token conversion and non-zero averaging
- assembler: last-writer-wins merge of collector outputs
"""

from __future__ import annotations

from softnas_monitor.metrics.assembler import merge_metrics
from softnas_monitor.metrics.base import BaseCollector, MetricMap
from softnas_monitor.metrics.overview_collector import OverviewCollector
from softnas_monitor.metrics.perfmon_collector import PerfmonCollector
from softnas_monitor.metrics.pool_collector import (
    PoolIOCollector,
    is_pool_record,
    list_pools,
    pools_from_response,
)
from softnas_monitor.metrics.units import (
    average_nonzero,
    convert_size,
    first_token,
    metric_name,
    parse_rate,
)

__all__ = [
    "BaseCollector",
    "MetricMap",
    "OverviewCollector",
    "PerfmonCollector",
    "PoolIOCollector",
    "average_nonzero",
    "convert_size",
    "first_token",
    "is_pool_record",
    "list_pools",
    "merge_metrics",
    "metric_name",
    "parse_rate",
    "pools_from_response",
]
