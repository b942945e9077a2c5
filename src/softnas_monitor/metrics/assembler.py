"""Merge independent collector outputs into the map reported to mackerel-agent."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from softnas_monitor.metrics.base import MetricMap


def merge_metrics(maps: Iterable[Mapping[str, float]]) -> MetricMap:
    """Merge metric maps in order; on a key collision the later map wins.

    Example:
        >>> merge_metrics([{"a": 1}, {"a": 2, "b": 3}])
        {'a': 2, 'b': 3}
    """
    merged: MetricMap = {}
    for metrics in maps:
        merged.update(metrics)
    return merged
