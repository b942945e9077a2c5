"""SoftNAS plugin orchestrating one poll-and-report cycle.

A cycle runs strictly in sequence:
1. Log in and obtain a session handle
2. Discover pools
3. Run each collector (overview, perfmon, one per pool)
4. Merge collector outputs into one metric map

Any failure aborts the cycle; partial results are never reported. The
graph-definition request is the exception: if pool discovery fails, the
static graphs are still emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from softnas_monitor.core.errors import SoftnasError
from softnas_monitor.core.schemas import GraphDefinition, PluginConfig
from softnas_monitor.metrics.assembler import merge_metrics
from softnas_monitor.metrics.base import BaseCollector, MetricMap
from softnas_monitor.metrics.overview_collector import OverviewCollector
from softnas_monitor.metrics.perfmon_collector import PerfmonCollector
from softnas_monitor.metrics.pool_collector import PoolIOCollector, list_pools
from softnas_monitor.reporting.graphdef import build_graph_definition
from softnas_monitor.reporting.mackerel import format_meta, format_metric_lines, meta_requested
from softnas_monitor.runners.command_runner import SoftnasCommand

logger = logging.getLogger(__name__)


class SoftnasPlugin:
    """mackerel-agent plugin for SoftNAS appliances.

    Example:
        ```python
        plugin = SoftnasPlugin(PluginConfig(base_url="https://nas01/softnas"))
        metrics = plugin.fetch_metrics()
        graphs = plugin.graph_definition()
        ```
    """

    def __init__(self, config: PluginConfig, command: SoftnasCommand | None = None) -> None:
        """Initialize the plugin.

        Args:
            config: Plugin configuration
            command: softnas-cmd runner; built from `config` when omitted
        """
        self.config = config
        self.command = command or SoftnasCommand(
            config.command,
            config.base_url,
            timeout_seconds=config.timeout_seconds,
        )
        self.pools: list[str] | None = None

    def connect(self) -> str:
        """Log in once per cycle and return the session handle."""
        if self.command.session_id is None:
            self.command.login(self.config.user, self.config.password)
        return self.command.session_id

    def discover_pools(self) -> list[str]:
        """Discover pools once per cycle."""
        if self.pools is None:
            self.connect()
            self.pools = list_pools(self.command)
        return self.pools

    def collectors(self) -> list[BaseCollector]:
        """Collectors for this cycle, in reporting order."""
        collectors: list[BaseCollector] = [
            OverviewCollector(self.command),
            PerfmonCollector(self.command),
        ]
        collectors.extend(PoolIOCollector(self.command, pool) for pool in self.discover_pools())
        return collectors

    def fetch_metrics(self) -> MetricMap:
        """Run a full poll cycle and return the merged metric map.

        Raises:
            SoftnasError: If login, discovery or any collector fails
        """
        self.connect()
        results: list[MetricMap] = []
        for collector in self.collectors():
            logger.debug(f"Running collector {collector.name}")
            stat = collector.collect()
            logger.debug(f"Collector {collector.name} produced {len(stat)} metrics")
            results.append(stat)

        metrics = merge_metrics(results)
        logger.info(f"Collected {len(metrics)} metrics from {len(results)} collectors")
        return metrics

    def graph_definition(self) -> dict[str, GraphDefinition]:
        """Graph metadata including the series of every discovered pool."""
        return build_graph_definition(self.discover_pools())

    def report(self, environ: Mapping[str, str] | None = None, timestamp: int | None = None) -> str:
        """Produce the text mackerel-agent reads from stdout.

        Args:
            environ: Environment to check for the meta request (default: os.environ)
            timestamp: Epoch seconds for metric lines (default: now)
        """
        prefix = self.config.metric_prefix
        if meta_requested(environ):
            try:
                graphs = self.graph_definition()
            except SoftnasError as e:
                # Static graphs stay valid without a session; only pool series are lost
                logger.warning(f"Pool discovery failed, emitting graphs without pool series: {e}")
                graphs = build_graph_definition(())
            return format_meta(graphs, prefix)

        metrics = self.fetch_metrics()
        lines = format_metric_lines(metrics, self.graph_definition(), prefix, timestamp)
        return "\n".join(lines)
