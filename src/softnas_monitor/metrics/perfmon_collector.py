"""PerfmonCollector - ARC cache counters from `softnas-cmd perfmon`.

perfmon returns a window of per-minute samples. Each ARC counter series is
reduced to the mean of its non-zero readings.
"""

from __future__ import annotations

import logging

from softnas_monitor.core.schemas import PerfmonResponse
from softnas_monitor.metrics.base import BaseCollector, MetricMap
from softnas_monitor.metrics.units import average_nonzero

logger = logging.getLogger(__name__)

# Record field -> metric name
ARC_COUNTERS = ("arc_hits", "arc_miss", "arc_read")


class PerfmonCollector(BaseCollector):
    """Collects ARC hit/miss/read counts averaged over the perfmon window."""

    @property
    def name(self) -> str:
        return "perfmon"

    def collect(self) -> MetricMap:
        response = self.command.fetch("perfmon", PerfmonResponse)
        return self.parse(response)

    def parse(self, response: PerfmonResponse) -> MetricMap:
        """Average each ARC counter over the returned samples."""
        records = response.result.records
        if response.result.total != len(records):
            # `total` is unreliable; the series is sized by what actually arrived
            logger.debug(
                f"perfmon declared total={response.result.total} but returned {len(records)} records"
            )

        stat: MetricMap = {}
        for counter in ARC_COUNTERS:
            series = [getattr(record, counter) for record in records]
            stat[counter] = average_nonzero(series)
        return stat
