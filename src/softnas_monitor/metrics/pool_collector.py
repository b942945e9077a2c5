"""Pool discovery and per-pool I/O collection from `softnas-cmd pooldetails`.

pooldetails interleaves real pools with decorative sub-rows whose name
carries an "&nbsp;" entity; those rows are never pools.
"""

from __future__ import annotations

import logging

from softnas_monitor.core.constants import NBSP_ARTIFACT
from softnas_monitor.core.errors import StructuralError
from softnas_monitor.core.schemas import PoolDetailsResponse, PoolRecord
from softnas_monitor.metrics.base import BaseCollector, MetricMap
from softnas_monitor.metrics.units import metric_name, parse_rate
from softnas_monitor.runners.command_runner import SoftnasCommand

logger = logging.getLogger(__name__)


def is_pool_record(record: PoolRecord) -> bool:
    """True for a real pool row, False for placeholder/decorative rows."""
    return bool(record.name.strip()) and NBSP_ARTIFACT not in record.name


def list_pools(command: SoftnasCommand) -> list[str]:
    """Discover the pools to report on, in the order softnas-cmd lists them.

    Args:
        command: Logged-in softnas-cmd runner

    Returns:
        Pool names
    """
    response = command.fetch("pooldetails", PoolDetailsResponse)
    pools = pools_from_response(response)
    logger.info(f"Discovered {len(pools)} pools: {', '.join(pools) or 'none'}")
    return pools


def pools_from_response(response: PoolDetailsResponse) -> list[str]:
    """Extract pool names from a pooldetails envelope, dropping artifact rows."""
    pools: list[str] = []
    for record in response.result.records:
        if not is_pool_record(record):
            logger.debug(f"Skipping pooldetails row {record.name!r}")
            continue
        pools.append(record.name)
    return pools


class PoolIOCollector(BaseCollector):
    """Collects read/write IOPS for a single pool."""

    def __init__(self, command: SoftnasCommand, pool: str) -> None:
        """Initialize the collector.

        Args:
            command: Logged-in softnas-cmd runner
            pool: Pool name, passed to pooldetails as a positional argument
        """
        super().__init__(command)
        self.pool = pool

    @property
    def name(self) -> str:
        return f"pool:{self.pool}"

    def collect(self) -> MetricMap:
        response = self.command.fetch("pooldetails", PoolDetailsResponse, self.pool)
        return self.parse(response)

    def parse(self, response: PoolDetailsResponse) -> MetricMap:
        """Extract this pool's IOPS pair, keyed by the sanitized pool name.

        Raises:
            StructuralError: If the response has no row for this pool
            ParseError: If a rate string is not a number
        """
        for record in response.result.records:
            if record.name == self.pool:
                key = metric_name(self.pool)
                return {
                    f"{key}_read_iops": parse_rate(record.read_iops),
                    f"{key}_write_iops": parse_rate(record.write_iops),
                }
        raise StructuralError(f"pooldetails response has no record for pool '{self.pool}'")
