"""Base collector abstract class for metrics collection.

Every collector issues exactly one softnas-cmd invocation and projects the
response into a flat metric map. Collectors share no state; the assembler
is their only consumer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from softnas_monitor.runners.command_runner import SoftnasCommand

MetricMap = dict[str, float]


class BaseCollector(ABC):
    """Abstract base class for softnas-cmd metric collectors.

    Implementations:
    - OverviewCollector: storage and cache-memory capacity
    - PerfmonCollector: averaged ARC counters
    - PoolIOCollector: read/write IOPS of a single pool
    """

    def __init__(self, command: SoftnasCommand) -> None:
        """Initialize the collector.

        Args:
            command: Logged-in softnas-cmd runner
        """
        self.command = command

    @abstractmethod
    def collect(self) -> MetricMap:
        """Run the collector's softnas-cmd action and return its metrics.

        Raises:
            SoftnasError: On any invocation, response or parse failure
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this collector."""
        pass
