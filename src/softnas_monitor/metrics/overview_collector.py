"""OverviewCollector - storage and cache-memory capacity from `softnas-cmd overview`.

The overview action returns four records, two storage rows and two memory
rows, each pairing a descriptor ("44.8G Free\\n(100.0%)") with a percentage.
Rows are matched by field and descriptor wording rather than by position,
and a response missing any of the four is rejected as a StructuralError.
"""

from __future__ import annotations

import logging

from softnas_monitor.core.errors import StructuralError
from softnas_monitor.core.schemas import OverviewRecord, OverviewResponse
from softnas_monitor.metrics.base import BaseCollector, MetricMap
from softnas_monitor.metrics.units import convert_size, first_token

logger = logging.getLogger(__name__)

EXPECTED_RECORDS = 4


def _classify(descriptor: str) -> str | None:
    """Return "free" or "used" based on the descriptor wording."""
    words = descriptor.split()
    if "Free" in words:
        return "free"
    if "Used" in words:
        return "used"
    return None


def _pick(records: list[OverviewRecord], kind: str) -> dict[str, tuple[str, float]]:
    """Group storage or memory rows by free/used.

    Args:
        records: All overview records
        kind: "storage" or "memory"

    Returns:
        Mapping of "free"/"used" to (descriptor, percentage)
    """
    picked: dict[str, tuple[str, float]] = {}
    for record in records:
        descriptor = getattr(record, f"{kind}_name")
        percentage = getattr(record, f"{kind}_data")
        if descriptor is None:
            continue
        slot = _classify(descriptor)
        if slot is None:
            logger.debug(f"Ignoring unrecognized {kind} descriptor {descriptor!r}")
            continue
        if slot in picked:
            raise StructuralError(f"Duplicate {kind} '{slot}' record in overview response")
        if percentage is None:
            raise StructuralError(f"overview {kind} '{slot}' record has no percentage")
        picked[slot] = (descriptor, percentage)
    return picked


class OverviewCollector(BaseCollector):
    """Collects storage/memory size (bytes) and usage (percent)."""

    @property
    def name(self) -> str:
        return "overview"

    def collect(self) -> MetricMap:
        response = self.command.fetch("overview", OverviewResponse)
        return self.parse(response)

    def parse(self, response: OverviewResponse) -> MetricMap:
        """Project an overview envelope into metrics.

        Raises:
            StructuralError: If a storage or memory free/used record is missing
            ParseError: If a size descriptor cannot be converted
        """
        records = response.result.records
        if len(records) < EXPECTED_RECORDS:
            raise StructuralError(
                f"overview returned {len(records)} records, expected {EXPECTED_RECORDS}"
            )

        stat: MetricMap = {}
        for kind in ("storage", "memory"):
            picked = _pick(records, kind)
            for slot in ("free", "used"):
                if slot not in picked:
                    raise StructuralError(f"overview response has no {kind} '{slot}' record")
                descriptor, percentage = picked[slot]
                stat[f"{kind}name_{slot}"] = convert_size(first_token(descriptor))
                stat[f"{kind}data_{slot}"] = percentage

        return stat
