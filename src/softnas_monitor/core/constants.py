"""Shared constants for the SoftNAS monitor.

Centralized constants to avoid duplication and ensure consistency across modules.
"""

from __future__ import annotations

# Defaults mirror a stock SoftNAS install
DEFAULT_COMMAND = "/usr/local/bin/softnas-cmd"
DEFAULT_BASE_URL = "https://localhost/softnas"
DEFAULT_USER = "softnas"
DEFAULT_PASSWORD = "Pass4W0rd"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_METRIC_PREFIX = "softnas"

# Binary multipliers for size-token suffixes (K, M, G, T)
SIZE_SUFFIX_MULTIPLIERS: dict[str, int] = {
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
}

# pooldetails emits decorative sub-rows whose name carries this HTML entity
NBSP_ARTIFACT = "&nbsp;"

# Environment variable set by mackerel-agent when it requests graph metadata
PLUGIN_META_ENV = "MACKEREL_AGENT_PLUGIN_META"
PLUGIN_META_HEADER = "# mackerel-agent-plugin"
