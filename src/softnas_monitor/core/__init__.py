"""Core module - configuration, schemas and errors."""

from __future__ import annotations

from softnas_monitor.core.config import load_config, merge_overrides
from softnas_monitor.core.constants import NBSP_ARTIFACT, SIZE_SUFFIX_MULTIPLIERS
from softnas_monitor.core.errors import (
    InvocationError,
    ParseError,
    ResponseError,
    SoftnasError,
    StructuralError,
)
from softnas_monitor.core.schemas import (
    GraphDefinition,
    GraphMetric,
    LoginResponse,
    OverviewRecord,
    OverviewResponse,
    PerfmonRecord,
    PerfmonResponse,
    PluginConfig,
    PoolDetailsResponse,
    PoolRecord,
)

__all__ = [
    "GraphDefinition",
    "GraphMetric",
    "InvocationError",
    "LoginResponse",
    "load_config",
    "merge_overrides",
    "NBSP_ARTIFACT",
    "OverviewRecord",
    "OverviewResponse",
    "ParseError",
    "PerfmonRecord",
    "PerfmonResponse",
    "PluginConfig",
    "PoolDetailsResponse",
    "PoolRecord",
    "ResponseError",
    "SIZE_SUFFIX_MULTIPLIERS",
    "SoftnasError",
    "StructuralError",
]
