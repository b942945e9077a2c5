"""Pydantic schemas for the SoftNAS monitor.

This module defines the data contracts used throughout the plugin: the
plugin configuration, the softnas-cmd response envelopes, and the graph
metadata handed to mackerel-agent.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from softnas_monitor.core.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_COMMAND,
    DEFAULT_METRIC_PREFIX,
    DEFAULT_PASSWORD,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER,
)


class PluginConfig(BaseModel):
    """Runtime configuration for one poll cycle.

    Attributes:
        command: Path of the softnas-cmd executable
        base_url: SoftNAS web API base URL passed through to softnas-cmd
        user: Login user
        password: Login password
        timeout_seconds: Per-invocation timeout for softnas-cmd
        metric_prefix: First component of every reported graph key
    """

    command: str = Field(default=DEFAULT_COMMAND, min_length=1, description="Path of softnas-cmd")
    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1, description="URL of softnas-cmd")
    user: str = Field(default=DEFAULT_USER, description="User of softnas-cmd")
    password: str = Field(default=DEFAULT_PASSWORD, description="Password of softnas-cmd")
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, ge=1, description="softnas-cmd invocation timeout"
    )
    metric_prefix: str = Field(
        default=DEFAULT_METRIC_PREFIX, pattern=r"^[A-Za-z0-9_-]+$", description="Graph key prefix"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base_url without a trailing slash."""
        return v.rstrip("/") or v


# =============================================================================
# softnas-cmd RESPONSE ENVELOPES
# =============================================================================


class LoginResponse(BaseModel):
    """Envelope returned by `softnas-cmd login`."""

    success: bool = True
    session_id: int | None = None
    result: dict[str, Any] = Field(default_factory=dict)


class OverviewRecord(BaseModel):
    """One capacity row: either a storage or a memory descriptor/percentage pair."""

    storage_name: str | None = None
    storage_data: float | None = None
    memory_name: str | None = None
    memory_data: float | None = None


class PerfmonRecord(BaseModel):
    """One per-minute performance sample. Only the ARC counters are read."""

    arc_hits: float = 0.0
    arc_miss: float = 0.0
    arc_read: float = 0.0

    @field_validator("arc_hits", "arc_miss", "arc_read", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        """An empty minute slot may come back as null."""
        return 0.0 if v is None else v


class PoolRecord(BaseModel):
    """One pooldetails row. Rates arrive as decimal strings or plain numbers."""

    model_config = {"populate_by_name": True}

    name: str = ""
    read_iops: str | float = Field(default="", alias="read_IOPS")
    write_iops: str | float = Field(default="", alias="write_IOPS")


class OverviewResult(BaseModel):
    success: bool = True
    msg: str = ""
    records: list[OverviewRecord] = Field(default_factory=list)
    total: int = 0


class PerfmonResult(BaseModel):
    success: bool = True
    msg: str = ""
    records: list[PerfmonRecord] = Field(default_factory=list)
    total: int = 0


class PoolDetailsResult(BaseModel):
    success: bool = True
    msg: str = ""
    records: list[PoolRecord] = Field(default_factory=list)
    total: int = 0


class OverviewResponse(BaseModel):
    """Envelope returned by `softnas-cmd overview`."""

    success: bool = True
    session_id: int | None = None
    result: OverviewResult = Field(default_factory=OverviewResult)


class PerfmonResponse(BaseModel):
    """Envelope returned by `softnas-cmd perfmon`."""

    success: bool = True
    session_id: int | None = None
    result: PerfmonResult = Field(default_factory=PerfmonResult)


class PoolDetailsResponse(BaseModel):
    """Envelope returned by `softnas-cmd pooldetails`."""

    success: bool = True
    session_id: int | None = None
    result: PoolDetailsResult = Field(default_factory=PoolDetailsResult)


# =============================================================================
# GRAPH METADATA
# =============================================================================


class GraphMetric(BaseModel):
    """A single series within a graph."""

    model_config = {"frozen": True}

    name: str = Field(..., min_length=1)
    label: str
    diff: bool = False
    stacked: bool = False


class GraphDefinition(BaseModel):
    """Rendering metadata for one graph, consumed by mackerel-agent."""

    model_config = {"frozen": True}

    label: str
    unit: str = Field(..., description="float, integer, percentage, bytes, bytes/sec or iops")
    metrics: tuple[GraphMetric, ...] = ()
