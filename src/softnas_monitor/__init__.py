"""SoftNAS Monitor - mackerel-agent plugin package."""

from __future__ import annotations

from softnas_monitor.core.errors import (
    InvocationError,
    ParseError,
    ResponseError,
    SoftnasError,
    StructuralError,
)
from softnas_monitor.core.schemas import PluginConfig
from softnas_monitor.metrics.assembler import merge_metrics
from softnas_monitor.metrics.units import average_nonzero, convert_size
from softnas_monitor.plugin import SoftnasPlugin

__version__ = "0.1.0"

__all__ = [
    "InvocationError",
    "ParseError",
    "PluginConfig",
    "ResponseError",
    "SoftnasError",
    "SoftnasPlugin",
    "StructuralError",
    "average_nonzero",
    "convert_size",
    "merge_metrics",
    "__version__",
]
