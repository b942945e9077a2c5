"""Runners module - softnas-cmd execution."""

from __future__ import annotations

from softnas_monitor.runners.command_runner import CommandResult, SoftnasCommand, resolve_session

__all__ = ["CommandResult", "SoftnasCommand", "resolve_session"]
