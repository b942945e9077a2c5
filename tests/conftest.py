"""Shared fixtures for the softnas-cmd tests."""

from __future__ import annotations

import subprocess
from collections.abc import Callable

import pytest

from softnas_responses import FakeSoftnasCmd


@pytest.fixture
def fake_cmd(monkeypatch: pytest.MonkeyPatch) -> FakeSoftnasCmd:
    """Patch subprocess.run inside the runner with a FakeSoftnasCmd."""
    fake = FakeSoftnasCmd()
    monkeypatch.setattr("softnas_monitor.runners.command_runner.subprocess.run", fake)
    return fake


@pytest.fixture
def called_process_error() -> Callable[[str], subprocess.CalledProcessError]:
    """Factory for the error subprocess.run raises on a non-zero exit."""

    def make(action: str) -> subprocess.CalledProcessError:
        return subprocess.CalledProcessError(
            2, ["softnas-cmd", action], output="", stderr="Session expired"
        )

    return make
