"""softnas-cmd runner.

This module owns every interaction with the SoftNAS management CLI:
- Argument construction (action, positional args, session and base URL flags)
- Blocking execution with an explicit timeout
- Decoding the JSON response envelope into a pydantic model

softnas-cmd is outside our control, so each call is bounded by
`timeout_seconds` and every failure is raised as a typed error.
"""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from softnas_monitor.core.constants import DEFAULT_TIMEOUT_SECONDS
from softnas_monitor.core.errors import InvocationError, ResponseError
from softnas_monitor.core.schemas import LoginResponse

logger = logging.getLogger(__name__)

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


@dataclass
class CommandResult:
    """Result from one softnas-cmd execution."""

    action: str
    returncode: int
    stdout: str
    stderr: str
    duration_seconds: float


class SoftnasCommand:
    """Invokes softnas-cmd actions for a single poll cycle.

    Example:
        ```python
        command = SoftnasCommand("/usr/local/bin/softnas-cmd", "https://localhost/softnas")
        command.login("softnas", "Pass4W0rd")
        overview = command.fetch("overview", OverviewResponse)
        ```
    """

    def __init__(
        self,
        command: str,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session_id: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            command: Path of the softnas-cmd executable
            base_url: SoftNAS base URL passed as --base_url
            timeout_seconds: Upper bound for each invocation
            session_id: Session handle from a previous login, if any
        """
        self.command = command
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.session_id = session_id

    def build_args(self, action: str, *args: str) -> list[str]:
        """Build the argv for a session-scoped action."""
        if self.session_id is None:
            raise InvocationError(f"No session for '{action}': login first", action=action)
        return [
            self.command,
            action,
            *args,
            "--session_id",
            self.session_id,
            "--base_url",
            self.base_url,
        ]

    def run(self, argv: list[str], action: str, secret: str | None = None) -> CommandResult:
        """Execute softnas-cmd and return its captured output.

        Args:
            argv: Full argument vector, executable first
            action: Action name, used for logging and errors
            secret: Argument to mask in log output

        Raises:
            InvocationError: If the command is missing, times out or exits non-zero
        """
        shown = " ".join("****" if secret is not None and a == secret else a for a in argv)
        logger.debug(f"Running: {shown}")

        start = time.monotonic()
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=True,
            )
        except subprocess.TimeoutExpired as e:
            raise InvocationError(
                f"softnas-cmd {action} timed out after {self.timeout_seconds}s", action=action
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise InvocationError(
                f"softnas-cmd {action} exited with status {e.returncode}: {stderr or 'no output'}",
                action=action,
                returncode=e.returncode,
                stderr=stderr,
            ) from e
        except OSError as e:
            raise InvocationError(
                f"Could not execute {self.command}: {e}", action=action
            ) from e

        duration = time.monotonic() - start
        logger.debug(f"softnas-cmd {action} finished in {duration:.2f}s")
        return CommandResult(
            action=action,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
            duration_seconds=duration,
        )

    def decode(self, result: CommandResult, model: type[EnvelopeT]) -> EnvelopeT:
        """Validate softnas-cmd stdout against an envelope model.

        Raises:
            ResponseError: If stdout is not JSON, does not fit the model,
                or the envelope reports failure
        """
        try:
            envelope = model.model_validate_json(result.stdout)
        except ValidationError as e:
            snippet = result.stdout.strip()[:200]
            raise ResponseError(
                f"Invalid {result.action} response ({e.error_count()} errors): {snippet!r}"
            ) from e

        if not getattr(envelope, "success", True):
            inner = getattr(envelope, "result", None)
            msg = getattr(inner, "msg", "") or "no message"
            raise ResponseError(f"softnas-cmd {result.action} reported failure: {msg}")
        return envelope

    def fetch(self, action: str, model: type[EnvelopeT], *args: str) -> EnvelopeT:
        """Run a session-scoped action and decode its envelope."""
        result = self.run(self.build_args(action, *args), action)
        return self.decode(result, model)

    def login(self, user: str, password: str) -> str:
        """Exchange credentials for a session handle and keep it for later calls.

        Raises:
            InvocationError: If softnas-cmd fails
            ResponseError: If the response carries no session_id
        """
        argv = [self.command, "login", user, password, "--base_url", self.base_url]
        result = self.run(argv, "login", secret=password)
        envelope = self.decode(result, LoginResponse)
        if envelope.session_id is None:
            raise ResponseError("softnas-cmd login response has no session_id")

        self.session_id = str(envelope.session_id)
        logger.info(f"Logged in to {self.base_url} as {user}")
        return self.session_id


def resolve_session(
    command: str,
    base_url: str,
    user: str,
    password: str,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """Convenience function returning a fresh session handle."""
    return SoftnasCommand(command, base_url, timeout_seconds=timeout_seconds).login(user, password)
