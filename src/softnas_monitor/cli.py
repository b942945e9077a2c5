"""CLI for the SoftNAS monitor.

Runs one poll-and-report cycle and exits. Metric lines (or the graph
metadata block) go to stdout for mackerel-agent; errors go to stderr.
"""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from softnas_monitor.core.config import load_config, merge_overrides
from softnas_monitor.core.errors import SoftnasError
from softnas_monitor.core.schemas import PluginConfig
from softnas_monitor.plugin import SoftnasPlugin
from softnas_monitor.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="softnas-monitor",
    help="mackerel-agent plugin for SoftNAS",
    add_completion=False,
)

err_console = Console(stderr=True)
logger = get_logger(__name__)


@app.command()
def main(
    cmd: str | None = typer.Option(
        None, "--cmd", help="Path of softnas-cmd [default: /usr/local/bin/softnas-cmd]"
    ),
    url: str | None = typer.Option(
        None, "--url", help="URL of softnas-cmd [default: https://localhost/softnas]"
    ),
    user: str | None = typer.Option(None, "--user", help="User of softnas-cmd [default: softnas]"),
    password: str | None = typer.Option(
        None, "--password", help="Password of softnas-cmd [default: Pass4W0rd]"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="softnas-cmd timeout in seconds [default: 30]"
    ),
    prefix: str | None = typer.Option(
        None, "--prefix", help="Metric key prefix [default: softnas]"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="YAML/JSON configuration file; flags override its values"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file in addition to stderr"
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Output logs in JSON format (for programmatic parsing)"
    ),
) -> None:
    """Poll softnas-cmd once and print metrics for mackerel-agent."""
    setup_logging(
        level=log_level, log_file=log_file, json_format=json_logs, rich_console=not json_logs
    )

    overrides = {
        "command": cmd,
        "base_url": url,
        "user": user,
        "password": password,
        "timeout_seconds": timeout,
        "metric_prefix": prefix,
    }
    try:
        base = load_config(config) if config is not None else PluginConfig()
        plugin_config = merge_overrides(base, overrides)
    except (FileNotFoundError, ValueError, ValidationError, yaml.YAMLError) as e:
        err_console.print(f"[bold red]Error loading config:[/] {escape(str(e))}")
        raise typer.Exit(1) from e

    plugin = SoftnasPlugin(plugin_config)
    try:
        output = plugin.report()
    except SoftnasError as e:
        logger.debug("Poll failed", exc_info=True)
        err_console.print(f"[bold red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from e

    if output:
        typer.echo(output)


if __name__ == "__main__":
    app()
