"""Click CLI for dbgate — inspect settings and exercise the gate."""

from __future__ import annotations

import asyncio
import logging
import sys
import time

import click
import yaml
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from dbgate.concurrency.gate import ConcurrencyGate
from dbgate.config.defaults import DEFAULT_LOG_LEVEL
from dbgate.config.hierarchy import load_settings
from dbgate.config.schema import GateSettings
from dbgate.errors.exceptions import GateError

console = Console()
error_console = Console(stderr=True)


def _resolve_log_level(verbosity: int, base_level: str = DEFAULT_LOG_LEVEL) -> int:
    """Pick the log level: -v / -vv win over the configured level."""
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    return logging.getLevelName(base_level.upper())


def _setup_logging(verbosity: int, base_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure logging based on verbosity level and configured log level."""
    logging.basicConfig(
        level=_resolve_log_level(verbosity, base_level),
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


class SimulationResult(BaseModel):
    limit: int
    operations: int
    succeeded: int = 0
    failed: int = 0
    peak_concurrency: int = 0
    start_order: list[int] = Field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def fifo(self) -> bool:
        return self.start_order == sorted(self.start_order)


async def simulate_load(
    gate: ConcurrencyGate,
    operations: int,
    delay: float = 0.01,
    fail_every: int = 0,
) -> SimulationResult:
    """Push ``operations`` synthetic calls through ``gate`` and record what happened."""
    result = SimulationResult(limit=gate.limit, operations=operations)
    in_flight = 0

    async def fake_query(index: int) -> int:
        nonlocal in_flight
        result.start_order.append(index)
        in_flight += 1
        result.peak_concurrency = max(result.peak_concurrency, in_flight)
        try:
            await asyncio.sleep(delay)
            if fail_every and (index + 1) % fail_every == 0:
                raise RuntimeError(f"simulated failure in operation {index}")
            return index
        finally:
            in_flight -= 1

    started = time.monotonic()
    outcomes = await asyncio.gather(
        *(gate.run(lambda i=i: fake_query(i)) for i in range(operations)),
        return_exceptions=True,
    )
    result.elapsed_seconds = time.monotonic() - started

    for outcome in outcomes:
        if isinstance(outcome, Exception):
            result.failed += 1
        else:
            result.succeeded += 1
    return result


@click.group()
@click.version_option(package_name="dbgate")
def cli() -> None:
    """dbgate — bounded-concurrency gate for async database calls."""


def _load_settings_or_exit(**overrides: object) -> GateSettings:
    try:
        return load_settings(**overrides)
    except ValidationError as e:
        error_console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(1)


@cli.command("config")
@click.option("--limit", type=int, default=None, help="Override the concurrency limit.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def show_config(limit: int | None, verbose: int) -> None:
    """Show resolved gate settings."""
    settings = _load_settings_or_exit(concurrency_limit=limit)
    _setup_logging(verbose, settings.log_level)

    table = Table(title="Gate Settings", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("concurrency_limit", str(settings.concurrency_limit))
    table.add_row("log_level", settings.log_level)

    console.print(table)


@cli.command()
@click.option("-n", "--operations", type=int, default=100, show_default=True,
              help="Number of operations to submit.")
@click.option("--limit", type=int, default=None, help="Gate limit (default: resolved config).")
@click.option("--delay", type=float, default=0.01, show_default=True,
              help="Seconds each operation takes.")
@click.option("--fail-every", type=int, default=0,
              help="Make every Nth operation fail (0 = never).")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def simulate(
    operations: int,
    limit: int | None,
    delay: float,
    fail_every: int,
    verbose: int,
) -> None:
    """Run synthetic operations through a fresh gate and summarize."""
    settings = _load_settings_or_exit()
    _setup_logging(verbose, settings.log_level)

    if limit is None:
        limit = settings.concurrency_limit

    try:
        gate = ConcurrencyGate(limit)
        result = asyncio.run(simulate_load(gate, operations, delay, fail_every))
    except GateError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    _print_summary(result)


def _print_summary(result: SimulationResult) -> None:
    table = Table(title="Simulation Summary", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Limit", str(result.limit))
    table.add_row("Operations", str(result.operations))
    table.add_row("Succeeded", str(result.succeeded))
    failed = f"[yellow]{result.failed}[/yellow]" if result.failed else "0"
    table.add_row("Failed", failed)
    table.add_row("Peak concurrency", str(result.peak_concurrency))
    table.add_row("FIFO admission", "yes" if result.fifo else "[red]no[/red]")
    table.add_row("Elapsed", f"{result.elapsed_seconds:.2f}s")

    console.print(table)


@cli.command("validate-config")
@click.argument("config_yaml", type=click.Path(exists=True))
def validate_config(config_yaml: str) -> None:
    """Validate a settings YAML file."""
    from dbgate.config.loader import load_settings_yaml

    try:
        settings = load_settings_yaml(config_yaml)
    except (ValueError, yaml.YAMLError) as e:
        error_console.print(f"[red]Invalid config:[/red] {e}")
        sys.exit(1)

    console.print(f"[green]Valid config:[/green] concurrency_limit={settings.concurrency_limit}")
    console.print(f"  log_level: {settings.log_level}")


def main() -> None:
    """Entry point for the CLI."""
    cli()
