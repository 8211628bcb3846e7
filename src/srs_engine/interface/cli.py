"""srs-engine CLI: run the scheduling core over JSON records."""

import dataclasses
import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
from pydantic import BaseModel, TypeAdapter, ValidationError

from srs_engine.application.config import resolve_config
from srs_engine.application.factory import build_batch_processor, build_calculator
from srs_engine.application.queue_builder import build_review_queue
from srs_engine.application.stats.metrics_calculator import AnalyticsAggregator
from srs_engine.domain.errors import SchedulingError
from srs_engine.interface.schemas import BatchItemIn, ReviewLogEntryIn, SchedulableItemIn

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="srs-engine: SM-2 spaced-repetition scheduling core.",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Manage srs-engine configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _emit(payload: Any) -> None:
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        payload = dataclasses.asdict(payload)
    elif isinstance(payload, list):
        payload = [
            dataclasses.asdict(p) if dataclasses.is_dataclass(p) else p for p in payload
        ]
    typer.echo(json.dumps(payload, indent=2, default=_json_default))


def _read_records(source: str, model: type[BaseModel]) -> list[Any]:
    """Read a JSON array from a file path (or '-' for stdin) and validate it."""
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as e:
        typer.secho(f"Cannot read {source}: {e}", fg="red", err=True)
        raise typer.Exit(2)
    try:
        records = TypeAdapter(list[model]).validate_json(text)
    except ValidationError as e:
        typer.secho(f"Invalid input: {e}", fg="red", err=True)
        raise typer.Exit(2)
    return [r.to_domain() for r in records]


def _parse_now(now: str | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(now)
    except ValueError:
        typer.secho(f"Invalid --now timestamp: {now!r}", fg="red", err=True)
        raise typer.Exit(2)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _fail(e: SchedulingError) -> NoReturn:
    typer.secho(f"Error: {e}", fg="red", err=True)
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
):
    """Global settings for srs-engine."""
    config = resolve_config({"log_level": "DEBUG" if verbose else None})
    logging.getLogger().setLevel(config.log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def review(
    ctx: typer.Context,
    quality: Annotated[int, typer.Argument(help="Recall quality, 0-5.")],
    repetitions: Annotated[int, typer.Option(help="Prior successful repetitions.")] = 0,
    interval: Annotated[int, typer.Option(help="Prior interval in days.")] = 1,
    ease_factor: Annotated[float, typer.Option(help="Prior ease factor.")] = 2.5,
    now: Annotated[str | None, typer.Option(help="Reference time (ISO 8601).")] = None,
):
    """Compute the next schedule for one item."""
    calc = build_calculator(ctx.obj["config"])
    try:
        result = calc.compute(quality, repetitions, interval, ease_factor, now=_parse_now(now))
    except SchedulingError as e:
        _fail(e)
    _emit(result)


@app.command()
def batch(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="JSON array of items, or '-' for stdin.")],
    now: Annotated[str | None, typer.Option(help="Reference time (ISO 8601).")] = None,
):
    """Compute the next schedule for every item in a batch (all-or-nothing)."""
    items = _read_records(source, BatchItemIn)
    processor = build_batch_processor(ctx.obj["config"])
    try:
        result = processor.compute_batch(items, now=_parse_now(now))
    except SchedulingError as e:
        _fail(e)
    _emit(result)


@app.command()
def queue(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="JSON array of items, or '-' for stdin.")],
    capacity: Annotated[
        int | None, typer.Option(help="Maximum queue length. Defaults to config.")
    ] = None,
    now: Annotated[str | None, typer.Option(help="Reference time (ISO 8601).")] = None,
):
    """Build a ranked queue of due items."""
    items = _read_records(source, SchedulableItemIn)
    cap = ctx.obj["config"].queue_capacity if capacity is None else capacity
    try:
        entries = build_review_queue(items, cap, _parse_now(now))
    except ValueError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(2)
    _emit(entries)


@app.command()
def stats(
    source: Annotated[str, typer.Argument(help="JSON array of log entries, or '-' for stdin.")],
    strict: Annotated[
        bool, typer.Option("--strict", help="Reject the log if any entry is malformed.")
    ] = False,
):
    """Summarize a review log (oldest entry first)."""
    log = _read_records(source, ReviewLogEntryIn)
    try:
        summary = AnalyticsAggregator().summarize(log, strict=strict)
    except SchedulingError as e:
        _fail(e)
    _emit(summary)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    typer.echo(json.dumps(config.model_dump(), indent=2))


def main() -> None:
    app()
