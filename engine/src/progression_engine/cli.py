"""CLI for running the progression engine against a snapshot file."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from .config import Config
from .history_aggregator import (
    aggregate_volume_by_muscle,
    aggregate_volume_by_muscle_group,
    aggregate_volume_by_overall_group,
)
from .logging import setup_logging
from .max_lift import extract_max_lift
from .models import exercise_lookup, muscle_lookup, muscle_name_lookup
from .personal_records import personal_record_updates
from .series_builder import build_series
from .snapshot import (
    Snapshot,
    SnapshotError,
    dump_max_lift,
    dump_records,
    dump_series,
    load_snapshot,
)
from .time_frames import TimeFrame, apply_time_frame

logger = logging.getLogger(__name__)

_SNAPSHOT_ARG = click.argument(
    "snapshot_path",
    metavar="SNAPSHOT",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
_OUTPUT_OPT = click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write JSON to a file."
)


def _load(snapshot_path: Path) -> Snapshot:
    try:
        snapshot = load_snapshot(snapshot_path)
    except SnapshotError as exc:
        logger.error("Snapshot rejected (%s)", exc.code, extra={"progression_error_code": exc.code})
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    logger.info(
        "Loaded snapshot %s: %d session(s), %d exercise(s), %d muscle(s)",
        snapshot_path,
        len(snapshot.history),
        len(snapshot.exercises),
        len(snapshot.muscles),
    )
    return snapshot


def _emit(payload: object, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        click.echo(text)
        return
    try:
        output.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        click.echo(f"Error: cannot write {output}: {exc.strerror or exc}", err=True)
        sys.exit(1)
    click.echo(f"Wrote {output}", err=True)


@click.group()
@click.option("--log-format", type=click.Choice(["json", "text"]), help="Override PROGRESSION_LOG_FORMAT.")
@click.option("--log-level", type=str, help="Override PROGRESSION_LOG_LEVEL.")
@click.pass_context
def main(ctx: click.Context, log_format: str | None, log_level: str | None):
    """Muscle volume and max-lift progression from workout history."""
    try:
        config = Config.from_env()
    except RuntimeError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if log_format:
        config = replace(config, log_format=log_format)
    if log_level:
        config = replace(config, log_level=log_level.strip().upper())
    level = config.log_level_number
    if not isinstance(level, int):
        click.echo(f"Error: unknown log level {config.log_level}", err=True)
        sys.exit(1)

    setup_logging(config.log_format, level)
    ctx.obj = config


@main.command()
@_SNAPSHOT_ARG
@click.option(
    "--by",
    "grouping",
    type=click.Choice(["muscle", "muscle-group", "overall-group"]),
    default="muscle",
    show_default=True,
    help="Series key: tiered per-muscle, muscle roll-up, or exercise overall group.",
)
@click.option(
    "--time-frame",
    type=click.Choice([tf.value.replace("_", "-") for tf in TimeFrame]),
    help="Calendar bucketing (defaults to PROGRESSION_TIME_FRAME).",
)
@_OUTPUT_OPT
@click.pass_obj
def volume(
    config: Config,
    snapshot_path: Path,
    grouping: str,
    time_frame: str | None,
    output: Path | None,
):
    """Volume series per muscle or muscle group."""
    snapshot = _load(snapshot_path)
    lookup = exercise_lookup(snapshot.exercises)

    if grouping == "overall-group":
        datasets = build_series(aggregate_volume_by_overall_group(snapshot.history, lookup))
    else:
        per_muscle = aggregate_volume_by_muscle(snapshot.history, lookup)
        if grouping == "muscle-group":
            datasets = build_series(
                aggregate_volume_by_muscle_group(per_muscle, muscle_lookup(snapshot.muscles))
            )
        else:
            datasets = build_series(per_muscle, muscle_name_lookup(snapshot.muscles))

    frame = TimeFrame.parse(time_frame) if time_frame else config.time_frame
    datasets = apply_time_frame(datasets, frame)
    logger.info(
        "Built %d %s series (%s)",
        len(datasets),
        grouping,
        frame.value,
        extra={"progression_command": "volume"},
    )
    _emit(dump_series(datasets), output)


@main.command("max-lift")
@_SNAPSHOT_ARG
@click.option("--exercise", "exercise_id", required=True, help="Exercise id to chart.")
@_OUTPUT_OPT
def max_lift(snapshot_path: Path, exercise_id: str, output: Path | None):
    """Heaviest weight per session for one exercise."""
    snapshot = _load(snapshot_path)
    points = extract_max_lift(snapshot.history, exercise_id)
    if not points:
        logger.info("No sessions contain exercise %s", exercise_id)
    _emit(dump_max_lift(points), output)


@main.command()
@_SNAPSHOT_ARG
@click.option("--session", "session_id", required=True, help="Completed workout id.")
@_OUTPUT_OPT
def records(snapshot_path: Path, session_id: str, output: Path | None):
    """Personal records a completed session would set."""
    snapshot = _load(snapshot_path)
    session = snapshot.session(session_id)
    if session is None:
        click.echo(f"Error: no completed session with id {session_id}", err=True)
        sys.exit(1)
    updates = personal_record_updates(session, exercise_lookup(snapshot.exercises))
    _emit(dump_records(updates), output)


if __name__ == "__main__":
    main()
