"""
`cognitive-insights` command line.

Each command loads ``AppConfig``, sets up logging, then works against the
SQLite store named by ``[database].db_path`` (or ``--db-path``). Heavy imports
happen inside the command bodies so ``--help`` stays fast.

Typical session::

    cognitive-insights --help
    cognitive-insights init-db
    cognitive-insights validate-config
    cognitive-insights import-records --file records.json
    cognitive-insights analyze --user user-123
    cognitive-insights history --user user-123
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="cognitive-insights",
    help="Strengths, weaknesses and narrative insights from cognitive assessments.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Return the loaded ``AppConfig`` or exit 1 with the reason on stderr."""
    from pydantic import ValidationError

    from cognitive_insights.config import load_config

    try:
        return load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config) -> None:
    from cognitive_insights.utils.logging import configure_logging
    configure_logging(config.logging)


def _database_config(config, db_path: Optional[str]):
    if db_path:
        return config.database.model_copy(update={"db_path": db_path})
    return config.database


def _print_result(result) -> None:
    if result.strengths:
        typer.echo("  Strengths:")
        for item in result.strengths:
            typer.echo(f"    - {item.area}: {item.description}")
    if result.weaknesses:
        typer.echo("  Growth areas:")
        for item in result.weaknesses:
            typer.echo(f"    - {item.area}: {item.description}")
    typer.echo(f"  {result.general_insight}")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(
        None, "--db-path", help="Override DB path from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file.",
    ),
) -> None:
    """Create the SQLite database and apply the schema (idempotent)."""
    from cognitive_insights.db.connection import connection_for
    from cognitive_insights.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    db_config = _database_config(config, db_path)

    typer.echo(f"Initializing database at: {db_config.db_path}")
    with connection_for(db_config) as conn:
        apply_schema(conn)

    typer.echo(f"  {len(ALL_TABLE_NAMES)} tables present: {', '.join(ALL_TABLE_NAMES)}")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False, "--full", help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values."""
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration OK:")
    typer.echo(f"  Database path:      {config.database.db_path}")
    typer.echo(f"  Strength threshold: {config.insights.strength_threshold}")
    typer.echo(f"  Max strengths:      {config.insights.max_strengths}")
    typer.echo(f"  Max weaknesses:     {config.insights.max_weaknesses}")
    typer.echo(f"  History limit:      {config.insights.history_limit}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("All settings:")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("import-records")
def import_records(
    records_file: str = typer.Option(
        ..., "--file", "-f", help="Path to a records JSON file.",
    ),
    user_id: Optional[str] = typer.Option(
        None, "--user", help="Owner of the records. Overrides the file's user_id.",
    ),
    db_path: Optional[str] = typer.Option(
        None, "--db-path", help="Override DB path from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Validate records but do not write to the database.",
    ),
) -> None:
    """Import assessments and technique interactions from a JSON file.

    Assessments are upserted by id. Interactions are appended.
    """
    from cognitive_insights.db.connection import connection_for
    from cognitive_insights.db.repositories.assessment_repo import (
        AssessmentRepository,
        TechniqueInteractionRepository,
    )
    from cognitive_insights.db.schema import apply_schema
    from cognitive_insights.ingestion.records_file import load_records_file

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        parsed = load_records_file(Path(records_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if parsed.errors:
        typer.echo(f"[ERROR] {len(parsed.errors)} assessment(s) failed validation:", err=True)
        for idx, msg in parsed.errors[:5]:
            typer.echo(f"  Assessment #{idx}: {msg}", err=True)
        if len(parsed.errors) > 5:
            typer.echo(f"  ... and {len(parsed.errors) - 5} more.", err=True)
        raise typer.Exit(code=1)

    owner = user_id or parsed.user_id
    if not owner:
        typer.echo("[ERROR] No user id: pass --user or set user_id in the file.", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"  Validated {len(parsed.assessments)} assessment(s) and "
        f"{len(parsed.interactions)} interaction(s) for user {owner}."
    )
    if dry_run:
        typer.echo("[DRY RUN] Nothing written to database.")
        return

    with connection_for(_database_config(config, db_path)) as conn:
        apply_schema(conn)
        assessments = AssessmentRepository(conn)
        for record in parsed.assessments:
            assessments.upsert(owner, record)
        interactions = TechniqueInteractionRepository(conn)
        for row in parsed.interactions:
            interactions.insert_raw(owner, row)

    typer.echo("[OK] Records imported.")


@app.command("analyze")
def analyze(
    user_id: str = typer.Option(..., "--user", help="User to analyse."),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for narrative template choice.",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output", help="Also write the result as JSON into this directory.",
    ),
    db_path: Optional[str] = typer.Option(
        None, "--db-path", help="Override DB path from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file.",
    ),
) -> None:
    """Generate (and record) strengths, weaknesses and a narrative for a user."""
    from cognitive_insights.insights.service import InsightService
    from cognitive_insights.insights.store import SqliteInsightStore
    from cognitive_insights.reporting.export import write_insight_json

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    rng = random.Random(seed) if seed is not None else None
    service = InsightService(
        store=SqliteInsightStore(_database_config(config, db_path)),
        config=config.insights,
        rng=rng,
    )
    result = service.get_strengths_and_weaknesses(user_id)

    typer.echo(f"Insights for user {user_id}:")
    _print_result(result)

    if output_dir:
        path = write_insight_json(result, Path(output_dir), user_id)
        typer.echo(f"  Written: {path}")


@app.command("history")
def history(
    user_id: str = typer.Option(..., "--user", help="User whose history to show."),
    csv_path: Optional[str] = typer.Option(
        None, "--csv", help="Also write the history to this CSV file.",
    ),
    db_path: Optional[str] = typer.Option(
        None, "--db-path", help="Override DB path from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file.",
    ),
) -> None:
    """Show previously generated insights for a user, newest first."""
    from cognitive_insights.insights.service import InsightService
    from cognitive_insights.insights.store import SqliteInsightStore
    from cognitive_insights.reporting.export import write_history_csv

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    service = InsightService(
        store=SqliteInsightStore(_database_config(config, db_path)),
        config=config.insights,
    )
    entries = service.get_insight_history(user_id)
    if not entries:
        typer.echo(f"No insight history for user {user_id}.")
        return

    for entry in entries:
        stamp = entry.created_at.isoformat() if entry.created_at else "unsaved"
        typer.echo(f"[{stamp}] assessment={entry.assessment_id}")
        _print_result(entry)

    if csv_path:
        path = write_history_csv(entries, Path(csv_path))
        typer.echo(f"  Written: {path}")


if __name__ == "__main__":
    app()
