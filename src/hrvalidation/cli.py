"\"\"\"Typer CLI entrypoint for candidate validation status tracking.\"\"\""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger
from .schemas.config import load_config

app = typer.Typer(help="Candidate validation status CLI.")

LOG_FORMATS = ("json", "console")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_hint="--config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


@app.command()
def resolve(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidates JSONL path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    log_format: str = typer.Option("json", help="Log output format: json or console."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Recompute every candidate status from its validation history."""
    if log_format not in LOG_FORMATS:
        raise typer.BadParameter(f"Expected one of {', '.join(LOG_FORMATS)}", param_hint="--log-format")
    settings = _load_settings(config)
    configure_logging(log_level, renderer=log_format)

    pipeline = create_container(settings=settings).pipeline()
    results = pipeline.resolve_all(
        candidates_path=candidates,
        output_path=output,
        audit_logger=AuditLogger(audit_log) if audit_log else None,
    )
    typer.echo(f"Resolved {len(results)} candidates. Results saved to {output}.")


@app.command()
def submit(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidates JSONL path."),
    submissions: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Submissions JSONL path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    log_format: str = typer.Option("json", help="Log output format: json or console."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Apply reviewer submissions in order and write the updated candidates."""
    if log_format not in LOG_FORMATS:
        raise typer.BadParameter(f"Expected one of {', '.join(LOG_FORMATS)}", param_hint="--log-format")
    settings = _load_settings(config)
    configure_logging(log_level, renderer=log_format)

    pipeline = create_container(settings=settings).pipeline()
    results = pipeline.apply_submissions(
        candidates_path=candidates,
        submissions_path=submissions,
        output_path=output,
        audit_logger=AuditLogger(audit_log) if audit_log else None,
    )
    typer.echo(f"Processed submissions for {len(results)} candidates. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
