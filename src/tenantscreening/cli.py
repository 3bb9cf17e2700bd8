"""Typer CLI entrypoint for applicant screening."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml

from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger
from .schemas.config import load_config

app = typer.Typer(help="Applicant risk screening and listing match CLI.")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    try:
        return load_config(loaded).to_settings()
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


def _build_pipeline(config: Optional[Path], log_level: str):
    settings = _load_settings(config)
    configure_logging(log_level)
    return create_container(settings=settings).pipeline()


@app.command()
def screen(
    applicant: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Applicant identity JSON path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Screening report output path."),
    deadline: Optional[float] = typer.Option(None, min=0.1, help="Overall provider deadline in seconds."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Screen an applicant and store the normalized report."""
    pipeline = _build_pipeline(config, log_level)
    report = pipeline.screen_file(
        applicant_path=applicant,
        output_path=output,
        deadline_s=deadline,
        audit_logger=AuditLogger(audit_log) if audit_log else None,
    )
    typer.echo(f"Screened {report.applicant_id} ({report.source}). Report saved to {output}.")


@app.command()
def match(
    report: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Stored screening report JSON path."),
    listing: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Listing JSON path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Match result output path."),
    income: Optional[float] = typer.Option(None, min=0, help="Applicant's stated monthly income."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Score a stored report against one listing without re-screening."""
    pipeline = _build_pipeline(config, log_level)
    result = pipeline.match_file(
        report_path=report,
        listing_path=listing,
        output_path=output,
        monthly_income=income,
    )
    typer.echo(f"Match score {result['match_score']} ({result['match_color']}). Result saved to {output}.")


@app.command()
def apply(
    applicant: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Applicant identity JSON path."),
    listings: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Listings JSONL path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    income: Optional[float] = typer.Option(None, min=0, help="Applicant's stated monthly income."),
    deadline: Optional[float] = typer.Option(None, min=0.1, help="Overall provider deadline in seconds."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Screen an applicant once and score the report against every listing."""
    pipeline = _build_pipeline(config, log_level)
    results = pipeline.run(
        applicant_path=applicant,
        listings_path=listings,
        output_path=output,
        monthly_income=income,
        deadline_s=deadline,
        audit_logger=AuditLogger(audit_log) if audit_log else None,
    )
    typer.echo(f"Scored {len(results)} listings. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
