"""Typer CLI entrypoint for batch eligibility checks."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .core import OfferingQuery
from .logging import configure_logging
from .pipeline import (
    AuditLogger,
    CandidateLoader,
    CandidateNotFoundError,
    OfferingLoader,
    OfferingLoadError,
)
from .schemas.config import load_config

app = typer.Typer(help="Course and job eligibility CLI.")

_SORT_KEYS = ("newest", "oldest", "title", "deadline", "organization")
_KINDS = ("course", "job")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    try:
        return load_config(loaded).to_settings()
    except (ValueError, ValidationError) as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _check_choice(value: Optional[str], choices: tuple[str, ...], param_name: str) -> None:
    if value is not None and value not in choices:
        raise typer.BadParameter(
            f"Expected one of: {', '.join(choices)}", param_hint=param_name
        )


@app.command()
def check(
    candidate: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidate profile JSON/JSONL path."),
    offerings: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Offerings JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    candidate_id: Optional[str] = typer.Option(None, help="Candidate id to pick from the profile file."),
    eligible_only: bool = typer.Option(False, "--eligible-only", help="Drop offerings the candidate does not qualify for."),
    open_only: bool = typer.Option(False, "--open-only", help="Keep only offerings accepting applications."),
    kind: Optional[str] = typer.Option(None, help="Restrict to one offering kind (course or job)."),
    search: Optional[str] = typer.Option(None, help="Case-insensitive search term."),
    sort_by: Optional[str] = typer.Option(None, help="Sort key: newest, oldest, title, deadline, organization."),
    limit: Optional[int] = typer.Option(None, min=0, help="Maximum number of results."),
    as_of: Optional[str] = typer.Option(None, help="Reference date (ISO) for deadline checks."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Evaluate every offering for one candidate."""
    _check_choice(kind, _KINDS, "kind")
    _check_choice(sort_by, _SORT_KEYS, "sort_by")
    settings = _load_settings(config)

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None
    query = OfferingQuery(
        search=search,
        sort_by=sort_by,
        eligible_only=eligible_only,
        open_only=open_only,
        kind=kind,
        limit=limit,
    )

    try:
        results = pipeline.run(
            candidate_path=candidate,
            offerings_path=offerings,
            output_path=output,
            candidate_id=candidate_id,
            query=query,
            as_of=as_of,
            audit_logger=audit_logger,
        )
    except CandidateNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    qualified = sum(1 for item in results if item["eligibility_status"] == "qualified")
    typer.echo(f"Checked {len(results)} offerings ({qualified} qualified). Results saved to {output}.")


@app.command()
def explain(
    candidate: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidate profile JSON/JSONL path."),
    offerings: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Offerings JSONL path."),
    offering_id: str = typer.Option(..., help="Offering to explain."),
    candidate_id: Optional[str] = typer.Option(None, help="Candidate id to pick from the profile file."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print the requirement lines behind one offering's verdict."""
    settings = _load_settings(config)
    configure_logging(log_level)

    container = create_container(settings=settings)
    registry = container.adapter_registry()
    pipeline = container.pipeline()

    try:
        document = CandidateLoader().load(candidate, candidate_id)
    except CandidateNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    try:
        loaded = OfferingLoader(registry).load(offerings)
    except OfferingLoadError as exc:
        loaded = exc.partial

    matches = [item for item in loaded if item.offering_id == offering_id]
    if not matches:
        typer.echo(f"Offering not found: {offering_id!r}", err=True)
        raise typer.Exit(code=1)

    offering = pipeline.annotate(document, matches)[0]
    verdict = offering.verdict
    typer.echo(f"{offering.title or offering.offering_id} [{offering.kind}]")
    if verdict is None:
        typer.echo("Qualification unknown: no profile data for this offering kind.")
        return
    typer.echo("Qualified" if verdict.qualified else "Not qualified")
    for line in verdict.satisfied:
        typer.echo(f"  + {line}")
    for line in verdict.missing:
        typer.echo(f"  - {line}")
    if verdict.suggestions:
        typer.echo("Suggestions:")
        for line in verdict.suggestions:
            typer.echo(f"  * {line}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
