from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.text import Text

from reprocheck.config import load_run_config, load_runtime_settings
from reprocheck.extraction import ExtractionSchemaError, load_extraction
from reprocheck.report import build_score_payload, render_markdown_report
from reprocheck.schemas import ProtocolExtractionV1, ReproScoreV1
from reprocheck.scoring import calculate_repro_score

app = typer.Typer(help="Reproducibility scoring for structured protocol extractions")
log = logging.getLogger(__name__)


@app.callback()
def _root_callback():
    """reprocheck CLI root."""
    load_dotenv()
    settings = load_runtime_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))


def _load_or_exit(path: Path, strict: bool) -> tuple[ProtocolExtractionV1, List[str]]:
    try:
        return load_extraction(path, strict=strict)
    except ExtractionSchemaError as exc:
        typer.echo(f"ERROR: {exc} ({', '.join(exc.warnings)})", err=True)
        raise typer.Exit(1)


def _emit(text: str, out: Optional[Path]) -> None:
    if out is None:
        typer.echo(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {out}")


def _score_table(payload: Dict[str, Any], score: ReproScoreV1) -> Table:
    title = payload.get("doc_title") or "Protocol"
    verdict = payload["verdict"]["label"]
    table = Table(title=Text(f"{title}: {score.total}/100 ({verdict})"), expand=True)
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Score", justify="right")
    for name, value in payload["score"]["subscores"].items():
        table.add_row(name, str(value))
    for issue in score.top_issues:
        # Issue text comes from the payload and may contain markup brackets
        table.add_row(Text(f"[{issue.severity}] {issue.title}"), Text(issue.linked_field))
    return table


def _run_score(extraction: Path, out: Optional[Path], strict: bool, pretty: bool) -> None:
    model, warnings = _load_or_exit(extraction, strict)
    score = calculate_repro_score(model)
    payload = build_score_payload(model, score, warnings=warnings)
    if pretty and out is None:
        Console().print(_score_table(payload, score))
        return
    settings = load_runtime_settings()
    _emit(json.dumps(payload, indent=settings.json_indent), out)


def _run_report(extraction: Path, out: Optional[Path], strict: bool) -> None:
    model, _ = _load_or_exit(extraction, strict)
    score = calculate_repro_score(model)
    _emit(render_markdown_report(model, score), out)


@app.command("score")
def cmd_score(
    extraction: Path = typer.Argument(..., exists=True, dir_okay=False, help="Extraction JSON (or raw model output)"),
    out: Optional[Path] = typer.Option(None, help="Write the JSON payload here instead of stdout"),
    strict: bool = typer.Option(False, help="Reject payloads that needed JSON repair or unwrapping"),
    pretty: bool = typer.Option(False, help="Render a table instead of JSON (stdout only)"),
):
    """Score an extraction and print the JSON payload."""
    _run_score(extraction, out, strict, pretty)


@app.command("report")
def cmd_report(
    extraction: Path = typer.Argument(..., exists=True, dir_okay=False, help="Extraction JSON (or raw model output)"),
    out: Optional[Path] = typer.Option(None, help="Write the markdown report here instead of stdout"),
    strict: bool = typer.Option(False, help="Reject payloads that needed JSON repair or unwrapping"),
):
    """Score an extraction and render a markdown report."""
    _run_report(extraction, out, strict)


@app.command("validate")
def cmd_validate(
    extraction: Path = typer.Argument(..., exists=True, dir_okay=False, help="Extraction JSON (or raw model output)"),
    strict: bool = typer.Option(False, help="Reject payloads that needed JSON repair or unwrapping"),
):
    """Validate an extraction without scoring it."""
    model, warnings = _load_or_exit(extraction, strict)
    typer.echo(
        json.dumps(
            {
                "valid": True,
                "warnings": warnings,
                "counts": {
                    "materials": len(model.materials),
                    "steps": len(model.steps),
                    "controls_and_replicates": len(model.controls_and_replicates),
                    "qc_checks": len(model.qc_checks),
                    "software": len(model.analysis.software),
                    "ambiguities": len(model.ambiguities),
                    "missing_fields": len(model.missing_fields),
                },
            },
            indent=2,
        )
    )


@app.command("run")
def cmd_run(
    config: Path = typer.Option(..., exists=True, dir_okay=False, help="Path to run config YAML/JSON"),
):
    """Score or report according to a run config file."""
    try:
        cfg = load_run_config(config)
    except (TypeError, ValueError) as exc:
        typer.echo(f"ERROR: invalid config {config}: {exc}", err=True)
        raise typer.Exit(1)
    extraction = Path(cfg.extraction)
    if not extraction.exists():
        typer.echo(f"ERROR: extraction file not found: {extraction}", err=True)
        raise typer.Exit(1)
    out = Path(cfg.out) if cfg.out else None
    log.info("run_config_loaded", extra={"format": cfg.format, "strict": cfg.strict})
    if cfg.format == "markdown":
        _run_report(extraction, out, cfg.strict)
    else:
        _run_score(extraction, out, cfg.strict, pretty=False)


if __name__ == "__main__":
    app()
