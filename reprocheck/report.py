from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from reprocheck.constants import SCHEMA_VERSION
from reprocheck.schemas import ProtocolExtractionV1, ReproScoreV1
from reprocheck.verdicts import classify_score

_CATEGORY_LABELS = (
    ("materials", "Materials"),
    ("parameters", "Parameters"),
    ("controls", "Controls"),
    ("qc", "QC Checks"),
    ("analysis", "Analysis"),
)


def build_score_payload(
    extraction: ProtocolExtractionV1,
    score: ReproScoreV1,
    *,
    warnings: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """JSON-ready summary of a scored extraction (camelCase score keys)."""
    label, summary = classify_score(score.total)
    return {
        "schema_version": SCHEMA_VERSION,
        "doc_title": extraction.doc_title,
        "experiment_template": extraction.experiment_template,
        "score": score.model_dump(by_alias=True),
        "verdict": {"label": label, "summary": summary},
        "warnings": list(warnings or []),
    }


def render_markdown_report(
    extraction: ProtocolExtractionV1,
    score: ReproScoreV1,
    *,
    generated_on: Optional[date] = None,
) -> str:
    day = generated_on or date.today()
    label, summary = classify_score(score.total)
    subscores = score.subscores

    lines: List[str] = [
        f"# {extraction.doc_title or 'Protocol'} Reproducibility Report",
        f"**Date:** {day.isoformat()}",
        f"**Overall Reproducibility Score:** {score.total}/100 ({label})",
        "",
        summary,
    ]
    if extraction.objective:
        lines += ["", "## Objective", extraction.objective]

    lines += ["", "## Reproducibility Scorecard"]
    for attr, title in _CATEGORY_LABELS:
        lines.append(f"- **{title}:** {getattr(subscores, attr)}/100")
    lines.append(f"- **Ambiguity Penalty:** {subscores.ambiguity_penalty} pts")

    lines += ["", "## Top Issues"]
    if score.top_issues:
        for issue in score.top_issues:
            lines.append(f"- [{issue.severity}] {issue.title}: {issue.details} ({issue.linked_field})")
    else:
        lines.append("None")

    if extraction.contradictions:
        lines += ["", "## Contradictions"]
        lines += [f"- {c.description}" for c in extraction.contradictions]

    return "\n".join(lines) + "\n"


__all__ = ["build_score_payload", "render_markdown_report"]
