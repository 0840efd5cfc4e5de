"""Rule-based reproducibility scoring over a protocol extraction.

Five category subscores (materials, parameters, controls, QC, analysis) are
averaged with equal weight, an ambiguity penalty is added, and the result is
rounded once and clamped to [0, 100]. Missing fields and ambiguities are
ranked separately into a short issue list; they do not affect the total.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from reprocheck.constants import (
    AMBIGUITY_ISSUE_FIELD,
    AMBIGUITY_ISSUE_SEVERITY,
    AMBIGUITY_ISSUE_TITLE,
    AMBIGUITY_PENALTY_FLOOR,
    AMBIGUITY_PENALTY_STEP,
    FULL_CREDIT,
    MAX_TOP_ISSUES,
    MIN_DETAILED_PARAMETERS,
    PARTIAL_CREDIT,
    REPLICATE_KEYWORDS,
    SAMPLE_SIZE_MARKER,
    SEVERITY_WEIGHTS,
)
from reprocheck.schemas import (
    Ambiguity,
    ControlOrReplicate,
    IssueV1,
    Material,
    MissingField,
    ProtocolExtractionV1,
    QCCheck,
    ReproScoreV1,
    Software,
    Step,
    SubscoresV1,
)
from reprocheck.telemetry import timed

log = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending exact halves towards +inf."""
    return int(math.floor(value + 0.5))


def _fraction_score(hits: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up((hits / total) * 100)


def materials_score(materials: Sequence[Material]) -> int:
    identifiable = sum(1 for m in materials if m.vendor is not None or m.identifier is not None)
    return _fraction_score(identifiable, len(materials))


def parameters_score(steps: Sequence[Step]) -> int:
    detailed = sum(1 for s in steps if s.parameters.populated() >= MIN_DETAILED_PARAMETERS)
    return _fraction_score(detailed, len(steps))


def _states_replicates(control: ControlOrReplicate) -> bool:
    description = control.description.lower()
    kind = control.type.lower()
    if any(word in description or word in kind for word in REPLICATE_KEYWORDS):
        return True
    return SAMPLE_SIZE_MARKER in control.description


def controls_score(controls: Sequence[ControlOrReplicate]) -> int:
    if not controls:
        return 0
    return FULL_CREDIT if any(_states_replicates(c) for c in controls) else PARTIAL_CREDIT


def qc_score(checks: Sequence[QCCheck]) -> int:
    if not checks:
        return 0
    return FULL_CREDIT if any(c.acceptance_criteria is not None for c in checks) else PARTIAL_CREDIT


def analysis_score(software: Sequence[Software]) -> int:
    if not software:
        return 0
    return FULL_CREDIT if any(s.version is not None for s in software) else PARTIAL_CREDIT


def ambiguity_penalty(ambiguities: Sequence[Ambiguity]) -> int:
    return max(AMBIGUITY_PENALTY_FLOOR, AMBIGUITY_PENALTY_STEP * len(ambiguities))


def combine_total(categories: Sequence[int], penalty: int) -> int:
    """Mean of the category scores plus the penalty, rounded once and clamped."""
    raw = sum(categories) / len(categories) + penalty
    return max(0, min(100, round_half_up(raw)))


def rank_issues(
    missing_fields: Sequence[MissingField],
    ambiguities: Sequence[Ambiguity],
    limit: int = MAX_TOP_ISSUES,
) -> List[IssueV1]:
    """Missing-field issues then ambiguity issues, most severe first.

    ``sorted`` is stable, so equal severities keep construction order.
    """
    issues: List[IssueV1] = [
        IssueV1(
            severity=f.severity,
            title=f"Missing: {f.field}",
            details=f.why_it_matters,
            linked_field=f.field,
        )
        for f in missing_fields
    ]
    issues.extend(
        IssueV1(
            severity=AMBIGUITY_ISSUE_SEVERITY,
            title=AMBIGUITY_ISSUE_TITLE,
            details=f"{a.text} - {a.reason}",
            linked_field=AMBIGUITY_ISSUE_FIELD,
        )
        for a in ambiguities
    )
    ranked = sorted(issues, key=lambda issue: SEVERITY_WEIGHTS[issue.severity], reverse=True)
    return ranked[:limit]


def calculate_repro_score(extraction: ProtocolExtractionV1) -> ReproScoreV1:
    """Score how completely ``extraction`` specifies what is needed to reproduce it."""
    with timed("repro_score", {"n_steps": len(extraction.steps)}):
        subscores = SubscoresV1(
            materials=materials_score(extraction.materials),
            parameters=parameters_score(extraction.steps),
            controls=controls_score(extraction.controls_and_replicates),
            qc=qc_score(extraction.qc_checks),
            analysis=analysis_score(extraction.analysis.software),
            ambiguity_penalty=ambiguity_penalty(extraction.ambiguities),
        )
        total = combine_total(subscores.categories(), subscores.ambiguity_penalty)
        top_issues = rank_issues(extraction.missing_fields, extraction.ambiguities)
        log.debug(
            "repro_score_computed",
            extra={"total": total, "subscores": subscores.model_dump(), "n_issues": len(top_issues)},
        )
        return ReproScoreV1(total=total, subscores=subscores, top_issues=top_issues)


__all__ = [
    "ambiguity_penalty",
    "analysis_score",
    "calculate_repro_score",
    "combine_total",
    "controls_score",
    "materials_score",
    "parameters_score",
    "qc_score",
    "rank_issues",
    "round_half_up",
]
