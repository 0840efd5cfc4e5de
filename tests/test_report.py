from __future__ import annotations

from datetime import date

import pytest

from reprocheck.constants import SCHEMA_VERSION
from reprocheck.report import build_score_payload, render_markdown_report
from reprocheck.schemas import ProtocolExtractionV1
from reprocheck.scoring import calculate_repro_score
from reprocheck.verdicts import classify_score
from _samples import ambiguity, build_extraction, missing_field


@pytest.mark.parametrize("total, label", [(100, "High"), (80, "High"), (79, "Moderate"), (50, "Moderate"), (49, "Low"), (0, "Low")])
def test_score_bands(total, label):
    assert classify_score(total)[0] == label
    assert classify_score(total)[1]


def test_build_score_payload(complete_payload):
    extraction = ProtocolExtractionV1.model_validate(complete_payload)
    score = calculate_repro_score(extraction)
    payload = build_score_payload(extraction, score, warnings=["json_repaired_simple"])
    assert payload["schema_version"] == SCHEMA_VERSION
    assert payload["doc_title"] == "Plasmid miniprep"
    assert payload["score"]["total"] == 100
    assert payload["score"]["subscores"]["ambiguityPenalty"] == 0
    assert payload["verdict"]["label"] == "High"
    assert payload["warnings"] == ["json_repaired_simple"]


def test_markdown_report_sections():
    extraction = build_extraction(
        missing=[missing_field("cell passage number", "blocker")],
        ambiguities=[ambiguity(0)],
        contradictions=[{"description": "Step 2 says 37 C, Step 5 says 30 C", "evidence": []}],
        objective="Isolate plasmid DNA",
    )
    score = calculate_repro_score(extraction)
    text = render_markdown_report(extraction, score, generated_on=date(2024, 5, 1))
    assert text.startswith("# Plasmid miniprep Reproducibility Report\n")
    assert "**Date:** 2024-05-01" in text
    assert "**Overall Reproducibility Score:** 0/100 (Low)" in text
    assert "## Objective\nIsolate plasmid DNA" in text
    assert "- **QC Checks:** 0/100" in text
    assert "- **Ambiguity Penalty:** -2 pts" in text
    assert "- [blocker] Missing: cell passage number: cell passage number is required to repeat the run (cell passage number)" in text
    assert "- [major] Ambiguous Instruction: incubate briefly (0) - duration not stated (procedure)" in text
    assert "## Contradictions\n- Step 2 says 37 C, Step 5 says 30 C" in text


def test_markdown_report_without_issues(complete_payload):
    extraction = ProtocolExtractionV1.model_validate(complete_payload)
    text = render_markdown_report(extraction, calculate_repro_score(extraction), generated_on=date(2024, 1, 2))
    assert "## Top Issues\nNone" in text
    assert "## Contradictions" not in text
