"""Canonical Pydantic schemas for protocol extractions and reproducibility scores."""

from .protocol_extraction_v1 import (
    Ambiguity,
    Analysis,
    Contradiction,
    ControlOrReplicate,
    Evidence,
    Material,
    MissingField,
    ProtocolExtractionV1,
    QCCheck,
    Severity,
    Software,
    StatTest,
    Step,
    StepParameters,
)
from .repro_score_v1 import IssueV1, ReproScoreV1, SubscoresV1

__all__ = [
    "Ambiguity",
    "Analysis",
    "Contradiction",
    "ControlOrReplicate",
    "Evidence",
    "IssueV1",
    "Material",
    "MissingField",
    "ProtocolExtractionV1",
    "QCCheck",
    "ReproScoreV1",
    "Severity",
    "Software",
    "StatTest",
    "Step",
    "StepParameters",
    "SubscoresV1",
]
