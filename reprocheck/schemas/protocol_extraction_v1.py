from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._helpers import coerce_string_list, none_to_list

Severity = Literal["blocker", "major", "minor"]
MaterialCategory = Literal["reagent", "equipment", "software", "consumable", "other"]
ExperimentTemplate = Literal["general", "cell_culture", "sequencing", "microscopy", "crispr", "other"]


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class Evidence(_Record):
    """A verbatim quote from the source protocol and where it was found."""

    quote: str
    location: Optional[str] = None


class _Evidenced(_Record):
    evidence: List[Evidence] = Field(default_factory=list)

    @field_validator("evidence", mode="before")
    @classmethod
    def _evidence_list(cls, value: object) -> object:
        return none_to_list(value)


class Material(_Evidenced):
    name: str
    category: MaterialCategory = "other"
    vendor: Optional[str] = None
    # catalog number, RRID, lot or version
    identifier: Optional[str] = None
    notes: Optional[str] = None


class StepParameters(_Record):
    time: Optional[str] = None
    temperature: Optional[str] = None
    volume: Optional[str] = None
    concentration: Optional[str] = None
    speed: Optional[str] = None
    other: Optional[str] = None

    def populated(self) -> int:
        """Number of parameter fields carrying a value."""
        values = (self.time, self.temperature, self.volume, self.concentration, self.speed, self.other)
        return sum(1 for value in values if value is not None)


class Step(_Evidenced):
    step_id: str
    phase: Optional[str] = None
    action: str
    parameters: StepParameters = Field(default_factory=StepParameters)
    notes: Optional[str] = None

    @field_validator("parameters", mode="before")
    @classmethod
    def _default_parameters(cls, value: object) -> object:
        return {} if value is None else value


class ControlOrReplicate(_Evidenced):
    type: str
    description: str


class QCCheck(_Evidenced):
    measurement: str
    acceptance_criteria: Optional[str] = None
    when: Optional[str] = None


class Software(_Evidenced):
    name: str
    version: Optional[str] = None


class StatTest(_Evidenced):
    test: str
    details: Optional[str] = None


class Analysis(_Record):
    software: List[Software] = Field(default_factory=list)
    stats: List[StatTest] = Field(default_factory=list)

    @field_validator("software", "stats", mode="before")
    @classmethod
    def _lists(cls, value: object) -> object:
        return none_to_list(value)


class Ambiguity(_Evidenced):
    text: str
    reason: str


class MissingField(_Record):
    field: str
    severity: Severity
    why_it_matters: str

    @field_validator("severity", mode="before")
    @classmethod
    def _lower_severity(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class Contradiction(_Evidenced):
    description: str


class ProtocolExtractionV1(_Record):
    """Structured view of a methods section, as returned by the extraction model."""

    doc_title: Optional[str] = None
    experiment_template: ExperimentTemplate = "general"
    organisms_or_samples: List[str] = Field(default_factory=list)
    objective: Optional[str] = None

    materials: List[Material] = Field(default_factory=list)
    steps: List[Step] = Field(default_factory=list)
    controls_and_replicates: List[ControlOrReplicate] = Field(default_factory=list)
    qc_checks: List[QCCheck] = Field(default_factory=list)
    analysis: Analysis = Field(default_factory=Analysis)
    ambiguities: List[Ambiguity] = Field(default_factory=list)
    missing_fields: List[MissingField] = Field(default_factory=list)
    contradictions: List[Contradiction] = Field(default_factory=list)

    @field_validator("organisms_or_samples", mode="before")
    @classmethod
    def _clean_samples(cls, value: object) -> List[str]:
        return coerce_string_list(value)

    @field_validator(
        "materials",
        "steps",
        "controls_and_replicates",
        "qc_checks",
        "ambiguities",
        "missing_fields",
        "contradictions",
        mode="before",
    )
    @classmethod
    def _lists(cls, value: object) -> object:
        return none_to_list(value)

    @field_validator("analysis", mode="before")
    @classmethod
    def _default_analysis(cls, value: object) -> object:
        return {} if value is None else value


__all__ = [
    "Ambiguity",
    "Analysis",
    "Contradiction",
    "ControlOrReplicate",
    "Evidence",
    "ExperimentTemplate",
    "Material",
    "MaterialCategory",
    "MissingField",
    "ProtocolExtractionV1",
    "QCCheck",
    "Severity",
    "Software",
    "StatTest",
    "Step",
    "StepParameters",
]
