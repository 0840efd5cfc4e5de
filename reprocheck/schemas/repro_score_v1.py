from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .protocol_extraction_v1 import Severity


class _Frozen(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class IssueV1(_Frozen):
    severity: Severity
    title: str
    details: str
    linked_field: str = Field(..., alias="linkedField")


class SubscoresV1(_Frozen):
    materials: int = Field(..., ge=0, le=100)
    parameters: int = Field(..., ge=0, le=100)
    controls: int = Field(..., ge=0, le=100)
    qc: int = Field(..., ge=0, le=100)
    analysis: int = Field(..., ge=0, le=100)
    ambiguity_penalty: int = Field(..., ge=-10, le=0, alias="ambiguityPenalty")

    def categories(self) -> List[int]:
        """The five equally weighted category scores, in display order."""
        return [self.materials, self.parameters, self.controls, self.qc, self.analysis]


class ReproScoreV1(_Frozen):
    """Reproducibility score for one protocol extraction.

    Serialise with ``model_dump(by_alias=True)`` to get the camelCase keys
    (``ambiguityPenalty``, ``topIssues``, ``linkedField``) used by display
    clients.
    """

    total: int = Field(..., ge=0, le=100)
    subscores: SubscoresV1
    top_issues: List[IssueV1] = Field(default_factory=list, max_length=5, alias="topIssues")


__all__ = ["IssueV1", "ReproScoreV1", "SubscoresV1"]
