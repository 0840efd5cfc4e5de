"""Shared helpers for turning a reproducibility total into display labels."""

from __future__ import annotations

from typing import Tuple

VerdictMeta = Tuple[str, str]

HIGH_THRESHOLD = 80
MODERATE_THRESHOLD = 50


def classify_score(total: int) -> VerdictMeta:
    """
    Convert a 0-100 total into user-facing verdict metadata.

    Returns (label, summary).
    """
    if total >= HIGH_THRESHOLD:
        return (
            "High",
            "Excellent protocol. High clarity, specific reagents, and clear controls "
            "make this suitable for immediate replication.",
        )
    if total >= MODERATE_THRESHOLD:
        return (
            "Moderate",
            "This protocol is robust but contains ambiguities. While many steps are clear, "
            "specific controls or analysis versions may be missing.",
        )
    return (
        "Low",
        "This protocol significantly lacks the necessary detail for reproduction. "
        "Key identifiers for materials and quantitative parameters are missing.",
    )
