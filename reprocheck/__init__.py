"""Deterministic reproducibility scoring for structured protocol extractions."""

from reprocheck.scoring import calculate_repro_score

__all__ = ["calculate_repro_score"]
