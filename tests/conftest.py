"""
Pytest configuration and fixtures for reproducibility scoring tests.

Provides scenario payloads, from fully specified protocols down to sparse
ones, plus a helper to write payloads to disk for CLI and loader tests.
"""
from __future__ import annotations

import json                                                  # JSON handling
import sys                                                   # Import path setup
from pathlib import Path                                     # Filesystem paths
from typing import Any, Dict                                 # Type hints

import pytest                                                 # Testing framework

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from _samples import (                                       # noqa: E402  Payload builders
    ambiguity,
    control,
    extraction_payload,
    material,
    qc_check,
    software,
    step,
)


# =============================================================================
# Scenario Fixtures
# =============================================================================

@pytest.fixture
def complete_payload() -> Dict[str, Any]:                   # Fully specified protocol
    """Every category fully specified, no ambiguities."""   # Fixture purpose
    return extraction_payload(
        materials=[material(f"m{i}", vendor="Sigma", identifier=f"CAT-{i}") for i in range(3)],
        steps=[step(str(i), time="10 min", temperature="37 C") for i in range(3)],
        controls=[control("biological", "All samples run in triplicate")],
        qc=[qc_check("ratio >= 1.8")],
        software_list=[software("1.54f")],
    )


@pytest.fixture
def sparse_payload() -> Dict[str, Any]:                     # Under-specified protocol
    """Unidentified materials, a bare step, three ambiguities."""  # Fixture purpose
    return extraction_payload(
        materials=[material("buffer"), material("enzyme")],
        steps=[step("1")],
        ambiguities=[ambiguity(i) for i in range(3)],
    )


@pytest.fixture
def write_payload(tmp_path: Path):                          # Payload-to-file helper
    """Write a payload (dict or raw text) to a file and return its path."""  # Fixture purpose
    def _write(payload: Any, name: str = "extraction.json") -> Path:
        path = tmp_path / name
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path
    return _write
