from __future__ import annotations

import json

import pytest

from reprocheck.extraction import ExtractionSchemaError, load_extraction
from reprocheck.json_utils import (
    extract_and_validate,
    strip_markdown_json,
    unwrap_payload,
)
from reprocheck.schemas import ProtocolExtractionV1
from _samples import extraction_payload, material


def test_strip_markdown_json_drops_fences_and_prose():
    text = 'Here is the extraction:\n```json\n{"materials": []}\n```\nLet me know.'
    assert strip_markdown_json(text) == '{"materials": []}'


def test_strip_markdown_json_requires_json():
    with pytest.raises(ValueError):
        strip_markdown_json("no payload here")


def test_unwrap_payload_peels_wrappers():
    inner = {"materials": [], "steps": []}
    assert unwrap_payload({"result": {"extraction": inner}}) == inner
    assert unwrap_payload([inner]) == inner
    assert unwrap_payload({"data": json.dumps(inner)}) == inner


def test_unwrap_payload_leaves_extraction_alone():
    inner = {"materials": [], "data": {"materials": []}}
    assert unwrap_payload(inner) is inner


def test_extract_and_validate_reports_repairs():
    raw = "```json\n" + json.dumps({"response": extraction_payload()}) + "\n```"
    model, warnings = extract_and_validate(raw, ProtocolExtractionV1)
    assert isinstance(model, ProtocolExtractionV1)
    assert "json_repaired_simple" in warnings
    assert "payload_unwrapped" in warnings


def test_load_extraction_from_mapping_and_model():
    payload = extraction_payload(materials=[material("agarose", vendor="Bio-Rad")])
    model, _ = load_extraction(payload)
    assert model.materials[0].vendor == "Bio-Rad"
    same, warnings = load_extraction(model)
    assert same is model
    assert warnings == []


def test_load_extraction_from_path(write_payload):
    path = write_payload(extraction_payload())
    model, _ = load_extraction(path)
    assert model.doc_title == "Plasmid miniprep"


def test_load_extraction_wraps_validation_errors():
    with pytest.raises(ExtractionSchemaError) as excinfo:
        load_extraction({"materials": [{"category": "reagent"}]})
    assert excinfo.value.warnings == ["schema_validation_failed"]
    assert isinstance(excinfo.value, ValueError)


def test_load_extraction_wraps_json_errors():
    with pytest.raises(ExtractionSchemaError) as excinfo:
        load_extraction("not json at all")
    assert excinfo.value.warnings == ["json_parse_failed"]


def test_strict_mode_rejects_repaired_payload():
    raw = "```json\n" + json.dumps(extraction_payload()) + "\n```"
    model, warnings = load_extraction(raw)
    assert warnings == ["json_repaired_simple"]
    with pytest.raises(ExtractionSchemaError) as excinfo:
        load_extraction(raw, strict=True)
    assert excinfo.value.warnings == ["json_repaired_simple"]
