from __future__ import annotations

import json
import re
from typing import Any, List, Tuple, Type

from pydantic import BaseModel, ValidationError

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.IGNORECASE | re.DOTALL)
_WRAPPER_KEYS = ("extraction", "protocol", "response", "result", "output", "data", "payload", "content")
# Any of these at the top level means we are looking at the extraction itself.
_SIGNAL_KEYS = {
    "materials",
    "steps",
    "controls_and_replicates",
    "qc_checks",
    "analysis",
    "ambiguities",
    "missing_fields",
}


def strip_markdown_json(text: str) -> str:
    """Remove Markdown fences and discard text outside the first JSON block."""

    if text is None:
        raise ValueError("Input text must not be None")
    trimmed = text.strip()
    if not trimmed:
        raise ValueError("Input text must not be empty")

    match = _FENCE_RE.search(trimmed)
    if match:
        trimmed = match.group(1).strip()

    start_char = "{" if "{" in trimmed else ("[" if "[" in trimmed else None)
    if start_char is None:
        raise ValueError("No JSON object/array found in text")
    end_char = "}" if start_char == "{" else "]"
    start_idx = trimmed.find(start_char)
    end_idx = trimmed.rfind(end_char)
    if start_idx == -1 or end_idx == -1 or end_idx < start_idx:
        raise ValueError("Malformed JSON payload")
    return trimmed[start_idx : end_idx + 1]


def _maybe_parse_json_string(value: Any) -> Any:
    if isinstance(value, str):
        candidate = value.strip()
        if candidate.startswith("{") or candidate.startswith("["):
            try:
                return json.loads(candidate)
            except json.JSONDecodeError:
                return value
    return value


def _looks_like_extraction(obj: Any) -> bool:
    return isinstance(obj, dict) and bool(_SIGNAL_KEYS.intersection(obj.keys()))


def unwrap_payload(data: Any) -> Any:
    """Peel wrapper objects (``{"result": {...}}``, stringified JSON, 1-item lists)."""

    current = data
    for _ in range(8):
        if isinstance(current, str):
            parsed = _maybe_parse_json_string(current)
            if parsed is current:
                break
            current = parsed
            continue
        if isinstance(current, list):
            if len(current) == 1:
                current = current[0]
                continue
            break
        if not isinstance(current, dict) or _looks_like_extraction(current):
            break
        next_data: Any = None
        for key in _WRAPPER_KEYS:
            if key not in current:
                continue
            candidate = _maybe_parse_json_string(current[key])
            if isinstance(candidate, (dict, list)):
                next_data = candidate
                break
        if next_data is None:
            break
        current = next_data
    return current


def validate_payload(data: Any, schema_model: Type[BaseModel]) -> Tuple[BaseModel, List[str]]:
    """Validate already-decoded data strictly, falling back to lenient coercion."""

    warnings: List[str] = []
    unwrapped = unwrap_payload(data)
    if unwrapped is not data:
        warnings.append("payload_unwrapped")
    data = unwrapped
    try:
        return schema_model.model_validate(data, strict=True), warnings
    except ValidationError as strict_exc:
        try:
            obj = schema_model.model_validate(data, strict=False)
        except ValidationError as exc:
            raise exc from strict_exc
        warnings.append("validation_coerced")
        return obj, warnings


def extract_and_validate(
    raw_text: str,
    schema_model: Type[BaseModel],
) -> Tuple[BaseModel, List[str]]:
    """Parse raw model output, returning the schema object and warnings."""

    if not raw_text:
        raise ValueError("raw_text must be non-empty")
    warnings: List[str] = []
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        data = json.loads(strip_markdown_json(raw_text))
        warnings.append("json_repaired_simple")
    obj, more = validate_payload(data, schema_model)
    return obj, warnings + more


__all__ = [
    "extract_and_validate",
    "strip_markdown_json",
    "unwrap_payload",
    "validate_payload",
]
