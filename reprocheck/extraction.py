from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Tuple, Union

from pydantic import ValidationError

from reprocheck.json_utils import extract_and_validate, validate_payload
from reprocheck.schemas import ProtocolExtractionV1

log = logging.getLogger(__name__)

ExtractionSource = Union[ProtocolExtractionV1, Mapping[str, Any], Path, str]


class ExtractionSchemaError(ValueError):
    def __init__(self, warnings: List[str], detail: str | None = None):
        message = "Protocol extraction failed schema validation"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.warnings = warnings


def load_extraction(source: ExtractionSource, *, strict: bool = False) -> Tuple[ProtocolExtractionV1, List[str]]:
    """
    Validate an extraction payload before it is trusted for scoring.

    ``source`` may be a parsed model, a mapping, a path to a JSON/text file or
    the raw model output itself. Fenced or wrapped JSON is repaired and the
    repair is reported in the returned warnings; with ``strict`` any such
    warning is treated as a failure.
    """
    if isinstance(source, ProtocolExtractionV1):
        return source, []
    try:
        if isinstance(source, Mapping):
            model, warnings = validate_payload(dict(source), ProtocolExtractionV1)
        else:
            text = source.read_text(encoding="utf-8") if isinstance(source, Path) else source
            model, warnings = extract_and_validate(text, ProtocolExtractionV1)
    except ValidationError as exc:
        raise ExtractionSchemaError(["schema_validation_failed"], f"{exc.error_count()} error(s)") from exc
    except ValueError as exc:
        raise ExtractionSchemaError(["json_parse_failed"], str(exc)) from exc

    if warnings:
        log.warning("extraction_repaired", extra={"warnings": list(warnings), "strict": strict})
        if strict:
            raise ExtractionSchemaError(list(warnings), "strict mode rejects repaired payloads")
    return model, list(warnings)


__all__ = ["ExtractionSchemaError", "ExtractionSource", "load_extraction"]
