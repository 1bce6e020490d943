"""Turn raw completion text into a validated ExtractionResult."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import ValidationError

from ..core.errors import ParseError
from ..models.extraction import ExtractionResult
from ..utils.json_extractor import iter_json_objects
from .validation import ValidationService

_SHAPE_MISMATCH = "Completion JSON does not match the expected product shape"


@lru_cache(maxsize=1)
def get_validation_service() -> ValidationService:
    return ValidationService()


def _model_issues(exc: ValidationError) -> List[Dict[str, str]]:
    return [
        {"path": "/" + "/".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def parse_completion(text: str, validation: Optional[ValidationService] = None) -> ExtractionResult:
    """Locate the product object in ``text`` and build the result.

    Every JSON object in the text is tried in turn; the first one with the
    product shape wins, so stray objects in surrounding prose are skipped.
    Raises ParseError carrying the raw text when no object is found or none
    matches, reporting the issues of the first candidate. Values are never
    coerced (``"14499"`` is not a price).
    """

    validation = validation or get_validation_service()
    first_issues: Optional[List[Dict[str, str]]] = None

    for payload in iter_json_objects(text):
        is_valid, issues = validation.validate(payload)
        if is_valid:
            try:
                return ExtractionResult.model_validate(payload)
            except ValidationError as exc:
                candidate_issues = _model_issues(exc)
        else:
            candidate_issues = [issue.to_dict() for issue in issues]
        if first_issues is None:
            first_issues = candidate_issues

    if first_issues is None:
        raise ParseError("No JSON object found in completion", raw_text=text)
    raise ParseError(_SHAPE_MISMATCH, raw_text=text, errors=first_issues)
