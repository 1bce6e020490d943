"""Validation service using jsonschema"""
import json
import jsonschema
from typing import List, Dict, Any, Tuple
from pathlib import Path


SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "extraction_result.schema.json"


class ValidationIssue:
    """Validation error detail"""
    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message}


class ValidationService:
    """Validates extracted payloads against the ExtractionResult JSON schema"""

    def __init__(self, schema_path: Path = SCHEMA_PATH):
        with open(schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        validator_cls = jsonschema.validators.validator_for(self.schema)
        validator_cls.check_schema(self.schema)
        self._validator = validator_cls(self.schema)

    def validate(self, payload: Any) -> Tuple[bool, List[ValidationIssue]]:
        """Validate payload against schema, return (is_valid, errors)"""
        errors = [
            ValidationIssue("/" + "/".join(str(p) for p in error.absolute_path), error.message)
            for error in sorted(self._validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
        ]
        return not errors, errors
