from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft7Validator

_TYPE_NAMES = {
    "string": "a string",
    "boolean": "a boolean",
    "integer": "an integer",
    "number": "a number",
    "object": "an object",
    "array": "an array",
}


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def _field(error) -> str:
    return ".".join(str(p) for p in error.absolute_path) or "params"


def _describe_type(expected: Any) -> str:
    if isinstance(expected, list):
        return " or ".join(_TYPE_NAMES.get(t, t) for t in expected)
    return _TYPE_NAMES.get(expected, str(expected))


def validate_params(schema: dict[str, Any], params: Any) -> ValidationResult:
    """Check ``params`` against a tool's JSON Schema and report every violation.

    Errors come back in schema order, one string per failing constraint.
    """
    if not isinstance(params, dict):
        return ValidationResult(valid=False, errors=["params must be an object"])

    errors: list[str] = []
    validator = Draft7Validator(schema)
    for error in validator.iter_errors(params):
        name = _field(error)
        if error.validator == "required":
            # one error per missing property; the message names it
            missing = error.message.split("'")[1] if "'" in error.message else error.message
            errors.append(f"{missing} is required")
        elif error.validator == "minLength" and error.validator_value == 1:
            errors.append(f"{name} is required")
        elif error.validator == "type":
            errors.append(f"{name} must be {_describe_type(error.validator_value)}")
        elif error.validator == "enum":
            allowed = ", ".join(str(v) for v in error.validator_value)
            errors.append(f"{name} must be one of: {allowed}")
        else:
            errors.append(f"{name}: {error.message}")
    return ValidationResult(valid=not errors, errors=errors)
