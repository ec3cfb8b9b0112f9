"""
Validation utilities for the Realtor Home API.
Collects field violations into a structured result instead of failing on the first one.
"""

import math
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.utils.exceptions import ValidationError


class ValidationResult:
    """
    Outcome of validating a request payload or query.

    Attributes:
        violations: One dict per failed field with ``field``, ``message``,
            ``type`` and, where available, ``input``.
    """

    def __init__(self, violations: Optional[List[Dict[str, Any]]] = None):
        self.violations: List[Dict[str, Any]] = list(violations or [])

    @property
    def ok(self) -> bool:
        return not self.violations

    def add(self, field: str, message: str, error_type: str = "value_error", value: Any = None) -> None:
        violation = {"field": field, "message": message, "type": error_type}
        if value is not None:
            violation["input"] = value
        self.violations.append(violation)

    def raise_for_violations(self, detail: str = "Request validation failed") -> None:
        """
        Raise if any violation was recorded.

        Raises:
            ValidationError: Carrying the violations as field errors
        """
        if not self.ok:
            raise ValidationError(detail, field_errors=self.violations)

    @classmethod
    def from_pydantic(cls, exception: PydanticValidationError) -> "ValidationResult":
        """Build a result from a Pydantic (or FastAPI request) validation error."""
        result = cls()
        for error in exception.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            result.add(
                field=field_path,
                message=error["msg"],
                error_type=error["type"],
                value=error.get("input"),
            )
        return result

    def __repr__(self) -> str:
        return f"<ValidationResult(ok={self.ok}, violations={len(self.violations)})>"


def validate_schema(schema: Type[BaseModel], data: Any) -> ValidationResult:
    """
    Validate ``data`` against a Pydantic schema without raising.

    Args:
        schema: Pydantic model class
        data: Raw payload (usually a dict parsed from JSON)

    Returns:
        ValidationResult with every violation found
    """
    try:
        schema.model_validate(data)
    except PydanticValidationError as e:
        return ValidationResult.from_pydantic(e)
    return ValidationResult()


def parse_price(value: Any, field_name: str, result: ValidationResult) -> Optional[float]:
    """
    Parse a raw price value into a float, recording a violation on failure.

    Blank values count as absent. Non-numeric, non-finite and negative
    values are rejected.

    Returns:
        The parsed price, or None when absent or invalid
    """
    if value is None:
        return None

    raw = str(value).strip()
    if not raw:
        return None

    try:
        price = float(raw)
    except ValueError:
        result.add(field_name, f"{field_name} must be a valid number", "float_parsing", raw)
        return None

    if not math.isfinite(price):
        result.add(field_name, f"{field_name} must be a finite number", "finite_number", raw)
        return None

    if price < 0:
        result.add(field_name, f"{field_name} cannot be negative", "greater_than_equal", raw)
        return None

    return price
