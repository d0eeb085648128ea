"""
Validation result models for answer set validation.

FieldResult is what a single field validator returns; ValidationResult
aggregates the field results of a whole form.
"""

from typing import Any

from pydantic import BaseModel, Field


class FieldResult(BaseModel):
    """Outcome of validating one field's value."""

    field_id: str = Field(..., description="Id of the validated field")
    is_valid: bool = Field(..., description="Whether the value passed")
    value: Any | None = Field(default=None, description="Cleaned value (numbers parsed)")
    error_type: str | None = Field(default=None, description="Kind of failure")
    message: str | None = Field(default=None, description="Human-readable error message")

    @classmethod
    def valid(cls, field_id: str, value: Any = None) -> "FieldResult":
        return cls(field_id=field_id, is_valid=True, value=value)

    @classmethod
    def invalid(cls, field_id: str, error_type: str, message: str) -> "FieldResult":
        return cls(field_id=field_id, is_valid=False, error_type=error_type, message=message)


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_id: str = Field(..., description="Id of the field with error")
    error_type: str = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of validating a whole answer set."""

    is_valid: bool = Field(..., description="Whether the answer set is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Cleaned answers if valid"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Non-blocking warnings"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, field_id: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_id == field_id]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field ids to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.field_id not in result:
                result[error.field_id] = []
            result[error.field_id].append(error.message)
        return result
