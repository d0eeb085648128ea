"""
Data models for the form engine.

This module contains Pydantic models for:
- Field definitions (types, rules, derived configuration)
- Form documents
- Validation results
"""

from form_engine.models.field_definitions import (
    CHOICE_TYPES,
    DerivedFieldConfig,
    DerivedLogic,
    FieldDefinition,
    FieldType,
    RuleKind,
    SelectOption,
    ValidationRule,
)
from form_engine.models.form_document import (
    FormDocument,
    initial_answers,
    sort_fields,
)
from form_engine.models.validation_result import (
    FieldResult,
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Field definitions
    "CHOICE_TYPES",
    "DerivedFieldConfig",
    "DerivedLogic",
    "FieldDefinition",
    "FieldType",
    "RuleKind",
    "SelectOption",
    "ValidationRule",
    # Documents
    "FormDocument",
    "initial_answers",
    "sort_fields",
    # Validation
    "FieldResult",
    "FieldValidationError",
    "ValidationResult",
]
