"""
Form Engine: validation and derived values for user-built forms.

Field definitions come from a form editor; this package compiles them
into a validator for the answer set and computes derived fields (age,
sum, concatenation, arithmetic formulas) from the other answers.

Simple Usage:
    from form_engine import compile_schema, compute_derived_patch, apply_patch

    schema = compile_schema([
        {"id": "first", "type": "text", "required": True},
        {"id": "last", "type": "text", "required": True},
        {
            "id": "full_name",
            "type": "text",
            "isDerived": True,
            "derivedConfig": {"parentFieldIds": ["first", "last"], "logic": "concat"},
        },
    ])

    answers = {"first": "Jane", "last": "Doe", "full_name": ""}
    answers = apply_patch(answers, compute_derived_patch(schema, answers))

    result = schema.validate_form(answers)
    print(result.is_valid, result.to_error_dict())

Rendering layers:
    from form_engine import sync_derived_fields

    # Call on every answer change; writes only what changed, without
    # marking fields dirty/touched or triggering validation.
    sync_derived_fields(schema, form.values, form)
"""

from form_engine.config import (
    FormEngineConfig,
    get_config,
    update_config,
)
from form_engine.errors import (
    ChainedDerivationError,
    DanglingReferenceError,
    DivisionByZeroError,
    DuplicateFieldIdError,
    EvaluationError,
    ExpressionSyntaxError,
    FormEngineError,
    InvalidDerivationError,
    InvalidRuleError,
    RuleTypeMismatchError,
    SchemaError,
)
from form_engine.models import (
    DerivedFieldConfig,
    DerivedLogic,
    FieldDefinition,
    FieldResult,
    FieldType,
    FieldValidationError,
    FormDocument,
    RuleKind,
    SelectOption,
    ValidationResult,
    ValidationRule,
    initial_answers,
    sort_fields,
)
from form_engine.validation import (
    FieldValidator,
    SchemaValidator,
    compile_field_validator,
    compile_schema,
)
from form_engine.derived import (
    CALCULATION_ERROR,
    ERROR_IN_CALCULATION,
    AnswerWriter,
    apply_patch,
    compute_derived_patch,
    evaluate_derived,
    evaluate_expression,
    sync_derived_fields,
)

__all__ = [
    # Configuration
    "FormEngineConfig",
    "get_config",
    "update_config",
    # Errors
    "FormEngineError",
    "SchemaError",
    "DuplicateFieldIdError",
    "DanglingReferenceError",
    "ChainedDerivationError",
    "InvalidDerivationError",
    "InvalidRuleError",
    "RuleTypeMismatchError",
    "EvaluationError",
    "ExpressionSyntaxError",
    "DivisionByZeroError",
    # Models
    "DerivedFieldConfig",
    "DerivedLogic",
    "FieldDefinition",
    "FieldType",
    "RuleKind",
    "SelectOption",
    "ValidationRule",
    "FormDocument",
    "initial_answers",
    "sort_fields",
    "FieldResult",
    "FieldValidationError",
    "ValidationResult",
    # Validation
    "FieldValidator",
    "SchemaValidator",
    "compile_field_validator",
    "compile_schema",
    # Derived values
    "CALCULATION_ERROR",
    "ERROR_IN_CALCULATION",
    "AnswerWriter",
    "apply_patch",
    "compute_derived_patch",
    "evaluate_derived",
    "evaluate_expression",
    "sync_derived_fields",
]

__version__ = "0.1.0"
