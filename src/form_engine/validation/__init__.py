"""
Validation for form answer sets.

compile_field_validator builds a validator for one field;
compile_schema builds one for a whole form.
"""

from form_engine.validation.rule_compiler import (
    CompiledRule,
    FieldValidator,
    compile_field_validator,
)
from form_engine.validation.schema import (
    SchemaValidator,
    compile_schema,
)

__all__ = [
    "CompiledRule",
    "FieldValidator",
    "compile_field_validator",
    "SchemaValidator",
    "compile_schema",
]
