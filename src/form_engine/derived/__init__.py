"""
Derived fields: values computed from other fields.
"""

from form_engine.derived.arithmetic import evaluate_expression
from form_engine.derived.evaluator import (
    CALCULATION_ERROR,
    ERROR_IN_CALCULATION,
    evaluate_derived,
    placeholder,
)
from form_engine.derived.sync import (
    AnswerWriter,
    apply_patch,
    compute_derived_patch,
    sync_derived_fields,
)

__all__ = [
    "evaluate_expression",
    "CALCULATION_ERROR",
    "ERROR_IN_CALCULATION",
    "evaluate_derived",
    "placeholder",
    "AnswerWriter",
    "apply_patch",
    "compute_derived_patch",
    "sync_derived_fields",
]
