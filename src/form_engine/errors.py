"""
Exception types for the form engine.

Two tiers:
- SchemaError and friends are raised while building a validator and are
  fatal: the form should not be rendered.
- EvaluationError is raised inside formula evaluation only and is always
  converted to a sentinel value before it reaches a caller.
"""


class FormEngineError(Exception):
    """Base class for all form engine errors."""


class SchemaError(FormEngineError):
    """The field definitions cannot be compiled into a consistent schema."""

    def __init__(self, message: str, field_id: str | None = None):
        super().__init__(message)
        self.field_id = field_id


class DuplicateFieldIdError(SchemaError):
    """Two field definitions share the same id."""


class DanglingReferenceError(SchemaError):
    """A derived field references a parent id that is not defined."""

    def __init__(self, message: str, field_id: str | None = None, parent_id: str | None = None):
        super().__init__(message, field_id)
        self.parent_id = parent_id


class ChainedDerivationError(SchemaError):
    """A derived field references a parent that is itself derived."""

    def __init__(self, message: str, field_id: str | None = None, parent_id: str | None = None):
        super().__init__(message, field_id)
        self.parent_id = parent_id


class InvalidDerivationError(SchemaError):
    """A derived field's configuration cannot produce a value."""


class InvalidRuleError(SchemaError):
    """A validation rule is missing data it needs (e.g. a bound value)."""


class RuleTypeMismatchError(SchemaError):
    """A rule was attached to a field type it cannot apply to (strict mode only)."""


class EvaluationError(FormEngineError):
    """A derived value could not be computed."""


class ExpressionSyntaxError(EvaluationError):
    """An arithmetic expression is malformed or too deeply nested."""


class DivisionByZeroError(EvaluationError):
    """An arithmetic expression divides by zero."""
