"""
Field definition models for form schemas.

These models describe one form input each: its type, its validation
rules and, for derived fields, how its value is computed from other
fields. They are produced by the editing UI and consumed read-only by
the rule compiler and the derived-value evaluator.

The editing UI speaks camelCase JSON (``isDerived``, ``validationRules``,
``parentFieldIds``...). Those names are accepted as aliases and emitted
by ``model_dump(by_alias=True)``.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator


class FieldType(str, Enum):
    """Input type of a field. Determines the base value shape."""

    TEXT = "text"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DATE = "date"


class RuleKind(str, Enum):
    """Kind of a validation rule."""

    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    EMAIL = "email"
    PASSWORD = "password"
    MIN = "min"
    MAX = "max"


class DerivedLogic(str, Enum):
    """Strategy used to compute a derived field."""

    AGE = "age"
    SUM = "sum"
    CONCAT = "concat"
    CUSTOM = "custom"


CHOICE_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX})


class ValidationRule(BaseModel):
    """A single validation rule attached to a field."""

    kind: RuleKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        serialization_alias="type",
        description="Rule kind",
    )
    value: float | None = Field(
        default=None,
        description="Numeric argument for length and bound rules",
    )
    message: str | None = Field(
        default=None,
        description="Override for the default failure message",
    )

    model_config = {"populate_by_name": True}


class SelectOption(BaseModel):
    """An option for select, radio and checkbox fields."""

    label: str = Field(..., description="Display text")
    value: str = Field(..., description="Stored value")


class DerivedFieldConfig(BaseModel):
    """How a derived field computes its value from its parents."""

    parent_field_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("parent_field_ids", "parentFieldIds", "parentFields"),
        serialization_alias="parentFieldIds",
        description="Ids of the fields this value is computed from, in order",
    )
    logic: DerivedLogic = Field(..., description="Computation strategy")
    formula: str = Field(
        default="",
        description="Template such as '${price} * ${qty}', used by custom logic only",
    )

    model_config = {"populate_by_name": True}


class FieldDefinition(BaseModel):
    """
    Declarative description of one form input.

    Structural invariants (checked on construction):
    - ``derived_config`` is present iff ``is_derived``
    - ``options`` is present for select/radio/checkbox fields; other
      types may only carry an empty option list
    """

    id: str = Field(..., min_length=1, description="Field id, unique within a form")
    type: FieldType = Field(..., description="Input type")
    label: str = Field(default="", description="Human-readable label")
    required: bool = Field(default=False, description="Whether a value must be entered")
    is_derived: bool = Field(default=False, alias="isDerived")
    derived_config: DerivedFieldConfig | None = Field(default=None, alias="derivedConfig")
    validation_rules: list[ValidationRule] = Field(default_factory=list, alias="validationRules")
    options: list[SelectOption] | None = Field(default=None)
    default_value: Any | None = Field(default=None, alias="defaultValue")
    order: int = Field(default=0, description="Display position")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_structure(self) -> "FieldDefinition":
        if self.is_derived and self.derived_config is None:
            raise ValueError(f"Derived field '{self.id}' has no derivedConfig")
        if not self.is_derived and self.derived_config is not None:
            raise ValueError(f"Field '{self.id}' has a derivedConfig but is not derived")
        if self.type in CHOICE_TYPES and self.options is None:
            raise ValueError(f"Field '{self.id}' of type {self.type.value} needs options")
        if self.type not in CHOICE_TYPES and self.options:
            raise ValueError(f"Field '{self.id}' of type {self.type.value} cannot have options")
        return self

    @property
    def is_choice(self) -> bool:
        """Whether the field picks from a list of options."""
        return self.type in CHOICE_TYPES

    @property
    def parent_ids(self) -> list[str]:
        """Parent field ids of a derived field (empty for input fields)."""
        if self.derived_config is None:
            return []
        return list(self.derived_config.parent_field_ids)
