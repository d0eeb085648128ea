"""
Schema assembler: compiles a list of field definitions into one validator
over a whole answer set.

Construction is where structural problems surface. A SchemaValidator that
was built successfully is guaranteed to have unique field ids and derived
fields whose parents exist and are plain input fields, so a single sync
pass over the derived fields always settles.
"""

import logging
from typing import Any, Iterable, Iterator, Mapping

from form_engine.errors import (
    ChainedDerivationError,
    DanglingReferenceError,
    DuplicateFieldIdError,
    InvalidDerivationError,
)
from form_engine.models.field_definitions import DerivedLogic, FieldDefinition
from form_engine.models.validation_result import (
    FieldResult,
    FieldValidationError,
    ValidationResult,
)
from form_engine.validation.rule_compiler import FieldValidator, compile_field_validator

logger = logging.getLogger("form-engine")


def _coerce_fields(fields: Iterable[FieldDefinition | Mapping[str, Any]]) -> list[FieldDefinition]:
    return [
        field if isinstance(field, FieldDefinition) else FieldDefinition.model_validate(field)
        for field in fields
    ]


def _check_unique_ids(fields: list[FieldDefinition]) -> dict[str, FieldDefinition]:
    by_id: dict[str, FieldDefinition] = {}
    for field in fields:
        if field.id in by_id:
            raise DuplicateFieldIdError(f"Duplicate field id: '{field.id}'", field_id=field.id)
        by_id[field.id] = field
    return by_id


def _check_derivations(fields: list[FieldDefinition], by_id: dict[str, FieldDefinition]) -> None:
    for field in fields:
        if not field.is_derived:
            continue
        parents = field.parent_ids
        if field.derived_config.logic == DerivedLogic.AGE and not parents:
            raise InvalidDerivationError(
                f"Derived field '{field.id}' uses age logic but has no birth date field",
                field_id=field.id,
            )
        for parent_id in parents:
            parent = by_id.get(parent_id)
            if parent is None:
                raise DanglingReferenceError(
                    f"Derived field '{field.id}' references unknown field '{parent_id}'",
                    field_id=field.id,
                    parent_id=parent_id,
                )
            if parent.is_derived:
                raise ChainedDerivationError(
                    f"Derived field '{field.id}' references derived field '{parent_id}'",
                    field_id=field.id,
                    parent_id=parent_id,
                )


class SchemaValidator:
    """
    Validator over a whole answer set.

    Fields are validated independently of each other; cross-field
    behaviour lives in the derived-value evaluator.
    """

    def __init__(self, fields: list[FieldDefinition], validators: dict[str, FieldValidator]):
        self._fields = fields
        self._by_id = {field.id: field for field in fields}
        self._validators = validators

    @property
    def fields(self) -> list[FieldDefinition]:
        """All field definitions, in the order they were given."""
        return list(self._fields)

    @property
    def derived_fields(self) -> list[FieldDefinition]:
        """Fields whose value is computed."""
        return [field for field in self._fields if field.is_derived]

    def field(self, field_id: str) -> FieldDefinition:
        return self._by_id[field_id]

    def validator(self, field_id: str) -> FieldValidator:
        return self._validators[field_id]

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._by_id

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def validate(self, answers: Mapping[str, Any]) -> dict[str, FieldResult]:
        """Validate every defined field. Missing answers count as empty."""
        return {
            field.id: self._validators[field.id](answers.get(field.id))
            for field in self._fields
        }

    def validate_form(self, answers: Mapping[str, Any]) -> ValidationResult:
        """
        Validate an answer set and aggregate the outcome.

        Returns a ValidationResult whose ``validated_data`` holds the
        cleaned values when every field passed. Answers for ids the schema
        does not define are ignored and reported as warnings.
        """
        results = self.validate(answers)
        errors = [
            FieldValidationError(
                field_id=result.field_id,
                error_type=result.error_type,
                message=result.message,
                received=answers.get(result.field_id),
            )
            for result in results.values()
            if not result.is_valid
        ]
        warnings = [
            f"Ignoring answer for unknown field '{key}'"
            for key in answers
            if key not in self._by_id
        ]
        is_valid = not errors
        return ValidationResult(
            is_valid=is_valid,
            errors=errors,
            validated_data={field_id: result.value for field_id, result in results.items()} if is_valid else None,
            warnings=warnings,
        )

    def __repr__(self) -> str:
        return f"SchemaValidator(fields={[field.id for field in self._fields]})"


def compile_schema(
    fields: Iterable[FieldDefinition | Mapping[str, Any]],
    strict: bool | None = None,
) -> SchemaValidator:
    """
    Compile field definitions into a SchemaValidator.

    Args:
        fields: FieldDefinition models or their JSON dicts.
        strict: Passed to the rule compiler; see compile_field_validator.

    Raises:
        DuplicateFieldIdError: Two fields share an id.
        DanglingReferenceError: A derived field names an unknown parent.
        ChainedDerivationError: A derived field's parent is itself derived.
        InvalidDerivationError: An age field has no birth date parent.
        InvalidRuleError, RuleTypeMismatchError: From the rule compiler.
        pydantic.ValidationError: A dict is not a valid field definition.
    """
    field_list = _coerce_fields(fields)
    by_id = _check_unique_ids(field_list)
    _check_derivations(field_list, by_id)

    validators = {
        field.id: compile_field_validator(field, strict=strict)
        for field in field_list
    }

    logger.debug(
        f"Compiled schema with {len(field_list)} fields "
        f"({sum(1 for f in field_list if f.is_derived)} derived)"
    )
    return SchemaValidator(field_list, validators)
