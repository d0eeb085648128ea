"""
Rule compiler: turns one field definition into a validator for its value.

Each field type carries its own base type check and the set of rules it
accepts. Both are resolved once, when the validator is compiled, so
validating a value only walks a prepared list of checks.

Order of checks for a value:
1. emptiness (optional fields accept empty values outright)
2. base type
3. rules, in the order they were attached; the first failure wins
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from form_engine.config import get_config
from form_engine.errors import InvalidRuleError, RuleTypeMismatchError
from form_engine.models.field_definitions import (
    FieldDefinition,
    FieldType,
    RuleKind,
    ValidationRule,
)
from form_engine.models.validation_result import FieldResult
from form_engine.validation.constants import (
    APPLICABLE_RULES,
    DEFAULT_RULE_MESSAGES,
    DERIVED_MISSING_MESSAGE,
    EMAIL_PATTERN,
    PASSWORD_PATTERN,
    REQUIRED_MESSAGE,
    TYPE_MESSAGES,
    VALUED_RULES,
)
from form_engine.values import format_number, is_empty, parse_number

logger = logging.getLogger("form-engine")

# A base check returns (accepted, cleaned value)
TypeCheck = Callable[[Any], tuple[bool, Any]]


def _check_string(value: Any) -> tuple[bool, Any]:
    return isinstance(value, str), value


def _check_number(value: Any) -> tuple[bool, Any]:
    number = parse_number(value)
    return number is not None, number


def _check_date(value: Any) -> tuple[bool, Any]:
    # datetime is a subclass of date
    return isinstance(value, (str, date)), value


def _check_checkbox(value: Any) -> tuple[bool, Any]:
    if isinstance(value, bool):
        return True, value
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return True, list(value)
    return False, value


BASE_CHECKS: dict[FieldType, TypeCheck] = {
    FieldType.TEXT: _check_string,
    FieldType.TEXTAREA: _check_string,
    FieldType.SELECT: _check_string,
    FieldType.RADIO: _check_string,
    FieldType.NUMBER: _check_number,
    FieldType.DATE: _check_date,
    FieldType.CHECKBOX: _check_checkbox,
}


@dataclass(frozen=True)
class CompiledRule:
    """A rule bound to its test and final message."""

    kind: RuleKind
    test: Callable[[Any], bool]
    message: str


def _rule_test(kind: RuleKind, bound: float | None) -> Callable[[Any], bool]:
    if kind == RuleKind.MIN_LENGTH:
        return lambda value: len(value) >= bound
    if kind == RuleKind.MAX_LENGTH:
        return lambda value: len(value) <= bound
    if kind == RuleKind.EMAIL:
        return lambda value: EMAIL_PATTERN.fullmatch(value) is not None
    if kind == RuleKind.PASSWORD:
        return lambda value: PASSWORD_PATTERN.fullmatch(value) is not None
    if kind == RuleKind.MIN:
        return lambda value: value >= bound
    if kind == RuleKind.MAX:
        return lambda value: value <= bound
    raise ValueError(f"No value test for rule kind: {kind.value}")


def _compile_rule(field: FieldDefinition, rule: ValidationRule) -> CompiledRule:
    message = rule.message
    if not message:
        shown = format_number(rule.value) if rule.value is not None else ""
        message = DEFAULT_RULE_MESSAGES[rule.kind].format(value=shown)
    return CompiledRule(kind=rule.kind, test=_rule_test(rule.kind, rule.value), message=message)


class FieldValidator:
    """
    Validator for a single field's value.

    Call it with the raw value from the answer set; it returns a
    FieldResult carrying either the cleaned value or the first failure.
    """

    def __init__(
        self,
        field: FieldDefinition,
        type_check: TypeCheck,
        rules: list[CompiledRule],
        required_message: str,
    ):
        self.field = field
        self.type_check = type_check
        self.rules = rules
        self.required_message = required_message

    @property
    def field_id(self) -> str:
        return self.field.id

    def __call__(self, value: Any) -> FieldResult:
        field = self.field

        if is_empty(value):
            if field.is_derived:
                return FieldResult.invalid(field.id, "derived", DERIVED_MISSING_MESSAGE)
            if field.required:
                return FieldResult.invalid(field.id, "required", self.required_message)
            return FieldResult.valid(field.id, value)

        accepted, cleaned = self.type_check(value)
        if not accepted:
            return FieldResult.invalid(field.id, "type", TYPE_MESSAGES[field.type])

        for rule in self.rules:
            if not rule.test(cleaned):
                return FieldResult.invalid(field.id, rule.kind.value, rule.message)

        return FieldResult.valid(field.id, cleaned)

    def __repr__(self) -> str:
        kinds = [rule.kind.value for rule in self.rules]
        return f"FieldValidator(field_id={self.field.id!r}, type={self.field.type.value!r}, rules={kinds})"


def compile_field_validator(field: FieldDefinition, strict: bool | None = None) -> FieldValidator:
    """
    Compile a field definition into a FieldValidator.

    Args:
        field: The field to compile.
        strict: Raise for rules the field type cannot apply (e.g. ``min``
            on a text field) and for length or bound rules with no value.
            Defaults to the ``strict_rule_types`` config setting; when off,
            such rules are ignored.

    Raises:
        InvalidRuleError: Strict mode and a length or bound rule with no value.
        RuleTypeMismatchError: Strict mode and an inapplicable rule.
    """
    if strict is None:
        strict = get_config().strict_rule_types

    applicable = APPLICABLE_RULES[field.type]
    required_message = REQUIRED_MESSAGE
    rules: list[CompiledRule] = []

    for rule in field.validation_rules:
        if rule.kind == RuleKind.REQUIRED:
            if rule.message:
                required_message = rule.message
            continue
        if rule.kind not in applicable:
            if strict:
                raise RuleTypeMismatchError(
                    f"Rule '{rule.kind.value}' cannot apply to {field.type.value} field '{field.id}'",
                    field_id=field.id,
                )
            logger.debug(f"Ignoring rule '{rule.kind.value}' on {field.type.value} field '{field.id}'")
            continue
        if rule.kind in VALUED_RULES and rule.value is None:
            if strict:
                raise InvalidRuleError(
                    f"Rule '{rule.kind.value}' on field '{field.id}' needs a value",
                    field_id=field.id,
                )
            logger.debug(f"Ignoring rule '{rule.kind.value}' without a value on field '{field.id}'")
            continue
        rules.append(_compile_rule(field, rule))

    return FieldValidator(
        field=field,
        type_check=BASE_CHECKS[field.type],
        rules=rules,
        required_message=required_message,
    )
