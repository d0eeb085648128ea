"""
Constants for the rule compiler.

Patterns, default messages and the rule sets each field type accepts.
"""

import re

from form_engine.models.field_definitions import FieldType, RuleKind

# RFC 5322 "lite": no leading dot, no consecutive dots, dotted domain with a 2+ letter TLD
EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+\-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)

# At least 8 characters from letters/digits/@$!%*#?&, with one letter and one digit
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*[0-9])[A-Za-z0-9@$!%*#?&]{8,}$")

REQUIRED_MESSAGE = "This field is required"
DERIVED_MISSING_MESSAGE = "Value has not been calculated"

TYPE_MESSAGES = {
    FieldType.TEXT: "Expected text",
    FieldType.TEXTAREA: "Expected text",
    FieldType.SELECT: "Expected a single option value",
    FieldType.RADIO: "Expected a single option value",
    FieldType.NUMBER: "Not a valid number",
    FieldType.DATE: "Expected a date",
    FieldType.CHECKBOX: "Expected a list of option values or a boolean",
}

DEFAULT_RULE_MESSAGES = {
    RuleKind.MIN_LENGTH: "Must contain at least {value} character(s)",
    RuleKind.MAX_LENGTH: "Must contain at most {value} character(s)",
    RuleKind.EMAIL: "Invalid email format",
    RuleKind.PASSWORD: "Password must be at least 8 characters and contain a number",
    RuleKind.MIN: "Must be greater than or equal to {value}",
    RuleKind.MAX: "Must be less than or equal to {value}",
}

# Rules that need a numeric value to mean anything
VALUED_RULES = frozenset({RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH, RuleKind.MIN, RuleKind.MAX})

_STRING_RULES = frozenset({RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH, RuleKind.EMAIL, RuleKind.PASSWORD})
_NUMBER_RULES = frozenset({RuleKind.MIN, RuleKind.MAX})

# Value rules each field type accepts. "required" is handled separately.
APPLICABLE_RULES: dict[FieldType, frozenset[RuleKind]] = {
    FieldType.TEXT: _STRING_RULES,
    FieldType.TEXTAREA: _STRING_RULES,
    FieldType.SELECT: _STRING_RULES,
    FieldType.RADIO: _STRING_RULES,
    FieldType.NUMBER: _NUMBER_RULES,
    FieldType.DATE: frozenset(),
    FieldType.CHECKBOX: frozenset(),
}
