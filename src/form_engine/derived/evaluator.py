"""
Derived-value evaluator.

Computes the value of a derived field from the current answer set. The
evaluator never raises: a field that cannot be computed gets a sentinel
value so the rest of the form keeps working while the user is still
typing.

Sentinels:
- ""                      age with a missing/unparseable birth date,
                          custom formula that is blank after substitution
- ERROR_IN_CALCULATION    custom formula rejected or failed to evaluate
- CALCULATION_ERROR       a sum too large to represent, or anything else
                          that went wrong
"""

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Callable, Mapping

from form_engine.config import get_config
from form_engine.errors import EvaluationError
from form_engine.derived.arithmetic import evaluate_expression
from form_engine.models.field_definitions import DerivedFieldConfig, DerivedLogic, FieldDefinition
from form_engine.values import format_number, parse_number, to_text

logger = logging.getLogger("form-engine")

ERROR_IN_CALCULATION = "Error in calculation"
CALCULATION_ERROR = "Calculation Error"

# What a substituted formula may contain before it is evaluated
FORMULA_ALLOWED = re.compile(r"^[0-9.\s+\-*/()]+$")


def placeholder(field_id: str) -> str:
    """Formula token that stands for a field's value, e.g. ``${price}``."""
    return "${" + field_id + "}"


def parse_date(value: Any) -> date | None:
    """Read a date, datetime or ISO date string. Returns None if it is none of those."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def age_on(birth: date, today: date) -> int:
    """Whole years between two dates; one less until the anniversary is reached."""
    years = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        years -= 1
    return years


def _age(config: DerivedFieldConfig, answers: Mapping[str, Any], today: date) -> str:
    birth = parse_date(answers.get(config.parent_field_ids[0]))
    if birth is None or birth > today:
        return ""
    return str(age_on(birth, today))


def _sum(config: DerivedFieldConfig, answers: Mapping[str, Any], today: date) -> str:
    total = 0.0
    for field_id in config.parent_field_ids:
        number = parse_number(answers.get(field_id))
        total += number if number is not None else 0.0
    if not math.isfinite(total):
        logger.debug(f"Sum of {config.parent_field_ids} overflowed")
        return CALCULATION_ERROR
    return format_number(total)


def _concat(config: DerivedFieldConfig, answers: Mapping[str, Any], today: date) -> str:
    return " ".join(to_text(answers.get(field_id)) for field_id in config.parent_field_ids)


def substitute(formula: str, parent_ids: list[str], answers: Mapping[str, Any]) -> str:
    """Replace every parent placeholder in a formula with that parent's value."""
    expression = formula
    for field_id in parent_ids:
        expression = expression.replace(placeholder(field_id), to_text(answers.get(field_id)))
    return expression


def _custom(config: DerivedFieldConfig, answers: Mapping[str, Any], today: date) -> str:
    expression = substitute(config.formula, config.parent_field_ids, answers)
    if not expression.strip():
        return ""

    settings = get_config()
    if len(expression) > settings.max_expression_length or not FORMULA_ALLOWED.match(expression):
        logger.debug(f"Rejected formula expression: {expression[:80]!r}")
        return ERROR_IN_CALCULATION

    try:
        result = evaluate_expression(expression, max_depth=settings.max_expression_depth)
    except EvaluationError as e:
        logger.debug(f"Formula {expression!r} failed: {e}")
        return ERROR_IN_CALCULATION
    return format_number(result)


STRATEGIES: dict[DerivedLogic, Callable[[DerivedFieldConfig, Mapping[str, Any], date], str]] = {
    DerivedLogic.AGE: _age,
    DerivedLogic.SUM: _sum,
    DerivedLogic.CONCAT: _concat,
    DerivedLogic.CUSTOM: _custom,
}


def evaluate_derived(
    field: FieldDefinition,
    answers: Mapping[str, Any],
    today: date | None = None,
) -> str | None:
    """
    Compute a derived field's value from the current answers.

    Args:
        field: A field with ``is_derived`` set. Other fields yield None.
        answers: Snapshot of the answer set; it is not modified.
        today: Reference date for age logic. Defaults to ``date.today()``.

    Returns:
        The computed value as a string, or a sentinel (see module docs).
    """
    if not field.is_derived or field.derived_config is None:
        return None
    if today is None:
        today = date.today()

    config = field.derived_config
    try:
        return STRATEGIES[config.logic](config, answers, today)
    except Exception as e:
        logger.warning(f"Error calculating derived value for '{field.id}': {type(e).__name__}: {e}")
        return CALCULATION_ERROR
