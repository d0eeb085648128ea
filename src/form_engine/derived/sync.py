"""
Reactive sync of derived values.

The rendering layer owns the live answer set. On every change it runs
one sync pass: evaluate every derived field against a snapshot of the
answers and write back only the values that changed. Those writes must
not mark the field dirty or touched and must not trigger validation,
otherwise each write would schedule another pass.

Because derived fields may only depend on input fields (enforced by
compile_schema), a pass over patched answers produces no further
changes: the loop settles after one pass.
"""

import logging
from datetime import date
from typing import Any, Mapping, Protocol

from form_engine.derived.evaluator import evaluate_derived
from form_engine.validation.schema import SchemaValidator

logger = logging.getLogger("form-engine")


class AnswerWriter(Protocol):
    """What the rendering layer exposes for writing a derived value back."""

    def set_value(
        self,
        field_id: str,
        value: Any,
        *,
        should_dirty: bool,
        should_touch: bool,
        should_validate: bool,
    ) -> None:
        ...


def compute_derived_patch(
    schema: SchemaValidator,
    answers: Mapping[str, Any],
    today: date | None = None,
) -> dict[str, Any]:
    """
    Evaluate all derived fields and return the values that differ.

    Args:
        schema: Compiled schema (guarantees no chained derivations).
        answers: Snapshot of the current answers; not modified.
        today: Reference date for age logic.

    Returns:
        Mapping of field id to new value, only for fields whose computed
        value is not equal to the stored one. Empty when nothing changed.
    """
    patch: dict[str, Any] = {}
    for field in schema.derived_fields:
        value = evaluate_derived(field, answers, today=today)
        if value != answers.get(field.id):
            patch[field.id] = value
    return patch


def apply_patch(answers: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new answer set with the patch applied."""
    updated = dict(answers)
    updated.update(patch)
    return updated


def sync_derived_fields(
    schema: SchemaValidator,
    answers: Mapping[str, Any],
    writer: AnswerWriter,
    today: date | None = None,
) -> dict[str, Any]:
    """
    Run one sync pass and push the changes through ``writer``.

    Each changed value is written with dirty, touched and validate all
    switched off. Returns the patch that was written.
    """
    patch = compute_derived_patch(schema, answers, today=today)
    for field_id, value in patch.items():
        writer.set_value(
            field_id,
            value,
            should_dirty=False,
            should_touch=False,
            should_validate=False,
        )
    if patch:
        logger.debug(f"Synced derived fields: {sorted(patch)}")
    return patch
