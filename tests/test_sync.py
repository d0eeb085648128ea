"""Tests for the reactive sync of derived values."""

from datetime import date

from form_engine.derived.evaluator import ERROR_IN_CALCULATION
from form_engine.derived.sync import apply_patch, compute_derived_patch, sync_derived_fields
from form_engine.validation.schema import compile_schema

TODAY = date(2024, 6, 15)

FIELDS = [
    {"id": "first", "type": "text", "required": True},
    {"id": "last", "type": "text", "required": True},
    {"id": "dob", "type": "date"},
    {"id": "price", "type": "number"},
    {"id": "qty", "type": "number"},
    {
        "id": "full_name",
        "type": "text",
        "isDerived": True,
        "derivedConfig": {"parentFieldIds": ["first", "last"], "logic": "concat"},
    },
    {
        "id": "age",
        "type": "number",
        "isDerived": True,
        "derivedConfig": {"parentFieldIds": ["dob"], "logic": "age"},
    },
    {
        "id": "total",
        "type": "number",
        "isDerived": True,
        "derivedConfig": {"parentFieldIds": ["price", "qty"], "logic": "custom", "formula": "${price} * ${qty}"},
    },
]


class RecordingWriter:
    """Stands in for a form library's setValue."""

    def __init__(self):
        self.calls = []

    def set_value(self, field_id, value, *, should_dirty, should_touch, should_validate):
        self.calls.append((field_id, value, should_dirty, should_touch, should_validate))


class TestComputePatch:
    """Tests for compute_derived_patch."""

    def test_patch_contains_changed_values(self):
        """Test every out-of-date derived value is in the patch."""
        schema = compile_schema(FIELDS)
        answers = {"first": "Jane", "last": "Doe", "dob": "2000-06-15", "price": "2.5", "qty": "4"}
        patch = compute_derived_patch(schema, answers, today=TODAY)
        assert patch == {"full_name": "Jane Doe", "age": "24", "total": "10"}

    def test_unchanged_values_skipped(self):
        """Test values equal to the stored ones are not written."""
        schema = compile_schema(FIELDS)
        answers = {
            "first": "Jane", "last": "Doe", "dob": "", "price": "", "qty": "",
            "full_name": "Jane Doe", "age": "", "total": ERROR_IN_CALCULATION,
        }
        assert compute_derived_patch(schema, answers, today=TODAY) == {}

    def test_snapshot_not_mutated(self):
        """Test the input answers are left untouched."""
        schema = compile_schema(FIELDS)
        answers = {"first": "Jane", "last": "Doe"}
        before = dict(answers)
        compute_derived_patch(schema, answers, today=TODAY)
        assert answers == before

    def test_error_sentinel_is_a_value(self):
        """Test a failing formula shows up as a sentinel rather than raising."""
        schema = compile_schema(FIELDS)
        patch = compute_derived_patch(schema, {"price": "abc", "qty": "2"}, today=TODAY)
        assert patch["total"] == ERROR_IN_CALCULATION


class TestApplyPatch:
    """Tests for apply_patch."""

    def test_returns_new_mapping(self):
        """Test the patch is applied to a copy."""
        answers = {"a": 1, "b": 2}
        updated = apply_patch(answers, {"b": 3})
        assert updated == {"a": 1, "b": 3}
        assert answers == {"a": 1, "b": 2}


class TestSyncPass:
    """Tests for sync_derived_fields."""

    def test_writes_without_side_effects(self):
        """Test writes are made with dirty, touched and validate switched off."""
        schema = compile_schema(FIELDS)
        writer = RecordingWriter()
        patch = sync_derived_fields(schema, {"first": "Jane", "last": "Doe"}, writer, today=TODAY)
        assert ("full_name", "Jane Doe", False, False, False) in writer.calls
        assert len(writer.calls) == len(patch)

    def test_second_pass_is_idempotent(self):
        """Test a second pass over the synced answers writes nothing."""
        schema = compile_schema(FIELDS)
        answers = {"first": "Jane", "last": "Doe", "dob": "1990-01-01", "price": "3", "qty": "7"}
        first = compute_derived_patch(schema, answers, today=TODAY)
        assert first
        synced = apply_patch(answers, first)

        writer = RecordingWriter()
        assert sync_derived_fields(schema, synced, writer, today=TODAY) == {}
        assert writer.calls == []

    def test_input_change_triggers_update(self):
        """Test editing a parent produces a new patch for its dependents only."""
        schema = compile_schema(FIELDS)
        answers = {"first": "Jane", "last": "Doe", "dob": "1990-01-01", "price": "3", "qty": "7"}
        synced = apply_patch(answers, compute_derived_patch(schema, answers, today=TODAY))
        edited = apply_patch(synced, {"qty": "8"})
        assert compute_derived_patch(schema, edited, today=TODAY) == {"total": "24"}

    def test_synced_answers_validate(self):
        """Test synced derived values satisfy the derived-as-required rule."""
        schema = compile_schema(FIELDS)
        answers = {"first": "Jane", "last": "Doe", "dob": "1990-01-01", "price": "3", "qty": "7"}
        synced = apply_patch(answers, compute_derived_patch(schema, answers, today=TODAY))
        result = schema.validate_form(synced)
        assert result.is_valid, result.to_error_dict()
        assert result.validated_data["age"] == 34.0
