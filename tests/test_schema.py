"""Tests for the schema assembler."""

import pytest
from pydantic import ValidationError

from form_engine.errors import (
    ChainedDerivationError,
    DanglingReferenceError,
    DuplicateFieldIdError,
    InvalidDerivationError,
    InvalidRuleError,
    RuleTypeMismatchError,
    SchemaError,
)
from form_engine.validation.schema import compile_schema


def text(field_id, **kwargs):
    return {"id": field_id, "type": "text", **kwargs}


def derived(field_id, parents, logic="concat", formula="", field_type="text"):
    return {
        "id": field_id,
        "type": field_type,
        "isDerived": True,
        "derivedConfig": {"parentFieldIds": parents, "logic": logic, "formula": formula},
    }


SIGNUP = [
    text("name", required=True, validationRules=[{"type": "minLength", "value": 2}]),
    text("email", required=True, validationRules=[{"type": "email"}]),
    {"id": "age", "type": "number", "validationRules": [{"type": "min", "value": 18}]},
    {"id": "plan", "type": "select", "options": [{"label": "Free", "value": "free"}]},
    text("nickname"),
]


class TestConstruction:
    """Tests for construction-time checks."""

    def test_duplicate_ids(self):
        """Test two fields with the same id fail construction."""
        with pytest.raises(DuplicateFieldIdError) as exc_info:
            compile_schema([text("x"), text("x")])
        assert exc_info.value.field_id == "x"

    def test_dangling_reference(self):
        """Test a derived field naming an unknown parent fails construction."""
        with pytest.raises(DanglingReferenceError) as exc_info:
            compile_schema([text("a"), derived("full", ["a", "missing"])])
        assert exc_info.value.field_id == "full"
        assert exc_info.value.parent_id == "missing"

    def test_chained_derivation(self):
        """Test a derived field whose parent is derived fails construction."""
        with pytest.raises(ChainedDerivationError) as exc_info:
            compile_schema([text("a"), derived("one", ["a"]), derived("two", ["one"])])
        assert exc_info.value.parent_id == "one"

    def test_self_reference_is_chained(self):
        """Test a derived field cannot reference itself."""
        with pytest.raises(ChainedDerivationError):
            compile_schema([derived("loop", ["loop"])])

    def test_age_without_parent(self):
        """Test age logic needs a birth date field."""
        with pytest.raises(InvalidDerivationError):
            compile_schema([derived("age", [], logic="age")])

    def test_errors_share_base(self):
        """Test every construction failure is a SchemaError."""
        for error in (DuplicateFieldIdError, DanglingReferenceError, ChainedDerivationError):
            assert issubclass(error, SchemaError)

    def test_strict_passes_through(self):
        """Test strict mode reaches the rule compiler."""
        fields = [text("t", validationRules=[{"type": "max", "value": 3}])]
        compile_schema(fields, strict=False)
        with pytest.raises(RuleTypeMismatchError):
            compile_schema(fields, strict=True)

    def test_rule_without_value_compiles(self):
        """Test a minLength rule saved without a value does not break the schema."""
        schema = compile_schema([
            {"id": "name", "type": "text", "validationRules": [{"type": "minLength", "value": None}]}
        ])
        assert schema.validate({"name": "a"})["name"].is_valid
        with pytest.raises(InvalidRuleError):
            compile_schema(
                [{"id": "name", "type": "text", "validationRules": [{"type": "minLength", "value": None}]}],
                strict=True,
            )

    def test_malformed_definition(self):
        """Test dicts that are not field definitions raise pydantic errors."""
        with pytest.raises(ValidationError):
            compile_schema([{"id": "x", "type": "color"}])

    def test_schema_accessors(self):
        """Test field lookup helpers."""
        schema = compile_schema([text("a"), text("b"), derived("ab", ["a", "b"])])
        assert len(schema) == 3
        assert "ab" in schema
        assert "zz" not in schema
        assert [f.id for f in schema.derived_fields] == ["ab"]
        assert schema.field("a").id == "a"
        assert schema.validator("b").field_id == "b"
        assert [f.id for f in schema] == ["a", "b", "ab"]


class TestValidate:
    """Tests for whole answer set validation."""

    def test_per_field_results(self):
        """Test each defined field gets its own result."""
        schema = compile_schema(SIGNUP)
        results = schema.validate({"name": "J", "email": "jane@example.com", "age": "30"})
        assert list(results) == ["name", "email", "age", "plan", "nickname"]
        assert not results["name"].is_valid
        assert results["name"].error_type == "minLength"
        assert results["email"].is_valid
        assert results["age"].value == 30.0
        assert results["plan"].is_valid
        assert results["nickname"].is_valid

    def test_validate_form_valid(self):
        """Test a fully valid answer set produces cleaned data."""
        schema = compile_schema(SIGNUP)
        result = schema.validate_form({
            "name": "Jane",
            "email": "jane@example.com",
            "age": "30",
            "plan": "free",
            "nickname": "",
        })
        assert result.is_valid
        assert result.error_count == 0
        assert result.validated_data["age"] == 30.0
        assert result.validated_data["nickname"] == ""

    def test_validate_form_invalid(self):
        """Test errors are collected with the received value."""
        schema = compile_schema(SIGNUP)
        result = schema.validate_form({"name": "", "email": "nope", "age": 12})
        assert not result.is_valid
        assert result.validated_data is None
        errors = result.to_error_dict()
        assert errors == {
            "name": ["This field is required"],
            "email": ["Invalid email format"],
            "age": ["Must be greater than or equal to 18"],
        }
        assert result.get_field_errors("age")[0].received == 12

    def test_unknown_answers_warned(self):
        """Test answers for undefined fields are ignored with a warning."""
        schema = compile_schema([text("a")])
        result = schema.validate_form({"a": "x", "extra": 1})
        assert result.is_valid
        assert "extra" not in result.validated_data
        assert result.warnings == ["Ignoring answer for unknown field 'extra'"]

    def test_derived_field_validated_as_required(self):
        """Test an uncomputed derived value blocks the form."""
        schema = compile_schema([text("a"), text("b"), derived("ab", ["a", "b"])])
        assert not schema.validate_form({"a": "x", "b": "y"}).is_valid
        assert schema.validate_form({"a": "x", "b": "y", "ab": "x y"}).is_valid
