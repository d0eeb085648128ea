"""
Form document model and answer set helpers.

A FormDocument is the named, timestamped container the editing UI saves.
Storage of documents is the UI's business; this module only gives the
rendering layer one object to compile and a way to seed its answer set.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Iterable

from pydantic import BaseModel, Field

from form_engine.models.field_definitions import FieldDefinition, FieldType

if TYPE_CHECKING:
    from form_engine.validation.schema import SchemaValidator


def _now() -> datetime:
    return datetime.now(timezone.utc)


def sort_fields(fields: Iterable[FieldDefinition]) -> list[FieldDefinition]:
    """Return fields in display order (stable for equal ``order`` values)."""
    return sorted(fields, key=lambda f: f.order)


def initial_answers(fields: Iterable[FieldDefinition]) -> dict[str, Any]:
    """
    Build the answer set a freshly rendered form starts from.

    Uses each field's default value when set; otherwise an empty list for
    checkbox fields and an empty string for everything else.
    """
    answers: dict[str, Any] = {}
    for field in fields:
        if field.default_value is not None:
            answers[field.id] = field.default_value
        elif field.type == FieldType.CHECKBOX:
            answers[field.id] = []
        else:
            answers[field.id] = ""
    return answers


class FormDocument(BaseModel):
    """A named form built in the editor."""

    id: str = Field(..., description="Form identifier")
    name: str = Field(..., description="Form name")
    fields: list[FieldDefinition] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=_now, alias="updatedAt")

    model_config = {"populate_by_name": True}

    def sorted_fields(self) -> list[FieldDefinition]:
        """Fields in display order."""
        return sort_fields(self.fields)

    def initial_answers(self) -> dict[str, Any]:
        """Starting answer set for this form."""
        return initial_answers(self.fields)

    def compile(self, strict: bool | None = None) -> "SchemaValidator":
        """Compile the form's fields into a schema validator."""
        from form_engine.validation.schema import compile_schema

        return compile_schema(self.sorted_fields(), strict=strict)
