"""Form Schemas — Pydantic models for the editor API boundary.

Invariants:
    - Field.type stays a plain str here: unsupported types reach the core and come back
      as FIELD_TYPE_UNSUPPORTED rather than a generic request validation error
    - FormSaveRequest.name: 1-200 chars, stripped, non-empty
    - FieldUpdateRequest only carries keys the client actually sent (exclude_unset)

Design Decisions:
    - Conversion to/from core dataclasses lives on the schemas so routes stay thin
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.core.domain_types import FieldId, FormId, KnowledgeBaseId, parse_field_type
from app.core.form_state import FormField, KnowledgeBase, SavedForm
from app.core.notifications import Notification
from app.core.templates import FormTemplate


class FieldSchema(BaseModel):
    id: str = Field(min_length=1, max_length=200)
    type: str
    label: str = Field("", max_length=500)
    placeholder: str = Field("", max_length=500)
    required: bool = False
    options: list[str] | None = None

    def to_domain(self) -> FormField:
        return FormField(
            id=FieldId(self.id),
            type=parse_field_type(self.type) or self.type,
            label=self.label,
            placeholder=self.placeholder,
            required=self.required,
            options=tuple(self.options) if self.options is not None else None,
        )

    @classmethod
    def from_domain(cls, field: FormField) -> "FieldSchema":
        return cls(
            id=field.id,
            type=field.type.value,
            label=field.label,
            placeholder=field.placeholder,
            required=field.required,
            options=list(field.options) if field.options is not None else None,
        )


class FormSchema(BaseModel):
    """A saved form, as sent to load_form."""
    id: str | None = None
    name: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    is_public: bool = False
    fields: list[FieldSchema] = []
    knowledge_base_id: str | None = None

    def to_domain(self) -> SavedForm:
        return SavedForm(
            id=FormId(self.id) if self.id else None,
            name=self.name,
            description=self.description,
            is_public=self.is_public,
            fields=tuple(f.to_domain() for f in self.fields),
            knowledge_base_id=(
                KnowledgeBaseId(self.knowledge_base_id)
                if self.knowledge_base_id else None
            ),
        )


# --- Requests -----------------------------------------------------------------

class AddFieldRequest(BaseModel):
    type: str


class FieldUpdateRequest(BaseModel):
    """Partial field update — only sent keys are applied."""
    type: str | None = None
    label: str | None = Field(None, max_length=500)
    placeholder: str | None = Field(None, max_length=500)
    required: bool | None = None
    options: list[str] | None = None

    def updates(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MoveFieldRequest(BaseModel):
    direction: Literal["up", "down"]


class SelectionRequest(BaseModel):
    field_id: str | None = None


class TemplateFieldsRequest(BaseModel):
    fields: list[FieldSchema]


class FormSaveRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    is_public: bool = False
    knowledge_base_id: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class DuplicateFormRequest(BaseModel):
    form_id: str


# --- Responses ----------------------------------------------------------------

class NotificationSchema(BaseModel):
    event: str
    title: str
    description: str
    severity: str

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationSchema":
        return cls(**notification.to_dict())


class EditorStateResponse(BaseModel):
    editor_id: UUID
    fields: list[FieldSchema]
    selected_field_id: str | None
    current_form_id: str | None
    current_form_name: str | None
    revision: int
    has_chat_field: bool
    notifications: list[NotificationSchema] = []


class SaveResponse(BaseModel):
    ok: bool
    form_id: str | None = None
    payload: dict | None = None
    stale: bool = False
    state: EditorStateResponse


class ValidationStatusResponse(BaseModel):
    has_chat_field: bool
    show_validation_error: bool


class TemplateSummary(BaseModel):
    id: str
    name: str
    description: str
    category: str
    field_count: int

    @classmethod
    def from_domain(cls, template: FormTemplate) -> "TemplateSummary":
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            category=template.category,
            field_count=len(template.fields),
        )


class KnowledgeBaseSchema(BaseModel):
    id: str
    name: str

    @classmethod
    def from_domain(cls, kb: KnowledgeBase) -> "KnowledgeBaseSchema":
        return cls(id=kb.id, name=kb.name)


class KnowledgeBaseListResponse(BaseModel):
    knowledge_bases: list[KnowledgeBaseSchema]
    loading: bool
