"""Form Builder State — the field model store as immutable, pure dataclasses.

Invariants:
    - fields is an ordered tuple; order is display/tab order
    - Field ids are unique within fields
    - selected_field_id is None or the id of a field in fields
    - options is a non-empty tuple iff the field type is a choice type, None otherwise
    - revision only ever increases; every state-changing transition bumps it
    - generation only ever increases; whole-form replacements bump it

Design Decisions:
    - Frozen dataclasses: transitions build a new state with dataclasses.replace,
      so a snapshot taken before an async save can never be mutated under it
    - No IO here — the shell (services/form_editor) owns the live reference
"""

from dataclasses import dataclass, field, replace
from typing import Any

from app.core.domain_types import FieldId, FieldType, FormId, KnowledgeBaseId
from app.core.notifications import Notification


@dataclass(frozen=True)
class FormField:
    """One input definition within a form schema."""
    id: FieldId
    type: FieldType
    label: str
    placeholder: str = ""
    required: bool = False
    options: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "placeholder": self.placeholder,
            "required": self.required,
        }
        if self.options is not None:
            data["options"] = list(self.options)
        return data


@dataclass(frozen=True)
class SavedForm:
    """A form as known to the persistence collaborator."""
    id: FormId | None
    name: str
    description: str = ""
    is_public: bool = False
    fields: tuple[FormField, ...] = ()
    knowledge_base_id: KnowledgeBaseId | None = None


@dataclass(frozen=True)
class KnowledgeBase:
    id: KnowledgeBaseId
    name: str


@dataclass(frozen=True)
class FormBuilderState:
    """Field list, selection and current-form reference."""

    fields: tuple[FormField, ...] = field(default_factory=tuple)
    selected_field_id: FieldId | None = None
    # None means the form is new/unsaved
    current_form: SavedForm | None = None
    revision: int = 0
    # bumped by load/template/new-form, which replace the whole form
    generation: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.fields

    @property
    def has_selection(self) -> bool:
        return self.selected_field_id is not None

    @property
    def field_ids(self) -> list[FieldId]:
        return [f.id for f in self.fields]

    @property
    def selected_field(self) -> FormField | None:
        if self.selected_field_id is None:
            return None
        return self.get_field(self.selected_field_id)

    def index_of(self, field_id: str) -> int:
        """Position of field_id in fields, or -1 if absent."""
        for i, f in enumerate(self.fields):
            if f.id == field_id:
                return i
        return -1

    def get_field(self, field_id: str) -> FormField | None:
        index = self.index_of(field_id)
        return self.fields[index] if index >= 0 else None

    def advance(self, **changes: Any) -> "FormBuilderState":
        """Next state with changes applied and revision bumped."""
        return replace(self, revision=self.revision + 1, **changes)


@dataclass(frozen=True)
class Transition:
    """Result of a pure transition: next state, emitted notifications, optional error.

    When error is set, state is the unchanged input state.
    """
    state: FormBuilderState
    notifications: tuple[Notification, ...] = ()
    error: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
