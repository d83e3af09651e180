"""Save Validation Gate — conditional knowledge-base requirement and payload normalization.

Invariants:
    - All functions are PURE: no IO, no async
    - should_show_validation_error is True iff a chat field exists AND knowledge_base_id
      is empty or unset
    - build_save_payload never carries an empty-string knowledge_base_id (normalized to None)
    - check_save_quota only gates new forms; updating an existing form is never gated

Design Decisions:
    - FormSaveData carries its own field list, so the predicate is evaluated against
      the exact snapshot that will be persisted
    - validate_save chains the checks, first error wins — same shape as the mutation
      errors so the shell handles both uniformly
"""

from dataclasses import dataclass, field
from typing import Iterable

from app.core.domain_types import FieldType, KnowledgeBaseId
from app.core.form_lifecycle import check_quota
from app.core.form_state import FormField


@dataclass(frozen=True)
class FormSaveData:
    """What the save dialog submits, plus the fields being saved."""
    name: str
    description: str = ""
    is_public: bool = False
    knowledge_base_id: str | None = None
    fields: tuple[FormField, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SavePayload:
    """Normalized structure handed to the persistence collaborator."""
    name: str
    description: str
    is_public: bool
    knowledge_base_id: KnowledgeBaseId | None = None

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "description": self.description,
            "isPublic": self.is_public,
        }
        if self.knowledge_base_id is not None:
            data["knowledgeBaseId"] = self.knowledge_base_id
        return data


def has_chat_field(fields: Iterable[FormField]) -> bool:
    return any(f.type == FieldType.CHAT for f in fields)


def should_show_validation_error(form_data: FormSaveData) -> bool:
    return has_chat_field(form_data.fields) and not form_data.knowledge_base_id


def check_knowledge_base(form_data: FormSaveData) -> dict | None:
    """Chat fields need a knowledge base to ground their responses."""
    if should_show_validation_error(form_data):
        return {
            "status": "error",
            "error_code": "KNOWLEDGE_BASE_REQUIRED",
            "message": "Knowledge base is required for forms with chat fields.",
        }
    return None


def check_save_quota(is_new_form: bool, max_forms_reached: bool) -> dict | None:
    if not is_new_form:
        return None
    return check_quota(max_forms_reached)


def validate_save(
    form_data: FormSaveData, *, is_new_form: bool = False, max_forms_reached: bool = False,
) -> dict | None:
    """Run every pre-save check. Returns first error or None."""
    return (
        check_knowledge_base(form_data)
        or check_save_quota(is_new_form, max_forms_reached)
    )


def build_save_payload(form_data: FormSaveData) -> SavePayload:
    return SavePayload(
        name=form_data.name,
        description=form_data.description,
        is_public=form_data.is_public,
        knowledge_base_id=(
            KnowledgeBaseId(form_data.knowledge_base_id)
            if form_data.knowledge_base_id else None
        ),
    )


def duplicate_payload(
    name: str, description: str | None, is_public: bool,
    knowledge_base_id: str | None = None,
) -> SavePayload:
    """Payload for saving a copy of an existing form."""
    return build_save_payload(FormSaveData(
        name=f"{name} (Copy)",
        description=description or "",
        is_public=is_public,
        knowledge_base_id=knowledge_base_id,
    ))
