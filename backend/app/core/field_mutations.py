"""Field Mutation API — add / update / delete / move / select as pure transitions.

Invariants:
    - All functions are PURE: they return a Transition, never mutate the input state
    - Field ids stay unique: new ids come from the injected factory, update never changes id
    - options is non-empty iff the type is a choice type, after every transition
    - Deleting the selected field clears the selection
    - Unknown ids are silent no-ops for update/delete/move/select (no error, no event,
      revision unchanged)

Design Decisions:
    - Type change on update resets options to the new type's defaults but keeps `required`;
      options supplied in the same update win when the new type is a choice type
    - Errors returned as dicts, not raised: the shell decides whether to surface them
      as HTTP errors, keeping failure and success paths the same shape
"""

from typing import Any, Mapping

from app.core import notifications
from app.core.domain_types import (
    DEFAULT_OPTIONS,
    FieldId,
    FieldType,
    MoveDirection,
    is_choice_type,
    parse_field_type,
)
from app.core.field_ids import FieldIdFactory
from app.core.form_state import FormBuilderState, FormField, Transition


UPDATABLE_KEYS = frozenset({"type", "label", "placeholder", "required", "options"})
# None clears these; for the other keys None means "leave unchanged".
NULLABLE_KEYS = frozenset({"placeholder", "options"})


def unsupported_type_error(field_type: Any) -> dict:
    return {
        "status": "error",
        "error_code": "FIELD_TYPE_UNSUPPORTED",
        "message": f"Field type '{field_type}' is not supported.",
        "field_type": str(field_type),
    }


def duplicate_id_error(field_id: str) -> dict:
    return {
        "status": "error",
        "error_code": "DUPLICATE_FIELD_ID",
        "message": f"Field id '{field_id}' is already used in this form.",
        "field_id": field_id,
    }


def resolve_options(
    field_type: FieldType,
    supplied: Any = None,
    current: tuple[str, ...] | None = None,
) -> tuple[str, ...] | None:
    """Options for field_type: supplied if non-empty, else current, else defaults."""
    if not is_choice_type(field_type):
        return None
    if supplied:
        return tuple(str(o) for o in supplied)
    if current:
        return current
    return DEFAULT_OPTIONS


# ─── Add ─────────────────────────────────────────────────────────

def add_field(
    state: FormBuilderState, field_type: str | FieldType, next_id: FieldIdFactory,
) -> Transition:
    """Append a new default field of field_type and select it."""
    parsed = parse_field_type(field_type)
    if parsed is None:
        return Transition(state, error=unsupported_type_error(field_type))

    new_field = FormField(
        id=next_id(),
        type=parsed,
        label=f"New {parsed.value} field",
        placeholder="",
        required=False,
        options=resolve_options(parsed),
    )
    if state.index_of(new_field.id) >= 0:
        return Transition(state, error=duplicate_id_error(new_field.id))

    next_state = state.advance(
        fields=state.fields + (new_field,), selected_field_id=new_field.id,
    )
    return Transition(next_state, (notifications.field_added(new_field.label),))


# ─── Update ──────────────────────────────────────────────────────

def merge_field(current: FormField, updates: Mapping[str, Any]) -> FormField | dict:
    """Merge updates into current under the type-change policy.

    Returns the merged field, or an error dict for an unsupported type.
    """
    updates = {
        k: v for k, v in updates.items() if v is not None or k in NULLABLE_KEYS
    }
    new_type = current.type
    if "type" in updates:
        new_type = parse_field_type(updates["type"])
        if new_type is None:
            return unsupported_type_error(updates["type"])

    keep_options = current.options if "options" not in updates else None
    return FormField(
        id=current.id,
        type=new_type,
        label=str(updates.get("label", current.label)),
        placeholder=str(updates.get("placeholder", current.placeholder) or ""),
        required=bool(updates.get("required", current.required)),
        options=resolve_options(new_type, updates.get("options"), keep_options),
    )


def update_field(
    state: FormBuilderState, field_id: str, updates: Mapping[str, Any],
) -> Transition:
    """Merge partial updates into the field with field_id; id is always preserved."""
    index = state.index_of(field_id)
    if index < 0:
        return Transition(state)

    relevant = {k: v for k, v in updates.items() if k in UPDATABLE_KEYS}
    merged = merge_field(state.fields[index], relevant)
    if isinstance(merged, dict):
        return Transition(state, error=merged)
    if merged == state.fields[index]:
        return Transition(state)

    fields = list(state.fields)
    fields[index] = merged
    return Transition(state.advance(fields=tuple(fields)))


# ─── Delete ──────────────────────────────────────────────────────

def delete_field(state: FormBuilderState, field_id: str) -> Transition:
    """Remove the field if present; clear the selection if it was selected."""
    removed = state.get_field(field_id)
    if removed is None:
        return Transition(state)

    selected = state.selected_field_id
    if selected == field_id:
        selected = None
    next_state = state.advance(
        fields=tuple(f for f in state.fields if f.id != field_id),
        selected_field_id=selected,
    )
    return Transition(next_state, (notifications.field_deleted(removed.label),))


# ─── Move ────────────────────────────────────────────────────────

def move_field(
    state: FormBuilderState, field_id: str, direction: str | MoveDirection,
) -> Transition:
    """Swap the field with its neighbour in direction. No-op at either boundary."""
    try:
        direction = MoveDirection(direction)
    except ValueError:
        return Transition(state, error={
            "status": "error",
            "error_code": "INVALID_DIRECTION",
            "message": f"Direction must be 'up' or 'down', got '{direction}'.",
        })

    index = state.index_of(field_id)
    if index < 0:
        return Transition(state)
    target = index - 1 if direction == MoveDirection.UP else index + 1
    if target < 0 or target >= len(state.fields):
        return Transition(state)

    fields = list(state.fields)
    fields[index], fields[target] = fields[target], fields[index]
    return Transition(state.advance(fields=tuple(fields)))


# ─── Select ──────────────────────────────────────────────────────

def select_field(state: FormBuilderState, field_id: FieldId | None) -> Transition:
    """Set or clear the selection. Ids not in the store are ignored."""
    if field_id == state.selected_field_id:
        return Transition(state)
    if field_id is not None and state.index_of(field_id) < 0:
        return Transition(state)
    return Transition(state.advance(selected_field_id=field_id))
