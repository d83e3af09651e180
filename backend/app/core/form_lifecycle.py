"""Form Lifecycle — load / template / new-form transitions that replace the whole store.

Invariants:
    - All functions are PURE: return a Transition, never mutate input state
    - Every successful lifecycle transition clears the selection
    - load_form sets current_form; select_template and start_new_form clear it
    - start_new_form with max_forms_reached leaves state untouched and emits quota_exceeded
    - Incoming field lists are normalized (options policy) and must have unique ids

Design Decisions:
    - Quota is an opaque bool computed by the shell; check_quota never asks why
    - Incoming lists that break an invariant are rejected whole rather than repaired
      field by field, so a loaded form is never silently altered beyond options
"""

from dataclasses import replace
from typing import Iterable

from app.core import notifications
from app.core.field_mutations import (
    duplicate_id_error,
    resolve_options,
    unsupported_type_error,
)
from app.core.domain_types import parse_field_type
from app.core.form_state import FormBuilderState, FormField, SavedForm, Transition
from app.core.templates import FormTemplate


def check_quota(max_forms_reached: bool) -> dict | None:
    """Gate for operations that create a new form."""
    if max_forms_reached:
        return {
            "status": "error",
            "error_code": "QUOTA_EXCEEDED",
            "message": notifications.QUOTA_MESSAGE,
        }
    return None


def normalize_fields(fields: Iterable[FormField]) -> tuple[FormField, ...] | dict:
    """Apply the options policy to every field and reject duplicate ids.

    Returns the normalized tuple, or an error dict.
    """
    seen: set[str] = set()
    normalized = []
    for f in fields:
        field_type = parse_field_type(f.type)
        if field_type is None:
            return unsupported_type_error(f.type)
        if f.id in seen:
            return duplicate_id_error(f.id)
        seen.add(f.id)
        normalized.append(replace(
            f, type=field_type, options=resolve_options(field_type, f.options),
        ))
    return tuple(normalized)


def load_form(state: FormBuilderState, form: SavedForm) -> Transition:
    """Replace the store with form's fields and make form the current form."""
    fields = normalize_fields(form.fields)
    if isinstance(fields, dict):
        return Transition(state, error=fields)

    next_state = state.advance(
        fields=fields,
        selected_field_id=None,
        current_form=replace(form, fields=fields),
        generation=state.generation + 1,
    )
    return Transition(next_state, (notifications.form_loaded(form.name),))


def select_template(
    state: FormBuilderState,
    fields: Iterable[FormField],
    template_name: str | None = None,
) -> Transition:
    """Replace the store with template fields; the form becomes new/unsaved."""
    normalized = normalize_fields(fields)
    if isinstance(normalized, dict):
        return Transition(state, error=normalized)

    next_state = state.advance(
        fields=normalized, selected_field_id=None, current_form=None,
        generation=state.generation + 1,
    )
    return Transition(next_state, (notifications.template_applied(template_name),))


def apply_template(state: FormBuilderState, template: FormTemplate) -> Transition:
    return select_template(state, template.fields, template.name)


def start_new_form(state: FormBuilderState, max_forms_reached: bool) -> Transition:
    """Clear the store for a brand-new form, unless the plan quota is reached."""
    error = check_quota(max_forms_reached)
    if error:
        return Transition(state, (notifications.quota_exceeded(),), error)

    next_state = state.advance(
        fields=(), selected_field_id=None, current_form=None,
        generation=state.generation + 1,
    )
    return Transition(next_state, (notifications.new_form_started(),))


def record_saved_form(
    state: FormBuilderState, saved: SavedForm, expected_generation: int,
) -> Transition:
    """Make saved the current form, unless the form was replaced during the save.

    expected_generation is the store generation captured when the save started;
    a load/template/new-form since then means the saved form is no longer on screen.
    """
    if state.generation != expected_generation:
        return Transition(state)
    return Transition(state.advance(current_form=saved))
