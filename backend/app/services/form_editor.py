"""Form Editor — live field store, notification forwarding and the async save flow.

Invariants:
    - Every mutation is synchronous and applies a core Transition atomically
    - Notifications are forwarded only after the new state is in place
    - A failing sink never changes editor state (delivery is best effort)
    - validate_and_submit never calls the repository when a pre-save check fails
    - Repository exceptions propagate to the caller unmodified

Design Decisions:
    - The store is NOT locked while a save is awaited: the repository receives the
      field snapshot taken at call time, and SubmitResult.stale reports whether the
      store's revision moved during the await
    - The saved form becomes the current form only if no load/template/new-form
      replaced the form during the save (generation check in core)
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from app.core import field_mutations, form_lifecycle, notifications
from app.core.domain_types import FieldId, FieldType, MoveDirection
from app.core.field_ids import FieldIdFactory, uuid_field_ids
from app.core.form_export import export_json
from app.core.form_state import FormBuilderState, FormField, SavedForm, Transition
from app.core.notifications import Notification
from app.core.repository_protocols import FormRepository, NotificationSink
from app.core.save_validation import (
    FormSaveData,
    SavePayload,
    build_save_payload,
    duplicate_payload,
    should_show_validation_error,
    validate_save,
)
from app.core.templates import FormTemplate

logger = logging.getLogger(__name__)

UNTITLED_FORM = "Untitled Form"


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    error: dict | None = None
    payload: SavePayload | None = None
    saved_form: SavedForm | None = None
    stale: bool = False


class FormEditor:
    """One user's editing session over a single form."""

    def __init__(
        self,
        sink: NotificationSink | None = None,
        next_id: FieldIdFactory | None = None,
        state: FormBuilderState | None = None,
        editor_id: str | None = None,
    ):
        self.sink = sink
        self.next_id = next_id or uuid_field_ids()
        self.editor_id = editor_id
        self._state = state or FormBuilderState()

    @property
    def state(self) -> FormBuilderState:
        return self._state

    @property
    def fields(self) -> tuple[FormField, ...]:
        return self._state.fields

    @property
    def selected_field_id(self) -> FieldId | None:
        return self._state.selected_field_id

    @property
    def current_form(self) -> SavedForm | None:
        return self._state.current_form

    # ─── Field mutations ────────────────────────────────────────

    def add_field(self, field_type: str | FieldType) -> Transition:
        return self._apply(
            field_mutations.add_field(self._state, field_type, self.next_id),
        )

    def update_field(self, field_id: str, updates: Mapping[str, Any]) -> Transition:
        return self._apply(field_mutations.update_field(self._state, field_id, updates))

    def delete_field(self, field_id: str) -> Transition:
        return self._apply(field_mutations.delete_field(self._state, field_id))

    def move_field(self, field_id: str, direction: str | MoveDirection) -> Transition:
        return self._apply(field_mutations.move_field(self._state, field_id, direction))

    def select_field(self, field_id: FieldId | None) -> Transition:
        return self._apply(field_mutations.select_field(self._state, field_id))

    # ─── Lifecycle ──────────────────────────────────────────────

    def load_form(self, form: SavedForm) -> Transition:
        return self._apply(form_lifecycle.load_form(self._state, form))

    def select_template(
        self, fields: tuple[FormField, ...] | list[FormField],
    ) -> Transition:
        return self._apply(form_lifecycle.select_template(self._state, fields))

    def apply_template(self, template: FormTemplate) -> Transition:
        return self._apply(form_lifecycle.apply_template(self._state, template))

    def start_new_form(self, max_forms_reached: bool) -> Transition:
        return self._apply(form_lifecycle.start_new_form(self._state, max_forms_reached))

    # ─── Save ───────────────────────────────────────────────────

    def save_data(
        self,
        name: str,
        description: str = "",
        is_public: bool = False,
        knowledge_base_id: str | None = None,
    ) -> FormSaveData:
        """Dialog values plus a snapshot of the current fields."""
        return FormSaveData(
            name=name,
            description=description,
            is_public=is_public,
            knowledge_base_id=knowledge_base_id,
            fields=self._state.fields,
        )

    def should_show_validation_error(self, knowledge_base_id: str | None) -> bool:
        return should_show_validation_error(
            self.save_data("", knowledge_base_id=knowledge_base_id),
        )

    async def validate_and_submit(
        self,
        form_data: FormSaveData,
        repository: FormRepository,
        *,
        max_forms_reached: bool = False,
    ) -> SubmitResult:
        """Check, normalize and hand form_data to the repository."""
        started_revision = self._state.revision
        started_generation = self._state.generation
        existing = self._state.current_form

        error = validate_save(
            form_data,
            is_new_form=existing is None,
            max_forms_reached=max_forms_reached,
        )
        if error:
            logger.warning(
                f"Save rejected: {error['message']}",
                extra={"editor_id": self.editor_id, "error_code": error["error_code"]},
            )
            if error["error_code"] == "QUOTA_EXCEEDED":
                self._deliver((notifications.quota_exceeded(),))
            else:
                self._deliver((notifications.validation_failed(),))
            return SubmitResult(ok=False, error=error)

        payload = build_save_payload(form_data)
        saved = await repository.save_form(payload, form_data.fields, existing)
        if saved is None:
            self._deliver((notifications.save_failed(payload.name),))
            return SubmitResult(ok=False, payload=payload, error={
                "status": "error",
                "error_code": "SAVE_FAILED",
                "message": f'"{payload.name}" could not be saved.',
            })

        stale = self._state.revision != started_revision
        if stale:
            logger.info(
                "Form changed while save was in flight",
                extra={"editor_id": self.editor_id, "form_id": saved.id},
            )
        self._apply(form_lifecycle.record_saved_form(
            self._state, saved, started_generation,
        ))
        self._deliver((notifications.form_saved(payload.name, existing is not None),))
        return SubmitResult(ok=True, payload=payload, saved_form=saved, stale=stale)

    async def duplicate_form(
        self,
        form: SavedForm,
        repository: FormRepository,
        *,
        max_forms_reached: bool = False,
    ) -> SubmitResult:
        """Save a copy of form as a new form. Leaves the editor store alone."""
        error = form_lifecycle.check_quota(max_forms_reached)
        if error:
            self._deliver((notifications.quota_exceeded(),))
            return SubmitResult(ok=False, error=error)

        payload = duplicate_payload(
            form.name, form.description, form.is_public, form.knowledge_base_id,
        )
        saved = await repository.save_form(payload, form.fields, None)
        if saved is None:
            self._deliver((notifications.save_failed(payload.name),))
            return SubmitResult(ok=False, payload=payload, error={
                "status": "error",
                "error_code": "SAVE_FAILED",
                "message": f'"{payload.name}" could not be saved.',
            })
        self._deliver((notifications.form_duplicated(form.name),))
        return SubmitResult(ok=True, payload=payload, saved_form=saved)

    def export_json(self) -> str:
        name = self._state.current_form.name if self._state.current_form else UNTITLED_FORM
        return export_json(name, self._state.fields)

    # ─── Internals ──────────────────────────────────────────────

    def _apply(self, transition: Transition) -> Transition:
        self._state = transition.state
        if transition.error:
            logger.info(
                f"Editor operation rejected: {transition.error['message']}",
                extra={
                    "editor_id": self.editor_id,
                    "error_code": transition.error["error_code"],
                },
            )
        self._deliver(transition.notifications)
        return transition

    def _deliver(self, events: tuple[Notification, ...]) -> None:
        if self.sink is None:
            return
        for event in events:
            try:
                self.sink.notify(event)
            except Exception:
                logger.warning(
                    f"Notification delivery failed: {event.title}",
                    exc_info=True,
                    extra={"editor_id": self.editor_id, "event": event.event},
                )
