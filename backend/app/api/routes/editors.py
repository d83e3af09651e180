"""Editor Routes — HTTP surface over FormEditor sessions.

Invariants:
    - FormEditor is per-editor, in-memory (module-level dict)
    - Every response, success or error, carries the notifications the request produced
    - Core error descriptors become typed FormBuilderErrors; notifications from a
      rejected request travel in the error envelope
    - Quota is read from the FormQuota collaborator, never computed here

Design Decisions:
    - _editors as module-level dict: single-process uvicorn, state lost on restart
    - Collaborators injected with Depends so tests swap them via dependency_overrides
"""

import logging
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Query, Response, status

from app.config import get_settings
from app.core.errors import ErrorContext, ResourceNotFoundError, from_error_dict
from app.core.field_ids import uuid_field_ids
from app.core.form_export import export_filename
from app.core.form_state import Transition
from app.core.repository_protocols import FormQuota, FormRepository
from app.core.save_validation import has_chat_field
from app.core.templates import get_template
from app.infrastructure.memory_collaborators import (
    NotificationBuffer,
    get_form_quota,
    get_form_repository,
)
from app.schemas.form import (
    AddFieldRequest,
    DuplicateFormRequest,
    EditorStateResponse,
    FieldSchema,
    FieldUpdateRequest,
    FormSaveRequest,
    FormSchema,
    MoveFieldRequest,
    NotificationSchema,
    SaveResponse,
    SelectionRequest,
    TemplateFieldsRequest,
    ValidationStatusResponse,
)
from app.services.form_editor import FormEditor, SubmitResult

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/editors", tags=["editors"])

_editors: dict[UUID, FormEditor] = {}


def get_editor_or_404(editor_id: UUID) -> FormEditor:
    editor = _editors.get(editor_id)
    if editor is None:
        raise ResourceNotFoundError("Editor", str(editor_id))
    return editor


def _state_response(editor_id: UUID, editor: FormEditor) -> EditorStateResponse:
    state = editor.state
    current = state.current_form
    return EditorStateResponse(
        editor_id=editor_id,
        fields=[FieldSchema.from_domain(f) for f in state.fields],
        selected_field_id=state.selected_field_id,
        current_form_id=current.id if current else None,
        current_form_name=current.name if current else None,
        revision=state.revision,
        has_chat_field=has_chat_field(state.fields),
        notifications=[
            NotificationSchema.from_domain(n) for n in editor.sink.drain()
        ],
    )


def _raise_on_error(
    editor_id: UUID, editor: FormEditor, error: dict | None, field_id: str | None = None,
) -> None:
    if not error:
        return
    exc = from_error_dict(
        error, ErrorContext(editor_id=str(editor_id), field_id=field_id),
    )
    exc.notifications = [
        NotificationSchema.from_domain(n).model_dump() for n in editor.sink.drain()
    ]
    raise exc


def _respond(
    editor_id: UUID, editor: FormEditor, transition: Transition,
    field_id: str | None = None,
) -> EditorStateResponse:
    _raise_on_error(editor_id, editor, transition.error, field_id)
    return _state_response(editor_id, editor)


# ─── Editor sessions ────────────────────────────────────────────

@router.post(
    "", response_model=EditorStateResponse, status_code=status.HTTP_201_CREATED,
)
async def create_editor():
    """Open a new, empty editor."""
    editor_id = uuid4()
    editor = FormEditor(
        sink=NotificationBuffer(),
        next_id=uuid_field_ids(get_settings().field_id_prefix),
        editor_id=str(editor_id),
    )
    _editors[editor_id] = editor
    logger.info("Editor opened", extra={"editor_id": str(editor_id)})
    return _state_response(editor_id, editor)


@router.get("/{editor_id}", response_model=EditorStateResponse)
async def get_editor(editor_id: UUID):
    return _state_response(editor_id, get_editor_or_404(editor_id))


@router.delete("/{editor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_editor(editor_id: UUID):
    get_editor_or_404(editor_id)
    del _editors[editor_id]
    logger.info("Editor closed", extra={"editor_id": str(editor_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Fields ─────────────────────────────────────────────────────

@router.post("/{editor_id}/fields", response_model=EditorStateResponse)
async def add_field(editor_id: UUID, body: AddFieldRequest):
    editor = get_editor_or_404(editor_id)
    return _respond(editor_id, editor, editor.add_field(body.type))


@router.patch("/{editor_id}/fields/{field_id}", response_model=EditorStateResponse)
async def update_field(editor_id: UUID, field_id: str, body: FieldUpdateRequest):
    editor = get_editor_or_404(editor_id)
    transition = editor.update_field(field_id, body.updates())
    return _respond(editor_id, editor, transition, field_id)


@router.delete("/{editor_id}/fields/{field_id}", response_model=EditorStateResponse)
async def delete_field(editor_id: UUID, field_id: str):
    editor = get_editor_or_404(editor_id)
    return _respond(editor_id, editor, editor.delete_field(field_id), field_id)


@router.post(
    "/{editor_id}/fields/{field_id}/move", response_model=EditorStateResponse,
)
async def move_field(editor_id: UUID, field_id: str, body: MoveFieldRequest):
    editor = get_editor_or_404(editor_id)
    transition = editor.move_field(field_id, body.direction)
    return _respond(editor_id, editor, transition, field_id)


@router.put("/{editor_id}/selection", response_model=EditorStateResponse)
async def select_field(editor_id: UUID, body: SelectionRequest):
    editor = get_editor_or_404(editor_id)
    return _respond(editor_id, editor, editor.select_field(body.field_id))


# ─── Lifecycle ──────────────────────────────────────────────────

@router.post("/{editor_id}/load", response_model=EditorStateResponse)
async def load_form(editor_id: UUID, body: FormSchema):
    editor = get_editor_or_404(editor_id)
    return _respond(editor_id, editor, editor.load_form(body.to_domain()))


@router.post("/{editor_id}/template", response_model=EditorStateResponse)
async def select_template(editor_id: UUID, body: TemplateFieldsRequest):
    editor = get_editor_or_404(editor_id)
    transition = editor.select_template([f.to_domain() for f in body.fields])
    return _respond(editor_id, editor, transition)


@router.post(
    "/{editor_id}/templates/{template_id}", response_model=EditorStateResponse,
)
async def apply_template(editor_id: UUID, template_id: str):
    editor = get_editor_or_404(editor_id)
    template = get_template(template_id)
    if template is None:
        raise ResourceNotFoundError("Template", template_id)
    return _respond(editor_id, editor, editor.apply_template(template))


@router.post("/{editor_id}/new", response_model=EditorStateResponse)
async def start_new_form(
    editor_id: UUID, quota: FormQuota = Depends(get_form_quota),
):
    editor = get_editor_or_404(editor_id)
    transition = editor.start_new_form(await quota.max_forms_reached())
    return _respond(editor_id, editor, transition)


# ─── Save / duplicate / export ──────────────────────────────────

def _save_response(
    editor_id: UUID, editor: FormEditor, result: SubmitResult,
) -> SaveResponse:
    _raise_on_error(editor_id, editor, result.error)
    return SaveResponse(
        ok=result.ok,
        form_id=result.saved_form.id if result.saved_form else None,
        payload=result.payload.to_dict() if result.payload else None,
        stale=result.stale,
        state=_state_response(editor_id, editor),
    )


@router.post("/{editor_id}/save", response_model=SaveResponse)
async def save_form(
    editor_id: UUID,
    body: FormSaveRequest,
    repository: FormRepository = Depends(get_form_repository),
    quota: FormQuota = Depends(get_form_quota),
):
    """Validate and persist the editor's form (create or update)."""
    editor = get_editor_or_404(editor_id)
    form_data = editor.save_data(
        body.name, body.description, body.is_public, body.knowledge_base_id,
    )
    result = await editor.validate_and_submit(
        form_data, repository, max_forms_reached=await quota.max_forms_reached(),
    )
    return _save_response(editor_id, editor, result)


@router.post("/{editor_id}/duplicate", response_model=SaveResponse)
async def duplicate_form(
    editor_id: UUID,
    body: DuplicateFormRequest,
    repository: FormRepository = Depends(get_form_repository),
    quota: FormQuota = Depends(get_form_quota),
):
    editor = get_editor_or_404(editor_id)
    form = await repository.get_form(body.form_id)
    if form is None:
        raise ResourceNotFoundError("Form", body.form_id)
    result = await editor.duplicate_form(
        form, repository, max_forms_reached=await quota.max_forms_reached(),
    )
    return _save_response(editor_id, editor, result)


@router.get("/{editor_id}/export")
async def export_form(editor_id: UUID):
    """Download the form schema as JSON."""
    editor = get_editor_or_404(editor_id)
    current = editor.current_form
    filename = export_filename(current.name if current else "form")
    return Response(
        content=editor.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{editor_id}/validation", response_model=ValidationStatusResponse)
async def validation_status(
    editor_id: UUID, knowledge_base_id: str | None = Query(None),
):
    """Whether the save dialog should show the knowledge-base warning."""
    editor = get_editor_or_404(editor_id)
    return ValidationStatusResponse(
        has_chat_field=has_chat_field(editor.fields),
        show_validation_error=editor.should_show_validation_error(knowledge_base_id),
    )
