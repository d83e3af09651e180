"""Editor Routes — HTTP behaviour of the editor API.

Tests cover:
    - create / get / close editor, 404 for unknown editors
    - field add / update / delete / move / selection with notifications in responses
    - explicit nulls in a field update leave label, type and required alone
    - unsupported field type → 400 FIELD_TYPE_UNSUPPORTED
    - load, template (catalogue and ad-hoc), new form with quota → 403
    - rejected requests carry their destructive notifications in the error body
    - save: knowledge-base gate, normalization, update, quota for new forms
    - duplicate, export, validation status
"""

import json
import logging


async def _add(client, editor_id, field_type):
    res = await client.post(f"/api/v1/editors/{editor_id}/fields", json={"type": field_type})
    assert res.status_code == 200
    return res.json()


def _events(body) -> list[str]:
    return [n["event"] for n in body["notifications"]]


# ─── Editor sessions ────────────────────────────────────────────

async def test_create_editor_returns_empty_state(client):
    res = await client.post("/api/v1/editors")
    assert res.status_code == 201
    body = res.json()
    assert body["fields"] == []
    assert body["selected_field_id"] is None
    assert body["current_form_id"] is None


async def test_unknown_editor_is_404(client):
    res = await client.get("/api/v1/editors/00000000-0000-0000-0000-000000000000")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_close_editor(client, editor_id):
    res = await client.delete(f"/api/v1/editors/{editor_id}")
    assert res.status_code == 204
    assert (await client.get(f"/api/v1/editors/{editor_id}")).status_code == 404


# ─── Fields ─────────────────────────────────────────────────────

async def test_add_select_field(client, editor_id):
    body = await _add(client, editor_id, "select")
    [field] = body["fields"]
    assert field["type"] == "select"
    assert field["options"] == ["Option 1", "Option 2"]
    assert field["required"] is False
    assert body["selected_field_id"] == field["id"]
    assert _events(body) == ["field_added"]


async def test_notifications_are_not_repeated(client, editor_id):
    await _add(client, editor_id, "text")
    res = await client.get(f"/api/v1/editors/{editor_id}")
    assert res.json()["notifications"] == []


async def test_add_unsupported_type_is_400(client, editor_id):
    res = await client.post(
        f"/api/v1/editors/{editor_id}/fields", json={"type": "signature"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "FIELD_TYPE_UNSUPPORTED"


async def test_update_field_type_change(client, editor_id):
    body = await _add(client, editor_id, "select")
    field_id = body["fields"][0]["id"]
    res = await client.patch(
        f"/api/v1/editors/{editor_id}/fields/{field_id}",
        json={"type": "text", "label": "Your name"},
    )
    field = res.json()["fields"][0]
    assert field["id"] == field_id
    assert field["label"] == "Your name"
    assert field["options"] is None


async def test_update_with_null_values_keeps_label_and_required(client, editor_id):
    body = await _add(client, editor_id, "text")
    field_id = body["fields"][0]["id"]
    url = f"/api/v1/editors/{editor_id}/fields/{field_id}"
    await client.patch(url, json={"required": True})
    res = await client.patch(url, json={"label": None, "required": None, "type": None})
    assert res.status_code == 200
    field = res.json()["fields"][0]
    assert field["label"] == "New text field"
    assert field["required"] is True
    assert field["type"] == "text"


async def test_update_unknown_field_is_noop(client, editor_id):
    await _add(client, editor_id, "text")
    res = await client.patch(
        f"/api/v1/editors/{editor_id}/fields/nope", json={"label": "X"},
    )
    assert res.status_code == 200
    assert res.json()["fields"][0]["label"] == "New text field"


async def test_delete_field_clears_selection(client, editor_id):
    body = await _add(client, editor_id, "text")
    field_id = body["fields"][0]["id"]
    res = await client.delete(f"/api/v1/editors/{editor_id}/fields/{field_id}")
    body = res.json()
    assert body["fields"] == []
    assert body["selected_field_id"] is None
    assert _events(body) == ["field_deleted"]


async def test_move_field(client, editor_id):
    for t in ("text", "email", "phone"):
        body = await _add(client, editor_id, t)
    a, b, c = (f["id"] for f in body["fields"])
    res = await client.post(
        f"/api/v1/editors/{editor_id}/fields/{b}/move", json={"direction": "up"},
    )
    assert [f["id"] for f in res.json()["fields"]] == [b, a, c]


async def test_move_invalid_direction_is_400(client, editor_id):
    body = await _add(client, editor_id, "text")
    field_id = body["fields"][0]["id"]
    res = await client.post(
        f"/api/v1/editors/{editor_id}/fields/{field_id}/move", json={"direction": "left"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_selection(client, editor_id):
    await _add(client, editor_id, "text")
    body = await _add(client, editor_id, "text")
    first = body["fields"][0]["id"]
    res = await client.put(
        f"/api/v1/editors/{editor_id}/selection", json={"field_id": first},
    )
    assert res.json()["selected_field_id"] == first


# ─── Lifecycle ──────────────────────────────────────────────────

async def test_load_form(client, editor_id):
    res = await client.post(f"/api/v1/editors/{editor_id}/load", json={
        "id": "form_x", "name": "Intake",
        "fields": [{"id": "q1", "type": "radio", "label": "Plan", "options": ["A", "B"]}],
    })
    body = res.json()
    assert body["current_form_id"] == "form_x"
    assert body["current_form_name"] == "Intake"
    assert body["fields"][0]["options"] == ["A", "B"]
    assert _events(body) == ["form_loaded"]


async def test_load_form_duplicate_ids_is_400(client, editor_id):
    res = await client.post(f"/api/v1/editors/{editor_id}/load", json={
        "name": "Bad",
        "fields": [
            {"id": "q", "type": "text", "label": "A"},
            {"id": "q", "type": "text", "label": "B"},
        ],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_FIELD_ID"


async def test_apply_catalogue_template(client, editor_id):
    res = await client.post(f"/api/v1/editors/{editor_id}/templates/contact-form")
    body = res.json()
    assert [f["id"] for f in body["fields"]] == ["name", "email", "subject", "message"]
    assert body["current_form_id"] is None
    assert _events(body) == ["template_applied"]


async def test_unknown_template_is_404(client, editor_id):
    res = await client.post(f"/api/v1/editors/{editor_id}/templates/nope")
    assert res.status_code == 404


async def test_ad_hoc_template(client, editor_id):
    res = await client.post(f"/api/v1/editors/{editor_id}/template", json={
        "fields": [{"id": "t1", "type": "chat", "label": "Ask"}],
    })
    body = res.json()
    assert body["has_chat_field"] is True


async def test_new_form(client, editor_id):
    await _add(client, editor_id, "text")
    res = await client.post(f"/api/v1/editors/{editor_id}/new")
    body = res.json()
    assert body["fields"] == []
    assert _events(body) == ["new_form_started"]


async def test_new_form_over_quota_is_403_and_state_unchanged(
    client, editor_id, repository, quota,
):
    quota.max_forms = 0
    await _add(client, editor_id, "text")
    res = await client.post(f"/api/v1/editors/{editor_id}/new")
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "QUOTA_EXCEEDED"
    assert _events(res.json()) == ["quota_exceeded"]
    assert res.json()["notifications"][0]["title"] == "Form Limit Reached"
    assert res.json()["notifications"][0]["severity"] == "destructive"
    state = (await client.get(f"/api/v1/editors/{editor_id}")).json()
    assert len(state["fields"]) == 1
    assert state["notifications"] == []


# ─── Save ───────────────────────────────────────────────────────

async def test_save_chat_form_without_knowledge_base_is_400(client, editor_id, repository):
    await _add(client, editor_id, "chat")
    res = await client.post(
        f"/api/v1/editors/{editor_id}/save",
        json={"name": "Support", "knowledge_base_id": ""},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "KNOWLEDGE_BASE_REQUIRED"
    assert _events(res.json()) == ["validation_failed"]
    assert res.json()["notifications"][0]["title"] == "Knowledge Base Required"
    assert res.json()["notifications"][0]["severity"] == "destructive"
    assert repository.count() == 0
    state = (await client.get(f"/api/v1/editors/{editor_id}")).json()
    assert state["notifications"] == []


async def test_save_normalizes_empty_knowledge_base(client, editor_id, repository):
    await _add(client, editor_id, "text")
    res = await client.post(
        f"/api/v1/editors/{editor_id}/save",
        json={"name": "  Contact  ", "knowledge_base_id": ""},
    )
    body = res.json()
    assert body["ok"] is True
    assert body["payload"] == {"name": "Contact", "description": "", "isPublic": False}
    saved = await repository.get_form(body["form_id"])
    assert saved.knowledge_base_id is None
    assert body["state"]["current_form_id"] == body["form_id"]
    assert _events(body["state"]) == ["form_saved"]


async def test_second_save_updates(client, editor_id, repository):
    await _add(client, editor_id, "chat")
    first = await client.post(
        f"/api/v1/editors/{editor_id}/save",
        json={"name": "Bot", "knowledge_base_id": "kb_docs"},
    )
    second = await client.post(
        f"/api/v1/editors/{editor_id}/save",
        json={"name": "Bot v2", "knowledge_base_id": "kb_docs"},
    )
    assert second.json()["form_id"] == first.json()["form_id"]
    assert repository.count() == 1
    assert _events(second.json()["state"]) == ["form_updated"]


async def test_save_new_form_over_quota_is_403(client, editor_id, repository, quota):
    quota.max_forms = 0
    await _add(client, editor_id, "text")
    res = await client.post(f"/api/v1/editors/{editor_id}/save", json={"name": "X"})
    assert res.status_code == 403
    assert _events(res.json()) == ["quota_exceeded"]
    assert repository.count() == 0


async def test_save_blank_name_is_400(client, editor_id):
    res = await client.post(f"/api/v1/editors/{editor_id}/save", json={"name": "   "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["details"][0]["field"] == "name"


async def test_rejection_is_logged_with_editor_context(client, editor_id, quota, caplog):
    quota.max_forms = 0
    with caplog.at_level(logging.WARNING, logger="app.api.error_handlers"):
        await client.post(f"/api/v1/editors/{editor_id}/new")
    record = [r for r in caplog.records if r.name == "app.api.error_handlers"][-1]
    assert record.error_code == "QUOTA_EXCEEDED"
    assert record.editor_id == editor_id


# ─── Duplicate / export / validation ───────────────────────────

async def test_duplicate_form(client, editor_id, repository):
    await _add(client, editor_id, "text")
    saved = (await client.post(
        f"/api/v1/editors/{editor_id}/save", json={"name": "Survey"},
    )).json()
    res = await client.post(
        f"/api/v1/editors/{editor_id}/duplicate", json={"form_id": saved["form_id"]},
    )
    body = res.json()
    assert body["payload"]["name"] == "Survey (Copy)"
    assert body["form_id"] != saved["form_id"]
    assert repository.count() == 2


async def test_duplicate_unknown_form_is_404(client, editor_id):
    res = await client.post(
        f"/api/v1/editors/{editor_id}/duplicate", json={"form_id": "missing"},
    )
    assert res.status_code == 404


async def test_export(client, editor_id):
    await client.post(f"/api/v1/editors/{editor_id}/templates/survey-form")
    res = await client.get(f"/api/v1/editors/{editor_id}/export")
    assert res.status_code == 200
    assert "attachment" in res.headers["content-disposition"]
    doc = json.loads(res.text)
    assert doc["name"] == "Untitled Form"
    assert len(doc["fields"]) == 3


async def test_validation_status(client, editor_id):
    await _add(client, editor_id, "chat")
    res = await client.get(f"/api/v1/editors/{editor_id}/validation")
    assert res.json() == {"has_chat_field": True, "show_validation_error": True}
    res = await client.get(
        f"/api/v1/editors/{editor_id}/validation", params={"knowledge_base_id": "kb_faq"},
    )
    assert res.json()["show_validation_error"] is False
