"""Form Schemas — boundary validation and conversion to core dataclasses.

Invariants:
    - Unknown field types pass the schema (the core rejects them with a typed error)
    - FieldUpdateRequest.updates() only contains keys the client sent
    - FormSaveRequest strips and requires a non-blank name
"""

import pytest
from pydantic import ValidationError

from app.core.domain_types import FieldType
from app.schemas.form import (
    FieldSchema,
    FieldUpdateRequest,
    FormSaveRequest,
    FormSchema,
    MoveFieldRequest,
)


def test_field_schema_to_domain_parses_type():
    field = FieldSchema(id="q", type="radio", label="Pick", options=["a"]).to_domain()
    assert field.type is FieldType.RADIO
    assert field.options == ("a",)


def test_field_schema_keeps_unknown_type_for_core():
    field = FieldSchema(id="q", type="hologram").to_domain()
    assert field.type == "hologram"


def test_field_schema_requires_id():
    with pytest.raises(ValidationError):
        FieldSchema(id="", type="text")


def test_form_schema_blank_knowledge_base_becomes_none():
    form = FormSchema(name="F", knowledge_base_id="").to_domain()
    assert form.knowledge_base_id is None
    assert form.id is None


def test_update_request_only_sent_keys():
    assert FieldUpdateRequest(label="X").updates() == {"label": "X"}
    assert FieldUpdateRequest(options=None).updates() == {"options": None}


def test_save_request_strips_name():
    assert FormSaveRequest(name="  Intake ").name == "Intake"


def test_save_request_rejects_whitespace_name():
    with pytest.raises(ValidationError):
        FormSaveRequest(name="   ")


def test_move_request_direction_literal():
    with pytest.raises(ValidationError):
        MoveFieldRequest(direction="left")
