"""Service test fixtures — FormEditor with a recording sink and controllable repository.

Invariants:
    - Every test gets a fresh editor with deterministic field ids (field_1, field_2, ...)
"""

import pytest

from app.core.field_ids import SequentialFieldIds
from app.infrastructure.memory_collaborators import NotificationBuffer
from app.services.form_editor import FormEditor

from tests.services.fakes import FakeRepository


@pytest.fixture
def sink():
    return NotificationBuffer()


@pytest.fixture
def editor(sink):
    return FormEditor(sink=sink, next_id=SequentialFieldIds(), editor_id="ed-1")


@pytest.fixture
def repository():
    return FakeRepository()
