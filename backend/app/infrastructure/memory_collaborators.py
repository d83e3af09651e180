"""In-Memory Collaborators — reference implementations of the core boundary protocols.

Invariants:
    - InMemoryFormRepository assigns a new FormId on create, keeps the id on update
    - PlanQuota reports reached when stored forms >= max_forms
    - NotificationBuffer keeps events in arrival order until drained

Design Decisions:
    - Process-local dicts: the API is single-process and persistence mechanics are
      owned by the hosting product, these exist so the HTTP surface is usable on its own
"""

import logging
import uuid
from functools import lru_cache

from app.config import get_settings
from app.core.domain_types import FormId, KnowledgeBaseId
from app.core.form_state import FormField, KnowledgeBase, SavedForm
from app.core.notifications import Notification
from app.core.save_validation import SavePayload

logger = logging.getLogger(__name__)


class NotificationBuffer:
    """Sink that collects notifications for the current request/response."""

    def __init__(self):
        self._events: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self._events.append(notification)

    def drain(self) -> list[Notification]:
        events, self._events = self._events, []
        return events


class InMemoryFormRepository:
    def __init__(self):
        self.forms: dict[FormId, SavedForm] = {}

    async def save_form(
        self,
        payload: SavePayload,
        fields: tuple[FormField, ...],
        existing_form: SavedForm | None = None,
    ) -> SavedForm | None:
        if existing_form is not None and existing_form.id in self.forms:
            form_id = existing_form.id
        else:
            form_id = FormId(f"form_{uuid.uuid4().hex}")
        saved = SavedForm(
            id=form_id,
            name=payload.name,
            description=payload.description,
            is_public=payload.is_public,
            fields=tuple(fields),
            knowledge_base_id=payload.knowledge_base_id,
        )
        self.forms[form_id] = saved
        logger.info(
            f"Saved form '{payload.name}'",
            extra={"form_id": form_id},
        )
        return saved

    async def get_form(self, form_id: str) -> SavedForm | None:
        return self.forms.get(FormId(form_id))

    def count(self) -> int:
        return len(self.forms)


class InMemoryKnowledgeBaseDirectory:
    def __init__(self, knowledge_bases: list[KnowledgeBase] | None = None):
        self.loading = False
        self._knowledge_bases = list(knowledge_bases or [])

    def list_knowledge_bases(self) -> list[KnowledgeBase]:
        return list(self._knowledge_bases)

    def add(self, kb_id: str, name: str) -> KnowledgeBase:
        kb = KnowledgeBase(KnowledgeBaseId(kb_id), name)
        self._knowledge_bases.append(kb)
        return kb


class PlanQuota:
    """Form-count limit for a plan tier."""

    def __init__(self, repository: InMemoryFormRepository, max_forms: int):
        self.repository = repository
        self.max_forms = max_forms

    async def max_forms_reached(self) -> bool:
        return self.repository.count() >= self.max_forms


# ─── Process-wide instances (FastAPI dependencies) ──────────────

@lru_cache
def get_form_repository() -> InMemoryFormRepository:
    return InMemoryFormRepository()


@lru_cache
def get_knowledge_base_directory() -> InMemoryKnowledgeBaseDirectory:
    return InMemoryKnowledgeBaseDirectory()


def get_form_quota() -> PlanQuota:
    return PlanQuota(get_form_repository(), get_settings().max_forms_per_plan)
