"""Boundary Protocols — contracts between the form builder core and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO goes through these Protocol types
    - Implementations are provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Persistence and quota are async because implementations do IO; the pure core
      never awaits them, services/form_editor orchestrates the calls
"""

from typing import Protocol

from app.core.form_state import FormField, KnowledgeBase, SavedForm
from app.core.notifications import Notification
from app.core.save_validation import SavePayload


class FormRepository(Protocol):
    """Create-or-update persistence — save_form returns the saved form, or None on failure."""

    async def get_form(self, form_id: str) -> SavedForm | None: ...

    async def save_form(
        self,
        payload: SavePayload,
        fields: tuple[FormField, ...],
        existing_form: SavedForm | None = None,
    ) -> SavedForm | None: ...


class KnowledgeBaseDirectory(Protocol):
    """Read-only list of knowledge bases the current user can attach."""
    loading: bool

    def list_knowledge_bases(self) -> list[KnowledgeBase]: ...


class FormQuota(Protocol):
    """Opaque plan-limit gate."""
    async def max_forms_reached(self) -> bool: ...


class NotificationSink(Protocol):
    """Best-effort delivery of toast-style notifications."""
    def notify(self, notification: Notification) -> None: ...
