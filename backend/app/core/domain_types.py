"""Domain Types — rich types that replace bare primitives across the form builder.

Invariants:
    - FieldId and FormId wrap str — never pass raw ids around domain logic untyped
    - Every valid field type, direction and severity is an Enum — no raw string matching
    - CHOICE_TYPES is the single source of truth for which types carry options

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

FieldId = NewType("FieldId", str)
FormId = NewType("FormId", str)
KnowledgeBaseId = NewType("KnowledgeBaseId", str)


# ─── Enums ───────────────────────────────────────────────────────

class FieldType(str, Enum):
    """Supported field input types."""
    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DATE = "date"
    FILE = "file"
    PHONE = "phone"
    URL = "url"
    CHAT = "chat"
    PAGE_BREAK = "page-break"


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class NotificationSeverity(str, Enum):
    """Notification variants understood by the toast sink."""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


# ─── Field Type Rules ────────────────────────────────────────────

CHOICE_TYPES: frozenset[FieldType] = frozenset({FieldType.SELECT, FieldType.RADIO})

DEFAULT_OPTIONS: tuple[str, ...] = ("Option 1", "Option 2")


def parse_field_type(value: str | FieldType) -> FieldType | None:
    """Return the FieldType for value, or None if it is not supported."""
    if isinstance(value, FieldType):
        return value
    try:
        return FieldType(value)
    except ValueError:
        return None


def is_choice_type(field_type: FieldType) -> bool:
    return field_type in CHOICE_TYPES
