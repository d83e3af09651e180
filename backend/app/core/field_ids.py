"""Field Id Generation — injected unique-id factories for new fields.

Invariants:
    - Every factory returns a FieldId never returned before by the same factory
    - Ids are never derived from wall-clock time

Design Decisions:
    - Callable factory injected into add_field: the core stays deterministic under test
      (SequentialFieldIds) while production uses random uuid4 ids
"""

import itertools
import uuid
from typing import Callable

from app.core.domain_types import FieldId


FieldIdFactory = Callable[[], FieldId]


def uuid_field_ids(prefix: str = "field") -> FieldIdFactory:
    """Random ids of the form '<prefix>_<32 hex chars>'."""
    def _next() -> FieldId:
        return FieldId(f"{prefix}_{uuid.uuid4().hex}")
    return _next


class SequentialFieldIds:
    """Counter-backed factory: field_1, field_2, ..."""

    def __init__(self, prefix: str = "field", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> FieldId:
        return FieldId(f"{self.prefix}_{next(self._counter)}")
