"""Form Export — the downloadable JSON document for a form schema.

Invariants:
    - Pure: builds a string, no IO
    - Field order in the document is the store's order
"""

import json
from typing import Iterable

from app.core.form_state import FormField


def export_document(name: str, fields: Iterable[FormField]) -> dict:
    return {"name": name, "fields": [f.to_dict() for f in fields]}


def export_json(name: str, fields: Iterable[FormField]) -> str:
    return json.dumps(export_document(name, fields), indent=2, ensure_ascii=False)


def export_filename(name: str) -> str:
    """Filesystem-safe download name, e.g. 'Contact Form' -> 'contact-form.json'."""
    slug = "-".join(
        "".join(ch for ch in part if ch.isalnum()) for part in name.lower().split()
    ).strip("-")
    return f"{slug or 'form'}.json"
