"""Notification Descriptions — pure builders for the events the core emits.

Invariants:
    - Builders are pure: they describe an event, they never deliver it
    - Every event has a title, a description and a severity
    - Quota and validation failures use the destructive severity

Design Decisions:
    - Transitions return these alongside the next state; the shell forwards them
      to whatever NotificationSink it was given
"""

from dataclasses import dataclass

from app.core.domain_types import NotificationSeverity


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: NotificationSeverity = NotificationSeverity.DEFAULT
    event: str = ""

    def to_dict(self) -> dict:
        return {
            "event": self.event,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
        }


QUOTA_MESSAGE = "Your plan's form limit has been reached. Please upgrade to create more forms."


def field_added(label: str) -> Notification:
    return Notification(
        "Field Added", f'"{label}" has been added to your form.', event="field_added",
    )


def field_deleted(label: str) -> Notification:
    return Notification(
        "Field Deleted", f'"{label}" has been removed from your form.',
        event="field_deleted",
    )


def form_loaded(name: str) -> Notification:
    return Notification(
        "Form Loaded", f'"{name}" is now ready for editing.', event="form_loaded",
    )


def template_applied(template_name: str | None = None) -> Notification:
    if template_name:
        description = f'"{template_name}" template has been applied to your form.'
    else:
        description = "The template has been applied to your form."
    return Notification("Template Applied", description, event="template_applied")


def new_form_started() -> Notification:
    return Notification(
        "New Form Started", "You can now start building your new form.",
        event="new_form_started",
    )


def quota_exceeded() -> Notification:
    return Notification(
        "Form Limit Reached", QUOTA_MESSAGE,
        NotificationSeverity.DESTRUCTIVE, event="quota_exceeded",
    )


def validation_failed() -> Notification:
    return Notification(
        "Knowledge Base Required",
        "Forms with chat fields need a knowledge base. Select one and save again.",
        NotificationSeverity.DESTRUCTIVE, event="validation_failed",
    )


def form_saved(name: str, updated: bool) -> Notification:
    if updated:
        return Notification(
            "Form Updated", f'"{name}" has been updated successfully.',
            event="form_updated",
        )
    return Notification(
        "Form Saved", f'"{name}" has been saved successfully.', event="form_saved",
    )


def save_failed(name: str) -> Notification:
    return Notification(
        "Save Failed", f'"{name}" could not be saved. Please try again.',
        NotificationSeverity.DESTRUCTIVE, event="save_failed",
    )


def form_duplicated(name: str) -> Notification:
    return Notification(
        "Form Duplicated", f'"{name}" has been duplicated successfully.',
        event="form_duplicated",
    )
