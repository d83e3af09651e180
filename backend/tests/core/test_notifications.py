"""Notifications — event descriptions emitted by transitions."""

from app.core import notifications
from app.core.domain_types import NotificationSeverity


def test_failure_events_are_destructive():
    assert notifications.quota_exceeded().severity is NotificationSeverity.DESTRUCTIVE
    assert notifications.validation_failed().severity is NotificationSeverity.DESTRUCTIVE
    assert notifications.save_failed("X").severity is NotificationSeverity.DESTRUCTIVE


def test_success_events_use_default_severity():
    for note in (
        notifications.field_added("A"),
        notifications.field_deleted("A"),
        notifications.form_loaded("F"),
        notifications.template_applied(),
        notifications.new_form_started(),
    ):
        assert note.severity is NotificationSeverity.DEFAULT


def test_form_saved_vs_updated():
    assert notifications.form_saved("F", updated=False).title == "Form Saved"
    assert notifications.form_saved("F", updated=True).title == "Form Updated"


def test_to_dict():
    data = notifications.form_loaded("Intake").to_dict()
    assert data == {
        "event": "form_loaded",
        "title": "Form Loaded",
        "description": '"Intake" is now ready for editing.',
        "severity": "default",
    }
