"""Built-in form templates."""

from dataclasses import dataclass

from app.core.domain_types import FieldId, FieldType
from app.core.form_state import FormField


@dataclass(frozen=True)
class FormTemplate:
    id: str
    name: str
    description: str
    category: str
    fields: tuple[FormField, ...]


def _f(
    field_id: str, field_type: FieldType, label: str, *,
    required: bool = False, placeholder: str = "", options: tuple[str, ...] | None = None,
) -> FormField:
    return FormField(
        FieldId(field_id), field_type, label, placeholder, required, options,
    )


TEMPLATES: tuple[FormTemplate, ...] = (
    FormTemplate(
        id="contact-form",
        name="Contact Form",
        description="Basic contact form with name, email, and message",
        category="Business",
        fields=(
            _f("name", FieldType.TEXT, "Full Name", required=True,
               placeholder="Enter your full name"),
            _f("email", FieldType.EMAIL, "Email Address", required=True,
               placeholder="Enter your email"),
            _f("subject", FieldType.TEXT, "Subject", required=True,
               placeholder="What is this about?"),
            _f("message", FieldType.TEXTAREA, "Message", required=True,
               placeholder="Your message here..."),
        ),
    ),
    FormTemplate(
        id="survey-form",
        name="Customer Survey",
        description="Collect customer feedback and satisfaction ratings",
        category="Survey",
        fields=(
            _f("rating", FieldType.RADIO, "Overall Satisfaction", required=True,
               options=("Very Satisfied", "Satisfied", "Neutral",
                        "Dissatisfied", "Very Dissatisfied")),
            _f("recommend", FieldType.RADIO, "Would you recommend us?", required=True,
               options=("Definitely", "Probably", "Not Sure",
                        "Probably Not", "Definitely Not")),
            _f("feedback", FieldType.TEXTAREA, "Additional Feedback",
               placeholder="Any additional comments?"),
        ),
    ),
    FormTemplate(
        id="registration-form",
        name="Event Registration",
        description="Event registration with personal details and preferences",
        category="Events",
        fields=(
            _f("firstName", FieldType.TEXT, "First Name", required=True,
               placeholder="First name"),
            _f("lastName", FieldType.TEXT, "Last Name", required=True,
               placeholder="Last name"),
            _f("email", FieldType.EMAIL, "Email", required=True,
               placeholder="Email address"),
            _f("phone", FieldType.PHONE, "Phone Number", required=True,
               placeholder="Phone number"),
            _f("dietary", FieldType.SELECT, "Dietary Restrictions",
               options=("None", "Vegetarian", "Vegan", "Gluten-Free", "Other")),
            _f("newsletter", FieldType.CHECKBOX, "Subscribe to newsletter"),
        ),
    ),
    FormTemplate(
        id="job-application",
        name="Job Application",
        description="Comprehensive job application form",
        category="HR",
        fields=(
            _f("fullName", FieldType.TEXT, "Full Name", required=True,
               placeholder="Your full name"),
            _f("email", FieldType.EMAIL, "Email", required=True,
               placeholder="Email address"),
            _f("phone", FieldType.PHONE, "Phone", required=True,
               placeholder="Phone number"),
            _f("position", FieldType.SELECT, "Position Applied For", required=True,
               options=("Frontend Developer", "Backend Developer",
                        "Full Stack Developer", "Designer", "Product Manager")),
            _f("experience", FieldType.NUMBER, "Years of Experience", required=True,
               placeholder="Years"),
            _f("cover", FieldType.TEXTAREA, "Cover Letter", required=True,
               placeholder="Tell us why you want to work with us..."),
            _f("resume", FieldType.FILE, "Upload Resume", required=True),
        ),
    ),
)


def get_template(template_id: str) -> FormTemplate | None:
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None


def template_categories() -> list[str]:
    """Distinct categories in catalogue order."""
    return list(dict.fromkeys(t.category for t in TEMPLATES))
