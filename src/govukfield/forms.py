"""
Django form integration.

Renders a bound Django form field through the text field engine and
translates the form's validation errors into the engine's error map.

Usage:
    from govukfield import render_bound_field

    class ContactForm(forms.Form):
        email = forms.CharField(max_length=254, help_text="We'll only use this to reply")

    form = ContactForm(data=request.POST)
    html = render_bound_field(form["email"], options={"size": "govuk-input--width-20"})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from django import forms
from django.utils.safestring import SafeData, SafeString

from .fields import render_text_field

# Validator identifier used when a ValidationError carries no code
DEFAULT_VALIDATOR = "invalid"

# Option keys that replace the field's help text
HINT_KEYS = frozenset({"hint", "hintHtml", "hint_html"})


def form_errors(form: forms.BaseForm) -> dict[str, list[dict[str, Any]]]:
    """
    Build an error map from a Django form's errors.

    Each ValidationError message becomes one record, in the order Django
    reports them; the error code identifies the validator. Accessing the
    errors of a bound form triggers validation.
    """
    error_map: dict[str, list[dict[str, Any]]] = {}
    for field_name, errors in form.errors.as_data().items():
        error_map[field_name] = [
            {"inline": message, "validator": error.code or DEFAULT_VALIDATOR}
            for error in errors
            for message in error.messages
        ]
    return error_map


def render_bound_field(
    bound_field: forms.BoundField,
    label: str | None = None,
    options: Mapping[str, Any] | None = None,
) -> SafeString:
    """
    Render a bound form field as a GOV.UK text input.

    The field's label, help text and max_length are used unless label or
    options say otherwise. Help text marked safe (mark_safe, format_html)
    becomes a markup hint; any other help text is escaped. Errors are only
    shown for bound forms.
    """
    field = bound_field.field
    merged_options: dict[str, Any] = {}
    help_text = bound_field.help_text
    if not HINT_KEYS.intersection(options or {}):
        if isinstance(help_text, SafeData):
            merged_options["hintHtml"] = str(help_text)
        elif help_text:
            merged_options["hint"] = str(help_text)
    if getattr(field, "max_length", None) is not None:
        merged_options["maxlength"] = field.max_length
    merged_options.update(options or {})

    errors = {}
    if bound_field.form.is_bound:
        errors[bound_field.html_name] = form_errors(bound_field.form).get(bound_field.name, [])

    return render_text_field(
        name=bound_field.html_name,
        value=bound_field.value(),
        label=str(bound_field.label) if label is None else label,
        options=merged_options,
        errors=errors,
    )
