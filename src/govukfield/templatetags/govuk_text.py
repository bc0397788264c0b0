"""
Template tags for GOV.UK text fields.

Usage:
    {% load govuk_text %}

    {% govuk_text "email" value=email label="Email address" options=email_options errors=errors %}
    {% govuk_text_field form.email hint="We'll only use this to reply" %}
"""

from django import template

from ..fields import render_text_field
from ..forms import render_bound_field

register = template.Library()


@register.simple_tag
def govuk_text(name, value=None, label=None, options=None, errors=None):
    """Render a text field from its parts."""
    return render_text_field(name=name, value=value, label=label, options=options, errors=errors)


@register.simple_tag
def govuk_text_field(bound_field, label=None, **options):
    """Render a bound form field. Extra keyword arguments are text field options."""
    return render_bound_field(bound_field, label=label, options=options)
