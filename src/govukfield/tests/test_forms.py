"""Tests for rendering Django form fields through the text field engine."""

import pytest
from django import forms
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.utils.html import format_html

from govukfield.forms import DEFAULT_VALIDATOR, form_errors, render_bound_field


class ContactForm(forms.Form):
    email = forms.CharField(
        label="Email address", max_length=254, help_text="We'll only use this to reply"
    )
    nickname = forms.CharField(required=False)
    code = forms.CharField(
        required=False,
        min_length=3,
        validators=[RegexValidator(r"^\d+$", message="Enter digits only", code="digits")],
    )


class LinkedHelpForm(forms.Form):
    reference = forms.CharField(
        help_text=format_html('See <a href="{}">where to find it</a>', "/help/"),
    )


class ConsistentContactForm(ContactForm):
    def clean(self):
        raise ValidationError("Something is inconsistent")


# =============================================================================
# Test form_errors
# =============================================================================


class TestFormErrors:
    """Tests for form_errors."""

    def test_should_be_empty_for_valid_form(self):
        """A valid form has an empty error map."""
        # Arrange
        form = ContactForm(data={"email": "jo@example.com"})

        # Act & Assert
        assert form_errors(form) == {}

    def test_should_map_required_error(self):
        """A missing required value maps to the 'required' validator."""
        # Arrange
        form = ContactForm(data={"email": ""})

        # Act
        errors = form_errors(form)

        # Assert
        assert errors == {
            "email": [{"inline": "This field is required.", "validator": "required"}],
        }

    def test_should_keep_django_error_order(self):
        """Several failures for one field are kept in Django's order."""
        # Arrange
        form = ContactForm(data={"email": "jo@example.com", "code": "ab"})

        # Act
        records = form_errors(form)["code"]

        # Assert
        assert [record["validator"] for record in records] == ["digits", "min_length"]
        assert records[0]["inline"] == "Enter digits only"

    def test_should_use_default_validator_without_code(self):
        """Errors raised without a code use the default validator identifier."""
        # Arrange
        form = ConsistentContactForm(data={"email": "jo@example.com"})

        # Act
        errors = form_errors(form)

        # Assert
        assert errors["__all__"] == [
            {"inline": "Something is inconsistent", "validator": DEFAULT_VALIDATOR}
        ]


# =============================================================================
# Test render_bound_field
# =============================================================================


class TestRenderBoundField:
    """Tests for render_bound_field."""

    def test_should_render_unbound_field_from_field_definition(self):
        """Label, help text and max_length come from the form field."""
        # Arrange
        form = ContactForm()

        # Act
        html = render_bound_field(form["email"])

        # Assert
        assert '<label class="govuk-label govuk-label--m" for="f-email">Email address</label>' in html
        assert '<span class="govuk-hint" id="f-email-hint">We&#x27;ll only use this to reply</span>' in html
        assert 'maxlength="254"' in html
        assert "value=" not in html
        assert "govuk-form-group--error" not in html

    def test_should_default_label_to_field_name(self):
        """Fields without an explicit label use Django's generated label."""
        html = render_bound_field(ContactForm()["nickname"])

        assert ">Nickname</label>" in html

    def test_should_render_bound_errors(self):
        """A bound form's first error for the field is shown."""
        # Arrange
        form = ContactForm(data={"email": ""})

        # Act
        html = render_bound_field(form["email"])

        # Assert
        assert "govuk-form-group govuk-form-group--error" in html
        assert '<span class="govuk-error-message" id="f-email-error">This field is required.</span>' in html
        assert 'value=""' in html

    def test_should_not_show_errors_of_other_fields(self):
        """Only the rendered field's own errors are shown."""
        # Arrange
        form = ContactForm(data={"email": ""})

        # Act
        html = render_bound_field(form["nickname"])

        # Assert
        assert "govuk-error-message" not in html

    def test_should_use_prefixed_html_name(self):
        """Prefixed forms render and report errors under the prefixed name."""
        # Arrange
        form = ContactForm(data={"contact-email": ""}, prefix="contact")

        # Act
        html = render_bound_field(form["email"])

        # Assert
        assert 'name="contact-email"' in html
        assert 'id="f-contact-email"' in html
        assert 'id="f-contact-email-error"' in html
        assert (
            'data-validation="{&quot;fn&quot;:&quot;contact-email&quot;,&quot;va&quot;:&quot;required&quot;}"'
            in html
        )

    @pytest.mark.parametrize(
        ("options", "expected", "unexpected"),
        [
            ({"hint": "Custom hint"}, "Custom hint", "reply"),
            ({"hintHtml": "<b>Raw hint</b>"}, "<b>Raw hint</b>", "reply"),
            ({"maxlength": "10"}, 'maxlength="10"', 'maxlength="254"'),
        ],
    )
    def test_options_should_override_field_definition(self, options, expected, unexpected):
        """Explicit options win over values taken from the form field."""
        # Act
        html = render_bound_field(ContactForm()["email"], options=options)

        # Assert
        assert expected in html
        assert unexpected not in html

    def test_label_argument_should_override_field_label(self):
        html = render_bound_field(ContactForm()["email"], label="Your email")

        assert ">Your email</label>" in html
        assert "Email address" not in html

    def test_should_render_safe_help_text_as_markup(self):
        """Help text marked safe keeps its markup."""
        html = render_bound_field(LinkedHelpForm()["reference"])

        assert 'See <a href="/help/">where to find it</a></span>' in html

    def test_should_prefer_explicit_hint_over_safe_help_text(self):
        """An explicit hint replaces help text marked safe."""
        html = render_bound_field(LinkedHelpForm()["reference"], options={"hint": "Custom hint"})

        assert ">Custom hint</span>" in html
        assert "where to find it" not in html
