"""
Typed models for a single text field render.

A render call is described by a FieldDescriptor: the field name, its current
value, an optional label, a TextFieldOptions bag and the form's error map.
Callers usually pass plain mappings; normalize() turns them into these
models.

Usage:
    from govukfield import normalize

    descriptor = normalize(
        name="email",
        value="jo@example.com",
        label="Email address",
        options={"hint": "We'll only use this to contact you", "maxlength": 100},
        errors={"email": [{"inline": "Enter an email address", "validator": "required"}]},
    )

Option keys:
    Options are accepted in their camelCase spelling (hintHtml, labelledBy,
    inputAttributes, ...) or by Python field name. Unrecognised keys are
    dropped and logged at DEBUG level.

Mutually exclusive options:
    hint / hintHtml and label / labelledBy are exposed as tagged choices
    (TextFieldOptions.hint_content, FieldDescriptor.label_source) so the
    precedence lives in one place:
        - hintHtml wins over hint
        - labelledBy wins over the descriptor's own label
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from . import conf

logger = logging.getLogger(__name__)


# Tagged choices


@dataclass(frozen=True)
class PlainTextHint:
    """Hint text, escaped before insertion."""

    text: str


@dataclass(frozen=True)
class RawMarkupHint:
    """Pre-formatted hint markup, inserted verbatim."""

    markup: str


@dataclass(frozen=True)
class OwnLabel:
    """A label element rendered alongside the input."""

    text: str
    bold: bool = True
    hidden: bool = False


@dataclass(frozen=True)
class ExternalLabel:
    """An externally rendered label, referenced by id via aria-labelledby."""

    element_id: str


HintContent = PlainTextHint | RawMarkupHint
LabelSource = OwnLabel | ExternalLabel


# Models


class TextFieldOptions(BaseModel):
    """Rendering options for a text field.

    Attributes:
        unbolden: Drop the medium weight class from the label
        hidden_label: Wrap the label text in a visually hidden span
        hint: Plain text hint (escaped)
        hint_html: Markup hint (unescaped), takes precedence over hint
        size: CSS class appended to the input's class list
        maxlength: Value of the input's maxlength attribute, passed through as text
        labelled_by: Id of an external label; suppresses the field's own label
        input_prefix_html: Markup inserted immediately before the input
        input_postfix_html: Markup inserted immediately after the input
        line_break: Append a horizontal rule to the field group
        input_attributes: Attributes applied last to the input, overriding generated ones
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )

    unbolden: bool = False
    hidden_label: bool = False
    hint: str | None = None
    hint_html: str | None = None
    size: str | None = None
    maxlength: str | None = None
    labelled_by: str | None = None
    input_prefix_html: str | None = None
    input_postfix_html: str | None = None
    line_break: bool = False
    input_attributes: dict[str, str | bool] = Field(default_factory=dict)

    @field_validator("input_attributes", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def hint_content(self) -> HintContent | None:
        """The hint to render, if any. Raw markup wins over plain text."""
        if self.hint_html:
            return RawMarkupHint(self.hint_html)
        if self.hint:
            return PlainTextHint(self.hint)
        return None

    @classmethod
    def recognised_keys(cls) -> set[str]:
        """All accepted option keys, both aliases and field names."""
        keys = set(cls.model_fields)
        keys.update(info.alias for info in cls.model_fields.values() if info.alias)
        return keys


class ErrorRecord(BaseModel):
    """One validation failure: a human readable message and the failing rule."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        from_attributes=True,
        coerce_numbers_to_str=True,
    )

    inline: str = ""
    validator: str | None = None

    @field_validator("inline", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class ValidationPayload(BaseModel):
    """The {fn, va} object attached to an erroring input as data-validation."""

    model_config = ConfigDict(frozen=True)

    fn: str
    va: str | None


class FieldDescriptor(BaseModel):
    """The complete input to one render call."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(default=None, validate_default=True)  # type: ignore[assignment]
    value: Any = None
    label: str | None = None
    options: TextFieldOptions = Field(default_factory=TextFieldOptions)
    errors: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> Any:
        return conf.get_setting("DEFAULT_NAME") if value is None else value

    @field_validator("options", "errors", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def label_source(self) -> LabelSource | None:
        """Where the field's accessible name comes from, if anywhere."""
        if self.options.labelled_by:
            return ExternalLabel(self.options.labelled_by)
        if not self.label:
            return None
        return OwnLabel(
            self.label,
            bold=not self.options.unbolden,
            hidden=self.options.hidden_label,
        )


def normalize(
    raw: Mapping[str, Any] | FieldDescriptor | None = None, **fields: Any
) -> FieldDescriptor:
    """
    Build a FieldDescriptor from caller-supplied fields.

    Keyword fields take precedence over entries in raw. Absent fields get
    their defaults; the caller's mappings are never modified.

    Recognised values that cannot be coerced to their type are dropped in
    favour of their default and logged at DEBUG level. Caller input alone
    never makes normalize raise.
    """
    if isinstance(raw, FieldDescriptor):
        if not fields:
            return raw
        data = {key: getattr(raw, key) for key in FieldDescriptor.model_fields}
    else:
        data = dict(raw or {})
    data.update(fields)

    _log_ignored_options(data.get("options"))

    while True:
        try:
            return FieldDescriptor.model_validate(data)
        except PydanticValidationError as e:
            cleaned = data
            for err in e.errors():
                logger.debug(
                    "Dropping invalid field descriptor value at %s: %s",
                    ".".join(str(part) for part in err["loc"]),
                    err["msg"],
                )
                cleaned = _without(cleaned, err["loc"])
            if cleaned == data:
                # Nothing found at the reported locations; drop whole fields
                cleaned = {
                    key: value
                    for key, value in data.items()
                    if key not in {err["loc"][0] for err in e.errors()}
                }
                if cleaned == data:
                    # Only a broken GOVUK_FIELD default can fail without input
                    raise
            data = cleaned


def _without(data: Mapping[str, Any], loc: tuple[Any, ...]) -> dict[str, Any]:
    """Copy of data with the value at loc removed, at the deepest mapping reached."""
    head, rest = loc[0], loc[1:]
    copied = dict(data)
    nested = copied.get(head)
    if rest and isinstance(nested, Mapping):
        for key in _key_spellings(head, rest[0]):
            if key in nested:
                copied[head] = _without(nested, (key, *rest[1:]))
                break
        return copied
    copied.pop(head, None)
    return copied


def _key_spellings(parent: Any, key: Any) -> list[Any]:
    # Option errors may be reported by alias or by field name
    if parent != "options":
        return [key]
    spellings = [key]
    for name, info in TextFieldOptions.model_fields.items():
        if key == name and info.alias:
            spellings.append(info.alias)
        elif key == info.alias:
            spellings.append(name)
    return spellings


def _log_ignored_options(options: Any) -> None:
    if not isinstance(options, Mapping):
        return
    ignored = sorted(str(key) for key in set(options) - TextFieldOptions.recognised_keys())
    if ignored:
        logger.debug("Ignoring unrecognised text field options: %s", ", ".join(ignored))
