"""
GOV.UK text field rendering.

Turns a field descriptor into the design system's text input markup:

    <div class="govuk-form-group [govuk-form-group--error]">
        <label class="govuk-label govuk-label--m" for="f-NAME">LABEL</label>
        <span class="govuk-hint" id="f-NAME-hint">HINT</span>
        PREFIX<input class="govuk-input ..." id="f-NAME" name="NAME" type="text" ...>POSTFIX
        <span class="govuk-error-message" id="f-NAME-error">MESSAGE</span>
        <hr>
    </div>

Every part except the group and the input is optional. The result is an
element tree (see nodes.py); render_text_field() serializes it.

Input attribute precedence:
    Attributes are composed from ordered layers, later layers winning:
        1. type, name, value, generated id
        2. class
        3. maxlength
        4. aria-labelledby
        5. aria-describedby, data-validation (error state only)
        6. options.input_attributes
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from django.utils.safestring import SafeString

from . import conf
from .errors import ErrorResolution, resolve_error
from .nodes import Element, Node, RawMarkup, Text, render
from .types import (
    ExternalLabel,
    FieldDescriptor,
    HintContent,
    OwnLabel,
    RawMarkupHint,
    normalize,
)

logger = logging.getLogger(__name__)


# Design system class names

GROUP_CLASS = "govuk-form-group"
GROUP_ERROR_CLASS = "govuk-form-group--error"
LABEL_CLASS = "govuk-label"
LABEL_MEDIUM_CLASS = "govuk-label--m"
VISUALLY_HIDDEN_CLASS = "govuk-visually-hidden"
HINT_CLASS = "govuk-hint"
INPUT_CLASS = "govuk-input"
INPUT_ERROR_CLASS = "govuk-input--error"
ERROR_MESSAGE_CLASS = "govuk-error-message"


def field_id(name: str, suffix: str | None = None) -> str:
    """Element id for the field called name, e.g. f-email or f-email-error."""
    element_id = f"{conf.get_setting('ID_PREFIX')}{name}"
    if suffix:
        element_id = f"{element_id}-{suffix}"
    return element_id


# Label and hint


@dataclass(frozen=True)
class LabelHint:
    label: Element | None
    hint: Element | None
    aria_labelledby: str | None


def compose_label_hint(descriptor: FieldDescriptor, input_id: str | None = None) -> LabelHint:
    """
    Decide the label and hint elements for a field.

    An external label (options.labelled_by) suppresses the field's own label
    and is returned as aria_labelledby instead. The hint is decided
    independently of the label.
    """
    source = descriptor.label_source
    label = None
    aria_labelledby = None

    if isinstance(source, ExternalLabel):
        aria_labelledby = source.element_id
    elif isinstance(source, OwnLabel):
        label = _label_element(source, input_id or field_id(descriptor.name))

    hint = _hint_element(descriptor.options.hint_content, field_id(descriptor.name, "hint"))
    return LabelHint(label=label, hint=hint, aria_labelledby=aria_labelledby)


def _label_element(source: OwnLabel, input_id: str) -> Element:
    classes = [LABEL_CLASS]
    if source.bold:
        classes.append(LABEL_MEDIUM_CLASS)

    content: Node = Text(source.text)
    if source.hidden:
        # Only the text is hidden; the label element itself is kept
        content = Element("span", {"class": VISUALLY_HIDDEN_CLASS}, (content,))

    return Element("label", {"class": " ".join(classes), "for": input_id}, (content,))


def _hint_element(content: HintContent | None, hint_id: str) -> Element | None:
    if content is None:
        return None
    if isinstance(content, RawMarkupHint):
        child: Node = RawMarkup(content.markup)
    else:
        child = Text(content.text)
    return Element("span", {"class": HINT_CLASS, "id": hint_id}, (child,))


# Input attributes


def merge_attribute_layers(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Merge attribute mappings left to right; later layers win."""
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def build_input_attributes(
    descriptor: FieldDescriptor,
    resolution: ErrorResolution,
    aria_labelledby: str | None = None,
) -> dict[str, Any]:
    """Compose the input element's attributes."""
    options = descriptor.options

    base = {"type": "text", "name": descriptor.name, "id": field_id(descriptor.name)}
    if descriptor.value is not None:
        base["value"] = str(descriptor.value)

    classes = [INPUT_CLASS]
    if resolution.has_error:
        classes.append(INPUT_ERROR_CLASS)
    if options.size:
        classes.append(options.size)

    layers: list[Mapping[str, Any]] = [base, {"class": " ".join(classes)}]
    if options.maxlength:
        layers.append({"maxlength": options.maxlength})
    if aria_labelledby:
        layers.append({"aria-labelledby": aria_labelledby})
    if resolution.has_error:
        layers.append(
            {
                "aria-describedby": field_id(descriptor.name, "error"),
                "data-validation": resolution.serialized_payload,
            }
        )
    layers.append(options.input_attributes)

    return merge_attribute_layers(*layers)


# Assembly


def assemble(raw: Mapping[str, Any] | FieldDescriptor | None = None, **fields: Any) -> Element:
    """
    Build the element tree for a text field.

    Accepts a descriptor, a mapping, keyword fields or a mix (see
    types.normalize). Returns the root form group element.
    """
    descriptor = normalize(raw, **fields)
    options = descriptor.options
    resolution = resolve_error(descriptor.name, descriptor.errors)

    logger.debug("Assembling text field %r (error=%s)", descriptor.name, resolution.has_error)

    input_id = options.input_attributes.get("id")
    if not isinstance(input_id, str):
        input_id = field_id(descriptor.name)

    label_hint = compose_label_hint(descriptor, input_id=input_id)
    input_attrs = build_input_attributes(descriptor, resolution, label_hint.aria_labelledby)

    group_classes = [GROUP_CLASS]
    if resolution.has_error:
        group_classes.append(GROUP_ERROR_CLASS)

    children: list[Node | None] = [
        label_hint.label,
        label_hint.hint,
        RawMarkup(options.input_prefix_html) if options.input_prefix_html else None,
        Element("input", input_attrs),
        RawMarkup(options.input_postfix_html) if options.input_postfix_html else None,
    ]
    if resolution.has_error:
        children.append(
            Element(
                "span",
                {"class": ERROR_MESSAGE_CLASS, "id": field_id(descriptor.name, "error")},
                (Text(resolution.message or ""),),
            )
        )
    if options.line_break:
        children.append(Element("hr"))

    return Element(
        "div",
        {"class": " ".join(group_classes)},
        tuple(child for child in children if child is not None),
    )


def render_text_field(
    raw: Mapping[str, Any] | FieldDescriptor | None = None, **fields: Any
) -> SafeString:
    """Render a text field to markup. Accepts the same arguments as assemble()."""
    return render(assemble(raw, **fields))
