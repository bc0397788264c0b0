"""Minimal element tree for rendered fields, serialized with Django's HTML utilities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from django.forms.utils import flatatt
from django.utils.html import escape, format_html
from django.utils.safestring import SafeString, mark_safe

VOID_ELEMENTS = frozenset({"br", "hr", "img", "input", "link", "meta"})


@dataclass(frozen=True)
class Text:
    """Text content. Always escaped, even if already marked safe."""

    content: str


@dataclass(frozen=True)
class RawMarkup:
    """Trusted markup, inserted verbatim."""

    content: str


@dataclass(frozen=True)
class Element:
    tag: str
    attrs: Mapping[str, str | bool] = field(default_factory=dict)
    children: tuple[Node, ...] = ()

    @property
    def void(self) -> bool:
        return self.tag in VOID_ELEMENTS

    @property
    def classes(self) -> list[str]:
        value = self.attrs.get("class")
        return value.split() if isinstance(value, str) else []

    def has_class(self, class_name: str) -> bool:
        return class_name in self.classes


Node = Element | Text | RawMarkup


def render(node: Node) -> SafeString:
    """Serialize a node and its descendants to markup."""
    if isinstance(node, Text):
        return escape(node.content)
    if isinstance(node, RawMarkup):
        return mark_safe(node.content)
    if node.void:
        return format_html("<{}{}>", node.tag, flatatt(node.attrs))
    inner = mark_safe("".join(render(child) for child in node.children))
    return format_html("<{}{}>{}</{}>", node.tag, flatatt(node.attrs), inner, node.tag)


def iter_elements(node: Node) -> Iterator[Element]:
    """Yield node and every descendant element, in document order."""
    if not isinstance(node, Element):
        return
    yield node
    for child in node.children:
        yield from iter_elements(child)


def find_all(node: Node, tag: str | None = None, class_name: str | None = None) -> list[Element]:
    """Return elements in the tree matching tag and class_name, where given."""
    return [
        element
        for element in iter_elements(node)
        if (tag is None or element.tag == tag)
        and (class_name is None or element.has_class(class_name))
    ]


def text_content(node: Node) -> str:
    """Concatenated Text content of node and its descendants; raw markup is skipped."""
    if isinstance(node, Text):
        return node.content
    if isinstance(node, RawMarkup):
        return ""
    return "".join(text_content(child) for child in node.children)
