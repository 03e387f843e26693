#!/usr/bin/env python3
"""
Argument shapes of a translation call.

A matched call is classified into exactly one of:
    StringLiteral   l10n.t('Hello'), l10n.t(`Hello`), l10n.t(42)
    TaggedTemplate  l10n.t`Hello ${name}`
    ObjectForm      l10n.t({ message: 'Hello', comment: ['greeting'] })

Anything else is not a message call and classifies to None.
"""

from dataclasses import dataclass
from typing import Optional, Union

from tree_sitter import Node

from ..errors import TemplateArgumentError
from .unescape import unescape


@dataclass
class StringLiteral:
    """A single literal argument, already unescaped."""
    text: str


@dataclass
class TaggedTemplate:
    """
    A tagged template call.

    Attributes:
        source: Template source including backticks, UTF-8 encoded
        substitutions: Byte spans of each ${...} relative to source
    """
    source: bytes
    substitutions: list[tuple[int, int]]

    def render(self) -> str:
        """Replace substitutions with {0}, {1}, ... and return the message text."""
        source = self.source
        # Reverse order keeps the earlier spans valid
        for index in reversed(range(len(self.substitutions))):
            start, end = self.substitutions[index]
            source = source[:start] + f'{{{index}}}'.encode('utf-8') + source[end:]
        text = source.decode('utf-8')[1:-1].replace('\r\n', '\n')
        return unescape(text)


@dataclass
class ObjectForm:
    """An object argument with message, optional comment and optional args."""
    message: str
    comment: Optional[list[str]] = None
    args: Optional[str] = None


CallArgs = Union[StringLiteral, TaggedTemplate, ObjectForm]


def node_text(node: Node) -> str:
    return node.text.decode('utf-8')


def _substitutions(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type == 'template_substitution']


def _template(node: Node) -> TaggedTemplate:
    return TaggedTemplate(
        source=node.text,
        substitutions=[
            (sub.start_byte - node.start_byte, sub.end_byte - node.start_byte)
            for sub in _substitutions(node)
        ],
    )


def string_value(node: Node) -> str:
    """Unescaped value of a string literal node."""
    return unescape(node_text(node)[1:-1])


def template_value(node: Node) -> str:
    """
    Value of a template literal used as a plain message.

    Raises:
        TemplateArgumentError: If the template contains a substitution
    """
    if _substitutions(node):
        row, column = node.start_point
        raise TemplateArgumentError(node_text(node)[1:-1], line=row + 1, column=column + 1)
    return _template(node).render()


def _literal_value(node: Node) -> Optional[str]:
    if node.type == 'string':
        return string_value(node)
    if node.type == 'template_string':
        return template_value(node)
    return None


def _comment_values(node: Node) -> Optional[list[str]]:
    if node.type == 'array':
        values = [_literal_value(child) for child in node.named_children]
        return [value for value in values if value is not None]
    value = _literal_value(node)
    return None if value is None else [value]


def _property_name(key: Node) -> str:
    if key.type == 'string':
        return node_text(key)[1:-1]
    return node_text(key)


def _object_form(node: Node) -> Optional[ObjectForm]:
    message = None
    comment = None
    args = None
    for pair in node.named_children:
        if pair.type != 'pair':
            continue
        key = pair.child_by_field_name('key')
        value = pair.child_by_field_name('value')
        if key is None or value is None:
            continue

        name = _property_name(key)
        if name == 'message':
            message = _literal_value(value)
        elif name == 'comment':
            comment = _comment_values(value)
        elif name == 'args':
            args = node_text(value)

    if message is None:
        return None
    return ObjectForm(message=message, comment=comment, args=args)


def classify_arguments(node: Node) -> Optional[CallArgs]:
    """
    Classify the arguments of a matched translation call.

    Args:
        node: The call's arguments node, or its template for tagged calls

    Returns:
        The call shape, or None if the call does not carry a message

    Raises:
        TemplateArgumentError: If a template argument contains a substitution
        UnescapeError: If a literal contains a malformed escape
    """
    if node.type == 'template_string':
        return _template(node)

    if node.type != 'arguments':
        return None

    arguments = [child for child in node.named_children if child.type != 'comment']
    if not arguments:
        return None

    first = arguments[0]
    if first.type == 'string':
        return StringLiteral(string_value(first))
    if first.type == 'template_string':
        return StringLiteral(template_value(first))
    if first.type == 'number':
        return StringLiteral(node_text(first))
    if first.type == 'object':
        return _object_form(first)
    return None
