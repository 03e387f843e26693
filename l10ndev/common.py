#!/usr/bin/env python3
"""
Bundle data model shared by the analyzer, the XLIFF codec and the translators.

A bundle maps a message key to a message value. A value is one of:
    - a plain string (the key is the message itself)
    - a list of lines (legacy multi-line form, joined with newlines)
    - {"message": str, "comment": [str, ...]} (message with translator comments)

When comments are present the key is ``message + "/" + "".join(comments)``.
"""

import copy
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

MessageValue = Union[str, list[str], dict[str, Any]]
Bundle = dict[str, MessageValue]


@dataclass
class ScriptFile:
    """
    A source file handed to the analyzer.

    Attributes:
        extension: File extension including the dot (.ts, .tsx, .js, .jsx)
        contents: Full source text
        path: Optional origin, only used in diagnostics
    """
    extension: str
    contents: str
    path: Optional[str] = None


@dataclass
class L10nFileDetails:
    """Messages for one bundle in one language, as read from an XLIFF file."""
    name: str
    language: str
    messages: dict[str, str]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "language": self.language,
            "messages": self.messages,
        }


def make_key(message: str, comments: Optional[list[str]] = None) -> str:
    """
    Build the bundle key for a message.

    Args:
        message: Message text
        comments: Optional translator comments

    Returns:
        The message itself, or message + "/" + concatenated comments
    """
    if comments:
        return f"{message}/{''.join(comments)}"
    return message


def make_value(message: str, comments: Optional[list[str]] = None) -> MessageValue:
    """Build the bundle value matching make_key()."""
    if comments:
        return {"message": message, "comment": list(comments)}
    return message


def normalize_message(value: MessageValue) -> str:
    """
    Collapse a message value to its text.

    Args:
        value: Plain string, list of lines or annotated dict

    Returns:
        The message text (lines joined with newlines, comments dropped)
    """
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return '\n'.join(value)
    return value["message"]


def normalize_bundle(bundle: Bundle) -> Bundle:
    """Replace legacy list values with their joined text; keep everything else."""
    return {
        key: '\n'.join(value) if isinstance(value, list) else value
        for key, value in bundle.items()
    }


def get_message(value: MessageValue) -> str:
    return normalize_message(value)


def get_comment(value: MessageValue) -> Optional[list[str]]:
    """Return the comment list of an annotated value, or None."""
    if isinstance(value, dict):
        return value.get("comment")
    return None


def is_plain(value: MessageValue) -> bool:
    """True if the value carries no translator comment."""
    return not isinstance(value, dict) or not value.get("comment")


def _deep_merge(target: dict, source: dict) -> dict:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = _deep_merge(dict(target[key]), value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def merge_all(bundles: Iterable[Bundle]) -> Bundle:
    """
    Deep-merge bundles into a new bundle.

    Later bundles win on key collisions. Lists are replaced, never
    concatenated. Inputs are not modified.

    Args:
        bundles: Bundles in priority order (lowest first)

    Returns:
        Merged bundle
    """
    merged: Bundle = {}
    for bundle in bundles:
        _deep_merge(merged, bundle)
    return merged
