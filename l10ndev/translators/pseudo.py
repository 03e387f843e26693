#!/usr/bin/env python3
"""
Pseudo-localization.

Replaces every ASCII letter with an accented look-alike and doubles the
vowels a, e, o and u so untranslated strings and layout overflow are easy
to spot. Command links, icons and {placeholders} are left untouched.

    "Hello"                   -> "Ħḗḗŀŀǿǿ"
    "$(alert) Hello"          -> "$(alert) Ħḗḗŀŀǿǿ"
    "[hello](command:hello)"  -> "[ħḗḗŀŀǿǿ](command:hello)"
"""

from ..common import Bundle, normalize_message
from .base import PLACEHOLDER_REGEX, Translator

ACCENTED_MAP = {
    'a': 'ȧ', 'A': 'Ȧ', 'b': 'ƀ', 'B': 'Ɓ', 'c': 'ƈ', 'C': 'Ƈ', 'd': 'ḓ', 'D': 'Ḓ',
    'e': 'ḗ', 'E': 'Ḗ', 'f': 'ƒ', 'F': 'Ƒ', 'g': 'ɠ', 'G': 'Ɠ', 'h': 'ħ', 'H': 'Ħ',
    'i': 'ī', 'I': 'Ī', 'j': 'ĵ', 'J': 'Ĵ', 'k': 'ķ', 'K': 'Ķ', 'l': 'ŀ', 'L': 'Ŀ',
    'm': 'ḿ', 'M': 'Ḿ', 'n': 'ƞ', 'N': 'Ƞ', 'o': 'ǿ', 'O': 'Ǿ', 'p': 'ƥ', 'P': 'Ƥ',
    'q': 'ɋ', 'Q': 'Ɋ', 'r': 'ř', 'R': 'Ř', 's': 'ş', 'S': 'Ş', 't': 'ŧ', 'T': 'Ŧ',
    'u': 'ŭ', 'U': 'Ŭ', 'v': 'ṽ', 'V': 'Ṽ', 'w': 'ẇ', 'W': 'Ẇ', 'x': 'ẋ', 'X': 'Ẋ',
    'y': 'ẏ', 'Y': 'Ẏ', 'z': 'ẑ', 'Z': 'Ẑ',
}

# Doubled to make text ~30% longer
ELONGATED = set('aeouAEOU')


def pseudo_localize(text: str) -> str:
    """Pseudo-localize text, ignoring placeholders."""
    result = []
    for ch in text:
        accented = ACCENTED_MAP.get(ch)
        if accented is None:
            result.append(ch)
        elif ch in ELONGATED:
            result.append(accented * 2)
        else:
            result.append(accented)
    return ''.join(result)


def pseudo_localize_message(message: str) -> str:
    """
    Pseudo-localize a message, keeping command links, icons and placeholders.

    Args:
        message: Source message

    Returns:
        Pseudo-localized message
    """
    parts = []
    index = 0
    for match in PLACEHOLDER_REGEX.finditer(message):
        parts.append(pseudo_localize(message[index:match.start()]))
        parts.append(match.group(0))
        index = match.end()
    parts.append(pseudo_localize(message[index:]))
    return ''.join(parts)


def pseudo_localize_bundle(bundle: Bundle) -> Bundle:
    """
    Pseudo-localize every message of a bundle.

    Args:
        bundle: Source bundle (plain, multi-line or annotated values)

    Returns:
        New bundle with the same keys and pseudo-localized string values
    """
    return {key: pseudo_localize_message(normalize_message(value)) for key, value in bundle.items()}


class PseudoTranslator(Translator):
    """Offline translator producing pseudo-localized text for every language."""

    @property
    def name(self) -> str:
        return "pseudo"

    @property
    def description(self) -> str:
        return "Accented pseudo-localization (offline)"

    async def translate(self, bundle: Bundle, languages: list[str]) -> list[Bundle]:
        localized = pseudo_localize_bundle(bundle)
        return [dict(localized) for _ in languages]
