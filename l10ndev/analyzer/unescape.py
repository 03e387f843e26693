#!/usr/bin/env python3
"""
JavaScript string escape handling.

Turns the raw text between a literal's quote delimiters into its logical
value. Scanning is left to right and every replacement shifts the text, so
the next backslash is always searched from the end of the last replacement.
"""

import re

from ..errors import UnescapeError

_SIMPLE_ESCAPES = {
    'n': '\n',
    'r': '\r',
    't': '\t',
}

_HEX_DIGITS = re.compile(r'[0-9A-Fa-f]+')
_SURROGATE = re.compile('[\ud800-\udfff]')


def _parse_hex(digits: str, escape: str) -> int:
    if not digits or not _HEX_DIGITS.fullmatch(digits):
        raise UnescapeError(f"Invalid escape sequence '{escape}'")
    return int(digits, 16)


def _decode_escape(text: str, i: int) -> tuple[str, int]:
    """
    Decode the escape sequence starting at the backslash at index i.

    Returns:
        Tuple of (replacement, length of the escape sequence in text)
    """
    char = text[i + 1]

    if char in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[char], 2

    if char == 'x':
        digits = text[i + 2:i + 4]
        if len(digits) != 2:
            raise UnescapeError(f"Invalid escape sequence '{text[i:i + 4]}'")
        return chr(_parse_hex(digits, text[i:i + 4])), 4

    if char == 'u':
        if text[i + 2:i + 3] == '{':
            end = text.find('}', i + 3)
            if end == -1:
                raise UnescapeError(f"Unterminated unicode escape '{text[i:i + 12]}'")
            escape = text[i:end + 1]
            code_point = _parse_hex(text[i + 3:end], escape)
            if code_point > 0x10FFFF:
                raise UnescapeError(f"Invalid escape sequence '{escape}'")
            return chr(code_point), len(escape)

        digits = text[i + 2:i + 6]
        if len(digits) != 4:
            raise UnescapeError(f"Invalid escape sequence '{text[i:i + 6]}'")
        return chr(_parse_hex(digits, text[i:i + 6])), 6

    # \' \" \` \\ and anything else: drop the backslash
    return char, 2


def unescape(text: str) -> str:
    """
    Interpret JavaScript escape sequences in raw literal text.

    Handles \\n, \\r, \\t, \\xHH, \\u{H..H}, \\uHHHH and the catch-all
    \\<char> -> <char>. A trailing lone backslash is kept.

    Args:
        text: Literal text without its quote delimiters

    Returns:
        The logical string value

    Raises:
        UnescapeError: If a hex or unicode escape is malformed
    """
    i = text.find('\\')
    while i != -1 and i + 1 < len(text):
        replacement, length = _decode_escape(text, i)
        text = text[:i] + replacement + text[i + length:]
        i = text.find('\\', i + len(replacement))

    # Two \uHHHH escapes may form a surrogate pair
    if _SURROGATE.search(text):
        text = text.encode('utf-16', 'surrogatepass').decode('utf-16', 'surrogatepass')
    return text
