#!/usr/bin/env python3
"""
XLIFF 1.2 reading and writing for l10n bundles.

Output must stay byte-compatible with files already in translation
pipelines:

```xml
<?xml version="1.0" encoding="utf-8"?>
<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
  <file original="bundle" source-language="en" datatype="plaintext"><body>
    <trans-unit id="++CODE++<sha256>">
      <source xml:lang="en">Hello</source>
      <note>Greeting</note>
    </trans-unit>
  </body></file>
</xliff>
```

Lines are joined with CRLF and the document has no trailing line break.
Message-derived keys are replaced by a ``++CODE++`` SHA-256 id; on import
the key is rebuilt from the source text and note.
"""

import hashlib
import logging
import re
from dataclasses import dataclass
from typing import Optional
from xml.etree import ElementTree as ET

from .common import Bundle, L10nFileDetails, get_comment, get_message
from .errors import XliffError

logger = logging.getLogger(__name__)

XLIFF_NAMESPACE = 'urn:oasis:names:tc:xliff:document:1.2'
HASHED_ID_SIGNAL = '++CODE++'
# signal + 64 hex chars of SHA-256
HASHED_ID_LENGTH = len(HASHED_ID_SIGNAL) + 64

_ENCODE_MAP = {
    '"': '&quot;',
    "'": '&apos;',
    '<': '&lt;',
    '>': '&gt;',
    '&': '&amp;',
    '\n': '&#10;',
    '\r': '&#13;',
}

# &amp; last so decoded ampersands are not decoded again
_DECODE_ORDER = [
    ('&quot;', '"'),
    ('&apos;', "'"),
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&#10;', '\n'),
    ('&#13;', '\r'),
    ('&amp;', '&'),
]

_NEWLINES = re.compile(r'\r?\n')

MISSING_NODES = 'XLIFF file does not contain "xliff" or "file" node(s) required for parsing.'
MISSING_ORIGINAL = ('XLIFF file node does not contain original attribute to determine '
                    'the original location of the resource file.')
MISSING_TARGET_LANGUAGE = ('XLIFF file node does not contain target-language attribute to '
                           'determine translated language.')
MISSING_TARGET = ('XLIFF file does not contain full localization data. target node in one '
                  'of the trans-unit nodes is not present.')
MISSING_SOURCE = ('XLIFF file does not contain full localization data. source node in one '
                  'of the trans-unit nodes is not present.')
MISSING_ID = 'XLIFF trans-unit node does not contain id attribute.'


def encode_entities(value: str) -> str:
    """Escape XML special characters, CR and LF as entities."""
    return ''.join(_ENCODE_MAP.get(ch, ch) for ch in value)


def decode_entities(value: str) -> str:
    """Reverse encode_entities()."""
    for entity, ch in _DECODE_ORDER:
        value = value.replace(entity, ch)
    return value


def hash_id(key: str) -> str:
    """
    Build the hashed trans-unit id for a message-derived key.

    The key is hashed as a binary string: every UTF-16 code unit is
    truncated to its low byte.

    Args:
        key: Entity-encoded bundle key

    Returns:
        ``++CODE++`` followed by the lowercase hex SHA-256 digest
    """
    data = key.encode('utf-16-le', 'surrogatepass')[0::2]
    return HASHED_ID_SIGNAL + hashlib.sha256(data).hexdigest()


def utf16_order(text: str) -> bytes:
    """Sort key comparing strings by UTF-16 code units, as JavaScript does."""
    return text.encode('utf-16-be', 'surrogatepass')


def name_order(name: str) -> tuple[str, str]:
    """
    Sort key for bundle names: case-insensitive first, lowercase before
    uppercase on ties (a < A < b < B).
    """
    return name.casefold(), name.swapcase()


@dataclass
class TransUnit:
    """One entry of a file, with all fields already entity-encoded."""
    id: str
    message: str
    comment: Optional[str] = None


class XliffWriter:
    """
    Builds an XLIFF document from named bundles.

    Example:
        writer = XliffWriter(source_language='en')
        writer.add_file('bundle', {'Hello': 'Hello'})
        text = writer.to_string()
    """

    def __init__(self, source_language: str = 'en'):
        self.source_language = source_language
        self.files: dict[str, list[TransUnit]] = {}

    def add_file(self, name: str, bundle: Bundle) -> None:
        """
        Add a bundle as a <file> element. Empty bundles are skipped.

        Args:
            name: Bundle name written to the original attribute
            bundle: Messages of the bundle
        """
        if not bundle:
            return

        units = []
        for key, value in bundle.items():
            comments = get_comment(value)
            units.append(TransUnit(
                id=encode_entities(key),
                message=encode_entities(get_message(value)),
                comment='\r\n'.join(encode_entities(c) for c in comments) if comments else None,
            ))
        self.files[name] = units

    def to_string(self) -> str:
        """
        Render the document.

        Returns:
            XLIFF text with CRLF line endings

        Raises:
            XliffError: If a unit has an empty id or message
        """
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            f'<xliff version="1.2" xmlns="{XLIFF_NAMESPACE}">',
        ]

        for name in sorted(self.files, key=utf16_order):
            lines.append(_indent(
                f'<file original="{name}" source-language="{self.source_language}" datatype="plaintext"><body>', 2))
            # Stable sort over the reversed list: among equal messages the later unit comes first
            for unit in sorted(reversed(self.files[name]), key=lambda u: utf16_order(u.message)):
                lines.extend(self._trans_unit_lines(unit))
            lines.append(_indent('</body></file>', 2))

        lines.append('</xliff>')
        return '\r\n'.join(lines)

    def _trans_unit_lines(self, unit: TransUnit) -> list[str]:
        if not unit.id or not unit.message:
            raise XliffError('No item ID or value specified.')

        unit_id = hash_id(unit.id) if unit.id.startswith(unit.message) else unit.id

        lines = [
            _indent(f'<trans-unit id="{encode_entities(unit_id)}">', 4),
            _indent(f'<source xml:lang="{self.source_language}">{unit.message}</source>', 6),
        ]
        if unit.comment:
            lines.append(_indent(f'<note>{unit.comment}</note>', 6))
        lines.append(_indent('</trans-unit>', 4))
        return lines


def _indent(content: str, indent: int) -> str:
    return ' ' * indent + content


def _local_name(tag: str) -> str:
    """Strip the {namespace} prefix ElementTree puts on tags."""
    return tag.rsplit('}', 1)[-1]


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local_name(child.tag) == name]


def _child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    children = _children(elem, name)
    return children[0] if children else None


def _text(elem: Optional[ET.Element]) -> str:
    """Text content of an element including inline markup, '' if absent."""
    if elem is None:
        return ''
    return ''.join(elem.itertext())


def _unit_key(unit: ET.Element) -> str:
    unit_id = unit.get('id')
    if unit_id is None:
        raise XliffError(MISSING_ID)

    if not unit_id.startswith(HASHED_ID_SIGNAL) or len(unit_id) != HASHED_ID_LENGTH:
        # Literal id, written entity-encoded on top of XML escaping
        return decode_entities(unit_id)

    source = _text(_child(unit, 'source'))
    if not source:
        raise XliffError(MISSING_SOURCE)

    note = _text(_child(unit, 'note'))
    if note:
        return f"{source}/{_NEWLINES.sub('', note)}"
    return source


def parse_xliff(content: str) -> list[L10nFileDetails]:
    """
    Parse an XLIFF document into per-file, per-language messages.

    Trans-units without a <target> are skipped. Keys are rebuilt from
    source and note for hashed ids, otherwise the id is the key.

    Args:
        content: XLIFF document text

    Returns:
        L10nFileDetails sorted by name, each with messages sorted by key

    Raises:
        XliffError: If the document is not valid XML or lacks required nodes or attributes
    """
    try:
        root = ET.fromstring(content.lstrip('\ufeff \t\r\n'))
    except ET.ParseError as e:
        raise XliffError(f"Invalid XML in XLIFF file: {e}")

    if _local_name(root.tag) != 'xliff':
        raise XliffError(MISSING_NODES)
    file_nodes = _children(root, 'file')
    if not file_nodes:
        raise XliffError(MISSING_NODES)

    files = []
    for file_node in file_nodes:
        name = file_node.get('original')
        if not name:
            raise XliffError(MISSING_ORIGINAL)
        language = file_node.get('target-language')
        if not language:
            raise XliffError(MISSING_TARGET_LANGUAGE)
        language = language.lower()

        units = [unit for body in _children(file_node, 'body') for unit in _children(body, 'trans-unit')]
        if not units:
            logger.debug("Skipping file '%s' without trans-units", name)
            continue

        messages: dict[str, str] = {}
        for unit in units:
            target_node = _child(unit, 'target')
            if target_node is None:
                # Not translated yet
                continue
            target = _text(target_node)
            if not target:
                raise XliffError(MISSING_TARGET)
            messages[_unit_key(unit)] = decode_entities(target)

        files.append(L10nFileDetails(
            name=name,
            language=language,
            messages={key: messages[key] for key in sorted(messages, key=utf16_order)},
        ))

    return sorted(files, key=lambda details: name_order(details.name))
