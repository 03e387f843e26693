#!/usr/bin/env python3
"""
Markdown <-> HTML conversion for machine translation.

Messages may contain markdown (links, emphasis, code). Translation services
understand HTML, not markdown, so messages are rendered to HTML before they
are sent and converted back afterwards. Placeholder spans are wrapped in
no-translate markup on the way out.
"""

import re

from markdown_it import MarkdownIt
from markdownify import markdownify

# Placeholders as they appear in rendered HTML text (command links become href attributes)
_HTML_PLACEHOLDER = re.compile(r'\{[^{}\s<>]+\}|\$\([A-Za-z-~]+\)')
_TAG = re.compile(r'(<[^>]+>)')

NO_TRANSLATE_OPEN = '<span class="notranslate" translate="no">'
NO_TRANSLATE_CLOSE = '</span>'


class MarkupConverter:
    """
    Converts messages to HTML and translated HTML back to markdown.

    One converter holds one markdown-it renderer and can be reused for
    any number of messages.
    """

    def __init__(self):
        self._markdown = MarkdownIt('js-default')

    def markdown_to_html(self, message: str) -> str:
        """Render a markdown message to HTML with placeholders protected."""
        return protect_placeholders(self._markdown.render(message))

    @staticmethod
    def html_to_markdown(html: str) -> str:
        """Convert translated HTML back to a markdown message."""
        return markdownify(
            html,
            heading_style='ATX',
            escape_underscores=False,
            escape_asterisks=False,
            escape_misc=False,
        ).strip()


def protect_placeholders(html: str) -> str:
    """
    Wrap placeholder spans found in HTML text with no-translate markup.

    Tags and attribute values are left alone.

    Args:
        html: Rendered HTML

    Returns:
        HTML with every {placeholder} and $(icon) wrapped
    """
    parts = _TAG.split(html)
    for i, part in enumerate(parts):
        if part.startswith('<'):
            continue
        parts[i] = _HTML_PLACEHOLDER.sub(
            lambda match: f'{NO_TRANSLATE_OPEN}{match.group(0)}{NO_TRANSLATE_CLOSE}', part)
    return ''.join(parts)
