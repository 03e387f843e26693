#!/usr/bin/env python3
"""
Base classes for translation backends.

Translator is the abstract base class every backend implements: it takes a
bundle and a list of languages and returns one translated bundle per
language. Placeholder patterns describe the spans of a message that must
come back from translation unchanged.
"""

import logging
import re
from abc import ABC, abstractmethod

from ..common import Bundle

logger = logging.getLogger(__name__)


# Spans that must never be translated
PLACEHOLDER_PATTERNS = {
    'command': r'\(command:\S+',    # [link](command:id)
    'icon': r'\$\([A-Za-z-~]+\)',   # $(alert)
    'brace': r'\{\S+\}',            # {0}, {name}
}

PLACEHOLDER_REGEX = re.compile('|'.join(f'(?:{pattern})' for pattern in PLACEHOLDER_PATTERNS.values()))


def extract_placeholders(text: str) -> list[str]:
    """
    Extract all placeholders from text.

    Args:
        text: Text to extract placeholders from

    Returns:
        List of placeholder strings found (deduplicated, order preserved)
    """
    return list(dict.fromkeys(match.group(0) for match in PLACEHOLDER_REGEX.finditer(text)))


def validate_placeholders(source: str, translation: str) -> list[str]:
    """
    Validate that all source placeholders exist in translation.

    Args:
        source: Original source text
        translation: Translated text

    Returns:
        List of missing placeholder error messages
    """
    missing = set(extract_placeholders(source)) - set(extract_placeholders(translation))
    return [f"Missing placeholder in translation: {placeholder}" for placeholder in sorted(missing)]


class Translator(ABC):
    """
    Abstract base class for translation backends.

    Output bundles keep the input keys; every value becomes the translated
    message string (comments are dropped).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend name used on the command line."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable backend description."""
        pass

    @abstractmethod
    async def translate(self, bundle: Bundle, languages: list[str]) -> list[Bundle]:
        """
        Translate a bundle into several languages.

        Args:
            bundle: Source messages
            languages: Target language ids

        Returns:
            One bundle per language, in the order of `languages`
        """
        pass

    def check_placeholders(self, key: str, source: str, translation: str, language: str) -> None:
        """Log a warning for every placeholder lost in translation."""
        for error in validate_placeholders(source, translation):
            logger.warning("%s (%s, %s): %s", error, self.name, language, key)


class TranslatorRegistry:
    """Registry of available translation backends."""

    _translators: dict[str, type[Translator]] = {}
    _descriptions: dict[str, str] = {}

    @classmethod
    def register(cls, name: str, translator_class: type[Translator], description: str) -> None:
        """Register a translator class under a name."""
        cls._translators[name.lower()] = translator_class
        cls._descriptions[name.lower()] = description

    @classmethod
    def get(cls, name: str) -> type[Translator]:
        """Get translator class by name."""
        name_lower = name.lower()
        if name_lower not in cls._translators:
            available = ', '.join(cls._translators.keys())
            raise ValueError(f"Unknown translator: {name}. Available: {available}")
        return cls._translators[name_lower]

    @classmethod
    def list_translators(cls) -> list[dict]:
        """List all registered translators with their descriptions."""
        return [
            {'name': name, 'description': cls._descriptions[name]}
            for name in cls._translators
        ]
