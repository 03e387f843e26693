#!/usr/bin/env python3
"""
Exception types raised by l10n-dev.

Every error derives from L10nDevError so callers (and the CLI) can catch
the whole family at once. Errors caused by bad input also derive from
ValueError.
"""

from typing import Optional


class L10nDevError(Exception):
    """Base class for all l10n-dev errors."""


class UnsupportedFileError(L10nDevError, ValueError):
    """A script file has an extension the analyzer has no grammar for."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"File format '{extension}' not supported.")


class TemplateArgumentError(L10nDevError, ValueError):
    """A template literal with substitutions was used as a message argument."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(
            f"Unexpected pattern in l10n.t('{message}'). "
            "Template literals with substitutions are not supported as message arguments. "
            "Use a double-quoted string with positional args instead, "
            "e.g. l10n.t(\"Hello {0}\", name)."
        )


class UnescapeError(L10nDevError, ValueError):
    """A string literal contains a malformed escape sequence."""


class XliffError(L10nDevError, ValueError):
    """An XLIFF document is malformed or missing required data."""


class ConfigError(L10nDevError, ValueError):
    """Required configuration (usually credentials) is missing or invalid."""


class TranslationError(L10nDevError, RuntimeError):
    """A translation backend failed."""
