"""
l10ndev - Localization tooling for VS Code extensions

Extracts l10n.t() strings from TypeScript/JavaScript sources into
bundle.l10n.json, converts bundles to and from XLIFF 1.2 and produces
pseudo or machine translations.

Quick start:
    l10n-dev export ./src
    l10n-dev generate-xlf ./l10n ./package.nls.json --outFile ./loc/ext.xlf
    # send ext.xlf to translators, receive ext.de.xlf ...
    l10n-dev import-xlf ./loc/translated --outDir ./l10n
"""

__version__ = "0.1.0"
__author__ = "l10n-dev contributors"

from .analyzer import ScriptAnalyzer, Vocabulary
from .api import (
    get_l10n_aws_localized,
    get_l10n_azure_localized,
    get_l10n_files_from_xlf,
    get_l10n_json,
    get_l10n_pseudo_localized,
    get_l10n_xlf,
)
from .common import Bundle, L10nFileDetails, ScriptFile
from .errors import (
    ConfigError,
    L10nDevError,
    TemplateArgumentError,
    TranslationError,
    UnescapeError,
    UnsupportedFileError,
    XliffError,
)

__all__ = [
    "Bundle",
    "ConfigError",
    "L10nDevError",
    "L10nFileDetails",
    "ScriptAnalyzer",
    "ScriptFile",
    "TemplateArgumentError",
    "TranslationError",
    "UnescapeError",
    "UnsupportedFileError",
    "Vocabulary",
    "XliffError",
    "get_l10n_aws_localized",
    "get_l10n_azure_localized",
    "get_l10n_files_from_xlf",
    "get_l10n_json",
    "get_l10n_pseudo_localized",
    "get_l10n_xlf",
]
