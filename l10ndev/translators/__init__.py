#!/usr/bin/env python3
"""
Translation backends for l10n bundles.

Supported backends:
- pseudo: accented pseudo-localization, no network
- azure: Azure Translator REST API
- aws: Amazon Translate
"""

from .base import (
    PLACEHOLDER_PATTERNS,
    PLACEHOLDER_REGEX,
    Translator,
    TranslatorRegistry,
    extract_placeholders,
    validate_placeholders,
)
from .pseudo import PseudoTranslator, pseudo_localize_bundle, pseudo_localize_message
from .markup import MarkupConverter
from .azure import AzureTranslator
from .aws import AwsTranslator

# Register backends
TranslatorRegistry.register("pseudo", PseudoTranslator, "Accented pseudo-localization (offline)")
TranslatorRegistry.register("azure", AzureTranslator, "Azure Translator (AZURE_TRANSLATOR_KEY, AZURE_TRANSLATOR_REGION)")
TranslatorRegistry.register("aws", AwsTranslator, "Amazon Translate (environment credentials or SSO profile)")

__all__ = [
    'PLACEHOLDER_PATTERNS',
    'PLACEHOLDER_REGEX',
    'AwsTranslator',
    'AzureTranslator',
    'MarkupConverter',
    'PseudoTranslator',
    'Translator',
    'TranslatorRegistry',
    'extract_placeholders',
    'pseudo_localize_bundle',
    'pseudo_localize_message',
    'validate_placeholders',
]
