#!/usr/bin/env python3
"""
Library entry points for l10n-dev.

These functions tie the analyzer, the XLIFF codec and the translation
backends together. The CLI is a thin layer over them; tools that embed
l10n-dev can call them directly.

Example:
    bundle = get_l10n_json([ScriptFile('.ts', source)])
    xlf = get_l10n_xlf({'bundle': bundle})
    files = get_l10n_files_from_xlf(translated_xlf)
"""

import logging
from typing import Any, Iterable, Optional

import httpx

from .analyzer import ScriptAnalyzer
from .common import Bundle, L10nFileDetails, ScriptFile, is_plain, merge_all
from .config import AwsTranslatorConfig, AzureTranslatorConfig
from .translators import AwsTranslator, AzureTranslator, pseudo_localize_bundle
from .xliff import XliffWriter, parse_xliff

logger = logging.getLogger(__name__)

# Language ids written by older tooling
LEGACY_LANGUAGES = {
    'zh-hans': 'zh-cn',
    'zh-hant': 'zh-tw',
}


def get_l10n_json(script_files: Iterable[ScriptFile], analyzer: Optional[ScriptAnalyzer] = None) -> Bundle:
    """
    Extract and merge the strings of several source files.

    Args:
        script_files: Source files to analyze
        analyzer: Analyzer to reuse (default: a new ScriptAnalyzer)

    Returns:
        Merged bundle; later files win on key collisions

    Raises:
        UnsupportedFileError: If a file has an unsupported extension
        TemplateArgumentError: If a message argument uses substitutions
    """
    analyzer = analyzer or ScriptAnalyzer()
    bundles = []
    seen: set[str] = set()

    for script in script_files:
        logger.debug("Analyzing %s", script.path or f"<{script.extension}>")
        bundle = analyzer.analyze(script)
        for key, value in bundle.items():
            if key in seen:
                logger.info("The string '%s' without comments has been seen multiple times.", key)
            elif is_plain(value):
                seen.add(key)
        bundles.append(bundle)

    return merge_all(bundles)


def get_l10n_xlf(l10n_file_contents: dict[str, Bundle], source_language: str = 'en') -> str:
    """
    Serialize named bundles to one XLIFF 1.2 document.

    Args:
        l10n_file_contents: Bundle name -> bundle (e.g. 'bundle', 'package')
        source_language: Value of every file's source-language attribute

    Returns:
        XLIFF document text
    """
    writer = XliffWriter(source_language)
    for name, bundle in l10n_file_contents.items():
        writer.add_file(name, bundle)
    return writer.to_string()


def get_l10n_files_from_xlf(xlf_contents: str) -> list[L10nFileDetails]:
    """
    Parse a translated XLIFF document.

    Args:
        xlf_contents: XLIFF document text

    Returns:
        One L10nFileDetails per file node, with legacy Chinese language
        ids mapped to zh-cn/zh-tw

    Raises:
        XliffError: If the document is malformed or incomplete
    """
    details = parse_xliff(xlf_contents)
    for detail in details:
        language = LEGACY_LANGUAGES.get(detail.language)
        if language:
            logger.debug("Mapping language %s to %s for %s", detail.language, language, detail.name)
            detail.language = language
    return details


def get_l10n_pseudo_localized(bundle: Bundle) -> Bundle:
    """Pseudo-localize a bundle (values become plain strings)."""
    return pseudo_localize_bundle(bundle)


async def get_l10n_azure_localized(
    bundle: Bundle,
    languages: list[str],
    config: AzureTranslatorConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[Bundle]:
    """
    Machine-translate a bundle with Azure Translator.

    Args:
        bundle: Source messages
        languages: Target language ids
        config: Azure credentials and settings
        transport: Optional httpx transport

    Returns:
        One translated bundle per language, in language order

    Raises:
        TranslationError: If a request fails
    """
    translator = AzureTranslator(config, transport=transport)
    return await translator.translate(bundle, languages)


async def get_l10n_aws_localized(
    bundle: Bundle,
    languages: list[str],
    config: AwsTranslatorConfig,
    client: Optional[Any] = None,
) -> list[Bundle]:
    """
    Machine-translate a bundle with Amazon Translate.

    Args:
        bundle: Source messages
        languages: Target language ids
        config: AWS region and translation settings
        client: Optional boto3 translate client

    Returns:
        One translated bundle per language, in language order

    Raises:
        TranslationError: If a request fails
    """
    translator = AwsTranslator(config, client=client)
    return await translator.translate(bundle, languages)
