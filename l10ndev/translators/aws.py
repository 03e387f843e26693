#!/usr/bin/env python3
"""
Amazon Translate backend.

Every message is rendered to HTML and translated as its own document with
TranslateDocument. Languages are processed one after another; documents
of one language are sent concurrently in worker threads.
"""

import asyncio
import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..common import Bundle, normalize_message
from ..config import AwsTranslatorConfig
from ..errors import TranslationError
from .base import Translator
from .markup import MarkupConverter

logger = logging.getLogger(__name__)


class AwsTranslator(Translator):
    """
    Translates bundles with Amazon Translate.

    Credentials come from AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY when both
    are set, otherwise from the configured (SSO) profile.
    """

    def __init__(self, config: AwsTranslatorConfig, client: Optional[Any] = None):
        """
        Initialize AWS translator.

        Args:
            config: Region, languages and translation settings
            client: Optional pre-built boto3 translate client
        """
        self.config = config
        self.client = client
        self.markup = MarkupConverter()

    @property
    def name(self) -> str:
        return "aws"

    @property
    def description(self) -> str:
        return "Amazon Translate (environment credentials or SSO profile)"

    def _create_client(self):
        retry_config = Config(retries={'max_attempts': self.config.max_attempts, 'mode': 'standard'})
        if AwsTranslatorConfig.uses_environment_credentials():
            session = boto3.Session(region_name=self.config.region)
        else:
            logger.debug("Using AWS profile '%s'", self.config.profile or 'default')
            session = boto3.Session(profile_name=self.config.profile or None, region_name=self.config.region)
        return session.client('translate', config=retry_config)

    def _settings(self) -> dict:
        settings = {}
        if self.config.formality:
            settings['Formality'] = self.config.formality
        if self.config.profanity:
            settings['Profanity'] = self.config.profanity
        return settings

    async def translate(self, bundle: Bundle, languages: list[str]) -> list[Bundle]:
        """
        Translate a bundle into several languages.

        Args:
            bundle: Source messages
            languages: Target language ids

        Returns:
            One bundle per language, in the order of `languages`

        Raises:
            TranslationError: If any document fails to translate
        """
        if not bundle or not languages:
            return [{} for _ in languages]

        if self.client is None:
            self.client = self._create_client()

        messages = {key: normalize_message(value) for key, value in bundle.items()}
        documents = {key: self.markup.markdown_to_html(message) for key, message in messages.items()}
        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        files: list[Bundle] = []
        for language in languages:
            logger.debug("Submitting translation for %s", language)
            results = await asyncio.gather(
                *(self._translate_document(semaphore, html, language) for html in documents.values()),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result

            translated: Bundle = {}
            for key, html in zip(documents, results):
                text = self.markup.html_to_markdown(html)
                self.check_placeholders(key, messages[key], text, language)
                translated[key] = text
            files.append(translated)
        return files

    async def _translate_document(self, semaphore: asyncio.Semaphore, html: str, language: str) -> str:
        request = {
            'Document': {'Content': html.encode('utf-8'), 'ContentType': 'text/html'},
            'SourceLanguageCode': self.config.source_language,
            'TargetLanguageCode': language,
        }
        settings = self._settings()
        if settings:
            request['Settings'] = settings

        async with semaphore:
            try:
                response = await asyncio.to_thread(self.client.translate_document, **request)
            except (BotoCoreError, ClientError) as e:
                raise TranslationError(f"Failed to translate: {e}") from e
        return response['TranslatedDocument']['Content'].decode('utf-8')
