#!/usr/bin/env python3
"""
Azure Translator backend.

Messages are rendered to HTML, grouped into size-limited batches and sent
to the Translator REST API (v3.0) concurrently. Each batch returns one
translation per target language for each of its items, which is mapped
back to the batch's own keys and converted back to markdown.
"""

import asyncio
import logging
from typing import Optional

import httpx

from ..batcher import BatchInfo, BatchItem, CharacterBatcher
from ..common import Bundle, normalize_message
from ..config import AzureTranslatorConfig
from ..errors import TranslationError
from .base import Translator
from .markup import MarkupConverter

logger = logging.getLogger(__name__)

MAX_SIZE_OF_ARRAY_ELEMENT = 50000
MAX_NUMBER_OF_ARRAY_ELEMENTS = 1000
# Request size times the number of languages
MAX_REQUEST_SIZE = 50000


class AzureTranslator(Translator):
    """
    Translates bundles with Azure Translator.

    Example:
        translator = AzureTranslator(AzureTranslatorConfig.from_env())
        bundles = asyncio.run(translator.translate(bundle, ['de', 'fr']))
    """

    API_VERSION = '3.0'

    def __init__(
        self,
        config: AzureTranslatorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Azure translator.

        Args:
            config: Credentials and request settings
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self.transport = transport
        self.batcher = CharacterBatcher(
            max_item_size=MAX_SIZE_OF_ARRAY_ELEMENT,
            max_items=MAX_NUMBER_OF_ARRAY_ELEMENTS,
            max_request_size=MAX_REQUEST_SIZE,
        )
        self.markup = MarkupConverter()

    @property
    def name(self) -> str:
        return "azure"

    @property
    def description(self) -> str:
        return "Azure Translator (AZURE_TRANSLATOR_KEY, AZURE_TRANSLATOR_REGION)"

    @property
    def url(self) -> str:
        return f"{self.config.endpoint.rstrip('/')}/translate"

    async def translate(self, bundle: Bundle, languages: list[str]) -> list[Bundle]:
        """
        Translate a bundle into several languages.

        Args:
            bundle: Source messages
            languages: Target language ids

        Returns:
            One bundle per language, in the order of `languages`

        Raises:
            TranslationError: If an item is too large or any request fails
        """
        if not bundle or not languages:
            return [{} for _ in languages]

        messages = {key: normalize_message(value) for key, value in bundle.items()}
        items = [BatchItem(key, self.markup.markdown_to_html(message)) for key, message in messages.items()]
        batches = self.batcher.create_batches(items, language_count=len(languages))
        logger.debug("Sending %d message(s) to Azure: %s", len(items), self.batcher.get_stats(batches))

        semaphore = asyncio.Semaphore(self.config.max_concurrency)
        async with httpx.AsyncClient(timeout=self.config.timeout, transport=self.transport) as client:
            results = await asyncio.gather(
                *(self._translate_batch(client, semaphore, batch, languages) for batch in batches),
                return_exceptions=True,
            )

        for result in results:
            if isinstance(result, BaseException):
                raise result

        files: list[Bundle] = [{} for _ in languages]
        for batch, outputs in zip(batches, results):
            for key, output in zip(batch.keys, outputs):
                for language_index, translation in enumerate(output['translations'][:len(languages)]):
                    text = self.markup.html_to_markdown(translation['text'])
                    self.check_placeholders(key, messages[key], text, languages[language_index])
                    files[language_index][key] = text
        return files

    async def _translate_batch(
        self,
        client: httpx.AsyncClient,
        semaphore: asyncio.Semaphore,
        batch: BatchInfo,
        languages: list[str],
    ) -> list[dict]:
        params = {
            'api-version': self.API_VERSION,
            'from': self.config.source_language,
            'to': languages,
            'textType': 'html',
        }
        headers = {
            'Ocp-Apim-Subscription-Key': self.config.key,
            'Ocp-Apim-Subscription-Region': self.config.region,
            'Content-Type': 'application/json',
        }

        async with semaphore:
            logger.debug("Translating batch %d (items %d-%d of the bundle)",
                         batch.batch_num, batch.start_idx + 1, batch.end_idx)
            try:
                response = await client.post(
                    self.url,
                    params=params,
                    headers=headers,
                    json=[{'Text': text} for text in batch.texts],
                )
            except httpx.HTTPError as e:
                raise TranslationError(f"Failed to translate: {e}") from e

        if response.status_code != 200:
            raise TranslationError(f"Failed to translate: {_error_message(response)}")

        outputs = response.json()
        if len(outputs) != len(batch.items):
            raise TranslationError(
                f"Failed to translate: expected {len(batch.items)} results for batch "
                f"{batch.batch_num}, got {len(outputs)}"
            )
        return outputs


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()['error']['message']
    except (ValueError, KeyError, TypeError):
        return response.text or f"HTTP {response.status_code}"
