#!/usr/bin/env python3
"""
Configuration for l10n-dev.

Holds the defaults shared by the CLI and the library entry points, and the
settings objects for the machine translation backends. Credentials come from
environment variables; nothing is read from config files.
"""

import os
from dataclasses import asdict, dataclass
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_SOURCE_LANGUAGE = 'en'
DEFAULT_PSEUDO_LANGUAGE = 'qps-ploc'
DEFAULT_LANGUAGES = [
    'fr', 'it', 'de', 'es', 'ru', 'zh-cn', 'zh-tw', 'ja', 'ko', 'cs', 'pt-br', 'tr', 'pl',
]

AZURE_KEY_ENV = 'AZURE_TRANSLATOR_KEY'
AZURE_REGION_ENV = 'AZURE_TRANSLATOR_REGION'
AWS_ACCESS_KEY_ENV = 'AWS_ACCESS_KEY_ID'
AWS_SECRET_KEY_ENV = 'AWS_SECRET_ACCESS_KEY'

AZURE_ENDPOINT = 'https://api.cognitive.microsofttranslator.com'


@dataclass
class AzureTranslatorConfig:
    """Settings for the Azure Translator backend."""
    key: str
    region: str
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    endpoint: str = AZURE_ENDPOINT
    max_concurrency: int = 8
    timeout: float = 60.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "AzureTranslatorConfig":
        """
        Build config from AZURE_TRANSLATOR_KEY and AZURE_TRANSLATOR_REGION.

        Args:
            environ: Environment mapping (default: os.environ)
            **overrides: Values for the remaining fields

        Returns:
            AzureTranslatorConfig

        Raises:
            ConfigError: If either variable is missing or empty
        """
        environ = os.environ if environ is None else environ
        key = environ.get(AZURE_KEY_ENV)
        if not key:
            raise ConfigError(f"{AZURE_KEY_ENV} environment variable is not defined.")
        region = environ.get(AZURE_REGION_ENV)
        if not region:
            raise ConfigError(f"{AZURE_REGION_ENV} environment variable is not defined.")
        return cls(key=key, region=region, **overrides)

    def to_dict(self) -> dict:
        data = asdict(self)
        data['key'] = '***'
        return data


@dataclass
class AwsTranslatorConfig:
    """
    Settings for the Amazon Translate backend.

    Attributes:
        region: AWS region of the Translate endpoint
        source_language: Language of the source messages
        formality: FORMAL, INFORMAL or None for the service default
        profanity: MASK to mask profanities, None to keep them
        profile: SSO profile used when no key pair is in the environment
        max_concurrency: Documents translated at the same time
        max_attempts: Retry budget handed to botocore
    """
    region: str = 'us-west-2'
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    formality: Optional[str] = 'FORMAL'
    profanity: Optional[str] = 'MASK'
    profile: Optional[str] = None
    max_concurrency: int = 8
    max_attempts: int = 50

    def __post_init__(self):
        if self.formality not in (None, 'FORMAL', 'INFORMAL'):
            raise ConfigError(f"Invalid formality: {self.formality}. Expected FORMAL or INFORMAL")
        if self.profanity not in (None, 'MASK'):
            raise ConfigError(f"Invalid profanity setting: {self.profanity}. Expected MASK")

    @staticmethod
    def uses_environment_credentials(environ: Optional[Mapping[str, str]] = None) -> bool:
        """True when an access key pair is set in the environment."""
        environ = os.environ if environ is None else environ
        return AWS_ACCESS_KEY_ENV in environ and AWS_SECRET_KEY_ENV in environ

    def to_dict(self) -> dict:
        return asdict(self)
