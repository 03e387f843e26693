#!/usr/bin/env python3
"""
Extraction of localizable strings from TypeScript/JavaScript sources.

Recognized call shapes:
- l10n.t('message', ...args)
- l10n.t`message with ${placeholders}`
- l10n.t({ message: 'message', comment: ['translator note'], args: [...] })
- vscode.l10n.t(...) and directly imported t(...)
"""

from .analyzer import (
    DIALECTS,
    AnalysisError,
    AnalysisResult,
    ImportBinding,
    ScriptAnalyzer,
    Vocabulary,
)
from .calls import CallArgs, ObjectForm, StringLiteral, TaggedTemplate, classify_arguments
from .unescape import unescape

__all__ = [
    'DIALECTS',
    'AnalysisError',
    'AnalysisResult',
    'CallArgs',
    'ImportBinding',
    'ObjectForm',
    'ScriptAnalyzer',
    'StringLiteral',
    'TaggedTemplate',
    'Vocabulary',
    'classify_arguments',
    'unescape',
]
