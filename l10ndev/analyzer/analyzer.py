#!/usr/bin/env python3
"""
Script analyzer: extracts localizable strings from TypeScript/JavaScript.

The analyzer parses a file with tree-sitter, finds how the translation API
was imported (import or require, with or without aliases), then queries for
every call made through those names and turns each call into a bundle entry.

Grammars, parsers and compiled queries are owned by the analyzer instance
and created on first use, so one analyzer should be built once and reused
for all files of a run.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Query, QueryCursor

from ..common import Bundle, ScriptFile, make_key, make_value
from ..errors import TemplateArgumentError, UnescapeError, UnsupportedFileError
from .calls import CallArgs, ObjectForm, StringLiteral, TaggedTemplate, classify_arguments, node_text
from .queries import call_query, import_query, literal_query

logger = logging.getLogger(__name__)

# extension -> grammar
DIALECTS = {
    '.ts': 'typescript',
    '.js': 'typescript',
    '.tsx': 'tsx',
    '.jsx': 'tsx',
}

_GRAMMARS = {
    'typescript': tree_sitter_typescript.language_typescript,
    'tsx': tree_sitter_typescript.language_tsx,
}


@dataclass(frozen=True)
class Vocabulary:
    """
    Names the analyzer anchors on.

    Attributes:
        host_module: Module exposing the translation namespace as a property
        translation_module: Standalone translation module
        host_namespace: Default local name of the host module object
        translation_namespace: Name of the translation namespace
        call_name: Name of the translation function
        literal_attributes: JSX attributes checked by literal detection
    """
    host_module: str = 'vscode'
    translation_module: str = '@vscode/l10n'
    host_namespace: str = 'vscode'
    translation_namespace: str = 'l10n'
    call_name: str = 't'
    literal_attributes: tuple[str, ...] = (
        'title',
        'label',
        'placeholder',
        'alt',
        'aria-label',
        'aria-description',
    )


@dataclass(frozen=True)
class ImportBinding:
    """
    Local names that reach the translation function in one file.

    Only the names an import actually bound are set, so calls through an
    unrelated object of the same name are never matched.
    """
    host: Optional[str] = None
    namespace: Optional[str] = None
    bare_call: Optional[str] = None


@dataclass
class AnalysisError:
    """A call site that could not be extracted."""
    line: int
    column: int
    error_type: str
    message: str

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "column": self.column,
            "type": self.error_type,
            "message": self.message,
        }


@dataclass
class AnalysisResult:
    """Bundle extracted from one file plus the call sites that failed."""
    bundle: Bundle
    errors: list[AnalysisError] = field(default_factory=list)


class ScriptAnalyzer:
    """
    Extracts translation calls from script files.

    Example:
        analyzer = ScriptAnalyzer()
        bundle = analyzer.analyze(ScriptFile('.ts', source))
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None, detect_literals: bool = False):
        """
        Initialize analyzer.

        Args:
            vocabulary: Module and function names to recognize (default: VS Code l10n)
            detect_literals: Also extract template literals used as JSX attribute values
        """
        self.vocabulary = vocabulary or Vocabulary()
        self.detect_literals = detect_literals
        self._languages: dict[str, Language] = {}
        self._parsers: dict[str, Parser] = {}
        self._queries: dict[tuple[str, str], Query] = {}

    @staticmethod
    def dialect_for(extension: str) -> str:
        """
        Get the grammar name for a file extension.

        Raises:
            UnsupportedFileError: If no grammar handles the extension
        """
        ext = extension.lower()
        if ext and not ext.startswith('.'):
            ext = '.' + ext
        if ext not in DIALECTS:
            raise UnsupportedFileError(extension)
        return DIALECTS[ext]

    def _language(self, dialect: str) -> Language:
        if dialect not in self._languages:
            logger.debug("Loading %s grammar", dialect)
            self._languages[dialect] = Language(_GRAMMARS[dialect]())
        return self._languages[dialect]

    def _parser(self, dialect: str) -> Parser:
        if dialect not in self._parsers:
            self._parsers[dialect] = Parser(self._language(dialect))
        return self._parsers[dialect]

    def _query(self, dialect: str, source: str) -> Query:
        key = (dialect, source)
        if key not in self._queries:
            self._queries[key] = Query(self._language(dialect), source)
        return self._queries[key]

    def _matches(self, dialect: str, source: str, root: Node) -> list[dict[str, list[Node]]]:
        cursor = QueryCursor(self._query(dialect, source))
        return [captures for _, captures in cursor.matches(root)]

    def analyze(self, script: ScriptFile) -> Bundle:
        """
        Extract all messages from a script file.

        Args:
            script: File extension and contents

        Returns:
            Bundle of key -> message value

        Raises:
            UnsupportedFileError: If the extension is not supported
            TemplateArgumentError: If a message argument is a template with substitutions
            UnescapeError: If a message literal contains a malformed escape
        """
        return self._extract(script, errors=None)

    def analyze_with_errors(self, script: ScriptFile) -> AnalysisResult:
        """
        Extract messages, collecting bad call sites instead of raising.

        Unsupported extensions still raise.

        Args:
            script: File extension and contents

        Returns:
            AnalysisResult with the bundle and any per-call errors
        """
        errors: list[AnalysisError] = []
        bundle = self._extract(script, errors=errors)
        return AnalysisResult(bundle=bundle, errors=errors)

    def _extract(self, script: ScriptFile, errors: Optional[list[AnalysisError]]) -> Bundle:
        dialect = self.dialect_for(script.extension)
        vocab = self.vocabulary

        # Cheap pre-filter: real usage always mentions both names
        if vocab.translation_namespace not in script.contents or vocab.host_namespace not in script.contents:
            return {}

        tree = self._parser(dialect).parse(script.contents.encode('utf-8'))
        bindings = self.find_bindings(dialect, tree.root_node)
        if not bindings:
            return {}
        logger.debug("Found %d translation binding(s) in %s", len(bindings), script.path or script.extension)

        # (position, key, value) so output follows document order
        entries: list[tuple[int, str, object]] = []
        seen_calls: set[int] = set()

        for binding in bindings:
            source = call_query(
                host=binding.host,
                namespace=binding.namespace,
                namespace_property=vocab.translation_namespace,
                call_property=vocab.call_name,
                bare_call=binding.bare_call,
            )
            if not source:
                continue
            for captures in self._matches(dialect, source, tree.root_node):
                args = captures['args'][0]
                if args.start_byte in seen_calls:
                    continue
                seen_calls.add(args.start_byte)

                try:
                    call_args = classify_arguments(args)
                    if call_args is None:
                        continue
                    key, value = self._entry(call_args)
                except (TemplateArgumentError, UnescapeError) as e:
                    if errors is None:
                        raise
                    errors.append(self._error_at(args, e))
                    continue
                entries.append((args.start_byte, key, value))

        if self.detect_literals and dialect == 'tsx':
            for captures in self._matches(dialect, literal_query(list(vocab.literal_attributes)), tree.root_node):
                literal = captures['literal'][0]
                try:
                    key, value = self._entry(classify_arguments(literal))
                except UnescapeError as e:
                    if errors is None:
                        raise
                    errors.append(self._error_at(literal, e))
                    continue
                entries.append((literal.start_byte, key, value))

        bundle: Bundle = {}
        for _, key, value in sorted(entries, key=lambda entry: entry[0]):
            if key in bundle and isinstance(value, str):
                logger.debug("The string '%s' appears more than once in %s", key, script.path or 'script')
            bundle[key] = value
        return bundle

    def find_bindings(self, dialect: str, root: Node) -> list[ImportBinding]:
        """
        Find the local names bound to the translation API by imports and requires.

        Args:
            dialect: Grammar name
            root: Root node of the parsed file

        Returns:
            Distinct bindings in document order
        """
        vocab = self.vocabulary
        source = import_query(
            modules=[vocab.host_module, vocab.translation_module],
            symbols=[vocab.translation_namespace, vocab.call_name],
        )

        bindings: list[ImportBinding] = []
        for captures in self._matches(dialect, source, root):
            binding = self._binding(captures)
            if binding not in bindings:
                bindings.append(binding)
        return bindings

    def _binding(self, captures: dict[str, list[Node]]) -> ImportBinding:
        vocab = self.vocabulary

        def text(name: str) -> Optional[str]:
            nodes = captures.get(name)
            return node_text(nodes[0]) if nodes else None

        module = text('source')
        variable = text('variable')
        symbol = text('named') or text('property')

        if symbol is None:
            # Whole module: import * as x from M, x = require(M)
            local = text('namespace') or variable
            if module == vocab.host_module:
                return ImportBinding(host=local)
            return ImportBinding(namespace=local)

        # One symbol: import { s as x } from M, { s: x } = require(M), x = require(M).s
        local = text('named_alias') or text('alias') or variable or symbol
        if symbol == vocab.translation_namespace:
            return ImportBinding(namespace=local)
        return ImportBinding(bare_call=local)

    @staticmethod
    def _entry(call_args: CallArgs) -> tuple[str, object]:
        if isinstance(call_args, StringLiteral):
            message, comments = call_args.text, None
        elif isinstance(call_args, TaggedTemplate):
            message, comments = call_args.render(), None
        elif isinstance(call_args, ObjectForm):
            message, comments = call_args.message, call_args.comment
        else:
            raise TypeError(f"Unhandled call shape: {call_args!r}")
        return make_key(message, comments), make_value(message, comments)

    @staticmethod
    def _error_at(node: Node, error: Exception) -> AnalysisError:
        row, column = node.start_point
        return AnalysisError(
            line=row + 1,
            column=column + 1,
            error_type=type(error).__name__,
            message=str(error),
        )
