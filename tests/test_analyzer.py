#!/usr/bin/env python3
"""
Tests for the script analyzer.

Tests verify:
1. Every import/require idiom binds the translation call
2. Call shapes: string, template, number, tagged template, object form
3. Keys follow the message + "/" + comments rule
4. Negatives: bare references, l10n.config, unrelated t(), unresolved imports
5. Template arguments with substitutions raise (or are collected)
6. Unsupported extensions raise even for empty files
7. Opt-in JSX attribute literal detection
"""

import pytest

from l10ndev.analyzer import ScriptAnalyzer, Vocabulary
from l10ndev.common import ScriptFile
from l10ndev.errors import TemplateArgumentError, UnescapeError, UnsupportedFileError


@pytest.fixture
def analyzer():
    """Fixture to create a ScriptAnalyzer instance."""
    return ScriptAnalyzer()


def ts(source: str) -> ScriptFile:
    return ScriptFile(extension='.ts', contents=source)


@pytest.mark.parametrize('source', [
    "import * as vscode from 'vscode';\nvscode.l10n.t('Hello');",
    "import * as vs from 'vscode';\nvs.l10n.t('Hello');",
    "import { l10n } from 'vscode';\nl10n.t('Hello');",
    "import { l10n as loc } from 'vscode';\nloc.t('Hello');",
    "import * as l10n from '@vscode/l10n';\nl10n.t('Hello');",
    "import * as loc from '@vscode/l10n';\nloc.t('Hello');",
    "import { t } from '@vscode/l10n';\nt('Hello');",
    "import { t as translate } from '@vscode/l10n';\ntranslate('Hello');",
    "const vscode = require('vscode');\nvscode.l10n.t('Hello');",
    "var vs = require('vscode');\nvs.l10n.t('Hello');",
    "const { l10n } = require('vscode');\nl10n.t('Hello');",
    "const { l10n: loc } = require('vscode');\nloc.t('Hello');",
    "const l10n = require('@vscode/l10n');\nl10n.t('Hello');",
    "const loc = require('vscode').l10n;\nloc.t('Hello');",
    "const { t } = require('@vscode/l10n');\nt('Hello');",
    "const tr = require('@vscode/l10n').t;\ntr('Hello');",
    "let l10n;\nl10n = require('@vscode/l10n');\nl10n.t('Hello');",
])
def test_import_idioms(analyzer, source):
    """Test 1: Each supported import/require idiom extracts the call."""
    assert analyzer.analyze(ts(source)) == {'Hello': 'Hello'}


def test_javascript_and_jsx_extensions(analyzer):
    """Test 2: .js uses the TypeScript grammar, .jsx the TSX grammar."""
    source = "const vscode = require('vscode');\nvscode.l10n.t('Hello');"
    assert analyzer.analyze(ScriptFile('.js', source)) == {'Hello': 'Hello'}
    assert analyzer.analyze(ScriptFile('.jsx', source)) == {'Hello': 'Hello'}
    assert analyzer.analyze(ScriptFile('.tsx', source)) == {'Hello': 'Hello'}


def test_string_arguments(analyzer):
    """Test 3: Quotes are stripped and escapes interpreted; extra args are ignored."""
    source = (
        "import * as vscode from 'vscode';\n"
        "vscode.l10n.t(\"Hello {0}\", name);\n"
        "vscode.l10n.t('It\\'s {0}\\n', when);\n"
        "vscode.l10n.t(`Template without substitutions`);\n"
        "vscode.l10n.t(42);\n"
    )
    assert analyzer.analyze(ts(source)) == {
        'Hello {0}': 'Hello {0}',
        "It's {0}\n": "It's {0}\n",
        'Template without substitutions': 'Template without substitutions',
        '42': '42',
    }


def test_tagged_template(analyzer):
    """Test 4: Tagged template substitutions become positional placeholders."""
    source = (
        "import * as l10n from '@vscode/l10n';\n"
        "l10n.t`Hello ${user.name}, you have ${count} new ${count === 1 ? 'message' : 'messages'}`;\n"
    )
    assert analyzer.analyze(ts(source)) == {
        'Hello {0}, you have {1} new {2}': 'Hello {0}, you have {1} new {2}',
    }


def test_tagged_template_crlf(analyzer):
    """Test 5: CRLF inside a tagged template is normalized to LF."""
    source = "import * as l10n from '@vscode/l10n';\r\nl10n.t`line one\r\nline two`;\r\n"
    assert analyzer.analyze(ts(source)) == {'line one\nline two': 'line one\nline two'}


def test_object_form_with_comments(analyzer):
    """Test 6: Object form builds message/comment key and annotated value."""
    source = (
        "import * as vscode from 'vscode';\n"
        "vscode.l10n.t({\n"
        "  message: 'Hello {0}',\n"
        "  args: [name],\n"
        "  comment: ['Greeting shown on start', '{0} is a user name']\n"
        "});\n"
    )
    assert analyzer.analyze(ts(source)) == {
        'Hello {0}/Greeting shown on start{0} is a user name': {
            'message': 'Hello {0}',
            'comment': ['Greeting shown on start', '{0} is a user name'],
        },
    }


def test_object_form_single_comment_and_no_comment(analyzer):
    """Test 7: A string comment becomes a one-element list; no comment gives a plain entry."""
    source = (
        "import { l10n } from 'vscode';\n"
        "l10n.t({ message: 'Open', comment: 'Verb' });\n"
        "l10n.t({ message: `Close` });\n"
        "l10n.t({ comment: ['no message here'] });\n"
    )
    assert analyzer.analyze(ts(source)) == {
        'Open/Verb': {'message': 'Open', 'comment': ['Verb']},
        'Close': 'Close',
    }


def test_document_order_and_duplicates(analyzer):
    """Test 8: Entries follow document order; repeated messages collapse."""
    source = (
        "import * as vscode from 'vscode';\n"
        "vscode.l10n.t('Zebra');\n"
        "vscode.l10n.t('Apple');\n"
        "vscode.l10n.t('Zebra');\n"
    )
    bundle = analyzer.analyze(ts(source))
    assert list(bundle) == ['Zebra', 'Apple']


def test_negative_cases(analyzer):
    """Test 9: Bare references, l10n.config and unrelated t() are ignored."""
    source = (
        "import * as vscode from 'vscode';\n"
        "import { t } from 'i18next';\n"
        "if (vscode.l10n === undefined) {}\n"
        "vscode.l10n.config({ contents: {} });\n"
        "t('not ours');\n"
        "other.t('not ours either');\n"
        "vscode.l10n.t('ours');\n"
    )
    assert analyzer.analyze(ts(source)) == {'ours': 'ours'}


def test_calls_anchored_to_their_import(analyzer):
    """Test 10: A same-named object from another module is not the translation API."""
    foreign_namespace = (
        "import * as vscode from 'vscode';\n"
        "import l10n from 'other-i18n';\n"
        "l10n.t('foreign');\n"
        "vscode.l10n.t('ours');\n"
    )
    assert analyzer.analyze(ts(foreign_namespace)) == {'ours': 'ours'}

    foreign_host = (
        "import * as l10n from '@vscode/l10n';\n"
        "const vscode = require('./shim');\n"
        "vscode.l10n.t('foreign');\n"
        "l10n.t('ours');\n"
    )
    assert analyzer.analyze(ts(foreign_host)) == {'ours': 'ours'}

    bare_only = (
        "import { t } from '@vscode/l10n';\n"
        "import * as vscode from './vscode-mock';\n"
        "vscode.l10n.t('foreign');\n"
        "l10n.t('foreign too');\n"
        "t('ours');\n"
    )
    assert analyzer.analyze(ts(bare_only)) == {'ours': 'ours'}


def test_unresolved_import_produces_nothing(analyzer):
    """Test 11: Calls are ignored when no import binds the API."""
    source = "// uses vscode\nl10n.t('orphan');\n"
    assert analyzer.analyze(ts(source)) == {}


def test_fast_path_skips_unrelated_files(analyzer):
    """Test 12: Files that never mention the API names are not parsed."""
    assert analyzer.analyze(ts("export const x = 1;")) == {}
    assert analyzer._parsers == {}


def test_template_argument_with_substitution_raises(analyzer):
    """Test 13: l10n.t(`...${x}`) raises with the message text."""
    source = "import * as vscode from 'vscode';\nvscode.l10n.t(`Hello ${name}`);\n"
    with pytest.raises(TemplateArgumentError) as exc_info:
        analyzer.analyze(ts(source))
    assert 'Hello ${name}' in str(exc_info.value)
    assert exc_info.value.line == 2


def test_analyze_with_errors_collects_and_continues(analyzer):
    """Test 14: Bad call sites are reported while good ones are still extracted."""
    source = (
        "import * as vscode from 'vscode';\n"
        "vscode.l10n.t(`Hello ${name}`);\n"
        "vscode.l10n.t('bad \\u{110000}');\n"
        "vscode.l10n.t('Good');\n"
    )
    result = analyzer.analyze_with_errors(ts(source))
    assert result.bundle == {'Good': 'Good'}
    assert [e.error_type for e in result.errors] == ['TemplateArgumentError', 'UnescapeError']
    assert result.errors[0].line == 2
    assert result.errors[0].to_dict()['type'] == 'TemplateArgumentError'


def test_malformed_escape_raises(analyzer):
    """Test 15: analyze() raises on a malformed escape."""
    source = "import * as vscode from 'vscode';\nvscode.l10n.t('bad \\u{FFFFFF}');\n"
    with pytest.raises(UnescapeError):
        analyzer.analyze(ts(source))


@pytest.mark.parametrize('extension', ['.py', '.vue', '', '.json'])
def test_unsupported_extension_raises(analyzer, extension):
    """Test 16: Unsupported extensions raise even for empty contents."""
    with pytest.raises(UnsupportedFileError) as exc_info:
        analyzer.analyze(ScriptFile(extension, ''))
    assert str(exc_info.value) == f"File format '{extension}' not supported."


def test_dialect_for_normalizes_extension():
    """Test 17: Extensions are case-insensitive and the dot is optional."""
    assert ScriptAnalyzer.dialect_for('.TS') == 'typescript'
    assert ScriptAnalyzer.dialect_for('tsx') == 'tsx'
    assert ScriptAnalyzer.dialect_for('.jsx') == 'tsx'


def test_grammar_loaded_once(analyzer):
    """Test 18: One analyzer reuses its grammar and parser across files."""
    source = "import * as vscode from 'vscode';\nvscode.l10n.t('Hello');"
    analyzer.analyze(ts(source))
    analyzer.analyze(ScriptFile('.js', source))
    assert list(analyzer._languages) == ['typescript']
    assert list(analyzer._parsers) == ['typescript']


def test_literal_detection_is_opt_in():
    """Test 19: Template literals in JSX attributes are extracted only when enabled."""
    source = (
        "import * as vscode from 'vscode';\n"
        "export const Open = ({ name }) => (\n"
        "  <button title={`Open ${name}`} className={`btn ${kind}`}>{vscode.l10n.t('Open')}</button>\n"
        ");\n"
    )
    script = ScriptFile('.tsx', source)

    assert ScriptAnalyzer().analyze(script) == {'Open': 'Open'}

    bundle = ScriptAnalyzer(detect_literals=True).analyze(script)
    assert bundle == {'Open {0}': 'Open {0}', 'Open': 'Open'}
    assert list(bundle) == ['Open {0}', 'Open']


def test_literal_detection_requires_binding():
    """Test 20: Files without a translation import get no literal extraction."""
    source = (
        "// vscode l10n not imported here\n"
        "export const Open = ({ name }) => <button title={`Open ${name}`} />;\n"
    )
    assert ScriptAnalyzer(detect_literals=True).analyze(ScriptFile('.tsx', source)) == {}


def test_custom_vocabulary():
    """Test 21: The recognized module and function names are configurable."""
    vocabulary = Vocabulary(
        host_module='hostapi',
        translation_module='@hostapi/i18n',
        host_namespace='hostapi',
        translation_namespace='i18n',
        call_name='tr',
    )
    source = (
        "import * as hostapi from 'hostapi';\n"
        "hostapi.i18n.tr('Custom');\n"
        "hostapi.l10n.t('Ignored');\n"
    )
    assert ScriptAnalyzer(vocabulary).analyze(ts(source)) == {'Custom': 'Custom'}
