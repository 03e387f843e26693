#!/usr/bin/env python3
"""
Tests for file discovery and output paths.

Tests verify:
1. Directories are searched recursively, skipping node_modules
2. Explicit files and glob patterns are accepted
3. Bundle names and translated file paths
4. Export directory resolution from package.json
5. JSON output format
"""

import json
import logging
from pathlib import Path

import pytest

from l10ndev.files import (
    bundle_name,
    find_l10n_files,
    find_script_files,
    find_xlf_files,
    read_bundle,
    read_script_files,
    resolve_export_dir,
    translated_bundle_path,
    write_json,
)


@pytest.fixture
def project(tmp_path):
    """Fixture to create a small extension layout."""
    files = {
        'src/extension.ts': "import * as vscode from 'vscode';",
        'src/view/panel.tsx': '',
        'src/legacy.js': '',
        'src/readme.md': '',
        'node_modules/dep/index.ts': '',
        'l10n/bundle.l10n.json': '{"Hello": "Hello"}',
        'l10n/bundle.l10n.de.json': '{"Hello": "Hallo"}',
        'package.nls.json': '{"cmd.title": "Run"}',
        'node_modules/dep/package.nls.json': '{}',
        'loc/ext.de.xlf': '<xliff/>',
    }
    for name, content in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    return tmp_path.resolve()


def test_find_script_files_in_directory(project):
    """Test 1: Script files are found recursively outside node_modules."""
    found = find_script_files([str(project)])
    assert [p.relative_to(project).as_posix() for p in found] == [
        'src/extension.ts',
        'src/legacy.js',
        'src/view/panel.tsx',
    ]


def test_find_l10n_files(project):
    """Test 2: Only source bundles and package.nls.json are picked up."""
    found = find_l10n_files([str(project)])
    assert [p.relative_to(project).as_posix() for p in found] == [
        'l10n/bundle.l10n.json',
        'package.nls.json',
    ]


def test_explicit_files_and_globs(project):
    """Test 3: Files are used as-is, globs are expanded, results de-duplicated."""
    explicit = str(project / 'src' / 'extension.ts')
    pattern = str(project / 'src' / '**' / '*.tsx')
    found = find_script_files([explicit, pattern, explicit])
    assert [p.name for p in found] == ['extension.ts', 'panel.tsx']
    assert all(p.is_absolute() for p in found)

    assert [p.name for p in find_xlf_files([str(project / 'loc')])] == ['ext.de.xlf']
    assert find_script_files([str(project / 'missing')]) == []


def test_read_files(project):
    """Test 4: Script files keep their extension; bundles load as dicts."""
    scripts = read_script_files([project / 'src' / 'extension.ts'])
    assert scripts[0].extension == '.ts'
    assert scripts[0].contents == "import * as vscode from 'vscode';"
    assert read_bundle(project / 'package.nls.json') == {'cmd.title': 'Run'}


def test_bundle_names_and_translated_paths(tmp_path):
    """Test 5: bundle.l10n.json -> bundle.l10n.<lang>.json, package.nls.json -> package.nls.<lang>.json."""
    assert bundle_name(Path('l10n/bundle.l10n.json')) == 'bundle'
    assert bundle_name(Path('package.nls.json')) == 'package'
    assert translated_bundle_path(Path('l10n/bundle.l10n.json'), 'de') == Path('l10n/bundle.l10n.de.json')
    assert translated_bundle_path(Path('package.nls.json'), 'qps-ploc') == Path('package.nls.qps-ploc.json')
    with pytest.raises(ValueError):
        bundle_name(Path('strings.json'))


def test_resolve_export_dir(tmp_path, caplog):
    """Test 6: --outDir, the package.json l10n entry and the no-manifest case."""
    assert resolve_export_dir(None, tmp_path) is None
    assert resolve_export_dir('out', tmp_path) == (tmp_path / 'out').resolve()

    (tmp_path / 'package.json').write_text('{"name": "ext"}', encoding='utf-8')
    assert resolve_export_dir(None, tmp_path) == tmp_path.resolve()

    (tmp_path / 'package.json').write_text('{"l10n": "./l10n"}', encoding='utf-8')
    assert resolve_export_dir(None, tmp_path) == (tmp_path / 'l10n').resolve()

    with caplog.at_level(logging.WARNING, logger='l10ndev.files'):
        assert resolve_export_dir('l10n', tmp_path) == (tmp_path / 'l10n').resolve()
    assert 'does not match' not in caplog.text

    with caplog.at_level(logging.WARNING, logger='l10ndev.files'):
        assert resolve_export_dir('elsewhere', tmp_path) == (tmp_path / 'elsewhere').resolve()
    assert 'does not match the outDir specified' in caplog.text


def test_write_json_format(tmp_path):
    """Test 7: Two-space indent, non-ASCII kept, no trailing newline, parent dirs created."""
    path = tmp_path / 'nested' / 'out.json'
    write_json(path, {'Grüße': 'Grüße'})
    assert path.read_bytes() == '{\n  "Grüße": "Grüße"\n}'.encode('utf-8')
    assert json.loads(path.read_text(encoding='utf-8')) == {'Grüße': 'Grüße'}
