#!/usr/bin/env python3
"""
Tests for the bundle data model.

Tests verify:
1. Key and value construction with and without comments
2. Message normalization for plain, multi-line and annotated values
3. merge_all: right-most wins, nested dicts merge, inputs untouched
"""

from l10ndev.common import (
    L10nFileDetails,
    get_comment,
    get_message,
    is_plain,
    make_key,
    make_value,
    merge_all,
    normalize_bundle,
    normalize_message,
)


def test_make_key_and_value():
    """Test 1: Comments are appended to the key and kept in the value."""
    assert make_key('Hello') == 'Hello'
    assert make_key('Hello', []) == 'Hello'
    assert make_key('Hello', ['a', 'b']) == 'Hello/ab'
    assert make_value('Hello') == 'Hello'
    assert make_value('Hello', ['a']) == {'message': 'Hello', 'comment': ['a']}


def test_normalize_message():
    """Test 2: All value forms collapse to the message text."""
    assert normalize_message('Hello') == 'Hello'
    assert normalize_message(['line 1', 'line 2']) == 'line 1\nline 2'
    assert normalize_message({'message': 'Hi', 'comment': ['c']}) == 'Hi'
    assert get_message(['a', 'b']) == 'a\nb'


def test_normalize_bundle_only_touches_lists():
    """Test 3: Legacy arrays are joined; annotated values stay annotated."""
    bundle = {
        'a': ['x', 'y'],
        'b': 'plain',
        'c/note': {'message': 'c', 'comment': ['note']},
    }
    assert normalize_bundle(bundle) == {
        'a': 'x\ny',
        'b': 'plain',
        'c/note': {'message': 'c', 'comment': ['note']},
    }


def test_comment_helpers():
    """Test 4: get_comment and is_plain distinguish annotated values."""
    annotated = {'message': 'Hi', 'comment': ['c']}
    assert get_comment(annotated) == ['c']
    assert get_comment('Hi') is None
    assert is_plain('Hi')
    assert is_plain({'message': 'Hi', 'comment': []})
    assert not is_plain(annotated)


def test_merge_all_right_most_wins():
    """Test 5: Later bundles override earlier ones; lists are replaced."""
    first = {'a': 'one', 'b': ['x', 'y'], 'n': {'message': 'm', 'comment': ['old']}}
    second = {'a': 'two', 'b': ['z'], 'n': {'comment': ['new']}}

    merged = merge_all([first, second])

    assert merged == {'a': 'two', 'b': ['z'], 'n': {'message': 'm', 'comment': ['new']}}


def test_merge_all_does_not_mutate_inputs():
    """Test 6: Inputs are unchanged and the result shares no nested objects."""
    first = {'n': {'message': 'm', 'comment': ['c']}}
    second = {'o': 'other'}

    merged = merge_all([first, second])
    merged['n']['comment'].append('changed')

    assert first == {'n': {'message': 'm', 'comment': ['c']}}
    assert second == {'o': 'other'}
    assert merge_all([]) == {}


def test_l10n_file_details_to_dict():
    """Test 7: to_dict exposes name, language and messages."""
    details = L10nFileDetails(name='bundle', language='de', messages={'Hello': 'Hallo'})
    assert details.to_dict() == {'name': 'bundle', 'language': 'de', 'messages': {'Hello': 'Hallo'}}
