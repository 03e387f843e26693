#!/usr/bin/env python3
"""
Tests for request batching.

Tests verify:
1. Items are grouped in order up to the request size limit
2. The size limit scales with the number of languages
3. The item count limit starts a new batch
4. Oversized items raise TranslationError
5. Batch statistics
"""

import pytest

from l10ndev.batcher import BatchItem, CharacterBatcher
from l10ndev.errors import TranslationError


def items(*texts):
    return [BatchItem(key=f'k{i}', text=text) for i, text in enumerate(texts)]


def test_single_batch():
    """Test 1: Small inputs fit in one batch with keys in order."""
    batches = CharacterBatcher().create_batches(items('a', 'bb', 'ccc'))
    assert len(batches) == 1
    assert batches[0].keys == ['k0', 'k1', 'k2']
    assert batches[0].texts == ['a', 'bb', 'ccc']
    assert batches[0].estimated_size == 6


def test_request_size_limit():
    """Test 2: A new batch starts when the size limit would be exceeded."""
    batcher = CharacterBatcher(max_item_size=10, max_items=100, max_request_size=10)
    batches = batcher.create_batches(items('aaaa', 'bbbb', 'cccc', 'd'))
    assert [b.keys for b in batches] == [['k0', 'k1'], ['k2', 'k3']]
    assert [(b.start_idx, b.end_idx) for b in batches] == [(0, 2), (2, 4)]
    assert [b.batch_num for b in batches] == [1, 2]


def test_language_count_scales_size():
    """Test 3: Size is characters times target languages."""
    batcher = CharacterBatcher(max_item_size=10, max_items=100, max_request_size=10)
    batches = batcher.create_batches(items('aaaa', 'bbbb', 'cccc'), language_count=2)
    assert [b.keys for b in batches] == [['k0'], ['k1'], ['k2']]
    assert batcher.estimate_size('aaaa', 3) == 12


def test_item_count_limit():
    """Test 4: No batch holds more than max_items entries."""
    batcher = CharacterBatcher(max_items=2)
    batches = batcher.create_batches(items('a', 'b', 'c', 'd', 'e'))
    assert [len(b.items) for b in batches] == [2, 2, 1]


def test_oversized_item_raises():
    """Test 5: A single item above the item size limit cannot be sent."""
    batcher = CharacterBatcher(max_item_size=3)
    with pytest.raises(TranslationError, match='Item is too large'):
        batcher.create_batches(items('ok', 'too long'))


def test_empty_input_and_stats():
    """Test 6: No items give no batches; stats summarize sizes."""
    batcher = CharacterBatcher(max_request_size=4)
    assert batcher.create_batches([]) == []
    assert batcher.get_stats([])['total_batches'] == 0

    stats = batcher.get_stats(batcher.create_batches(items('aa', 'bb', 'c')))
    assert stats == {
        'total_batches': 2,
        'total_items': 3,
        'total_estimated_size': 5,
        'avg_size_per_batch': 2,
        'min_size': 1,
        'max_size': 4,
    }
