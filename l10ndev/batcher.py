#!/usr/bin/env python3
"""
Size-based batching for machine translation requests.

Translation APIs cap the number of items per request, the size of each
item and the total request size (which usually grows with the number of
target languages). The batcher groups items in order so each request stays
within those caps, and keeps the keys of every batch so results can be
mapped back to exactly the entries that were sent.
"""

from dataclasses import dataclass, field

from .errors import TranslationError


@dataclass
class BatchItem:
    """One message prepared for translation."""
    key: str
    text: str


@dataclass
class BatchInfo:
    """Information about a single batch."""
    batch_num: int
    items: list[BatchItem] = field(default_factory=list)
    estimated_size: int = 0
    start_idx: int = 0
    end_idx: int = 0

    @property
    def keys(self) -> list[str]:
        return [item.key for item in self.items]

    @property
    def texts(self) -> list[str]:
        return [item.text for item in self.items]


class CharacterBatcher:
    """
    Creates batches based on character count times number of languages.

    Instead of fixed item counts, this batcher fills each request up to the
    backend's size limit, starting a new batch when either the size or the
    item count limit would be exceeded.
    """

    def __init__(
        self,
        max_item_size: int = 50000,
        max_items: int = 1000,
        max_request_size: int = 50000,
    ):
        """
        Initialize character batcher.

        Args:
            max_item_size: Maximum characters in one item (default: 50000)
            max_items: Maximum items per request (default: 1000)
            max_request_size: Maximum characters x languages per request (default: 50000)
        """
        self.max_item_size = max_item_size
        self.max_items = max_items
        self.max_request_size = max_request_size

    def estimate_size(self, text: str, language_count: int = 1) -> int:
        """
        Estimate the request size an item adds.

        Args:
            text: Text to send
            language_count: Number of target languages in the request

        Returns:
            Characters counted against the request limit
        """
        return len(text) * language_count

    def create_batches(
        self,
        items: list[BatchItem],
        language_count: int = 1,
    ) -> list[BatchInfo]:
        """
        Group items into batches within the request limits.

        Args:
            items: Items in output order
            language_count: Number of target languages per request

        Returns:
            List of BatchInfo objects

        Raises:
            TranslationError: If a single item exceeds the item size limit
        """
        if not items:
            return []

        batches = []
        current_items = []
        current_size = 0
        start_idx = 0

        for i, item in enumerate(items):
            if len(item.text) > self.max_item_size:
                raise TranslationError(f"Failed to translate. Item is too large: {item.text}")

            item_size = self.estimate_size(item.text, language_count)

            # Check if adding this item would exceed a limit
            if current_items and (
                current_size + item_size > self.max_request_size
                or len(current_items) == self.max_items
            ):
                batches.append(BatchInfo(
                    batch_num=len(batches) + 1,
                    items=current_items,
                    estimated_size=current_size,
                    start_idx=start_idx,
                    end_idx=start_idx + len(current_items),
                ))

                current_items = [item]
                current_size = item_size
                start_idx = i
            else:
                current_items.append(item)
                current_size += item_size

        if current_items:
            batches.append(BatchInfo(
                batch_num=len(batches) + 1,
                items=current_items,
                estimated_size=current_size,
                start_idx=start_idx,
                end_idx=start_idx + len(current_items),
            ))

        return batches

    def get_stats(self, batches: list[BatchInfo]) -> dict:
        """
        Get statistics about batches.

        Args:
            batches: List of BatchInfo objects

        Returns:
            Dictionary with batch statistics
        """
        if not batches:
            return {
                'total_batches': 0,
                'total_items': 0,
                'total_estimated_size': 0,
                'avg_size_per_batch': 0,
                'min_size': 0,
                'max_size': 0,
            }

        sizes = [b.estimated_size for b in batches]
        return {
            'total_batches': len(batches),
            'total_items': sum(len(b.items) for b in batches),
            'total_estimated_size': sum(sizes),
            'avg_size_per_batch': sum(sizes) // len(batches),
            'min_size': min(sizes),
            'max_size': max(sizes),
        }
