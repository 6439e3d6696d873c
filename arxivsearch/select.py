from __future__ import annotations

from collections import Counter
import re
from typing import Iterable

from arxivsearch.arxiv import SearchResult


def normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", re.sub(r"[^a-z0-9\s]+", "", str(text or "").lower())).strip()


def _word_letter_pairs(text: str) -> Counter[str]:
    pairs: Counter[str] = Counter()
    for word in text.split():
        for index in range(len(word) - 1):
            pairs[word[index : index + 2]] += 1
    return pairs


def dice_coefficient(left: str, right: str) -> float:
    """Bigram overlap between two strings, 0.0 (disjoint) to 1.0 (identical)."""
    left_norm = normalize_text(left)
    right_norm = normalize_text(right)
    if not left_norm or not right_norm:
        return 0.0
    if left_norm == right_norm:
        return 1.0

    left_pairs = _word_letter_pairs(left_norm)
    right_pairs = _word_letter_pairs(right_norm)
    total = sum(left_pairs.values()) + sum(right_pairs.values())
    if total == 0:
        return 0.0
    shared = sum((left_pairs & right_pairs).values())
    return 2.0 * shared / total


def rank_results(results: Iterable[SearchResult], query: str) -> list[SearchResult]:
    # Equal scores keep feed order.
    indexed = list(enumerate(results))
    indexed.sort(key=lambda item: (-dice_coefficient(item[1].title, query), item[0]))
    return [result for _, result in indexed]
