from __future__ import annotations

from datetime import datetime, timezone
import math
import re
from typing import Sequence

from arxivsearch.arxiv import SearchResult

PLACEHOLDER_TOKEN = "unk"
PLACEHOLDER_YEAR = "0000"
MULTI_AUTHOR_MARKER = " et al."

STOPWORDS = frozenset(
    {
        "a", "about", "after", "all", "also", "am", "an", "and", "another", "any",
        "are", "as", "at", "be", "because", "been", "before", "being", "between",
        "both", "but", "by", "came", "can", "come", "could", "did", "do", "each",
        "for", "from", "get", "got", "has", "had", "he", "have", "her", "here",
        "him", "himself", "his", "how", "i", "if", "in", "into", "is", "it", "its",
        "like", "make", "many", "me", "might", "more", "most", "much", "must", "my",
        "need", "never", "no", "not", "now", "of", "on", "only", "or", "other", "our",
        "out", "over", "said", "same", "see", "should", "since", "so", "some",
        "still", "such", "take", "than", "that", "the", "their", "them", "then",
        "there", "these", "they", "this", "those", "through", "to", "too", "under",
        "up", "very", "via", "was", "way", "we", "well", "were", "what", "when",
        "where", "which", "while", "who", "why", "will", "with", "would", "you",
        "your",
    }
)


def _clean_text(value: object) -> str:
    return re.sub(r"\s+", " ", str(value or "")).strip()


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _distance_words(seconds: float) -> str:
    minutes = _round_half_up(seconds / 60)
    if minutes == 0:
        return "less than a minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < 24 * 60:
        return f"about {_plural(_round_half_up(minutes / 60), 'hour')}"
    if minutes < 42 * 60:
        return "1 day"
    if minutes < 30 * 24 * 60:
        return _plural(_round_half_up(minutes / (24 * 60)), "day")
    if minutes < 45 * 24 * 60:
        return "about 1 month"
    if minutes < 60 * 24 * 60:
        return "about 2 months"

    months = int(minutes // (30 * 24 * 60))
    if months < 12:
        return _plural(months, "month")
    years, remainder = divmod(months, 12)
    if remainder < 3:
        return f"about {_plural(years, 'year')}"
    if remainder < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"


def relative_time(published: datetime | None, now: datetime | None = None) -> str:
    """Human distance from ``published`` to ``now``, e.g. "about 2 hours ago"."""
    if published is None:
        return "unknown date"
    current = now or datetime.now(timezone.utc)
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    delta = (current - published).total_seconds()
    words = _distance_words(abs(delta))
    return f"{words} ago" if delta >= 0 else f"in {words}"


def _last_name(authors: Sequence[str]) -> str:
    if not authors:
        return PLACEHOLDER_TOKEN
    parts = _clean_text(authors[0]).split(" ")
    last = "".join(char for char in parts[-1] if char.isalnum())
    return last or PLACEHOLDER_TOKEN


def _format_year(published: datetime | None) -> str:
    if published is None:
        return PLACEHOLDER_YEAR
    return f"{published.year:04d}"


def _first_title_word(title: str) -> str:
    for word in _clean_text(title).split(" "):
        letters = "".join(char for char in word if char.isalpha()).lower()
        if letters and letters not in STOPWORDS:
            return letters
    return PLACEHOLDER_TOKEN


def citation_key(result: SearchResult) -> str:
    """Short author-year-title key, e.g. ``vaswani2017attention``."""
    key = f"{_last_name(result.authors)}{_format_year(result.published)}{_first_title_word(result.title)}"
    return key.lower()


def primary_author(authors: Sequence[str]) -> str:
    names = [_clean_text(name) for name in authors or ()]
    names = [name for name in names if name]
    if not names:
        return ""
    suffix = MULTI_AUTHOR_MARKER if len(names) > 1 else ""
    return names[0] + suffix


def build_bibtex(result: SearchResult) -> str:
    author = primary_author(result.authors) or "Unknown Author"
    title = _clean_text(result.title) or "Unknown Title"
    year = str(result.published.year) if result.published is not None else "n.d."
    return (
        f"@article{{{citation_key(result)},\n"
        f"  author = {{{author}}},\n"
        f"  title = {{{title}}},\n"
        f"  year = {{{year}}},\n"
        f"  archivePrefix = {{arXiv}},\n"
        f"  url = {{{result.id}}},\n"
        f"  primaryClass = {{{result.category}}},\n"
        "}"
    )
