from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from arxivsearch.arxiv import SearchResult
from arxivsearch.categories import category_colour
from arxivsearch.citation import build_bibtex, citation_key, primary_author, relative_time


@dataclass(frozen=True)
class DisplayItem:
    id: str
    title: str
    tooltip: str
    subtitle: str
    accessory: str
    colour: str
    citation_key: str
    bibtex: str
    url: str
    pdf_url: str


def to_display_item(result: SearchResult, now: datetime | None = None) -> DisplayItem:
    return DisplayItem(
        id=result.id,
        title=result.title,
        tooltip=result.category,
        subtitle=primary_author(result.authors),
        accessory=relative_time(result.published, now),
        colour=category_colour(result.category),
        citation_key=citation_key(result),
        bibtex=build_bibtex(result),
        url=result.id,
        pdf_url=result.pdf_link,
    )


def to_display_items(results: Iterable[SearchResult], now: datetime | None = None) -> list[DisplayItem]:
    return [to_display_item(result, now) for result in results]
