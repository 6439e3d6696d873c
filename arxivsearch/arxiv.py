from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import re
import xml.etree.ElementTree as ET

import requests

from arxivsearch.query import ARXIV_BASE, MAX_RESULTS, build_search_params, should_execute

logger = logging.getLogger(__name__)

ATOM_NS = {
    "atom": "http://www.w3.org/2005/Atom",
    "arxiv": "http://arxiv.org/schemas/atom",
}


@dataclass(frozen=True)
class SearchResult:
    id: str
    title: str
    authors: tuple[str, ...]
    published: datetime | None
    category: str
    pdf_link: str


def _clean_text(value: str | None) -> str:
    return re.sub(r"\s+", " ", str(value or "")).strip()


def _parse_published(value: str) -> datetime | None:
    text = str(value or "").strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _extract_arxiv_id(id_url: str) -> str:
    text = str(id_url or "").strip()
    if not text:
        return ""
    marker = "/abs/"
    if marker in text:
        return text.split(marker, 1)[1]
    return text.rsplit("/", 1)[-1]


def _entry_text(entry: ET.Element, tag: str) -> str:
    node = entry.find(f"atom:{tag}", ATOM_NS)
    if node is None or node.text is None:
        return ""
    return node.text.strip()


def _entry_authors(entry: ET.Element) -> tuple[str, ...]:
    authors: list[str] = []
    for author in entry.findall("atom:author", ATOM_NS):
        name = _clean_text(author.findtext("atom:name", default="", namespaces=ATOM_NS))
        if name:
            authors.append(name)
    return tuple(authors)


def _entry_category(entry: ET.Element) -> str:
    primary = entry.find("arxiv:primary_category", ATOM_NS)
    if primary is not None and primary.attrib.get("term"):
        return primary.attrib["term"].strip()
    for category in entry.findall("atom:category", ATOM_NS):
        term = category.attrib.get("term", "").strip()
        if term:
            return term
    return ""


def _entry_pdf_link(entry: ET.Element, id_url: str) -> str:
    for link in entry.findall("atom:link", ATOM_NS):
        href = link.attrib.get("href", "")
        if not href:
            continue
        if link.attrib.get("title") == "pdf" or link.attrib.get("type") == "application/pdf":
            return href
    arxiv_id = _extract_arxiv_id(id_url)
    return f"https://arxiv.org/pdf/{arxiv_id}" if arxiv_id else ""


def _to_search_result(entry: ET.Element) -> SearchResult:
    id_url = _entry_text(entry, "id")
    return SearchResult(
        id=id_url,
        title=_clean_text(_entry_text(entry, "title")),
        authors=_entry_authors(entry),
        published=_parse_published(_entry_text(entry, "published")),
        category=_entry_category(entry),
        pdf_link=_entry_pdf_link(entry, id_url),
    )


def parse_feed(body: str | bytes | None) -> list[SearchResult]:
    """Parse an arXiv Atom feed into results, in document order.

    Empty or malformed documents yield an empty list instead of raising.
    """
    if body is None or not body.strip():
        return []
    try:
        root = ET.fromstring(body)
    except ET.ParseError as error:
        logger.warning("arXiv feed could not be parsed: %s", error)
        return []
    entries = root.findall("atom:entry", ATOM_NS)
    return [_to_search_result(entry) for entry in entries[:MAX_RESULTS]]


def search_papers(
    text: str,
    session: requests.Session | None = None,
    timeout: float = 30.0,
) -> list[SearchResult]:
    if not should_execute(text):
        return []
    client = session or requests
    response = client.get(ARXIV_BASE, params=build_search_params(text), timeout=timeout)
    response.raise_for_status()
    results = parse_feed(response.content)
    logger.debug("arXiv search %r returned %s entries", text, len(results))
    return results
