from __future__ import annotations

from urllib.parse import urlencode

ARXIV_BASE = "http://export.arxiv.org/api/query"
MAX_RESULTS = 30


def should_execute(text: str | None) -> bool:
    return bool(str(text or ""))


def build_search_params(text: str, max_results: int = MAX_RESULTS) -> dict[str, str]:
    return {
        "search_query": str(text or ""),
        "sortBy": "relevance",
        "sortOrder": "descending",
        "max_results": str(max(1, min(max_results, MAX_RESULTS))),
    }


def build_query_url(text: str, max_results: int = MAX_RESULTS) -> str:
    return f"{ARXIV_BASE}?{urlencode(build_search_params(text, max_results))}"
