from __future__ import annotations

from datetime import datetime
import logging
from typing import Callable

import requests

from arxivsearch.arxiv import SearchResult, search_papers
from arxivsearch.categories import ArxivCategory, filter_results
from arxivsearch.items import DisplayItem, to_display_items
from arxivsearch.query import MAX_RESULTS, should_execute
from arxivsearch.select import rank_results

logger = logging.getLogger(__name__)

Fetcher = Callable[..., list[SearchResult]]


class SearchSession:
    """Search text, category selection and the latest fetched result set.

    Every text change opens a new generation. Responses that arrive for an
    older generation are dropped so only the latest query is ever rendered.
    """

    def __init__(
        self,
        category: ArxivCategory = ArxivCategory.ALL,
        fetch: Fetcher = search_papers,
        http_session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.search_text = ""
        self.category = category
        self.is_loading = False
        self.error: str | None = None
        self._fetch = fetch
        self._http_session = http_session
        self._timeout = timeout
        self._generation = 0
        self._results: list[SearchResult] = []

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def results(self) -> list[SearchResult]:
        return list(self._results)

    def set_category(self, category: ArxivCategory) -> None:
        self.category = category

    def set_search_text(self, text: str) -> int:
        self.search_text = str(text or "")
        self._generation += 1
        self.error = None
        if not should_execute(self.search_text):
            self._results = []
            self.is_loading = False
        else:
            self.is_loading = True
        return self._generation

    def receive(self, generation: int, results: list[SearchResult]) -> bool:
        if generation != self._generation:
            logger.debug("Dropping stale results for generation %s (current %s)", generation, self._generation)
            return False
        self._results = list(results)[:MAX_RESULTS]
        self.is_loading = False
        return True

    def fail(self, generation: int, error: Exception) -> bool:
        if generation != self._generation:
            return False
        logger.warning("arXiv search for %r failed: %s", self.search_text, error)
        self._results = []
        self.error = str(error)
        self.is_loading = False
        return True

    def search(self, text: str) -> list[SearchResult]:
        generation = self.set_search_text(text)
        if not should_execute(self.search_text):
            return []
        try:
            results = self._fetch(self.search_text, session=self._http_session, timeout=self._timeout)
        except requests.RequestException as error:
            self.fail(generation, error)
        else:
            self.receive(generation, results)
        return self.visible_results()

    def visible_results(self) -> list[SearchResult]:
        ranked = rank_results(self._results, self.search_text)
        return filter_results(ranked, self.category)

    def render(self, now: datetime | None = None) -> list[DisplayItem]:
        return to_display_items(self.visible_results(), now)

    @property
    def empty_view_title(self) -> str:
        if self.is_loading:
            return "Loading..."
        if self.search_text:
            return "No Results"
        return "Use the search bar above to get started"
