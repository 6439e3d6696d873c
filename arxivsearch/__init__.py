"""Search arXiv, rank results by title similarity and grab citations or PDFs."""

__all__ = [
    "actions",
    "arxiv",
    "categories",
    "citation",
    "cli",
    "config",
    "host",
    "items",
    "pdf",
    "query",
    "search",
    "select",
]
