from __future__ import annotations

import argparse
import logging
from pathlib import Path

from arxivsearch import actions
from arxivsearch.categories import ArxivCategory
from arxivsearch.config import AppConfig, load_app_config, resolve_download_dir
from arxivsearch.host import Host, TerminalHost
from arxivsearch.items import DisplayItem
from arxivsearch.search import SearchSession

CATEGORY_KEY = "category"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _determine_completion_status(download_requested: bool, pdf_path: Path | None) -> tuple[str, int]:
    if not download_requested:
        return "skipped", 0
    if pdf_path is not None:
        return "success", 0
    return "failure", 2


def _resolve_category(requested: str | None, host: Host) -> ArxivCategory:
    if requested is not None:
        category = ArxivCategory.from_value(requested)
        host.set_value(CATEGORY_KEY, category.code)
        return category
    stored = host.get_value(CATEGORY_KEY)
    try:
        return ArxivCategory.from_value(stored)
    except ValueError:
        return ArxivCategory.ALL


def _pick_item(items: list[DisplayItem], index: int | None) -> DisplayItem | None:
    if index is None:
        return None
    if index < 1 or index > len(items):
        raise SystemExit(f"Result index {index} out of range (1-{len(items)}).")
    return items[index - 1]


def format_item(index: int, item: DisplayItem) -> str:
    subtitle = f" - {item.subtitle}" if item.subtitle else ""
    return f"[{index:>2}] {item.title}{subtitle}  ({item.accessory}) [{item.tooltip or '?'}]"


def render_items(session: SearchSession, items: list[DisplayItem]) -> list[str]:
    if not items:
        return [session.empty_view_title]
    lines = [f"Results ({len(items)})"]
    lines.extend(format_item(index, item) for index, item in enumerate(items, start=1))
    return lines


def run(
    keyword: str,
    category: str | None,
    app_config: AppConfig,
    host: Host,
    open_index: int | None = None,
    open_pdf_index: int | None = None,
    copy_index: int | None = None,
    download_index: int | None = None,
    session: SearchSession | None = None,
) -> tuple[list[DisplayItem], Path | None]:
    search = session or SearchSession(timeout=app_config.request_timeout)
    search.set_category(_resolve_category(category, host))
    search.search(keyword)
    items = search.render()
    for line in render_items(search, items):
        print(line)

    item = _pick_item(items, open_index)
    if item is not None:
        actions.open_link(item, host)
    item = _pick_item(items, open_pdf_index)
    if item is not None:
        actions.open_pdf(item, host)
    item = _pick_item(items, copy_index)
    if item is not None and actions.copy_bibtex(item, host):
        print(f"OK: BibTeX for {item.citation_key} copied to clipboard")

    pdf_path: Path | None = None
    item = _pick_item(items, download_index)
    if item is not None:
        pdf_path = actions.download_pdf(
            item,
            download_dir=resolve_download_dir(app_config),
            host=host,
            timeout=app_config.request_timeout,
        )
    return items, pdf_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search arXiv papers by title, author, or abstract."
    )
    parser.add_argument(
        "keyword",
        nargs="*",
        help="Search text; supports spaces without quotes (e.g. attention is all you need)",
    )
    parser.add_argument(
        "--category",
        type=str,
        default=None,
        help="Category filter by code, name or label (e.g. cs, phys, \"Computer Science\"); remembered between runs",
    )
    parser.add_argument("--open", dest="open_index", type=int, default=None, help="Open result N in the browser")
    parser.add_argument(
        "--open-pdf",
        dest="open_pdf_index",
        type=int,
        default=None,
        help="Open the PDF of result N in the browser",
    )
    parser.add_argument(
        "--copy-bibtex",
        dest="copy_index",
        type=int,
        default=None,
        help="Copy the BibTeX entry of result N to the clipboard",
    )
    parser.add_argument(
        "--download",
        dest="download_index",
        type=int,
        default=None,
        help="Download the PDF of result N into the configured directory",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    _configure_logging(args.verbose)
    keyword = " ".join(args.keyword).strip()

    try:
        app_config = load_app_config()
    except RuntimeError as error:
        raise SystemExit(str(error)) from error
    host = TerminalHost(Path(app_config.support_path))

    try:
        _, pdf_path = run(
            keyword=keyword,
            category=args.category,
            app_config=app_config,
            host=host,
            open_index=args.open_index,
            open_pdf_index=args.open_pdf_index,
            copy_index=args.copy_index,
            download_index=args.download_index,
        )
    except ValueError as error:
        parser.error(str(error))

    status, code = _determine_completion_status(args.download_index is not None, pdf_path)
    if status == "failure":
        print("WARN: pdf download failed.")
    raise SystemExit(code)


if __name__ == "__main__":
    main()
