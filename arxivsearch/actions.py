from __future__ import annotations

import logging
from pathlib import Path

import requests

from arxivsearch.host import Host, ToastStyle
from arxivsearch.items import DisplayItem
from arxivsearch.pdf import PDFDownloadError, download_pdf as fetch_pdf, target_pdf_path

logger = logging.getLogger(__name__)


def open_link(item: DisplayItem, host: Host) -> bool:
    return host.open_in_browser(item.url)


def open_pdf(item: DisplayItem, host: Host) -> bool:
    return host.open_in_browser(item.pdf_url)


def copy_bibtex(item: DisplayItem, host: Host) -> bool:
    return host.copy_to_clipboard(item.bibtex)


def download_pdf(
    item: DisplayItem,
    download_dir: Path,
    host: Host,
    timeout: float = 45.0,
    session: requests.Session | None = None,
) -> Path | None:
    """Copy the BibTeX entry, then save the PDF as ``<download_dir>/<citation key>.pdf``.

    Returns the written path, or ``None`` when the download failed. Failures
    only show up as a missing success toast and a log line.
    """
    host.copy_to_clipboard(item.bibtex)
    target = target_pdf_path(download_dir, item.citation_key)
    host.show_toast(ToastStyle.ANIMATED, f"PDF file downloading to {target}")
    try:
        path = fetch_pdf(item.pdf_url, target, timeout=timeout, session=session)
    except PDFDownloadError as error:
        logger.error("PDF download failed for %s: %s", item.id, error)
        return None
    host.show_toast(ToastStyle.SUCCESS, "Download succeeded.")
    return path
