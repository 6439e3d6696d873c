from __future__ import annotations

import logging
import re
from pathlib import Path

import requests

logger = logging.getLogger(__name__)


class PDFDownloadError(RuntimeError):
    """Raised when PDF download fails."""


def _sanitize_filename(text: str, max_length: int = 120) -> str:
    cleaned = re.sub(r"\s+", " ", str(text or "").strip())
    cleaned = re.sub(r'[\\/:*?"<>|]', "_", cleaned)
    cleaned = cleaned.strip(" .")
    if not cleaned:
        return "paper"
    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length].rstrip(" .")
    return cleaned or "paper"


def target_pdf_path(download_dir: Path, key: str) -> Path:
    return Path(download_dir).expanduser() / f"{_sanitize_filename(key)}.pdf"


def download_pdf(
    pdf_url: str,
    target_path: Path,
    timeout: float = 45.0,
    session: requests.Session | None = None,
) -> Path:
    """Fetch ``pdf_url`` in a single request and write the body to ``target_path``.

    There is no retry and a partially written file is left in place.
    """
    url = str(pdf_url or "").strip()
    if not url.startswith("http"):
        raise PDFDownloadError(f"No usable PDF URL: {pdf_url!r}")
    if timeout <= 0:
        raise PDFDownloadError("PDF timeout must be > 0.")

    client = session or requests
    try:
        response = client.get(
            url,
            timeout=(10, timeout),
            allow_redirects=True,
            headers={"User-Agent": "arxivsearch/0.1"},
        )
        response.raise_for_status()
    except requests.RequestException as error:
        raise PDFDownloadError(f"{url} -> {error}") from error

    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(response.content)
    except OSError as error:
        raise PDFDownloadError(f"Failed to write PDF to {target_path}: {error}") from error

    logger.info("Downloaded %s to %s (%s bytes)", url, target_path, len(response.content))
    return target_path
