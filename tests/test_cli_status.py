from __future__ import annotations

from contextlib import redirect_stdout
from datetime import datetime, timezone
import io
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest
from unittest.mock import MagicMock, patch

from arxivsearch.arxiv import SearchResult
from arxivsearch.categories import ArxivCategory
from arxivsearch.cli import _determine_completion_status, _resolve_category, build_parser, run
from arxivsearch.config import AppConfig
from arxivsearch.host import TerminalHost
from arxivsearch.search import SearchSession

CONFIG = AppConfig(
    pdf_download_path="/tmp/papers",
    support_path="/tmp/support",
    request_timeout=5.0,
    source_path="config.local.json",
)

RESULT = SearchResult(
    id="http://arxiv.org/abs/1706.03762v7",
    title="Attention Is All You Need",
    authors=("Ashish Vaswani",),
    published=datetime(2017, 6, 12, tzinfo=timezone.utc),
    category="cs.CL",
    pdf_link="http://arxiv.org/pdf/1706.03762v7",
)


class CLICompletionStatusTests(unittest.TestCase):
    def test_success_when_pdf_downloaded(self) -> None:
        status, code = _determine_completion_status(True, Path("papers/a.pdf"))
        self.assertEqual(status, "success")
        self.assertEqual(code, 0)

    def test_failure_when_pdf_requested_but_missing(self) -> None:
        status, code = _determine_completion_status(True, None)
        self.assertEqual(status, "failure")
        self.assertEqual(code, 2)

    def test_skipped_when_no_download_requested(self) -> None:
        status, code = _determine_completion_status(False, None)
        self.assertEqual(status, "skipped")
        self.assertEqual(code, 0)


class CLICategoryTests(unittest.TestCase):
    def test_explicit_category_is_stored(self) -> None:
        host = MagicMock()
        self.assertIs(_resolve_category("cs", host), ArxivCategory.COMPUTER_SCIENCE)
        host.set_value.assert_called_once_with("category", "cs")

    def test_stored_category_is_restored(self) -> None:
        host = MagicMock()
        host.get_value.return_value = "math"
        self.assertIs(_resolve_category(None, host), ArxivCategory.MATHEMATICS)

    def test_category_survives_unwritable_support_path(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            blocker = Path(tmp_dir) / "file"
            blocker.write_text("x", encoding="utf-8")
            with self.assertLogs("arxivsearch.host", level="WARNING"):
                category = _resolve_category("cs", TerminalHost(blocker / "support"))
        self.assertIs(category, ArxivCategory.COMPUTER_SCIENCE)

    def test_garbage_stored_category_falls_back_to_all(self) -> None:
        host = MagicMock()
        host.get_value.return_value = "nonsense"
        self.assertIs(_resolve_category(None, host), ArxivCategory.ALL)


class CLIRunTests(unittest.TestCase):
    def test_parser_accepts_spaced_keyword(self) -> None:
        args = build_parser().parse_args(["attention", "is", "all", "--download", "1"])
        self.assertEqual(args.keyword, ["attention", "is", "all"])
        self.assertEqual(args.download_index, 1)

    def test_run_lists_results_and_opens_link(self) -> None:
        host = MagicMock()
        host.get_value.return_value = None
        session = SearchSession(fetch=MagicMock(return_value=[RESULT]))
        out = io.StringIO()
        with redirect_stdout(out):
            items, pdf_path = run("attention", None, CONFIG, host, open_index=1, session=session)

        self.assertEqual(len(items), 1)
        self.assertIsNone(pdf_path)
        self.assertIn("Results (1)", out.getvalue())
        self.assertIn("Attention Is All You Need - Ashish Vaswani", out.getvalue())
        host.open_in_browser.assert_called_once_with("http://arxiv.org/abs/1706.03762v7")

    def test_run_with_empty_keyword_prints_hint(self) -> None:
        host = MagicMock()
        host.get_value.return_value = None
        fetch = MagicMock()
        out = io.StringIO()
        with redirect_stdout(out):
            items, _ = run("", None, CONFIG, host, session=SearchSession(fetch=fetch))
        self.assertEqual(items, [])
        fetch.assert_not_called()
        self.assertIn("Use the search bar above to get started", out.getvalue())

    def test_download_uses_configured_timeout(self) -> None:
        host = MagicMock()
        host.get_value.return_value = None
        session = SearchSession(fetch=MagicMock(return_value=[RESULT]))
        with patch("arxivsearch.cli.actions.download_pdf", return_value=Path("/tmp/papers/x.pdf")) as download:
            with redirect_stdout(io.StringIO()):
                _, pdf_path = run("attention", None, CONFIG, host, download_index=1, session=session)
        self.assertEqual(pdf_path, Path("/tmp/papers/x.pdf"))
        self.assertEqual(download.call_args.kwargs["timeout"], 5.0)
        self.assertEqual(download.call_args.kwargs["download_dir"], Path("/tmp/papers"))

    def test_out_of_range_index_exits(self) -> None:
        host = MagicMock()
        host.get_value.return_value = None
        session = SearchSession(fetch=MagicMock(return_value=[RESULT]))
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit):
            run("attention", None, CONFIG, host, open_index=5, session=session)


if __name__ == "__main__":
    unittest.main()
