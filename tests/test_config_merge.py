from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest

from arxivsearch.config import AppConfig, load_app_config, resolve_download_dir


def _load_in(directory: Path, config_file: str | None = None) -> AppConfig:
    prev_cwd = os.getcwd()
    prev_env = os.getenv("ARXIVSEARCH_CONFIG_FILE")
    os.chdir(directory)
    if config_file is None:
        os.environ.pop("ARXIVSEARCH_CONFIG_FILE", None)
    else:
        os.environ["ARXIVSEARCH_CONFIG_FILE"] = config_file
    try:
        return load_app_config()
    finally:
        os.chdir(prev_cwd)
        if prev_env is None:
            os.environ.pop("ARXIVSEARCH_CONFIG_FILE", None)
        else:
            os.environ["ARXIVSEARCH_CONFIG_FILE"] = prev_env


class ConfigMergeTests(unittest.TestCase):
    def test_local_overrides_example_and_inherits_missing_fields(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            (tmp_path / "config.example.json").write_text(
                json.dumps(
                    {
                        "preferences": {"pdf_download_path": "YOUR_PDF_DIRECTORY"},
                        "support_path": "/srv/arxivsearch",
                        "request_timeout": 12,
                    }
                ),
                encoding="utf-8",
            )
            (tmp_path / "config.local.json").write_text(
                json.dumps({"preferences": {"pdf_download_path": "/data/papers"}}),
                encoding="utf-8",
            )
            cfg = _load_in(tmp_path)

        self.assertEqual(cfg.pdf_download_path, "/data/papers")
        self.assertEqual(cfg.support_path, "/srv/arxivsearch")
        self.assertEqual(cfg.request_timeout, 12.0)
        self.assertIn("config.example.json", cfg.source_path)
        self.assertIn("config.local.json", cfg.source_path)

    def test_placeholder_download_path_falls_back_to_support_path(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            (tmp_path / "config.example.json").write_text(
                json.dumps({"pdf_download_path": "YOUR_PDF_DIRECTORY", "support_path": "/srv/arxivsearch"}),
                encoding="utf-8",
            )
            cfg = _load_in(tmp_path)

        self.assertEqual(cfg.pdf_download_path, "")
        self.assertEqual(resolve_download_dir(cfg), Path("/srv/arxivsearch"))

    def test_defaults_without_any_file(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            cfg = _load_in(Path(tmp_dir))
        self.assertEqual(cfg.support_path, "~/.arxivsearch")
        self.assertEqual(cfg.request_timeout, 30.0)
        self.assertEqual(resolve_download_dir(cfg), Path("~/.arxivsearch").expanduser())

    def test_explicit_missing_config_file_raises(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            with self.assertRaises(RuntimeError):
                _load_in(Path(tmp_dir), config_file=str(Path(tmp_dir) / "missing.json"))

    def test_non_object_config_raises(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            cfg_path = Path(tmp_dir) / "config.json"
            cfg_path.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                _load_in(Path(tmp_dir), config_file=str(cfg_path))


if __name__ == "__main__":
    unittest.main()
