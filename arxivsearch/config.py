from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_SUPPORT_PATH = "~/.arxivsearch"
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class AppConfig:
    pdf_download_path: str
    support_path: str
    request_timeout: float
    source_path: str


def _to_str(value: Any) -> str:
    return str(value or "").strip()


def _to_float(value: Any, default: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _pick_config_path() -> Path | None:
    configured = _to_str(os.getenv("ARXIVSEARCH_CONFIG_FILE"))
    if configured:
        path = Path(configured)
        if not path.exists():
            raise RuntimeError(f"Config file not found: {path}")
        return path

    default_paths = [Path("config.local.json")]
    for path in default_paths:
        if path.exists():
            return path
    return None


def _load_json_object(path: Path) -> dict[str, Any]:
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise RuntimeError(f"Failed to read config file: {path}") from error
    if not isinstance(loaded, dict):
        raise RuntimeError(f"Config file must be a JSON object: {path}")
    return loaded


def _deep_merge_dict(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, override_value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            merged[key] = _deep_merge_dict(base_value, override_value)
        else:
            merged[key] = override_value
    return merged


def _clear_placeholder(value: Any) -> str:
    text = _to_str(value)
    if text in {"YOUR_PDF_DIRECTORY", "/path/to/papers"}:
        return ""
    return text


def load_app_config() -> AppConfig:
    config_path = _pick_config_path()
    default_path = Path("config.example.json")
    default_raw: dict[str, Any] = _load_json_object(default_path) if default_path.exists() else {}
    override_raw: dict[str, Any] = _load_json_object(config_path) if config_path is not None else {}
    raw: dict[str, Any] = _deep_merge_dict(default_raw, override_raw)

    preferences_obj = raw.get("preferences") if isinstance(raw.get("preferences"), dict) else {}

    pdf_download_path = _clear_placeholder(
        preferences_obj.get("pdf_download_path")
        if "pdf_download_path" in preferences_obj
        else raw.get("pdf_download_path")
    )
    support_path = _clear_placeholder(raw.get("support_path")) or DEFAULT_SUPPORT_PATH
    request_timeout = _to_float(raw.get("request_timeout"), DEFAULT_REQUEST_TIMEOUT)

    source_parts: list[str] = []
    if default_path.exists():
        source_parts.append(str(default_path))
    if config_path is not None:
        source_parts.append(str(config_path))
    source_path = " + ".join(source_parts) if source_parts else "config.local.json"

    return AppConfig(
        pdf_download_path=pdf_download_path,
        support_path=support_path,
        request_timeout=request_timeout,
        source_path=source_path,
    )


def resolve_download_dir(app_config: AppConfig) -> Path:
    """Configured PDF directory, or the per-extension support path when unset."""
    configured = app_config.pdf_download_path or app_config.support_path
    return Path(configured).expanduser()
