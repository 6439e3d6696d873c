"""Launcher host abstraction and a terminal implementation of it."""

from __future__ import annotations

from enum import Enum
import json
import logging
from pathlib import Path
import platform
import subprocess
from typing import Any, Callable, Protocol
import webbrowser

logger = logging.getLogger(__name__)

SUBPROCESS_TIMEOUT = 5
STATE_FILENAME = "state.json"


class ToastStyle(Enum):
    ANIMATED = "animated"
    SUCCESS = "success"
    FAILURE = "failure"


class Host(Protocol):
    support_path: Path

    def show_toast(self, style: ToastStyle, title: str) -> None: ...

    def copy_to_clipboard(self, text: str) -> bool: ...

    def open_in_browser(self, url: str) -> bool: ...

    def get_value(self, key: str) -> Any: ...

    def set_value(self, key: str, value: Any) -> None: ...


_TOAST_PREFIX = {
    ToastStyle.ANIMATED: "...",
    ToastStyle.SUCCESS: "OK:",
    ToastStyle.FAILURE: "WARN:",
}


def _clipboard_commands() -> list[tuple[list[str], str]]:
    system = platform.system()
    if system == "Darwin":
        return [(["pbcopy"], "utf-8")]
    if system == "Windows":
        return [(["clip"], "utf-16")]
    return [
        (["xclip", "-selection", "clipboard"], "utf-8"),
        (["xsel", "--clipboard", "--input"], "utf-8"),
    ]


class TerminalHost:
    """Host backed by stdout, the system clipboard tools and a JSON state file."""

    def __init__(
        self,
        support_path: Path,
        echo: Callable[[str], None] = print,
        opener: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        self.support_path = Path(support_path).expanduser()
        self._echo = echo
        self._opener = opener

    @property
    def state_path(self) -> Path:
        return self.support_path / STATE_FILENAME

    def show_toast(self, style: ToastStyle, title: str) -> None:
        self._echo(f"{_TOAST_PREFIX[style]} {title}")

    def copy_to_clipboard(self, text: str) -> bool:
        for command, encoding in _clipboard_commands():
            try:
                subprocess.run(
                    command,
                    input=text.encode(encoding),
                    check=True,
                    shell=False,
                    timeout=SUBPROCESS_TIMEOUT,
                )
                return True
            except FileNotFoundError:
                continue
            except (subprocess.SubprocessError, OSError) as error:
                logger.debug("Clipboard command %s failed: %s", command[0], error)
                return False
        logger.debug("No clipboard tool available")
        return False

    def open_in_browser(self, url: str) -> bool:
        if not url:
            return False
        return bool(self._opener(url))

    def _load_state(self) -> dict[str, Any]:
        if not self.state_path.exists():
            return {}
        try:
            loaded = json.loads(self.state_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as error:
            logger.warning("Ignoring unreadable state file %s: %s", self.state_path, error)
            return {}
        return loaded if isinstance(loaded, dict) else {}

    def get_value(self, key: str) -> Any:
        return self._load_state().get(key)

    def set_value(self, key: str, value: Any) -> None:
        state = self._load_state()
        state[key] = value
        try:
            self.support_path.mkdir(parents=True, exist_ok=True)
            self.state_path.write_text(json.dumps(state, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as error:
            logger.warning("Could not write state file %s: %s", self.state_path, error)
