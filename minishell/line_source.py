"""Line-input sources for interactive mode.

The interactive loop only needs two capabilities: read one line with a
prompt (None at end of input) and remember a line in history. Keeping
them behind LineSource lets the loop run without a terminal.

Key classes:
    LineSource: Protocol consumed by Shell.run_interactive_mode().
    PromptToolkitLineSource: Line editing and history via prompt_toolkit.
    IterableLineSource: Lines from any iterable, e.g. piped stdin.
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.history import FileHistory, History, InMemoryHistory

from .logging_config import get_logger

logger = get_logger("minishell.interactive")


class LineSource(Protocol):
    def read_line(self, prompt: str) -> Optional[str]:
        """Return the next line without its terminator, or None at end of input."""
        ...

    def add_history(self, line: str) -> None:
        ...


class PromptToolkitLineSource:
    """Terminal line editor with persistent or in-memory history.

    Ctrl-D ends input. Ctrl-C discards the current line and returns an
    empty string so the loop simply prompts again.

    Args:
        history_file: File to load and append history to. In-memory
            history is used when None or when the file cannot be used.
    """

    def __init__(self, history_file: Optional[Path] = None):
        self.history = self._make_history(history_file)
        self._session = PromptSession(
            history=self.history,
            auto_suggest=AutoSuggestFromHistory(),
        )

    @staticmethod
    def _make_history(history_file: Optional[Path]) -> History:
        if history_file is None:
            return InMemoryHistory()
        try:
            history_file.parent.mkdir(parents=True, exist_ok=True)
            history_file.touch(exist_ok=True)
        except OSError as e:
            logger.warning("history_file_unavailable", path=str(history_file), error=str(e))
            return InMemoryHistory()
        return FileHistory(str(history_file))

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return self._session.prompt(prompt)
        except KeyboardInterrupt:
            return ""
        except EOFError:
            return None

    def add_history(self, line: str) -> None:
        # prompt_toolkit already records accepted input; avoid a second copy
        strings = self.history.get_strings()
        if strings and strings[-1] == line:
            return
        self.history.append_string(line)


class IterableLineSource:
    """Serve lines from an iterable, ignoring the prompt.

    Used for non-interactive stdin and in tests. Trailing line
    terminators are removed. History is kept in a plain list.

    Args:
        lines: Any iterable of strings, such as an open text stream.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)
        self.history: List[str] = []

    def read_line(self, prompt: str) -> Optional[str]:
        line = next(self._lines, None)
        if line is None:
            return None
        return line.rstrip("\r\n")

    def add_history(self, line: str) -> None:
        self.history.append(line)
