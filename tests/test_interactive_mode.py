"""Tests for interactive mode and line sources."""

from unittest.mock import MagicMock, patch

from minishell.command import Command
from minishell.line_source import IterableLineSource


def test_lines_are_dispatched_and_recorded(shell, spy):
    """Non-blank lines are dispatched and added to history."""
    cmd_id = shell.add_command(Command(name="pack"))
    shell.add_command_execute_function(cmd_id, spy)
    source = IterableLineSource(["pack\n", "   \n", "\n", "bogus\n", "pack"])

    shell.run_interactive_mode({}, source)

    assert spy.call_count == 2
    assert source.history == ["pack", "bogus", "pack"]


def test_prompt_is_shell_name(shell):
    """The line source should be asked for input with the shell prompt."""
    source = MagicMock()
    source.read_line.side_effect = ["", None]

    shell.run_interactive_mode({}, source)

    source.read_line.assert_called_with("testshell> ")
    assert source.read_line.call_count == 2
    source.add_history.assert_not_called()


def test_loop_ends_only_at_end_of_input(shell):
    """exit and quit are ordinary lines; only end of input stops the loop."""
    source = IterableLineSource(["exit", "quit"])
    with patch.object(shell, "execute_command") as mock_exec:
        shell.run_interactive_mode({}, source)
    assert [c.args[0] for c in mock_exec.call_args_list] == ["exit", "quit"]


def test_raw_line_is_dispatched_with_host_context(shell):
    """The line is dispatched unmodified together with the host context."""
    host = object()
    source = IterableLineSource(["  pack  "])
    with patch.object(shell, "execute_command") as mock_exec:
        shell.run_interactive_mode(host, source)
    mock_exec.assert_called_once_with("  pack  ", host)
    assert source.history == ["  pack  "]


def test_title_printed_once(shell, echoed):
    """The banner comes first and the title is printed once."""
    shell.set_title("== title ==")
    shell.run_interactive_mode({}, IterableLineSource(["a", "b"]))
    assert echoed[0] == "Start interactive mode of testshell..."
    assert echoed.count("== title ==") == 1


def test_iterable_source_end_of_input():
    """An exhausted iterable should report end of input."""
    source = IterableLineSource([])
    assert source.read_line("> ") is None


class TestPromptToolkitLineSource:
    """PromptToolkitLineSource with the prompt session mocked out."""

    def _make_source(self, history_file=None):
        with patch("minishell.line_source.PromptSession") as mock_session_cls:
            from minishell.line_source import PromptToolkitLineSource
            source = PromptToolkitLineSource(history_file)
        return source, mock_session_cls.return_value

    def test_eof_ends_input(self):
        """Ctrl-D should end input."""
        source, session = self._make_source()
        session.prompt.side_effect = EOFError
        assert source.read_line("x> ") is None

    def test_ctrl_c_returns_empty_line(self):
        """Ctrl-C should discard the line without leaving the loop."""
        source, session = self._make_source()
        session.prompt.side_effect = KeyboardInterrupt
        assert source.read_line("x> ") == ""

    def test_returns_entered_line(self):
        """The entered text should be returned as typed."""
        source, session = self._make_source()
        session.prompt.return_value = "pack --all"
        assert source.read_line("x> ") == "pack --all"
        session.prompt.assert_called_once_with("x> ")

    def test_add_history_does_not_duplicate(self):
        """Repeating the previous line should not add a history entry."""
        source, _ = self._make_source()
        source.add_history("pack")
        source.add_history("pack")
        source.add_history("route")
        assert source.history.get_strings() == ["pack", "route"]

    def test_file_history(self, tmp_path):
        """History should persist to the configured file."""
        history_file = tmp_path / "sub" / "history"
        source, _ = self._make_source(history_file)
        source.add_history("pack")
        assert history_file.exists()
        assert "+pack" in history_file.read_text()
