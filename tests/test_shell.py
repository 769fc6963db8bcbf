"""Tests for Shell registration and command dispatch."""

from unittest.mock import MagicMock

import pytest

from minishell.command import Command
from minishell.exceptions import InvalidCommandIdError
from minishell.registry import INVALID_COMMAND_ID, ShellCommandId
from minishell.shell import DispatchStatus, Shell, strip_comment


def test_prompt_uses_shell_name(shell):
    """Prompt should be the shell name followed by '> '."""
    assert shell.name == "testshell"
    assert shell.prompt == "testshell> "


def test_registration_api(shell, read_arch, spy):
    """Shell registration methods should delegate to the registry."""
    cmd_id = shell.add_command(read_arch, "Read an architecture")
    other = shell.add_command(Command(name="write_fabric"), "Write the fabric")
    shell.add_command_execute_function(cmd_id, spy)
    shell.add_command_dependency(other, [cmd_id])

    assert shell.commands() == (cmd_id, other)
    assert shell.command("read_arch") == cmd_id
    assert shell.command_by_id(cmd_id).name == "read_arch"
    assert shell.command_description(other) == "Write the fabric"
    assert shell.command_dependency(other) == (cmd_id,)
    assert shell.valid_command_id(other)
    assert not shell.valid_command_id(ShellCommandId(2))


def test_duplicate_add_keeps_registry_size(shell, read_arch):
    """Adding a second command with a taken name should change nothing."""
    shell.add_command(read_arch)
    assert shell.add_command(Command(name="read_arch")) == INVALID_COMMAND_ID
    assert len(shell.commands()) == 1


def test_dependency_on_unregistered_command_raises(shell, read_arch):
    """Declaring a dependency on an unknown id is a programming error."""
    cmd_id = shell.add_command(read_arch)
    with pytest.raises(InvalidCommandIdError):
        shell.add_command_dependency(cmd_id, [ShellCommandId(5)])


def test_execute_runs_bound_function(shell, echoed, read_arch, spy):
    """A valid line should echo its options and call the bound function."""
    cmd_id = shell.add_command(read_arch)
    shell.add_command_execute_function(cmd_id, spy)
    host = {"design": None}

    status = shell.execute_command("read_arch -f arch.xml --verbose", host)

    assert status is DispatchStatus.EXECUTED
    spy.assert_called_once()
    called_host, ctx = spy.call_args.args
    assert called_host is host
    assert ctx is shell.command_context(cmd_id)
    assert ctx.option_value("file") == "arch.xml"
    assert echoed == [
        "Command 'read_arch' execute with options: --file arch.xml --verbose"
    ]


def test_unknown_command_reports_once_and_runs_nothing(shell, echoed, read_arch, spy):
    """An unknown command should produce one diagnostic and no execution."""
    cmd_id = shell.add_command(read_arch)
    shell.add_command_execute_function(cmd_id, spy)

    status = shell.execute_command("raed_arch -f arch.xml", {})

    assert status is DispatchStatus.UNKNOWN_COMMAND
    spy.assert_not_called()
    assert echoed == ["Try to call a command 'raed_arch' which is not defined!"]


def test_default_echo_keeps_log_events_off_stdout(capsys):
    """Without logging setup, stdout should carry only the shell's own output."""
    shell = Shell("plain")
    shell.add_command(Command(name="a"))

    shell.execute_command("bogus", {})

    out = capsys.readouterr().out
    assert out == "Try to call a command 'bogus' which is not defined!\n"
    assert "command_registered" not in out


def test_parse_failure_prints_usage_and_runs_nothing(shell, echoed, read_arch, spy):
    """A parse failure should print the reason and usage, not execute."""
    cmd_id = shell.add_command(read_arch, "Read an architecture")
    shell.add_command_execute_function(cmd_id, spy)

    status = shell.execute_command("read_arch --verbose", {})

    assert status is DispatchStatus.PARSE_ERROR
    spy.assert_not_called()
    assert echoed[0] == "Required option '--file' is missing!"
    assert echoed[1] == "Command 'read_arch' usage:"
    assert "  Read an architecture" in echoed


def test_custom_parser_is_used(echoed, read_arch, spy):
    """An injected parser should receive the option tokens and the context."""
    parser = MagicMock(return_value=False)
    shell = Shell("custom", echo=echoed.append, parser=parser)
    cmd_id = shell.add_command(read_arch)
    shell.add_command_execute_function(cmd_id, spy)

    assert shell.execute_command("read_arch a b", {}) is DispatchStatus.PARSE_ERROR
    parser.assert_called_once_with(["a", "b"], read_arch, shell.command_context(cmd_id))
    spy.assert_not_called()


def test_unbound_command_is_reported(shell, echoed):
    """A command with no execute function should be reported, not ignored."""
    shell.add_command(Command(name="pack"))

    status = shell.execute_command("pack", {})

    assert status is DispatchStatus.UNBOUND
    assert echoed[-1] == "Command 'pack' has no execute function bound!"


def test_loop_continues_after_unbound_command(shell, spy):
    """Dispatch should keep working after an unbound command."""
    shell.add_command(Command(name="pack"))
    route = shell.add_command(Command(name="route"))
    shell.add_command_execute_function(route, spy)

    assert shell.execute_command("pack", {}) is DispatchStatus.UNBOUND
    assert shell.execute_command("route", {}) is DispatchStatus.EXECUTED
    spy.assert_called_once()


def test_blank_line_is_ignored(shell, echoed):
    """Whitespace-only input should be skipped silently."""
    assert shell.execute_command("   ", {}) is DispatchStatus.EMPTY
    assert echoed == []


def test_dependencies_are_not_enforced(shell, spy):
    """Declared dependencies are metadata; dispatch does not check them."""
    pack = shell.add_command(Command(name="pack"))
    route = shell.add_command(Command(name="route"))
    shell.add_command_execute_function(pack, lambda host, ctx: None)
    shell.add_command_execute_function(route, spy)
    shell.add_command_dependency(route, [pack])

    assert shell.execute_command("route", {}) is DispatchStatus.EXECUTED
    spy.assert_called_once()


def test_context_is_reset_between_invocations(shell, read_arch):
    """Options omitted in a later call should not keep earlier values."""
    seen = []
    cmd_id = shell.add_command(read_arch)
    shell.add_command_execute_function(
        cmd_id, lambda host, ctx: seen.append(ctx.enabled_options())
    )

    shell.execute_command("read_arch -f a.xml -j 8 --verbose", {})
    shell.execute_command("read_arch -f b.xml", {})

    assert seen == [
        {"file": "a.xml", "verbose": None, "jobs": 8},
        {"file": "b.xml"},
    ]


def test_execute_function_errors_propagate(shell):
    """Exceptions from an execute function should reach the caller."""
    def boom(host, ctx):
        raise RuntimeError("boom")

    cmd_id = shell.add_command(Command(name="pack"))
    shell.add_command_execute_function(cmd_id, boom)
    with pytest.raises(RuntimeError, match="boom"):
        shell.execute_command("pack", {})


def test_host_context_is_mutable_by_callbacks(shell):
    """The same host context object should be passed to every call."""
    cmd_id = shell.add_command(Command(name="count"))
    shell.add_command_execute_function(
        cmd_id, lambda host, ctx: host.__setitem__("n", host.get("n", 0) + 1)
    )
    host = {}
    shell.execute_command("count", host)
    shell.execute_command("count", host)
    assert host == {"n": 2}


@pytest.mark.parametrize(
    "line, expected",
    [
        ("cmd --x 1", "cmd --x 1"),
        ("cmdB   # trailing", "cmdB   "),
        ("# full", ""),
        ("", ""),
    ],
)
def test_strip_comment(line, expected):
    """Everything from the first '#' should be removed."""
    assert strip_comment(line) == expected
