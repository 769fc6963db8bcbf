"""Built-in commands available in every host shell.

Key functions:
    add_builtin_commands: Register ``help`` and ``version`` on a shell.
"""

from typing import Any, Callable, Dict

from .command import Command, CommandContext, CommandOption
from .command_echo import format_command_options
from .logging_config import get_logger
from .registry import INVALID_COMMAND_ID, ShellCommandId
from .shell import Shell
from .version import version_lines

logger = get_logger("minishell.registry")

HELP_COMMAND = Command(
    name="help",
    options=[
        CommandOption(
            name="command",
            short_name="c",
            require_value=True,
            description="Show the usage of a single command",
        ),
    ],
)


VERSION_COMMAND = Command(name="version")


def help_lines(shell: Shell) -> list:
    """One line per command: name, description, declared dependencies."""
    ids = shell.commands()
    width = max((len(shell.command_by_id(i).name) for i in ids), default=0)
    lines = [f"Commands of {shell.name}:"]
    for cmd_id in ids:
        name = shell.command_by_id(cmd_id).name
        line = f"  {name.ljust(width)}  {shell.command_description(cmd_id)}".rstrip()
        deps = shell.command_dependency(cmd_id)
        if deps:
            dep_names = ", ".join(shell.command_by_id(d).name for d in deps)
            line += f" (after: {dep_names})"
        lines.append(line)
    return lines


def add_builtin_commands(
    shell: Shell, echo: Callable[[str], None]
) -> Dict[str, ShellCommandId]:
    """Register the built-in commands and bind their execute functions.

    Args:
        shell: Shell to extend. Built-ins ignore the host context.
        echo: Where the built-ins write their output.

    Returns:
        Mapping of built-in name to id. A built-in whose name the host
        already registered is skipped and left out of the mapping.
    """

    def run_help(_host: Any, ctx: CommandContext) -> None:
        name = ctx.option_value("command")
        if name is None:
            lines = help_lines(shell)
        else:
            cmd_id = shell.command(name)
            if cmd_id == INVALID_COMMAND_ID:
                echo(f"Command '{name}' is not defined!")
                return
            lines = format_command_options(
                shell.command_by_id(cmd_id), shell.command_description(cmd_id)
            )
        for line in lines:
            echo(line)

    def run_version(_host: Any, _ctx: CommandContext) -> None:
        for line in version_lines(shell.name):
            echo(line)

    added = {}
    for command, description, func in (
        (HELP_COMMAND, "Show the available commands", run_help),
        (VERSION_COMMAND, "Show version information", run_version),
    ):
        cmd_id = shell.add_command(command, description)
        if cmd_id == INVALID_COMMAND_ID:
            logger.warning("builtin_command_skipped", command=command.name)
            continue
        shell.add_command_execute_function(cmd_id, func)
        added[command.name] = cmd_id
    return added
