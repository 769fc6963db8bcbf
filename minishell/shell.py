"""Shell: command dispatcher plus interactive and script runners.

A Shell owns a CommandRegistry and drives input lines through the
dispatch pipeline: tokenize, resolve the command name, parse the
remaining tokens into the command's context, echo the resolved
options, then call the bound execute function with the host context.

User errors (unknown command, bad options) and configuration errors
(no execute function bound) are reported through the echo sink and
the loop carries on. Invalid command ids are programming errors and
raise InvalidCommandIdError.

Key classes:
    DispatchStatus: Outcome of one execute_command() call.
    Shell: The host-facing registration and execution API.
"""

import functools
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Generic, Optional, Sequence, Tuple, TypeVar, Union

from .command import Command, CommandContext
from .command_echo import print_command_context, print_command_options
from .command_parser import OptionParser, parse_command
from .line_source import LineSource
from .logging_config import get_logger
from .registry import CommandRegistry, ExecuteFunction, ShellCommandId
from .tokenizer import tokenize

logger = get_logger("minishell.dispatch")
script_logger = get_logger("minishell.script")
interactive_logger = get_logger("minishell.interactive")

T = TypeVar("T")

COMMENT_MARKER = "#"


class DispatchStatus(str, Enum):
    """Where a single dispatch stopped."""
    EXECUTED = "executed"
    EMPTY = "empty"
    UNKNOWN_COMMAND = "unknown_command"
    PARSE_ERROR = "parse_error"
    UNBOUND = "unbound"


def stdout_echo(text: str) -> None:
    """Default echo sink: one line on stdout."""
    sys.stdout.write(text + "\n")
    sys.stdout.flush()


def strip_comment(line: str) -> str:
    """Drop everything from the first comment marker onwards."""
    pos = line.find(COMMENT_MARKER)
    if pos == -1:
        return line
    return line[:pos]


class Shell(Generic[T]):
    """Command shell generic over the host context type ``T``.

    Args:
        name: Shell name, used in banners and the ``<name>> `` prompt.
        echo: Sink for human-readable output. Defaults to stdout.
        parser: Option parser capability. Defaults to parse_command()
            reporting its errors through ``echo``.
    """

    def __init__(
        self,
        name: str,
        echo: Optional[Callable[[str], None]] = None,
        parser: Optional[OptionParser] = None,
    ):
        self._name = name
        self._title = ""
        self._echo = echo or stdout_echo
        self._parser = parser or functools.partial(parse_command, echo=self._echo)
        self.registry: CommandRegistry[T] = CommandRegistry()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def title(self) -> str:
        return self._title

    @property
    def prompt(self) -> str:
        return f"{self._name}> "

    def set_title(self, title: str) -> None:
        self._title = title

    def commands(self) -> Tuple[ShellCommandId, ...]:
        return self.registry.ids()

    def command(self, name: str) -> ShellCommandId:
        """Id of the command called ``name``, or INVALID_COMMAND_ID."""
        return self.registry.lookup(name)

    def command_by_id(self, cmd_id: ShellCommandId) -> Command:
        return self.registry.command(cmd_id)

    def command_description(self, cmd_id: ShellCommandId) -> str:
        return self.registry.description(cmd_id)

    def command_context(self, cmd_id: ShellCommandId) -> CommandContext:
        return self.registry.context(cmd_id)

    def command_dependency(self, cmd_id: ShellCommandId) -> Tuple[ShellCommandId, ...]:
        return self.registry.dependencies(cmd_id)

    def valid_command_id(self, cmd_id: ShellCommandId) -> bool:
        return self.registry.is_valid(cmd_id)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_command(self, command: Command, description: str = "") -> ShellCommandId:
        return self.registry.add(command, description)

    def add_command_execute_function(
        self, cmd_id: ShellCommandId, func: ExecuteFunction
    ) -> None:
        self.registry.bind_execute(cmd_id, func)

    def add_command_dependency(
        self, cmd_id: ShellCommandId, dependencies: Sequence[ShellCommandId]
    ) -> None:
        self.registry.set_dependencies(cmd_id, dependencies)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute_command(self, line: str, host_context: T) -> DispatchStatus:
        """Run a single input line.

        Args:
            line: Raw command line, comments already removed.
            host_context: Caller-owned value handed to the execute function.

        Returns:
            The stage the dispatch reached. Exceptions raised by the
            execute function itself propagate to the caller.
        """
        tokens = tokenize(line)
        if not tokens:
            return DispatchStatus.EMPTY

        cmd_id = self.registry.lookup(tokens[0])
        if cmd_id.is_invalid:
            logger.info("unknown_command", command=tokens[0])
            self._echo(f"Try to call a command '{tokens[0]}' which is not defined!")
            return DispatchStatus.UNKNOWN_COMMAND

        command = self.registry.command(cmd_id)
        context = self.registry.context(cmd_id)
        if not self._parser(tokens[1:], command, context):
            print_command_options(command, self._echo, self.registry.description(cmd_id))
            return DispatchStatus.PARSE_ERROR

        print_command_context(command, context, self._echo)

        func = self.registry.execute_function(cmd_id)
        if func is None:
            logger.error("execute_function_unbound", command=command.name)
            self._echo(f"Command '{command.name}' has no execute function bound!")
            return DispatchStatus.UNBOUND

        logger.debug("command_executing", command=command.name, options=context.enabled_options())
        func(host_context, context)
        return DispatchStatus.EXECUTED

    def _print_title(self) -> None:
        if self._title:
            self._echo(self._title)

    def run_interactive_mode(self, host_context: T, line_source: LineSource) -> None:
        """Read-eval loop until the line source reports end of input."""
        self._echo(f"Start interactive mode of {self._name}...")
        self._print_title()
        interactive_logger.info("interactive_mode_started", shell=self._name)

        while True:
            line = line_source.read_line(self.prompt)
            if line is None:
                break
            if not line.strip():
                continue
            self.execute_command(line, host_context)
            line_source.add_history(line)

        interactive_logger.info("interactive_mode_finished", shell=self._name)

    def run_script_mode(self, script_path: Union[str, Path], host_context: T) -> bool:
        """Execute every command line of a script file.

        The whole file is read and decoded before the first command runs,
        so an unreadable or non-UTF-8 file runs nothing.

        Returns:
            False when the file could not be opened or read (nothing was
            run), True once every line has been processed.
        """
        self._echo(f"Reading script file {script_path}...")
        self._print_title()

        try:
            fp = open(script_path, "r", encoding="utf-8")
        except OSError as e:
            script_logger.error("script_open_failed", path=str(script_path), error=str(e))
            self._echo(
                f"Fail to open the script file: {script_path}! Please check its location"
            )
            return False

        with fp:
            try:
                text = fp.read()
            except (OSError, UnicodeDecodeError) as e:
                script_logger.error("script_read_failed", path=str(script_path), error=str(e))
                self._echo(f"Fail to read the script file: {script_path}! {e}")
                return False

        for lineno, raw in enumerate(text.split("\n"), start=1):
            line = strip_comment(raw.rstrip("\r"))
            if not line.strip():
                continue
            script_logger.debug("script_line", path=str(script_path), line=lineno)
            self.execute_command(line, host_context)
        return True
