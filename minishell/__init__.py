"""minishell: a reusable command-shell engine.

Hosts register commands with option schemas, bind execute functions
and declare dependencies, then run input interactively or from a
script file.
"""

from .command import Command, CommandContext, CommandOption, OptionValueType
from .command_parser import parse_command
from .exceptions import (
    CommandDefinitionError,
    ConfigurationError,
    InvalidCommandIdError,
    OptionParseError,
    ShellError,
)
from .line_source import IterableLineSource, LineSource, PromptToolkitLineSource
from .registry import INVALID_COMMAND_ID, CommandRegistry, ShellCommandId
from .shell import DispatchStatus, Shell
from .version import VERSION as __version__

__all__ = [
    "Command",
    "CommandContext",
    "CommandOption",
    "OptionValueType",
    "parse_command",
    "ShellError",
    "InvalidCommandIdError",
    "CommandDefinitionError",
    "OptionParseError",
    "ConfigurationError",
    "LineSource",
    "IterableLineSource",
    "PromptToolkitLineSource",
    "CommandRegistry",
    "ShellCommandId",
    "INVALID_COMMAND_ID",
    "DispatchStatus",
    "Shell",
]
