"""Default option parser for shell commands.

Turns the tokens of an input line into option values stored in a
command's CommandContext. The shell accepts any callable with the same
signature as parse_command(), so hosts can swap in their own syntax.

Reuse policy: clear-then-parse. The context is reset before the new
tokens are applied, so an option omitted from an invocation never keeps
the value from a previous one.
"""

from typing import Callable, Optional, Sequence

from .command import Command, CommandContext
from .exceptions import OptionParseError
from .logging_config import get_logger

logger = get_logger("minishell.dispatch")

# (tokens, command, context) -> success
OptionParser = Callable[[Sequence[str], Command, CommandContext], bool]


def _apply_tokens(tokens: Sequence[str], command: Command, context: CommandContext) -> None:
    """Apply option tokens to the context, raising OptionParseError on the first problem."""
    i = 0
    while i < len(tokens):
        token = tokens[i]
        option = command.find_option(token)
        if option is None:
            raise OptionParseError(
                f"Detect unknown option '{token}'!",
                command_name=command.name,
                token=token,
            )
        if not option.require_value:
            context.enable(option.name)
            i += 1
            continue
        if i + 1 >= len(tokens):
            raise OptionParseError(
                f"Option '{token}' requires a value!",
                command_name=command.name,
                token=token,
            )
        raw = tokens[i + 1]
        try:
            value = option.value_type.convert(raw)
        except ValueError:
            raise OptionParseError(
                f"Option '{token}' expects a {option.value_type.value} value but got '{raw}'!",
                command_name=command.name,
                token=raw,
            ) from None
        context.enable(option.name, value)
        i += 2

    for option in command.options:
        if option.mandatory and not context.option_enabled(option.name):
            raise OptionParseError(
                f"Required option '--{option.name}' is missing!",
                command_name=command.name,
            )


def parse_command(
    tokens: Sequence[str],
    command: Command,
    context: CommandContext,
    echo: Optional[Callable[[str], None]] = None,
) -> bool:
    """Parse option tokens into a command's context.

    Args:
        tokens: Tokens following the command name.
        command: Command whose schema the tokens are checked against.
        context: Context that receives the parsed values. Reset first.
        echo: Where to report the reason for a failure. Defaults to
            logging only.

    Returns:
        True when every token was consumed and all mandatory options
        are present, otherwise False (context is left reset).
    """
    context.reset()
    try:
        _apply_tokens(tokens, command, context)
    except OptionParseError as e:
        context.reset()
        logger.info(
            "option_parse_failed",
            command=command.name,
            token=e.token,
            reason=e.message,
        )
        if echo is not None:
            echo(e.message)
        return False
    return True
