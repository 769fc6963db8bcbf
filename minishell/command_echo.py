"""Human-readable rendering of command usage and parsed options."""

from typing import Callable, List

from .command import Command, CommandContext


def format_command_options(command: Command, description: str = "") -> List[str]:
    """Usage lines for a command: header, description, one line per option."""
    lines = [f"Command '{command.name}' usage:"]
    if description:
        lines.append(f"  {description}")
    if not command.options:
        lines.append("  (no options)")
    width = max((len(opt.usage()) for opt in command.options), default=0)
    for opt in command.options:
        flags = opt.usage().ljust(width)
        suffix = " [mandatory]" if opt.mandatory else ""
        lines.append(f"  {flags}  {opt.description}{suffix}".rstrip())
    return lines


def print_command_options(
    command: Command, echo: Callable[[str], None], description: str = ""
) -> None:
    for line in format_command_options(command, description):
        echo(line)


def format_command_context(command: Command, context: CommandContext) -> str:
    """One line listing the options the command is about to run with."""
    parts = []
    for name, value in context.enabled_options().items():
        parts.append(f"--{name}" if value is None else f"--{name} {value}")
    if not parts:
        return f"Command '{command.name}' execute with default options"
    return f"Command '{command.name}' execute with options: {' '.join(parts)}"


def print_command_context(
    command: Command, context: CommandContext, echo: Callable[[str], None]
) -> None:
    echo(format_command_context(command, context))
