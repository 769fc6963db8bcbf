"""Custom exception hierarchy for minishell.

Separates programming errors made by the host while registering
commands (invalid ids, malformed schemas) from runtime failures that
the shell reports and recovers from (option parsing, configuration).
"""

from typing import Any, Optional


class ShellError(Exception):
    """Base exception for all minishell errors.

    Attributes:
        message: Human-readable error description.
        module: Originating module name (e.g. "registry").
        context: Arbitrary key-value pairs for structured logging.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.module = module
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message or self.__class__.__name__]
        if self.module:
            parts.append(f"[module={self.module}]")
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"({ctx})")
        return " ".join(parts)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({self.message!r}, module={self.module!r})"


# ---------------------------------------------------------------------------
# Registration-time errors (host programming mistakes)
# ---------------------------------------------------------------------------

class InvalidCommandIdError(ShellError):
    """A command id that is not registered was passed to the shell.

    Raised for any accessor or mutator call with an invalid id,
    including dependency declarations. Never caught by the shell.

    Attributes:
        command_id: Index of the offending id.
    """

    def __init__(
        self,
        message: str = "",
        *,
        command_id: Optional[int] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.command_id = command_id
        super().__init__(
            message,
            module=module or "registry",
            command_id=command_id,
            **context,
        )


class CommandDefinitionError(ShellError, ValueError):
    """A command or option schema is malformed."""

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, module=module or "command", **context)


# ---------------------------------------------------------------------------
# Runtime errors (reported, never fatal)
# ---------------------------------------------------------------------------

class OptionParseError(ShellError):
    """User-supplied tokens do not match a command's option schema.

    Attributes:
        command_name: Command whose options failed to parse.
        token: The offending token, when one is known.
    """

    def __init__(
        self,
        message: str = "",
        *,
        command_name: Optional[str] = None,
        token: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.command_name = command_name
        self.token = token
        super().__init__(message, module=module or "command_parser", **context)


class ConfigurationError(ShellError):
    """Invalid or unreadable configuration."""

    def __init__(
        self,
        message: str = "",
        *,
        setting_name: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.setting_name = setting_name
        super().__init__(message, module=module or "config", **context)
