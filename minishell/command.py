"""Command schema and per-command option context.

Defines the immutable description of a command (its name and option
schema) and the mutable container that receives parsed option values
each time the command is invoked.

Key classes:
    OptionValueType: Type a value-carrying option is converted to.
    CommandOption: One option in a command's schema.
    Command: Immutable command definition.
    CommandContext: Mutable option values for one command.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import CommandDefinitionError

OptionValue = Union[str, int, float]


class OptionValueType(str, Enum):
    """Conversion applied to the token following a value-carrying option."""
    STRING = "string"
    INT = "int"
    FLOAT = "float"

    def convert(self, raw: str) -> OptionValue:
        """Convert a raw token, raising ValueError when it does not fit."""
        if self is OptionValueType.INT:
            return int(raw)
        if self is OptionValueType.FLOAT:
            return float(raw)
        return raw


class CommandOption(BaseModel):
    """A single option accepted by a command.

    Attributes:
        name: Long name, given on the command line as ``--name``.
        short_name: Optional one-dash alias, given as ``-s``.
        require_value: Whether the option consumes the following token.
        value_type: Conversion applied to that token.
        mandatory: Whether parsing fails when the option is absent.
        description: One-line help text.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    short_name: Optional[str] = None
    require_value: bool = False
    value_type: OptionValueType = OptionValueType.STRING
    mandatory: bool = False
    description: str = ""

    @field_validator("name", "short_name")
    @classmethod
    def _no_dashes_or_spaces(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value or value.startswith("-") or " " in value:
            raise ValueError(
                f"option name '{value}' must be non-empty, without leading dash or spaces"
            )
        return value

    def usage(self) -> str:
        """Render the option the way it is typed, e.g. ``--file|-f <string>``."""
        text = f"--{self.name}"
        if self.short_name:
            text += f"|-{self.short_name}"
        if self.require_value:
            text += f" <{self.value_type.value}>"
        return text


class Command(BaseModel):
    """Immutable command definition: a name plus its option schema.

    Example:
        >>> Command(
        ...     name="read_arch",
        ...     options=[CommandOption(name="file", short_name="f",
        ...                            require_value=True, mandatory=True)],
        ... )
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    options: Tuple[CommandOption, ...] = ()

    @field_validator("name")
    @classmethod
    def _single_token(cls, value: str) -> str:
        if " " in value or value.startswith("#"):
            raise ValueError(f"command name '{value}' must be a single token")
        return value

    @model_validator(mode="after")
    def _unique_option_names(self) -> "Command":
        names = [opt.name for opt in self.options]
        shorts = [opt.short_name for opt in self.options if opt.short_name]
        if len(set(names)) != len(names):
            raise ValueError(f"command '{self.name}' has duplicate option names")
        if len(set(shorts)) != len(shorts):
            raise ValueError(f"command '{self.name}' has duplicate short option names")
        return self

    def option(self, name: str) -> CommandOption:
        """Return the option with the given long name.

        Raises:
            CommandDefinitionError: If the schema has no such option.
        """
        for opt in self.options:
            if opt.name == name:
                return opt
        raise CommandDefinitionError(
            f"command '{self.name}' has no option '{name}'", option=name
        )

    def find_option(self, flag: str) -> Optional[CommandOption]:
        """Resolve a command-line flag (``--name`` or ``-s``) to its option."""
        if flag.startswith("--"):
            name = flag[2:]
            return next((o for o in self.options if o.name == name), None)
        if flag.startswith("-"):
            short = flag[1:]
            return next((o for o in self.options if o.short_name == short), None)
        return None


class CommandContext:
    """Parsed option values for one command.

    A single instance is created per registered command and reused by
    every invocation of that command; values are overwritten in place.
    Callers that need fresh state call reset() first.

    Args:
        command: The command whose schema scopes this context.
    """

    def __init__(self, command: Command):
        self._command = command
        self._enabled: Dict[str, bool] = {}
        self._values: Dict[str, Optional[OptionValue]] = {}
        self.reset()

    @property
    def command(self) -> Command:
        return self._command

    def reset(self) -> None:
        """Disable every option and clear its value."""
        for opt in self._command.options:
            self._enabled[opt.name] = False
            self._values[opt.name] = None

    def _check(self, name: str) -> None:
        if name not in self._enabled:
            self._command.option(name)

    def enable(self, name: str, value: Optional[OptionValue] = None) -> None:
        """Mark an option as given, storing its value if it carries one."""
        self._check(name)
        self._enabled[name] = True
        self._values[name] = value

    def option_enabled(self, name: str) -> bool:
        self._check(name)
        return self._enabled[name]

    def option_value(self, name: str, default: Any = None) -> Any:
        """Value of an enabled option, or ``default`` when it was not given."""
        self._check(name)
        if not self._enabled[name]:
            return default
        return self._values[name]

    def enabled_options(self) -> Dict[str, Optional[OptionValue]]:
        """Enabled options and their values, in schema order."""
        return {
            opt.name: self._values[opt.name]
            for opt in self._command.options
            if self._enabled[opt.name]
        }

    def __repr__(self) -> str:
        return f"CommandContext({self._command.name!r}, {self.enabled_options()!r})"
