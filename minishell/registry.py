"""Command registry for the shell.

Stores registered commands in parallel slots indexed by a stable
ShellCommandId: the command definition, its description, its reusable
CommandContext, its declared dependencies, and its execute binding.
All slots for a command are created together by add() and are never
removed.

Key classes:
    ShellCommandId: Opaque handle for a registered command.
    CommandRegistry: Name -> id mapping plus the per-command slots.


Constants:
    INVALID_COMMAND_ID: Sentinel returned when a command does not exist.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from .command import Command, CommandContext
from .exceptions import InvalidCommandIdError
from .logging_config import get_logger

logger = get_logger("minishell.registry")

T = TypeVar("T")

ExecuteFunction = Callable[[T, CommandContext], None]


@dataclass(frozen=True)
class ShellCommandId:
    """Stable handle for a registered command.

    Wraps the command's index in the registry slots. Compare ids with
    ``==``; the index is only meaningful to the registry that issued it.
    """

    index: int

    def __index__(self) -> int:
        return self.index

    @property
    def is_invalid(self) -> bool:
        return self.index < 0

    def __repr__(self) -> str:
        if self.is_invalid:
            return "ShellCommandId(INVALID)"
        return f"ShellCommandId({self.index})"


INVALID_COMMAND_ID = ShellCommandId(-1)


class CommandRegistry(Generic[T]):
    """Registered commands and their per-command state.

    Registration happens once at host start-up; afterwards the slots
    are only read, except for each command's CommandContext, which the
    dispatcher overwrites on every invocation.
    """

    def __init__(self):
        self._ids: List[ShellCommandId] = []
        self._commands: List[Command] = []
        self._descriptions: List[str] = []
        self._contexts: List[CommandContext] = []
        self._dependencies: List[Tuple[ShellCommandId, ...]] = []
        self._execute_functions: List[Optional[ExecuteFunction]] = []
        self._name2id: Dict[str, ShellCommandId] = {}

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[ShellCommandId]:
        return iter(self.ids())

    def ids(self) -> Tuple[ShellCommandId, ...]:
        """All registered ids, in registration order."""
        return tuple(self._ids)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, command: Command, description: str = "") -> ShellCommandId:
        """Register a command.

        Args:
            command: Command definition. A deep copy is stored.
            description: Human-readable summary shown by help/usage.

        Returns:
            The new command's id, or INVALID_COMMAND_ID (with nothing
            stored) when a command with the same name already exists.
        """
        if command.name in self._name2id:
            logger.warning("command_name_conflict", command=command.name)
            return INVALID_COMMAND_ID

        stored = command.model_copy(deep=True)
        cmd_id = ShellCommandId(len(self._ids))
        self._ids.append(cmd_id)
        self._commands.append(stored)
        self._descriptions.append(description)
        self._contexts.append(CommandContext(stored))
        self._dependencies.append(())
        self._execute_functions.append(None)
        self._name2id[stored.name] = cmd_id

        logger.debug("command_registered", command=stored.name, command_id=cmd_id.index)
        return cmd_id

    def bind_execute(self, cmd_id: ShellCommandId, func: ExecuteFunction) -> None:
        """Bind the callback run when the command is dispatched."""
        self._require_valid(cmd_id)
        self._execute_functions[cmd_id.index] = func

    def set_dependencies(
        self, cmd_id: ShellCommandId, dependencies: Sequence[ShellCommandId]
    ) -> None:
        """Declare the commands that should run before ``cmd_id``.

        The list is stored verbatim and replaces any earlier declaration.
        It is metadata only: the dispatcher never checks it.

        Raises:
            InvalidCommandIdError: If ``cmd_id`` or any dependency is not
                registered. Nothing is stored in that case.
        """
        self._require_valid(cmd_id)
        for dep in dependencies:
            if not self.is_valid(dep):
                raise InvalidCommandIdError(
                    "Dependency refers to an unregistered command",
                    command_id=getattr(dep, "index", None),
                    dependent=self._commands[cmd_id.index].name,
                )
        self._dependencies[cmd_id.index] = tuple(dependencies)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> ShellCommandId:
        """Exact-match lookup by name; INVALID_COMMAND_ID when missing."""
        return self._name2id.get(name, INVALID_COMMAND_ID)

    def is_valid(self, cmd_id: ShellCommandId) -> bool:
        if not isinstance(cmd_id, ShellCommandId):
            return False
        return 0 <= cmd_id.index < len(self._ids) and self._ids[cmd_id.index] == cmd_id

    def _require_valid(self, cmd_id: ShellCommandId) -> None:
        if not self.is_valid(cmd_id):
            raise InvalidCommandIdError(
                "Invalid command id",
                command_id=getattr(cmd_id, "index", None),
                registered=len(self._ids),
            )

    def command(self, cmd_id: ShellCommandId) -> Command:
        self._require_valid(cmd_id)
        return self._commands[cmd_id.index]

    def description(self, cmd_id: ShellCommandId) -> str:
        self._require_valid(cmd_id)
        return self._descriptions[cmd_id.index]

    def context(self, cmd_id: ShellCommandId) -> CommandContext:
        self._require_valid(cmd_id)
        return self._contexts[cmd_id.index]

    def dependencies(self, cmd_id: ShellCommandId) -> Tuple[ShellCommandId, ...]:
        self._require_valid(cmd_id)
        return self._dependencies[cmd_id.index]

    def execute_function(self, cmd_id: ShellCommandId) -> Optional[ExecuteFunction]:
        """The bound callback, or None when the command has none yet."""
        self._require_valid(cmd_id)
        return self._execute_functions[cmd_id.index]

    @property
    def command_names(self) -> frozenset:
        """All registered command names."""
        return frozenset(self._name2id.keys())
