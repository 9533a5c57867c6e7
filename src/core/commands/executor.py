# src/core/commands/executor.py
"""Command executor for picking stored commands.

This module provides the CommandExecutor class which handles command
lookup, parameter resolution and usage tracking.
"""

import logging

from src.core.commands.errors import NotFoundError
from src.core.commands.models import HoardCommand
from src.core.commands.parameters import ValueSource, resolve_command
from src.core.commands.trove import Trove

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Executor for picking commands out of a trove.

    The CommandExecutor looks up a command, fills in its parameters through
    a value source and records the usage on the stored command. It never
    runs the resulting shell command; that is left to the calling shell.

    Attributes:
        trove: Trove the commands are picked from.
        start_token: Token that marks parameters.
        end_token: Token that closes named parameters, empty for none.

    Example:
        >>> from src.core.commands.parameters import values_from
        >>> executor = CommandExecutor(trove, start_token="#", end_token="!")
        >>> cmd = executor.pick("copy", values_from(["a.txt", "b.txt"]))
        >>> print(cmd.command)
        cp a.txt b.txt
    """

    def __init__(self, trove: Trove, start_token: str = "#", end_token: str = "") -> None:
        """Initialize the CommandExecutor.

        Args:
            trove: Trove the commands are picked from.
            start_token: Token that marks parameters.
            end_token: Token that closes named parameters, empty for none.
        """
        self.trove = trove
        self.start_token = start_token
        self.end_token = end_token

    def pick(
        self,
        name: str,
        value_source: ValueSource,
        namespace: str | None = None,
    ) -> HoardCommand:
        """Pick a command by name and resolve its parameters.

        The stored command keeps its template; only its usage count and
        last-used timestamp are updated.

        Args:
            name: Name of the command to pick.
            value_source: Supplies one value per parameter.
            namespace: Namespace to look in, any namespace if None.

        Returns:
            Copy of the command with every parameter filled in.

        Raises:
            NotFoundError: If no command matches.
            InvalidTokenError: If the start token is empty.
        """
        command = self.trove.get(name, namespace)
        if command is None:
            raise NotFoundError("command", name)

        used = command.with_usage()
        resolved = resolve_command(used, self.start_token, self.end_token, value_source)

        self.trove.update(used)
        logger.info(
            "Picked command %s",
            name,
            extra={"command_name": name, "namespace": command.namespace},
        )
        return resolved
