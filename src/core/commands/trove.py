# src/core/commands/trove.py
"""In-memory command store.

A Trove holds every saved HoardCommand and keeps the invariant that no two
commands share a ``(namespace, name)`` pair. Name collisions are resolved
before insertion: identical commands are ignored, differing ones either
replace the existing command or are stored under a suffixed name.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from src.core.commands.errors import InvalidEntityError, NotFoundError
from src.core.commands.models import HoardCommand
from src.version import __version__

logger = logging.getLogger(__name__)


class Collision(Enum):
    """Outcome of looking up a command's ``(namespace, name)`` in a trove."""

    NO_COLLISION = "no_collision"
    IDENTICAL_COLLISION = "identical_collision"
    DIFFERING_COLLISION = "differing_collision"


@dataclass(frozen=True)
class CollisionCheck:
    """Collision decision computed once per insertion.

    Attributes:
        kind: Which kind of collision was found.
        existing: The stored command sharing namespace and name, if any.
    """

    kind: Collision
    existing: HoardCommand | None = None


class Trove:
    """Collection of saved commands, a treasure trove.

    Attributes:
        version: Version the collection was written with, kept so older
            collections can be migrated.
        commands: Stored commands in insertion order.

    Example:
        >>> trove = Trove()
        >>> cmd = HoardCommand(name="ls", namespace="default", command="ls -la")
        >>> trove.add(cmd)
        True
        >>> trove.add(cmd)
        False
        >>> trove.namespaces()
        ['default']
    """

    def __init__(
        self,
        commands: Iterable[HoardCommand] | None = None,
        version: str = __version__,
        namespaces: Iterable[str] | None = None,
    ) -> None:
        """Initialize the Trove.

        Commands passed here are taken as-is; use ``add`` to get collision
        handling.

        Args:
            commands: Initial commands.
            version: Format version tag.
            namespaces: Namespaces used before, kept even without commands.
        """
        self.version = version
        self.commands: list[HoardCommand] = list(commands or [])
        self._namespaces: set[str] = set(namespaces or [])
        self._namespaces.update(c.namespace for c in self.commands)

    @classmethod
    def from_commands(cls, commands: Iterable[HoardCommand]) -> "Trove":
        """Create a Trove with the current version from a list of commands."""
        return cls(commands=commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[HoardCommand]:
        return iter(list(self.commands))

    def is_empty(self) -> bool:
        return not self.commands

    @property
    def namespace_index(self) -> frozenset[str]:
        """Every namespace ever used in this trove.

        Unlike ``namespaces()`` this is not pruned when the last command of a
        namespace is removed.
        """
        return frozenset(self._namespaces)

    def namespaces(self) -> list[str]:
        """Return the sorted namespaces of the stored commands."""
        return sorted({c.namespace for c in self.commands})

    def find_collision(self, command: HoardCommand) -> HoardCommand | None:
        """Return the stored command with the same namespace and name, if any."""
        for stored in self.commands:
            if stored.key == command.key:
                return stored
        return None

    def check_collision(self, command: HoardCommand) -> CollisionCheck:
        """Classify how ``command`` collides with the stored commands."""
        existing = self.find_collision(command)
        if existing is None:
            return CollisionCheck(Collision.NO_COLLISION)
        if existing == command:
            return CollisionCheck(Collision.IDENTICAL_COLLISION, existing)
        return CollisionCheck(Collision.DIFFERING_COLLISION, existing)

    def get(self, name: str, namespace: str | None = None) -> HoardCommand | None:
        """Return the first command called ``name``, optionally within a namespace."""
        for stored in self.commands:
            if stored.name == name and namespace in (None, stored.namespace):
                return stored
        return None

    def add(self, command: HoardCommand, overwrite_on_collision: bool = False) -> bool:
        """Add a command, resolving name collisions.

        Args:
            command: Command to add.
            overwrite_on_collision: Replace a differing command with the same
                namespace and name. When False the new command is stored
                under its name plus a random suffix instead.

        Returns:
            True if the trove changed, False if an identical command was
            already stored.

        Raises:
            InvalidEntityError: If the command is not valid.
        """
        if not command.is_valid():
            raise InvalidEntityError(
                f"Cannot save invalid command: {command.namespace}/{command.name}"
            )

        check = self.check_collision(command)

        if check.kind is Collision.NO_COLLISION:
            self._namespaces.add(command.namespace)
            self.commands.append(command)
            logger.debug("Added %s/%s", command.namespace, command.name)
            return True

        if check.kind is Collision.IDENTICAL_COLLISION:
            return False

        if overwrite_on_collision:
            self.commands = [c for c in self.commands if c.key != command.key]
            self.commands.append(command)
            logger.info("Replaced %s/%s", command.namespace, command.name)
            return True

        renamed = command.with_random_name_suffix()
        while self.find_collision(renamed) is not None:
            renamed = command.with_random_name_suffix()
        self.commands.append(renamed)
        logger.info(
            "Name collision for %s/%s, stored as %s",
            command.namespace,
            command.name,
            renamed.name,
        )
        return True

    def update(self, command: HoardCommand) -> None:
        """Replace the stored command sharing namespace and name with ``command``.

        Raises:
            NotFoundError: If no such command is stored.
            InvalidEntityError: If the command is not valid.
        """
        if not command.is_valid():
            raise InvalidEntityError(
                f"Cannot save invalid command: {command.namespace}/{command.name}"
            )
        for i, stored in enumerate(self.commands):
            if stored.key == command.key:
                self.commands[i] = command
                return
        raise NotFoundError("command", command.name)

    def remove(self, name: str) -> None:
        """Remove every command called ``name``.

        The namespace index is left as is.

        Raises:
            NotFoundError: If no command has that name.
        """
        if not any(c.name == name for c in self.commands):
            raise NotFoundError("command", name)
        self.commands = [c for c in self.commands if c.name != name]
        logger.info("Removed command %s", name)

    def remove_namespace(self, namespace: str) -> None:
        """Remove every command in ``namespace``.

        Raises:
            NotFoundError: If the namespace holds no commands.
        """
        if not any(c.namespace == namespace for c in self.commands):
            raise NotFoundError("namespace", namespace)
        self.commands = [c for c in self.commands if c.namespace != namespace]
        logger.info("Removed namespace %s", namespace)

    def merge(self, other: "Trove") -> bool:
        """Add every command of ``other``, overwriting on collision.

        Commands are added in the order ``other`` stores them, so a later
        command replaces an earlier one with the same namespace and name.
        Invalid commands are skipped.

        Returns:
            True if at least one command changed this trove.
        """
        changed = False
        for command in other:
            try:
                changed = self.add(command, overwrite_on_collision=True) or changed
            except InvalidEntityError as e:
                logger.warning("Skipping command during merge: %s", e)
        return changed

    def query(self, term: str) -> "Trove":
        """Return a new Trove of commands containing ``term``.

        A command matches when ``term`` is a case-sensitive substring of its
        name, namespace, tags, command or description.
        """
        matches = [
            c
            for c in self.commands
            if term in c.name
            or term in c.namespace
            or term in c.tags_as_string()
            or term in c.command
            or term in c.description
        ]
        return Trove(commands=matches, version=self.version)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "version": self.version,
            "commands": [c.to_dict() for c in self.commands],
            "namespaces": sorted(self._namespaces),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Trove":
        """Create from dictionary.

        Stored commands are merged into an empty trove, so invalid entries
        are skipped and a later entry replaces an earlier one with the same
        namespace and name.

        Args:
            data: Dictionary with ``version``, ``commands`` and optional
                ``namespaces``.

        Returns:
            Trove instance.
        """
        trove = cls(
            version=str(data.get("version", __version__)),
            namespaces=data.get("namespaces") or [],
        )
        stored = [HoardCommand.from_dict(c) for c in data.get("commands") or []]
        trove.merge(cls(commands=stored))
        if len(trove) != len(stored):
            logger.warning(
                "Dropped %d invalid or duplicate command(s) while loading",
                len(stored) - len(trove),
            )
        return trove
