# src/core/commands/models.py
"""Command data model for stored shell snippets.

This module defines the HoardCommand dataclass which represents one saved
shell command together with its namespace, tags, usage metadata and flags.
Commands are immutable; the ``with_*`` builders return modified copies.
"""

import random
import string
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from src.core.commands.errors import InvalidEntityError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

NAME_SUFFIX_ALPHABET = string.ascii_letters + string.digits
NAME_SUFFIX_LENGTH = 4


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    """Attach UTC to naive timestamps, leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _parse_timestamp(value: Any) -> datetime:
    if value is None:
        return _now()
    if isinstance(value, datetime):
        return _as_aware(value)
    return _as_aware(datetime.fromisoformat(str(value)))


def _has_whitespace(value: str) -> bool:
    return any(char.isspace() for char in value)


def string_to_tags(tags: str) -> tuple[str, ...]:
    """Convert a comma separated tag string into a tuple of tags.

    Surrounding whitespace is stripped and empty entries are dropped.

    Examples:
        >>> string_to_tags("docker, k8s,,ops")
        ('docker', 'k8s', 'ops')

        >>> string_to_tags("   ")
        ()
    """
    return tuple(tag.strip() for tag in tags.split(",") if tag.strip())


@dataclass(frozen=True, eq=False)
class HoardCommand:
    """A saved shell command.

    Two commands are equal when their namespace, name, command, description
    and tags match; tag order, timestamps, usage count and flags are ignored.
    This is the notion of "same command" the trove uses to deduplicate.

    Attributes:
        name: Name the command is referenced by, unique within its namespace.
        namespace: Grouping label.
        command: The shell command template, possibly holding parameters.
        description: Free text describing the command.
        tags: Tags used for searching, in display order.
        created: When the command was created.
        modified: When the command was last modified.
        last_used: When the command was last picked.
        usage_count: Number of times the command has been picked.
        is_favorite: Favorite flag.
        is_hidden: Hidden flag.
        is_deleted: Soft-delete flag, a display concern only.

    Example:
        >>> cmd = (
        ...     HoardCommand()
        ...     .with_name("list-pods")
        ...     .with_namespace("k8s")
        ...     .with_command("kubectl get pods -n #namespace!")
        ...     .with_tags_raw("kubectl,pods")
        ... )
        >>> cmd.is_valid()
        True
    """

    name: str = ""
    namespace: str = ""
    command: str = ""
    description: str = ""
    tags: tuple[str, ...] = ()
    created: datetime = field(default_factory=_now)
    modified: datetime = field(default_factory=_now)
    last_used: datetime = field(default_factory=_now)
    usage_count: int = 0
    is_favorite: bool = False
    is_hidden: bool = False
    is_deleted: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))
        # Naive timestamps are stored as UTC so they survive serialization
        for name in ("created", "modified", "last_used"):
            object.__setattr__(self, name, _as_aware(getattr(self, name)))

    def _identity(self) -> tuple:
        return (
            self.namespace,
            self.name,
            self.command,
            self.description,
            tuple(sorted(self.tags)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HoardCommand):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    @property
    def key(self) -> tuple[str, str]:
        """The ``(namespace, name)`` pair that must be unique in a trove."""
        return (self.namespace, self.name)

    def is_valid(self) -> bool:
        """Check whether the command can be stored.

        A valid command has a non-empty name without whitespace, a non-empty
        command and namespace, a non-negative usage count, and timestamps that
        are not the Unix epoch.
        """
        return (
            bool(self.name)
            and not _has_whitespace(self.name)
            and bool(self.command)
            and bool(self.namespace)
            and self.usage_count >= 0
            and EPOCH not in (self.created, self.modified, self.last_used)
        )

    @staticmethod
    def validate_name(name: str) -> None:
        """Validate a name entered by the user.

        Raises:
            InvalidEntityError: If the name is empty or contains whitespace.
        """
        if not name:
            raise InvalidEntityError("Name can't be empty")
        if _has_whitespace(name):
            raise InvalidEntityError("Name can't contain whitespaces")

    @staticmethod
    def validate_command(command: str) -> None:
        """Validate a command string entered by the user.

        Raises:
            InvalidEntityError: If the command is empty.
        """
        if not command:
            raise InvalidEntityError("Command can't be empty")

    @staticmethod
    def validate_tags(tags: str) -> None:
        """Validate a comma separated tag string entered by the user.

        Raises:
            InvalidEntityError: If the tag string contains whitespace.
        """
        if _has_whitespace(tags):
            raise InvalidEntityError("Tags can't contain whitespaces")

    def tags_as_string(self) -> str:
        """Return the tags joined by commas, in display order."""
        return ",".join(self.tags)

    def with_name(self, name: str) -> "HoardCommand":
        return replace(self, name=name)

    def with_namespace(self, namespace: str) -> "HoardCommand":
        return replace(self, namespace=namespace)

    def with_command(self, command: str) -> "HoardCommand":
        return replace(self, command=command)

    def with_description(self, description: str) -> "HoardCommand":
        return replace(self, description=description)

    def with_tags(self, tags: Iterable[str]) -> "HoardCommand":
        return replace(self, tags=tuple(tag for tag in tags if tag))

    def with_tags_raw(self, tags: str) -> "HoardCommand":
        """Set tags from a comma separated string; blank input keeps the tags."""
        if not tags.strip():
            return self
        return replace(self, tags=string_to_tags(tags))

    def with_random_name_suffix(self) -> "HoardCommand":
        """Return a copy named ``<name>-XXXX`` with a random alphanumeric suffix."""
        suffix = "".join(random.choices(NAME_SUFFIX_ALPHABET, k=NAME_SUFFIX_LENGTH))
        return replace(self, name=f"{self.name}-{suffix}")

    def with_usage(self) -> "HoardCommand":
        """Return a copy with the usage count bumped and last_used set to now."""
        return replace(self, usage_count=self.usage_count + 1, last_used=_now())

    def with_favorite(self, is_favorite: bool = True) -> "HoardCommand":
        return replace(self, is_favorite=is_favorite)

    def with_hidden(self, is_hidden: bool = True) -> "HoardCommand":
        return replace(self, is_hidden=is_hidden)

    def with_deleted(self, is_deleted: bool = True) -> "HoardCommand":
        return replace(self, is_deleted=is_deleted)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary holding every field, timestamps as ISO-8601 strings.
        """
        return {
            "name": self.name,
            "namespace": self.namespace,
            "command": self.command,
            "description": self.description,
            "tags": list(self.tags),
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
            "last_used": self.last_used.isoformat(),
            "usage_count": self.usage_count,
            "is_favorite": self.is_favorite,
            "is_hidden": self.is_hidden,
            "is_deleted": self.is_deleted,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HoardCommand":
        """Create from dictionary.

        Missing timestamps default to now, missing flags to False.

        Args:
            data: Dictionary with command data.

        Returns:
            HoardCommand instance.
        """
        tags = data.get("tags") or ()
        if isinstance(tags, str):
            tags = string_to_tags(tags)
        return cls(
            name=str(data.get("name", "")),
            namespace=str(data.get("namespace", "")),
            command=str(data.get("command", "")),
            description=str(data.get("description") or ""),
            tags=tuple(str(tag) for tag in tags),
            created=_parse_timestamp(data.get("created")),
            modified=_parse_timestamp(data.get("modified")),
            last_used=_parse_timestamp(data.get("last_used")),
            usage_count=int(data.get("usage_count", 0)),
            is_favorite=bool(data.get("is_favorite", False)),
            is_hidden=bool(data.get("is_hidden", False)),
            is_deleted=bool(data.get("is_deleted", False)),
        )
