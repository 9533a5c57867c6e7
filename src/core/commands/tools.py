# src/core/commands/tools.py
"""Command management operations for a CLI host.

This module provides trove operations as simple functions. Every function
loads the trove from the configured repository, applies one change, saves
it when something changed and returns a message for the user. Errors are
reported in the returned message instead of being raised.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from src.config import settings
from src.core.commands.errors import HoardError, InvalidEntityError
from src.core.commands.executor import CommandExecutor
from src.core.commands.models import HoardCommand
from src.core.commands.parameters import ValueSource
from src.core.commands.prompts import console_value_source
from src.core.commands.repository import TroveRepository, get_repository, to_yaml
from src.utils.logging import configure_structured_logging, set_operation

LIST_FORMATS = ("text", "json", "yaml")


def _truncate(text: str, limit: int) -> str:
    return f"{text[:limit]}{'...' if len(text) > limit else ''}"


def setup_logging() -> None:
    """Install JSON logging at ``settings.log_level``.

    Call once from the CLI host before running any operation.
    """
    configure_structured_logging(settings.log_level.upper())


def new_command(
    name: str,
    command: str,
    namespace: str | None = None,
    description: str = "",
    tags: str = "",
) -> str:
    """Save a new command.

    Args:
        name: Command name, without whitespace.
        command: The shell command. Mark parameters with the parameter token.
        namespace: Namespace to save in (default: settings.default_namespace).
        description: What the command does.
        tags: Comma separated tags (e.g., 'docker,cleanup').

    Returns:
        Success message with command details or error message.
    """
    set_operation("new")
    namespace = namespace or settings.default_namespace

    try:
        HoardCommand.validate_name(name)
        HoardCommand.validate_command(command)
        HoardCommand.validate_tags(tags)
    except InvalidEntityError as e:
        return f"Error: {e}"

    repo = get_repository()
    try:
        trove = repo.load()
    except HoardError as e:
        return f"Error: {e}"

    cmd = (
        HoardCommand(name=name, namespace=namespace, command=command)
        .with_description(description)
        .with_tags_raw(tags)
    )

    # Check if command already exists
    if trove.find_collision(cmd) is not None:
        return f"Error: Command '{name}' already exists in namespace '{namespace}'."

    trove.add(cmd)
    repo.save(trove)

    return (
        f"Command '{cmd.name}' saved in namespace '{cmd.namespace}'!\n"
        f"- Command: {_truncate(cmd.command, 100)}\n"
        f"- Tags: {cmd.tags_as_string() or 'none'}"
    )


def list_commands(query: str = "", fmt: str = "text") -> str:
    """List saved commands, optionally filtered by a search term.

    Args:
        query: Case-sensitive term matched against name, namespace, tags,
            command and description. Empty lists everything.
        fmt: Output format, one of "text", "json" or "yaml". The json and
            yaml formats print the matching trove document.

    Returns:
        Formatted list of commands or message if none match.
    """
    set_operation("list")
    if fmt not in LIST_FORMATS:
        return f"Error: Unknown format '{fmt}'. Use one of: {', '.join(LIST_FORMATS)}."

    try:
        trove = get_repository().load()
    except HoardError as e:
        return f"Error: {e}"

    if query:
        trove = trove.query(query)

    if fmt == "json":
        return json.dumps(trove.to_dict(), indent=2, ensure_ascii=False)
    if fmt == "yaml":
        return to_yaml(trove)

    if trove.is_empty():
        if query:
            return f"No commands matching '{query}'."
        return "No commands found. Use new_command to add one."

    lines = [f"Found {len(trove)} command(s):", "=" * 40]
    for namespace in trove.namespaces():
        lines.append(f"\n[{namespace}]")
        for cmd in trove:
            if cmd.namespace != namespace:
                continue
            lines.append(f"  {cmd.name}: {_truncate(cmd.command, 50)}")
            if cmd.description:
                lines.append(f"    {_truncate(cmd.description, 50)}")
            if cmd.tags:
                lines.append(f"    Tags: {cmd.tags_as_string()}")

    return "\n".join(lines)


def show_command(name: str, namespace: str | None = None) -> str:
    """Get detailed information about a specific command.

    Args:
        name: Command name to look up.
        namespace: Namespace to look in, any namespace if None.

    Returns:
        Command details or error message if not found.
    """
    set_operation("show")
    try:
        trove = get_repository().load()
    except HoardError as e:
        return f"Error: {e}"

    cmd = trove.get(name, namespace)
    if cmd is None:
        return f"Error: Command '{name}' not found."

    return (
        f"Command: {cmd.namespace}/{cmd.name}\n"
        f"{'=' * 40}\n"
        f"Command: {cmd.command}\n"
        f"Description: {cmd.description}\n"
        f"Tags: {cmd.tags_as_string() or 'none'}\n"
        f"Used: {cmd.usage_count} time(s)\n"
        f"Created at: {cmd.created.isoformat()}\n"
        f"Modified at: {cmd.modified.isoformat()}\n"
        f"Last used at: {cmd.last_used.isoformat()}"
    )


def pick_command(
    name: str,
    value_source: ValueSource | None = None,
    namespace: str | None = None,
) -> str:
    """Pick a command and fill in its parameters.

    Args:
        name: Command name to pick.
        value_source: Supplies parameter values (default: console prompt).
        namespace: Namespace to look in, any namespace if None.

    Returns:
        The resolved command string, or an error message.
    """
    set_operation("pick")
    start_token, end_token = settings.tokens
    if value_source is None:
        value_source = console_value_source(start_token)

    repo = get_repository()
    try:
        trove = repo.load()
        executor = CommandExecutor(trove, start_token=start_token, end_token=end_token)
        resolved = executor.pick(name, value_source, namespace)
    except HoardError as e:
        return f"Error: {e}"
    except (EOFError, KeyboardInterrupt):
        return "Error: Input aborted, nothing picked."

    repo.save(trove)
    return resolved.command


def remove_command(name: str) -> str:
    """Delete every command with the given name.

    Args:
        name: Command name to delete.

    Returns:
        Success message or error message if not found.
    """
    set_operation("remove")
    repo = get_repository()
    try:
        trove = repo.load()
        trove.remove(name)
    except HoardError as e:
        return f"Error: {e}"

    repo.save(trove)
    return f"Command '{name}' deleted successfully."


def remove_namespace(namespace: str) -> str:
    """Delete every command in a namespace.

    Args:
        namespace: Namespace to empty.

    Returns:
        Success message or error message if the namespace holds no commands.
    """
    set_operation("remove_namespace")
    repo = get_repository()
    try:
        trove = repo.load()
        removed = sum(1 for c in trove if c.namespace == namespace)
        trove.remove_namespace(namespace)
    except HoardError as e:
        return f"Error: {e}"

    repo.save(trove)
    return f"Namespace '{namespace}' emptied, {removed} command(s) deleted."


def import_trove(path: str | Path) -> str:
    """Merge the commands of another trove file into the local trove.

    Incoming commands replace local commands with the same namespace and name.

    Args:
        path: Path to the trove file to import.

    Returns:
        Summary message or error message.
    """
    set_operation("import")
    source = TroveRepository(path)
    if not source.exists():
        return f"Error: No trove file found at {source.path}."

    repo = get_repository()
    try:
        incoming = source.load()
        trove = repo.load()
    except HoardError as e:
        return f"Error: {e}"

    before = {c.key: c for c in trove}
    trove.merge(incoming)
    imported = sum(1 for c in trove if before.get(c.key) != c)
    if not imported:
        return "Nothing to import, all commands are already present."

    repo.save(trove)
    return f"Imported {imported} command(s) from {source.path}."


def export_trove(path: str | Path) -> str:
    """Write the local trove to another file.

    Args:
        path: Destination path.

    Returns:
        Summary message or error message.
    """
    set_operation("export")
    try:
        trove = get_repository().load()
    except HoardError as e:
        return f"Error: {e}"

    target = TroveRepository(path)
    target.save(trove)
    return f"Exported {len(trove)} command(s) to {target.path}."


def get_command_tools() -> list[Callable[..., Any]]:
    """Get all command management operations as a list.

    Returns:
        List of functions for trove operations.
    """
    return [
        new_command,
        list_commands,
        show_command,
        pick_command,
        remove_command,
        remove_namespace,
        import_trove,
        export_trove,
    ]
