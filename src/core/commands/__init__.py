"""Command module for saving, storing and picking shell commands.

This module provides:
- HoardCommand: Data model for a saved shell command
- Trove: In-memory command store with collision handling and merging
- TroveRepository: YAML file repository for trove persistence
- Parameter engine: is_parameterized, count_parameters, split,
  split_inclusive, substitute_one, resolve_interactive
- CommandExecutor: Picks commands and fills in their parameters
- Operations: new_command, list_commands, show_command, pick_command,
  remove_command, remove_namespace, import_trove, export_trove
"""

from src.core.commands.errors import (
    HoardError,
    InvalidEntityError,
    InvalidTokenError,
    MissingValueError,
    NotFoundError,
    TroveFileError,
)
from src.core.commands.executor import CommandExecutor
from src.core.commands.models import HoardCommand, string_to_tags
from src.core.commands.parameters import (
    ParameterSite,
    ValueSource,
    count_parameters,
    find_parameter,
    is_parameterized,
    iter_parameters,
    resolve_command,
    resolve_interactive,
    split,
    split_inclusive,
    substitute_one,
    values_from,
)
from src.core.commands.prompts import build_parameter_prompt, console_value_source
from src.core.commands.repository import TroveRepository, get_repository
from src.core.commands.tools import (
    export_trove,
    import_trove,
    list_commands,
    new_command,
    pick_command,
    remove_command,
    remove_namespace,
    setup_logging,
    show_command,
)
from src.core.commands.trove import Collision, CollisionCheck, Trove

__all__ = [
    "HoardError",
    "InvalidEntityError",
    "InvalidTokenError",
    "MissingValueError",
    "NotFoundError",
    "TroveFileError",
    "HoardCommand",
    "string_to_tags",
    "Trove",
    "Collision",
    "CollisionCheck",
    "TroveRepository",
    "get_repository",
    "ParameterSite",
    "ValueSource",
    "is_parameterized",
    "count_parameters",
    "split",
    "split_inclusive",
    "find_parameter",
    "iter_parameters",
    "substitute_one",
    "resolve_interactive",
    "resolve_command",
    "values_from",
    "build_parameter_prompt",
    "console_value_source",
    "CommandExecutor",
    "new_command",
    "list_commands",
    "show_command",
    "pick_command",
    "remove_command",
    "remove_namespace",
    "import_trove",
    "export_trove",
    "setup_logging",
]
