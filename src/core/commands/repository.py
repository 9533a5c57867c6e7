# src/core/commands/repository.py
"""YAML file repository for Trove persistence.

This module loads and saves a Trove as a YAML document holding the format
version, the list of commands and the set of namespaces.
"""

import logging
import os
from pathlib import Path

import yaml

from src.config import settings
from src.core.commands.errors import TroveFileError
from src.core.commands.trove import Trove

logger = logging.getLogger(__name__)


def to_yaml(trove: Trove) -> str:
    """Serialize a trove to a YAML string."""
    return yaml.safe_dump(trove.to_dict(), sort_keys=False, allow_unicode=True)


def load_from_string(text: str, source: str | None = None) -> Trove:
    """Parse a trove from a YAML string.

    An empty document gives an empty trove.

    Args:
        text: YAML document.
        source: Where the text came from, used in error messages.

    Returns:
        Parsed Trove.

    Raises:
        TroveFileError: If the text is not a valid trove document.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TroveFileError(f"The supplied trove file is invalid: {e}", source) from e

    if data is None:
        return Trove()
    if not isinstance(data, dict) or not isinstance(data.get("commands") or [], list):
        raise TroveFileError("The supplied trove file is invalid", source)

    try:
        return Trove.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise TroveFileError(f"The supplied trove file is invalid: {e}", source) from e


class TroveRepository:
    """Repository for storing and retrieving a trove from a YAML file.

    Attributes:
        path: Path to the trove file.

    Example:
        >>> repo = TroveRepository(path="~/.hoard/trove.yml")
        >>> trove = repo.load()
        >>> trove.add(command)
        True
        >>> repo.save(trove)
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the TroveRepository.

        Args:
            path: Path to the trove file; ``~`` is expanded.
        """
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Trove:
        """Load the trove file.

        Returns:
            The stored Trove, or an empty one if the file does not exist.

        Raises:
            TroveFileError: If the file cannot be parsed.
        """
        if not self.path.exists():
            logger.info("No trove file found at %s", self.path)
            return Trove()

        text = self.path.read_text(encoding="utf-8")
        try:
            trove = load_from_string(text, source=str(self.path))
        except TroveFileError:
            logger.error("Failed to parse trove file %s", self.path, exc_info=True)
            raise
        logger.debug("Loaded %d command(s) from %s", len(trove), self.path)
        return trove

    def save(self, trove: Trove) -> None:
        """Write the trove to the file, creating parent directories.

        Args:
            trove: Trove to store.
        """
        trove_dir = os.path.dirname(self.path)
        if trove_dir:
            os.makedirs(trove_dir, exist_ok=True)

        self.path.write_text(to_yaml(trove), encoding="utf-8")
        logger.debug("Saved %d command(s) to %s", len(trove), self.path)


_repository: TroveRepository | None = None


def get_repository(path: str | Path | None = None) -> TroveRepository:
    """Get the singleton TroveRepository instance.

    Args:
        path: Path to the trove file (only used on first call). Defaults to
            ``settings.trove_path``.

    Returns:
        TroveRepository singleton instance.
    """
    global _repository
    if _repository is None:
        _repository = TroveRepository(path=path or settings.trove_path)
    return _repository
