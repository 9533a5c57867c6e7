# src/core/commands/parameters.py
"""Parameter templating engine for command strings.

A command template marks the parts that are filled in at pick time with a
start token (``#`` by default). Two placeholder forms exist:

- Anonymous: the start token plus the word glued to it, up to the next
  whitespace, e.g. ``cp # #`` or ``cp #src #dst``.
- Named: start token, any run of characters and the end token, e.g.
  ``mv #from! #to!`` or ``grep #search term! .``.

A start token without an end token before the end of the string (or before
the next start token) is anonymous. Configuring the end token equal to the
start token, or leaving it empty, disables named placeholders entirely.

Substitution always resolves exactly one placeholder per call so that a host
prompting for values asks once per blank, left to right.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol

from src.core.commands.errors import InvalidTokenError, MissingValueError
from src.core.commands.models import HoardCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSite:
    """One placeholder occurrence inside a template.

    Attributes:
        index: Position of the placeholder among those resolved so far (0-based).
        start: Offset of the start token in the template.
        end: Offset just past the placeholder (past the end token if named).
        text: The placeholder text as it appears in the template.
        name: Text following the start token, without the end token.
        is_named: Whether the placeholder is closed by the end token.
    """

    index: int
    start: int
    end: int
    text: str
    name: str = ""
    is_named: bool = False


class ValueSource(Protocol):
    """Supplies one value per placeholder.

    Hosts implement this with a terminal prompt, a fixed list of values or a
    test fixture. The engine itself performs no I/O.
    """

    def __call__(self, template: str, site: ParameterSite) -> str:
        """Return the value for ``site`` in the current ``template``."""
        ...


def _require_token(token: str) -> None:
    if not token:
        raise InvalidTokenError("Parameter token can't be empty")


def _ending_token(start_token: str, end_token: str | None) -> str:
    if not end_token or end_token == start_token:
        return ""
    return end_token


def is_parameterized(template: str, start_token: str) -> bool:
    """Check if the template contains the start token at least once.

    Raises:
        InvalidTokenError: If ``start_token`` is empty.
    """
    _require_token(start_token)
    return start_token in template


def count_parameters(template: str, start_token: str) -> int:
    """Count non-overlapping occurrences of the start token.

    Examples:
        >>> count_parameters("cp #src #dst", "#")
        2
        >>> count_parameters("echo ####", "##")
        2
    """
    _require_token(start_token)
    return template.count(start_token)


def split(template: str, delimiter: str) -> list[str]:
    """Split the template on every delimiter, keeping empty segments.

    Examples:
        >>> split("#a#", "#")
        ['', 'a', '']
    """
    _require_token(delimiter)
    return template.split(delimiter)


def split_inclusive(template: str, delimiter: str) -> list[str]:
    """Split the template but keep a copy of the delimiter between segments.

    Joining the result gives back the template.

    Examples:
        >>> split_inclusive("test1 test2 test3", " ")
        ['test1', ' ', 'test2', ' ', 'test3']
    """
    collected: list[str] = []
    for i, segment in enumerate(split(template, delimiter)):
        if i:
            collected.append(delimiter)
        collected.append(segment)
    return collected


def find_parameter(
    template: str,
    start_token: str,
    end_token: str = "",
    offset: int = 0,
    index: int = 0,
) -> ParameterSite | None:
    """Locate the first placeholder at or after ``offset``.

    Args:
        template: Command template to scan.
        start_token: Token opening a placeholder.
        end_token: Token closing a named placeholder, empty for none.
        offset: Position to start scanning from.
        index: Index reported on the returned site.

    Returns:
        The placeholder found, or None if no start token remains.

    Raises:
        InvalidTokenError: If ``start_token`` is empty.
    """
    _require_token(start_token)
    start = template.find(start_token, offset)
    if start == -1:
        return None

    body_start = start + len(start_token)
    next_start = template.find(start_token, body_start)
    end_token = _ending_token(start_token, end_token)
    if end_token:
        close = template.find(end_token, body_start)
        if close != -1 and (next_start == -1 or close < next_start):
            end = close + len(end_token)
            return ParameterSite(
                index=index,
                start=start,
                end=end,
                text=template[start:end],
                name=template[body_start:close],
                is_named=True,
            )

    # Anonymous: the word glued to the token, stopping at whitespace or the next token
    limit = len(template) if next_start == -1 else next_start
    end = body_start
    while end < limit and not template[end].isspace():
        end += 1
    return ParameterSite(
        index=index,
        start=start,
        end=end,
        text=template[start:end],
        name=template[body_start:end],
    )


def iter_parameters(
    template: str, start_token: str, end_token: str = ""
) -> Iterator[ParameterSite]:
    """Yield every placeholder of the template, left to right."""
    offset = 0
    index = 0
    while True:
        site = find_parameter(template, start_token, end_token, offset, index)
        if site is None:
            return
        yield site
        offset = site.end
        index += 1


def substitute_one(
    template: str, start_token: str, end_token: str, value: str
) -> str:
    """Replace the first placeholder of the template with ``value``.

    Every other placeholder is left untouched, including named placeholders
    that share the same name.

    Examples:
        >>> substitute_one("cp #src #dst", "#", "", "a.txt")
        'cp a.txt #dst'
        >>> substitute_one("mv #from! #to!", "#", "!", "x")
        'mv x #to!'
    """
    site = find_parameter(template, start_token, end_token)
    if site is None:
        return template
    return template[: site.start] + value + template[site.end :]


def resolve_interactive(
    template: str,
    start_token: str,
    end_token: str,
    value_source: ValueSource,
) -> str:
    """Resolve every placeholder by asking ``value_source`` once per site.

    Scanning resumes right after each inserted value, so a value that itself
    contains the start token is kept as typed and never prompted for again.

    Args:
        template: Command template to resolve.
        start_token: Token opening a placeholder.
        end_token: Token closing a named placeholder, empty for none.
        value_source: Called once per placeholder, left to right.

    Returns:
        The command string with every placeholder of ``template`` filled
        in. It still contains the start token when a supplied value does,
        so ``count_parameters`` on the result is not necessarily zero.

    Raises:
        InvalidTokenError: If ``start_token`` is empty.
        MissingValueError: If ``value_source`` runs out of values.
    """
    resolved = template
    offset = 0
    index = 0
    while True:
        site = find_parameter(resolved, start_token, end_token, offset, index)
        if site is None:
            break
        value = value_source(resolved, site)
        resolved = resolved[: site.start] + value + resolved[site.end :]
        offset = site.start + len(value)
        index += 1

    logger.debug("Resolved %d parameter(s)", index)
    return resolved


def resolve_command(
    command: HoardCommand,
    start_token: str,
    end_token: str,
    value_source: ValueSource,
) -> HoardCommand:
    """Return a copy of ``command`` with all placeholders resolved."""
    resolved = resolve_interactive(
        command.command, start_token, end_token, value_source
    )
    return command.with_command(resolved)


def values_from(values: Iterable[str]) -> ValueSource:
    """Build a value source that hands out ``values`` in order.

    Raises:
        MissingValueError: When called after the values are used up.
    """
    remaining = iter(values)

    def source(template: str, site: ParameterSite) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise MissingValueError(
                f"No value left for parameter {site.index + 1} in: {template}"
            ) from None

    return source
