# src/core/commands/prompts.py
"""Prompt builder for parameter input.

This module provides the text shown to a user when a picked command still
holds parameters, and a console value source built on top of it.
"""

from collections.abc import Callable

from src.core.commands.parameters import ParameterSite, ValueSource

_ORDINALS = (
    "first",
    "second",
    "third",
    "fourth",
    "fifth",
    "sixth",
    "seventh",
    "eighth",
)


def ordinal(index: int) -> str:
    """Translate a 0-based index to its ordinal word.

    Examples:
        >>> ordinal(0)
        'first'
        >>> ordinal(8)
        'nth'
    """
    if 0 <= index < len(_ORDINALS):
        return _ORDINALS[index]
    return "nth"


def build_parameter_prompt(template: str, site: ParameterSite, start_token: str) -> str:
    """Build the prompt asking for the value of one parameter.

    Named parameters are referred to by their name, anonymous ones by their
    position.

    Args:
        template: Current, partially resolved command template.
        site: Parameter to ask for.
        start_token: Token that marks parameters.

    Returns:
        Prompt text ending with the current template.

    Example:
        >>> site = ParameterSite(index=0, start=3, end=7, text="#src", name="src")
        >>> print(build_parameter_prompt("cp #src #dst", site, "#"))
        Enter the first parameter(#) 'src'
        ~> cp #src #dst
    """
    label = f"Enter the {ordinal(site.index)} parameter({start_token})"
    if site.name:
        label = f"{label} '{site.name}'"
    return f"{label}\n~> {template}"


def console_value_source(
    start_token: str, read: Callable[[str], str] = input
) -> ValueSource:
    """Build a value source that asks for every value on the console.

    Args:
        start_token: Token that marks parameters, shown in the prompt.
        read: Function showing a prompt and returning the typed line.

    Returns:
        ValueSource prompting once per parameter.
    """

    def source(template: str, site: ParameterSite) -> str:
        return read(build_parameter_prompt(template, site, start_token) + "\n")

    return source
