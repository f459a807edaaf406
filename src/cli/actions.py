"""Invocation metadata handed to command middleware."""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cyclopts import Argument

_CLI_SOURCE = "cli"
_NON_FLAG_KINDS = frozenset(
    {
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.VAR_POSITIONAL,
        inspect.Parameter.VAR_KEYWORD,
    }
)


@dataclass(frozen=True)
class Flag:
    """A declared command flag and whether the caller set it explicitly."""

    name: str
    changed: bool = False


@dataclass(frozen=True)
class FlagSet:
    """Flags declared by a command, in declaration order."""

    flags: tuple[Flag, ...] = ()

    def visit_all(self) -> Iterator[Flag]:
        """Yield every declared flag, set or not."""
        yield from self.flags

    def changed_names(self) -> list[str]:
        """Return names of flags the caller set explicitly.

        Returns
        -------
        list[str]
            Flag names in visitation order.
        """
        return [flag.name for flag in self.visit_all() if flag.changed]


def flag_set_from_arguments(arguments: Iterable[Argument]) -> FlagSet:
    """Build a flag set from a parsed cyclopts argument collection.

    A flag is named by its first declared name. It counts as changed when
    any of its command-line tokens was matched by keyword. Aliases and
    ``--no-`` negatives are attributed to the flag that declares them.

    Parameters
    ----------
    arguments
        Arguments bound while parsing the command.

    Returns
    -------
    FlagSet
        Keyword-capable flags in declaration order.
    """
    flags: list[Flag] = []
    for argument in arguments:
        if argument.children or not argument.parse:
            continue
        if argument.field_info.kind in _NON_FLAG_KINDS or not argument.parameter.name:
            continue
        changed = any(
            token.source == _CLI_SOURCE and token.keyword is not None for token in argument.tokens
        )
        flags.append(Flag(argument.name.lstrip("-"), changed=changed))
    return FlagSet(tuple(flags))


def positional_values(arguments: Iterable[Argument]) -> tuple[str, ...]:
    """Return command-line values that were bound by position.

    Returns
    -------
    tuple[str, ...]
        Token values in parse order.
    """
    return tuple(
        token.value
        for argument in arguments
        for token in argument.tokens
        if token.source == _CLI_SOURCE and token.keyword is None
    )


@dataclass(frozen=True)
class CommandOptions:
    """Metadata describing one command invocation.

    Parameters
    ----------
    command_path
        Space separated path of registered command names, e.g.
        ``"cmdtrace telemetry show"``. Never built from argument values.
    flags
        Declared flags with explicit-set markers, when known.
    args
        Positional argument values. Only their count is ever reported.
    is_child_action
        True when this invocation runs inside another command.
    """

    command_path: str
    flags: FlagSet | None = None
    args: tuple[object, ...] = field(default_factory=tuple)
    is_child_action: bool = False


__all__ = [
    "CommandOptions",
    "Flag",
    "FlagSet",
    "flag_set_from_arguments",
    "positional_values",
]
