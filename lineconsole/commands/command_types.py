#!/usr/bin/env python3
# lineconsole/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- CommandHandler / Completer: callable protocols supplied by the embedder.
- Argument: one positional slot of a command grammar.
- PresenceFlag / ValueFlag: the two flag shapes (tagged variant `Flag`).
- Command: an immutable, self-validating grammar bound to a handler.
- ParsedInvocation: the per-line result of parsing against a Command.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol, Sequence, Union

from lineconsole.errors import ValidationError

# Identifier patterns shared by commands, aliases, arguments and flags
NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-_]{0,31}$")
FLAG_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9-_]{0,31}$")
FLAG_SHORT_PATTERN = re.compile(r"^[a-zA-Z]$")


class CommandHandler(Protocol):
    """Protocol for a command implementation (sync or async)."""

    def __call__(
        self,
        console: Any,
        arguments: dict[str, str],
        flags: dict[str, str | None],
    ) -> Any:  # pragma: no cover - signature only
        ...


Completer = Callable[[str], Sequence[str]]


def no_completions(prefix: str) -> list[str]:
    """Default completer: never suggests anything."""
    return []


def prefix_completer(choices: Sequence[str]) -> Completer:
    """
    Build a completer offering `choices` that start with the typed prefix.

    Matching is case-insensitive; the original spelling of each choice is kept.
    """
    frozen = tuple(choices)

    def _complete(prefix: str) -> list[str]:
        lowered = prefix.lower()
        return [choice for choice in frozen if choice.lower().startswith(lowered)]

    return _complete


@dataclass(frozen=True, slots=True)
class Argument:
    """
    A positional argument slot.

    Attributes:
        name: Key under which the supplied value is passed to the handler.
        mandatory: Whether the slot must be filled.
        completer: Pure function mapping a partial token to candidates.
        description: Short, user-facing description.
    """
    name: str
    mandatory: bool = True
    completer: Completer = field(default=no_completions, repr=False, compare=False)
    description: str = ""


@dataclass(frozen=True, slots=True)
class PresenceFlag:
    """A flag whose appearance alone is the signal."""
    name: str
    short: str | None = None
    description: str = ""

    @property
    def is_value_flag(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class ValueFlag:
    """A flag that must be followed by one value token (or carry `=value`)."""
    name: str
    short: str | None = None
    description: str = ""

    @property
    def is_value_flag(self) -> bool:
        return True


Flag = Union[PresenceFlag, ValueFlag]


@dataclass(frozen=True, slots=True)
class Command:
    """
    A named grammar (arguments + flags) bound to a handler.

    Construction validates the whole declaration and raises ValidationError on:
        - a name or alias that does not match NAME_PATTERN
        - an alias repeated, or equal to the command name
        - a mandatory argument declared after an optional one
        - a malformed or repeated argument name
        - a malformed flag name/short, or a name/short already declared

    Sequences are stored as tuples; the instance is immutable afterwards.
    """

    name: str
    handler: CommandHandler = field(repr=False, compare=False)
    arguments: Sequence[Argument] = ()
    flags: Sequence[Flag] = ()
    aliases: Sequence[str] = ()
    description: str = ""
    example: str = ""

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "arguments", tuple(self.arguments or ()))
        object.__setattr__(self, "flags", tuple(self.flags or ()))
        object.__setattr__(self, "aliases", tuple(self.aliases or ()))

        if not isinstance(self.name, str) or not NAME_PATTERN.match(self.name):
            raise ValidationError(
                f"Command name '{self.name}' does not match {NAME_PATTERN.pattern}.")
        if not callable(self.handler):
            raise ValidationError("Command handler must be callable.", self.name)

        self._validate_aliases()
        self._validate_arguments()
        self._validate_flags()

    # ---------------- Validation ----------------

    def _validate_aliases(self) -> None:
        seen: set[str] = {self.name}
        for alias in self.aliases:
            if not isinstance(alias, str) or not NAME_PATTERN.match(alias):
                raise ValidationError(
                    f"Command alias '{alias}' does not match {NAME_PATTERN.pattern}.", self.name)
            if alias in seen:
                raise ValidationError(
                    f"Command alias '{alias}' is declared twice.", self.name)
            seen.add(alias)

    def _validate_arguments(self) -> None:
        seen: set[str] = set()
        optional_seen = False
        for index, argument in enumerate(self.arguments):
            if not isinstance(argument, Argument):
                raise ValidationError(
                    f"Argument #{index} is not an Argument.", self.name)
            if not FLAG_NAME_PATTERN.match(argument.name):
                raise ValidationError(
                    f"Argument name '{argument.name}' does not match {FLAG_NAME_PATTERN.pattern}.",
                    self.name)
            if argument.name in seen:
                raise ValidationError(
                    f"Argument '{argument.name}' is declared twice.", self.name)
            if optional_seen and argument.mandatory:
                raise ValidationError(
                    f"Argument #{index} cannot be mandatory as there are optional arguments before.",
                    self.name)
            if not callable(argument.completer):
                raise ValidationError(
                    f"Argument '{argument.name}' completer must be callable.", self.name)
            optional_seen = optional_seen or not argument.mandatory
            seen.add(argument.name)

    def _validate_flags(self) -> None:
        # names and shorts share one namespace
        seen: set[str] = set()
        for flag in self.flags:
            if not isinstance(flag, (PresenceFlag, ValueFlag)):
                raise ValidationError(
                    f"Flag {flag!r} is neither a PresenceFlag nor a ValueFlag.", self.name)
            if not FLAG_NAME_PATTERN.match(flag.name):
                raise ValidationError(
                    f"Flag name '{flag.name}' does not match {FLAG_NAME_PATTERN.pattern}.", self.name)
            if flag.short is not None and not FLAG_SHORT_PATTERN.match(flag.short):
                raise ValidationError(
                    f"Flag short '{flag.short}' of '{flag.name}' does not match "
                    f"{FLAG_SHORT_PATTERN.pattern}.", self.name)
            if flag.name in seen or (flag.short is not None and flag.short in seen):
                raise ValidationError(
                    f"Flag '{flag.name}' is declared twice.", self.name)
            seen.add(flag.name)
            if flag.short is not None:
                seen.add(flag.short)

    # ---------------- Queries ----------------

    @property
    def names(self) -> tuple[str, ...]:
        """Primary name followed by aliases, in declaration order."""
        return (self.name, *self.aliases)

    def has_alias(self, alias: str) -> bool:
        return alias in self.aliases

    def argument_count(self) -> tuple[int, int]:
        """Return (min, max): mandatory argument count and total argument count."""
        mandatory = sum(1 for argument in self.arguments if argument.mandatory)
        return mandatory, len(self.arguments)

    @property
    def min_argument_count(self) -> int:
        return self.argument_count()[0]

    @property
    def max_argument_count(self) -> int:
        return self.argument_count()[1]

    def get_flag(self, token: str, include_shorts: bool = False) -> Flag | None:
        """
        Return the flag named `token`, or None.

        With `include_shorts`, a single-character token also matches a flag's
        short form.
        """
        for flag in self.flags:
            if flag.name == token:
                return flag
            if include_shorts and flag.short is not None and flag.short == token:
                return flag
        return None


@dataclass(frozen=True, slots=True)
class ParsedInvocation:
    """
    Result of parsing one submitted line against a Command.

    Attributes:
        command: The resolved command (referenced, not owned).
        arguments: Argument name -> literal value, in declaration order.
        flags: Canonical flag name -> value (None for presence flags).
    """
    command: Command
    arguments: Mapping[str, str] = field(default_factory=dict)
    flags: Mapping[str, str | None] = field(default_factory=dict)
