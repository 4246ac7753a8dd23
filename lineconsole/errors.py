#!/usr/bin/env python3
# lineconsole/errors.py
from __future__ import annotations

"""
Error taxonomy for the console engine.

Setup-time errors (raised while the registry is being built):
- ValidationError: malformed command, alias, argument or flag declaration.
- RegistryError: duplicate name/alias, or mutation after freeze.

Runtime errors:
- ParseFailure: one submitted line could not be parsed. Reported to the
  operator as a single line; never fatal to the console.
- StateError: lifecycle misuse such as initialising the console twice.
"""

from enum import Enum


class ConsoleError(Exception):
    """Base class of every error raised by lineconsole."""


class ValidationError(ConsoleError, ValueError):
    """A command declaration does not satisfy its shape rules."""

    def __init__(self, message: str, command_name: str | None = None) -> None:
        self.message = message
        self.command_name = command_name
        if command_name:
            message = f"{message} (command '{command_name}')"
        super().__init__(message)


class RegistryError(ConsoleError, ValueError):
    """Collision on add, or add/remove after the registry was frozen."""


class StateError(ConsoleError, RuntimeError):
    """Console lifecycle used out of order."""


class FailureReason(Enum):
    """Why a submitted line was rejected. Values are the operator-facing text."""

    UNKNOWN_COMMAND = "unknown command"
    UNKNOWN_FLAG = "unknown flag"
    MISSING_VALUE = "missing value for flag"
    WRONG_ARGUMENT_COUNT = "wrong argument count"


class ParseFailure(ConsoleError):
    """
    Terminal FAIL state of the input parser.

    Attributes:
        reason: FailureReason classifying the failure.
        token: The offending token (command name or flag), if any.
        expected: (min, max) argument range for WRONG_ARGUMENT_COUNT.
        actual: Number of positional arguments supplied.
        usage: Usage line of the resolved command, if any.
    """

    def __init__(
        self,
        reason: FailureReason,
        *,
        token: str | None = None,
        expected: tuple[int, int] | None = None,
        actual: int | None = None,
        usage: str | None = None,
    ) -> None:
        self.reason = reason
        self.token = token
        self.expected = expected
        self.actual = actual
        self.usage = usage
        super().__init__(self.render())

    def render(self) -> str:
        """Render the failure as one human-readable line."""
        if self.reason is FailureReason.UNKNOWN_COMMAND:
            text = f"Command '{self.token}' does not exist."
        elif self.reason is FailureReason.UNKNOWN_FLAG:
            text = f"Unknown flag '{self.token}'."
        elif self.reason is FailureReason.MISSING_VALUE:
            text = f"Missing value for flag '{self.token}'."
        else:
            low, high = self.expected or (0, 0)
            wanted = str(low) if low == high else f"{low}-{high}"
            text = f"Expected {wanted} argument(s), {self.actual} given."
        if self.usage:
            text = f"{text} Usage: {self.usage}"
        return text


__all__ = [
    "ConsoleError",
    "ValidationError",
    "RegistryError",
    "StateError",
    "FailureReason",
    "ParseFailure",
]
