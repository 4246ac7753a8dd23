#!/usr/bin/env python3
# lineconsole/commands/__init__.py
from __future__ import annotations

"""
Package for command declaration and registration.

Provides:
- Data structures and protocols (`Command`, `Argument`, `PresenceFlag`,
  `ValueFlag`, `ParsedInvocation`, `CommandHandler`, `Completer`).
- The freezable `CommandRegistry`.

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import (
    Argument,
    Command,
    CommandHandler,
    Completer,
    Flag,
    ParsedInvocation,
    PresenceFlag,
    ValueFlag,
    no_completions,
    prefix_completer,
)
from .commands import CommandRegistry

__all__ = [
    "Argument",
    "Command",
    "CommandHandler",
    "Completer",
    "Flag",
    "ParsedInvocation",
    "PresenceFlag",
    "ValueFlag",
    "no_completions",
    "prefix_completer",
    "CommandRegistry",
]
