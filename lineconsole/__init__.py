#!/usr/bin/env python3
# lineconsole/__init__.py
from __future__ import annotations
"""
Embeddable interactive line console.

Declare commands (positional arguments + presence/value flags), add them to a
registry, and let the Console tokenize, validate and dispatch operator input,
with positional tab completion.
"""

import logging

from lineconsole.commands import (
    Argument,
    Command,
    CommandRegistry,
    Flag,
    ParsedInvocation,
    PresenceFlag,
    ValueFlag,
    prefix_completer,
)
from lineconsole.config import ConsoleConfig, load_config
from lineconsole.errors import (
    ConsoleError,
    FailureReason,
    ParseFailure,
    RegistryError,
    StateError,
    ValidationError,
)
from lineconsole.interface import Completion, Console, help_command, load_commands, tokenize

__version__ = "0.1.0"

# Library logging stays silent until the host calls ui.init_logger
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Argument",
    "Command",
    "CommandRegistry",
    "Flag",
    "ParsedInvocation",
    "PresenceFlag",
    "ValueFlag",
    "prefix_completer",
    "ConsoleConfig",
    "load_config",
    "ConsoleError",
    "FailureReason",
    "ParseFailure",
    "RegistryError",
    "StateError",
    "ValidationError",
    "Completion",
    "Console",
    "help_command",
    "load_commands",
    "tokenize",
]
