#!/usr/bin/env python3
# lineconsole/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console interface and command dispatch.

Provides:
- Tokenizer and input parser (dispatch state machine).
- Positional completion resolver.
- Help formatting and the optional `help` command.
- Dynamic command loader for plugin packages.
- Line-editor frontends (prompt_toolkit / readline / plain).
- The Console orchestrator.
"""


# Completion FIRST (cli depends on it)
from .completion import Completion, CompletionResolver, MAX_COMPLETIONS, suggest

# Parser utilities
from .parser import InputParser, tokenize, parse_tokens, build_usage, strip_quotes

# Help
from .handler import format_command_help, format_command_list, help_command

# Loader
from .loader import load_commands

# CLI frontends (after completion is available)
from .cli import BaseCLI, PromptToolkitCLI, ReadlineCLI, make_cli

# Orchestrator last
from .console import Console

__all__ = [
    # completion
    "Completion",
    "CompletionResolver",
    "MAX_COMPLETIONS",
    "suggest",
    # parser
    "InputParser",
    "tokenize",
    "parse_tokens",
    "build_usage",
    "strip_quotes",
    # help
    "format_command_help",
    "format_command_list",
    "help_command",
    # loader
    "load_commands",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    # console
    "Console",
]
