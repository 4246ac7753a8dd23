#!/usr/bin/env python3
# lineconsole/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

This module offers token-aware suggestions for:
- First token: all registered command names and aliases.
- Subsequent tokens: values for the Nth positional argument of the typed
  command, via that argument's completer. Flags are never completed.
"""

import re
from typing import NamedTuple, Sequence

from lineconsole.commands import Command, CommandRegistry, ValueFlag

# Upper bound on candidates returned by an argument completer
MAX_COMPLETIONS = 100

_WHITESPACE_RE = re.compile(r"\s+")


class Completion(NamedTuple):
    """Candidates for a partial line and the trailing text they would replace."""
    candidates: tuple[str, ...]
    replaced: str


def _split_segments(raw_input: str) -> list[str]:
    """
    Split on whitespace, keeping an empty last segment when the line ends with
    whitespace (the operator is starting a new token).
    """
    return _WHITESPACE_RE.split(raw_input.lstrip())


def _positional_index(command_obj: Command, previous: Sequence[str]) -> int | None:
    """
    Count positional tokens among the completed segments.

    Flags are skipped and a value flag swallows the following segment, the same
    way the parser classifies them. Returns None when the segment being typed
    is itself the value of a value flag.
    """
    index = 0
    awaiting_value = False
    for token in previous:
        if awaiting_value:
            awaiting_value = False
            continue
        if token.startswith("--") and "=" not in token:
            flag = command_obj.get_flag(token[2:], include_shorts=False)
            awaiting_value = isinstance(flag, ValueFlag)
        elif token.startswith("-") and len(token) > 1:
            continue
        else:
            index += 1
    return None if awaiting_value else index


class CompletionResolver:
    """Resolve completion candidates for a partial line against a registry."""

    def __init__(self, registry: CommandRegistry, max_completions: int = MAX_COMPLETIONS) -> None:
        self.registry = registry
        self.max_completions = max_completions

    def resolve(self, line: str) -> Completion:
        """
        Produce suggestions for the line being edited (cursor at end of line).

        Strategy:
          1) No whitespace yet: command names/aliases matching the typed prefix
             (case-insensitive), replacing the whole line.
          2) Otherwise resolve the command; unknown command, a partial flag, or
             a position past the last declared argument yields nothing.
          3) Else ask the argument's completer, capped at `max_completions`,
             replacing only the partial token.
        """
        segments = _split_segments(line)
        if len(segments) <= 1:
            return Completion(tuple(self.registry.names(segments[0])), line)

        command_name, *argument_tokens = segments
        current_token = argument_tokens[-1]
        command_obj = self.registry.find_by_name(command_name.lower(), include_aliases=True)
        if command_obj is None or current_token.startswith("-"):
            return Completion((), line)

        position = _positional_index(command_obj, argument_tokens[:-1])
        if position is None or position >= command_obj.max_argument_count:
            return Completion((), line)

        completer = command_obj.arguments[position].completer
        candidates = tuple(completer(current_token))[: self.max_completions]
        return Completion(candidates, current_token)


def suggest(registry: CommandRegistry, text_before_cursor: str) -> list[str]:
    """Convenience wrapper returning only the candidate list."""
    return list(CompletionResolver(registry).resolve(text_before_cursor).candidates)
