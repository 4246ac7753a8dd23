#!/usr/bin/env python3
# lineconsole/interface/parser.py
from __future__ import annotations

"""
Input parsing for submitted lines.

Responsibilities:
- Tokenize a raw line honoring quoted spans and `-f=value` / `--flag=value`.
- Classify tokens against a Command grammar (flags, flag values, positionals).
- Check positional arity and build a ParsedInvocation.
- Render compact usage strings from a Command declaration.

The classifier is a single left-to-right pass with two states:
    EXPECT_TOKEN        no value is pending
    AWAIT_VALUE(flag)   a value flag was named and needs the next token
Terminal states are a returned ParsedInvocation (OK) or ParseFailure (FAIL).
"""

import logging
import re
from typing import Sequence

from lineconsole.commands import Command, Flag, ParsedInvocation, ValueFlag
from lineconsole.errors import FailureReason, ParseFailure

logger = logging.getLogger(__name__)

# Alternatives are tried in priority order at each position.
_TOKEN_RE = re.compile(
    r"""(?P<inline>(?:--[A-Za-z][A-Za-z0-9_-]*|-[A-Za-z])=)(?P<value>"[^"]*"|'[^']*'|\S*)"""
    r'''|"(?P<double>[^"]*)"'''
    r"""|'(?P<single>[^']*)'"""
    r"""|(?P<bare>\S+)"""
)


def strip_quotes(text: str) -> str:
    """Remove one matching pair of surrounding single or double quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


def tokenize(line: str) -> list[str]:
    """
    Split a raw line into tokens.

    Rules, in priority order:
        1) `-f=value` / `--flag=value` is one token; quotes around value are stripped.
        2) "double quoted" span -> inner text.
        3) 'single quoted' span -> inner text.
        4) any other run of non-whitespace.
    Never fails: an unterminated quote is just part of a rule-4 run.
    """
    tokens: list[str] = []
    for match in _TOKEN_RE.finditer(line):
        if match.group("inline") is not None:
            tokens.append(match.group("inline") + strip_quotes(match.group("value")))
        elif match.group("double") is not None:
            tokens.append(match.group("double"))
        elif match.group("single") is not None:
            tokens.append(match.group("single"))
        else:
            tokens.append(match.group("bare"))
    return tokens


def _is_flag_token(token: str) -> bool:
    # a lone "-" is an ordinary value
    return token.startswith("-") and len(token) > 1


class InputParser:
    """
    Dispatch state machine for one resolved Command.

    `classify()` walks the tokens and returns (positionals, flags) without the
    arity check; `parse()` adds the arity check and builds the invocation.
    Tokens are expected as `tokenize()` returns them: quotes are already gone,
    so values are recorded exactly as given.
    """

    def __init__(self, command_obj: Command) -> None:
        self.command = command_obj

    def _lookup(self, name: str, include_shorts: bool) -> Flag:
        flag = self.command.get_flag(name, include_shorts)
        if flag is None:
            raise ParseFailure(FailureReason.UNKNOWN_FLAG, token=name)
        return flag

    def classify(self, tokens: Sequence[str]) -> tuple[list[str], dict[str, str | None]]:
        positionals: list[str] = []
        flags: dict[str, str | None] = {}
        pending: ValueFlag | None = None

        for token in tokens:
            if pending is not None:
                # AWAIT_VALUE: the next non-flag token is the value
                if _is_flag_token(token):
                    raise ParseFailure(FailureReason.MISSING_VALUE, token=pending.name)
                flags[pending.name] = token
                pending = None
                continue

            if token.startswith("--"):
                name, sep, value = token[2:].partition("=")
                flag = self._lookup(name, include_shorts=False)
                if sep:
                    flags[flag.name] = value
                elif isinstance(flag, ValueFlag):
                    pending = flag
                else:
                    flags[flag.name] = None
            elif _is_flag_token(token) and "=" in token:
                # inline assignment overrides the declared flag kind
                name, _, value = token[1:].partition("=")
                flag = self._lookup(name, include_shorts=True)
                flags[flag.name] = value
            elif _is_flag_token(token):
                for char in token[1:]:
                    flag = self._lookup(char, include_shorts=True)
                    if isinstance(flag, ValueFlag):
                        raise ParseFailure(FailureReason.MISSING_VALUE, token=flag.name)
                    flags[flag.name] = None
            else:
                positionals.append(token)

        if pending is not None:
            raise ParseFailure(FailureReason.MISSING_VALUE, token=pending.name)
        return positionals, flags

    def parse(self, tokens: Sequence[str]) -> ParsedInvocation:
        """Classify `tokens`, check arity and return the invocation (or raise ParseFailure)."""
        positionals, flags = self.classify(tokens)
        low, high = self.command.argument_count()
        if not low <= len(positionals) <= high:
            raise ParseFailure(
                FailureReason.WRONG_ARGUMENT_COUNT,
                token=self.command.name,
                expected=(low, high),
                actual=len(positionals),
                usage=build_usage(self.command),
            )
        arguments = {
            argument.name: value
            for argument, value in zip(self.command.arguments, positionals)
        }
        logger.debug("Parsed %s: arguments=%r flags=%r", self.command.name, arguments, flags)
        return ParsedInvocation(command=self.command, arguments=arguments, flags=flags)


def parse_tokens(command_obj: Command, tokens: Sequence[str]) -> ParsedInvocation:
    """Shorthand for `InputParser(command_obj).parse(tokens)`."""
    return InputParser(command_obj).parse(tokens)


def build_usage(command_obj: Command) -> str:
    """
    Render a compact usage string for a command.

    Examples:
        'test <Movie> [--test1|-t] [--hello|-s <value>]'
    """
    usage_parts: list[str] = []
    for argument in command_obj.arguments:
        usage_parts.append(f"<{argument.name}>" if argument.mandatory else f"[{argument.name}]")
    for flag in command_obj.flags:
        spelled = f"--{flag.name}" + (f"|-{flag.short}" if flag.short else "")
        if isinstance(flag, ValueFlag):
            spelled += " <value>"
        usage_parts.append(f"[{spelled}]")
    return f"{command_obj.name} " + " ".join(usage_parts) if usage_parts else command_obj.name
