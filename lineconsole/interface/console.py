#!/usr/bin/env python3
# lineconsole/interface/console.py
from __future__ import annotations

"""
The Console orchestrator.

Flow for a submitted line:
    editor.read_line -> Console.submit -> tokenize -> registry lookup
    -> InputParser -> command handler (awaited) -> prompt again

Only one line is processed at a time: the editor is paused while a line is
parsed and its handler runs, and resumed once the handler has settled.
"""

import asyncio
import inspect
import logging
from typing import Optional

from lineconsole.commands import CommandRegistry, ParsedInvocation
from lineconsole.config import ConsoleConfig
from lineconsole.errors import FailureReason, ParseFailure, StateError
from lineconsole.interface.cli import BaseCLI, make_cli
from lineconsole.interface.completion import Completion, CompletionResolver
from lineconsole.interface.parser import InputParser, tokenize

logger = logging.getLogger(__name__)


class Console:
    """
    An interactive console bound to a command registry and a line editor.

    The console is passed explicitly to every handler as its first argument;
    there is no global instance.
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        editor: Optional[BaseCLI] = None,
        config: Optional[ConsoleConfig] = None,
    ) -> None:
        self.config = config or ConsoleConfig()
        self.commands = registry if registry is not None else CommandRegistry()
        self.editor = editor if editor is not None else make_cli(self.config)
        self.resolver = CompletionResolver(self.commands, self.config.max_completions)
        self.started = False
        if self.config.enable_completion:
            self.editor.bind_completer(self.complete)

    # ---------------- Lifecycle ----------------

    def init(self, banner: str = "") -> None:
        """Freeze the registry, show the banner and start accepting lines."""
        if self.started:
            raise StateError("Console already initiated.")
        self.started = True
        self.commands.freeze()

        if self.config.clear_on_init:
            self.editor.clear()
        if self.config.show_banner and banner:
            self.editor.write(banner)
        self.editor.set_prompt(self.config.prompt)
        self.editor.resume()
        logger.info("Console started with %d command(s).", len(self.commands))

    def pause(self) -> None:
        self.editor.pause()
        self.editor.write()
        self.editor.write("- Terminal paused -")

    def resume(self) -> None:
        self.editor.write("- Terminal resumed -")
        self.editor.resume()

    def write(self, text: str = "") -> None:
        """Print a line through the editor (handlers use this for output)."""
        self.editor.write(text)

    # ---------------- Completion ----------------

    def complete(self, line: str) -> Completion:
        """Synchronous completion callback for the line editor."""
        return self.resolver.resolve(line)

    # ---------------- Dispatch ----------------

    async def submit(self, line: str) -> ParsedInvocation | None:
        """
        Process one submitted line.

        Returns the dispatched invocation, or None when the line was blank or
        rejected (the reason is written to the operator).
        """
        if not self.started:
            raise StateError("Console not initiated; call init() first.")

        self.editor.pause()
        try:
            return await self._dispatch(line)
        finally:
            self.editor.resume()

    async def _dispatch(self, line: str) -> ParsedInvocation | None:
        tokens = tokenize(line.strip())
        if not tokens:
            return None

        command_name, *argument_tokens = tokens
        try:
            command_obj = self.commands.find_by_name(command_name.lower(), include_aliases=True)
            if command_obj is None:
                raise ParseFailure(FailureReason.UNKNOWN_COMMAND, token=command_name)
            invocation = InputParser(command_obj).parse(argument_tokens)
        except ParseFailure as failure:
            logger.debug("Rejected %r: %s", line, failure.reason.value)
            self.write(failure.render())
            return None

        logger.debug("Dispatching '%s'", command_obj.name)
        try:
            result = command_obj.handler(self, dict(invocation.arguments), dict(invocation.flags))
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.error("Command '%s' failed", command_obj.name, exc_info=True)
            self.write(f"[error] {type(exc).__name__}: {exc}")
            if self.config.propagate_handler_errors:
                raise
        return invocation

    # ---------------- Loop ----------------

    async def run_async(self, banner: str = "") -> None:
        """Read and dispatch lines until end of input (Ctrl-D) or Ctrl-C."""
        if not self.started:
            self.init(banner)
        with self.editor:
            while True:
                try:
                    line = await self.editor.read_line()
                except (EOFError, KeyboardInterrupt):
                    break
                await self.submit(line)

    def run(self, banner: str = "") -> None:
        asyncio.run(self.run_async(banner))
