#!/usr/bin/env python3
# lineconsole/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends (the line-editing facility).

Selection order:
    1) prompt_toolkit (live completion + history)
    2) readline / pyreadline3 (tab completion + history)
    3) plain input (last resort)

Every frontend offers the same primitives to the Console: read_line, write,
set_prompt, pause, resume, clear and bind_completer. History files are owned
here; the console core never persists anything.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from lineconsole.config import ConsoleConfig
from lineconsole.interface.completion import Completion
from lineconsole.ui import clear_screen, print_line

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[str], Completion]


class BaseCLI:
    """
    Plain `input()` frontend and base interface for richer ones.

    Subclasses may override:
        - setup() / teardown()
        - read_line()

    This base also provides context manager support to guarantee teardown.
    """

    def __init__(self, *, prompt: str = "> ", history_file: Optional[Path] = None, file=None) -> None:
        self.prompt_text = prompt
        self.history_file = history_file
        self.paused = False
        self._file = file
        self._complete: CompletionCallback | None = None

    def setup(self) -> None:
        ...

    def teardown(self) -> None:
        ...

    def bind_completer(self, callback: CompletionCallback) -> None:
        """Register the synchronous completion callback."""
        self._complete = callback

    def set_prompt(self, text: str) -> None:
        self.prompt_text = text

    async def read_line(self) -> str:
        """Prompt and wait for one submitted line. Raises EOFError on end of input."""
        return await asyncio.to_thread(input, self.prompt_text)

    def write(self, text: str = "") -> None:
        print_line(text, file=self._file or sys.stdout)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def clear(self) -> None:
        clear_screen(self._file)

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(self, *, complete_while_typing: bool = True, **kwargs) -> None:
        super().__init__(**kwargs)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer, Completion as PTCompletion
        from prompt_toolkit.history import FileHistory, InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        frontend = self

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                if frontend._complete is None:
                    return
                candidates, replaced = frontend._complete(document.text_before_cursor)
                # replace exactly the text the resolver reported
                for word in candidates:
                    yield PTCompletion(word, start_position=-len(replaced))

        # Key bindings to refresh completion when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.selection_state:
                b.cut_selection()
            else:
                b.delete_before_cursor(1)
            b.start_completion(select_first=False)

        if self.history_file is not None:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            history = FileHistory(str(self.history_file))
        else:
            history = InMemoryHistory()

        self._session = PromptSession(
            history=history,
            completer=_Completer(),
            complete_while_typing=complete_while_typing,
            key_bindings=kb,
        )

    async def read_line(self) -> str:
        from prompt_toolkit.formatted_text import ANSI

        # prompt_toolkit flushes history automatically
        return await self._session.prompt_async(ANSI(self.prompt_text))


# ===== Fallback: readline / pyreadline3 =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with tab completion and history."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self._matches: list[str] = []

    def setup(self) -> None:
        if self.history_file is not None:
            try:
                self.readline.read_history_file(str(self.history_file))
            except OSError:
                logger.debug("No readable history at %s", self.history_file)

        # Whitespace only, so '-', '=' and quotes stay inside the current token
        self.readline.set_completer_delims(" \t\n")
        self.readline.set_completer(self._readline_complete)
        self.readline.parse_and_bind("tab: complete")

    def _readline_complete(self, text_fragment: str, state_index: int) -> Optional[str]:
        if self._complete is None:
            return None
        if state_index == 0:
            buffer_text = self.readline.get_line_buffer()[: self.readline.get_endidx()]
            self._matches = list(self._complete(buffer_text).candidates)
        return self._matches[state_index] if state_index < len(self._matches) else None

    def teardown(self) -> None:
        if self.history_file is None:
            return
        try:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            self.readline.write_history_file(str(self.history_file))
        except OSError as exc:
            logger.warning("Could not write history to %s: %s", self.history_file, exc)


def make_cli(config: ConsoleConfig | None = None) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.
    """
    config = config or ConsoleConfig()
    options = {"prompt": config.prompt, "history_file": config.history_file_path}

    if sys.stdin.isatty():
        try:
            return PromptToolkitCLI(complete_while_typing=config.enable_completion, **options)
        except ImportError:
            logger.debug("prompt_toolkit unavailable; trying readline")
        try:
            return ReadlineCLI(**options)
        except ImportError:
            logger.debug("readline unavailable; using plain input")
    # Last resort: plain input with no completion or history
    return BaseCLI(**options)
