from __future__ import annotations

import pytest

from lineconsole.commands import (
    Argument,
    Command,
    CommandRegistry,
    PresenceFlag,
    ValueFlag,
    prefix_completer,
)
from lineconsole.config import ConsoleConfig
from lineconsole.interface import BaseCLI, Console

MOVIES = ("TPM", "AOTC", "ROTS", "ANH", "TESB", "ROTJ", "Solo", "RogueOne")


class FakeEditor(BaseCLI):
    """In-memory line editor: scripted input, captured output."""

    def __init__(self, lines=()) -> None:
        super().__init__(prompt="> ")
        self.lines = list(lines)
        self.output: list[str] = []
        self.cleared = 0
        self.pause_calls = 0
        self.resume_calls = 0
        self.setup_calls = 0
        self.teardown_calls = 0

    async def read_line(self) -> str:
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def write(self, text: str = "") -> None:
        self.output.append(text)

    def clear(self) -> None:
        self.cleared += 1

    def pause(self) -> None:
        super().pause()
        self.pause_calls += 1

    def resume(self) -> None:
        super().resume()
        self.resume_calls += 1

    def setup(self) -> None:
        self.setup_calls += 1

    def teardown(self) -> None:
        self.teardown_calls += 1


def noop(console, arguments, flags):
    return None


def make_movie_command(handler=noop, name: str = "test", aliases=("t",)) -> Command:
    return Command(
        name,
        handler,
        arguments=[Argument("Movie", completer=prefix_completer(MOVIES))],
        flags=[
            PresenceFlag("test1", short="t"),
            ValueFlag("salut", short="s"),
        ],
        aliases=aliases,
    )


@pytest.fixture
def editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture
def movie_command() -> Command:
    return make_movie_command()


@pytest.fixture
def registry(movie_command) -> CommandRegistry:
    return CommandRegistry().add(movie_command)


@pytest.fixture
def console(registry, editor) -> Console:
    return Console(registry=registry, editor=editor, config=ConsoleConfig(prompt="cli > "))
