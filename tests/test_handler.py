from __future__ import annotations

import pytest

from lineconsole.commands import CommandRegistry
from lineconsole.config import ConsoleConfig
from lineconsole.interface import Console, format_command_help, format_command_list, help_command
from tests.conftest import FakeEditor, make_movie_command


def test_format_command_list(registry):
    text = format_command_list(registry)
    assert "Command" in text and "Aliases" in text
    assert "| test " in text


def test_format_command_list_empty():
    assert format_command_list(CommandRegistry()) == "No commands loaded."


def test_format_command_help(movie_command):
    text = format_command_help(movie_command)
    assert "Name:        test" in text
    assert "Aliases:     t" in text
    assert "Usage:       test <Movie> [--test1|-t] [--salut|-s <value>]" in text
    assert "--salut" in text and "value" in text and "presence" in text


def test_help_argument_completes_command_names():
    registry = CommandRegistry().add(make_movie_command())
    registry.add(help_command(registry))
    console = Console(registry=registry, editor=FakeEditor(), config=ConsoleConfig())
    assert console.complete("help t").candidates == ("test", "t")


@pytest.mark.asyncio
async def test_help_command_output():
    registry = CommandRegistry().add(make_movie_command())
    registry.add(help_command(registry))
    editor = FakeEditor()
    console = Console(registry=registry, editor=editor, config=ConsoleConfig())
    console.init()

    await console.submit("help")
    assert "| help " in editor.output[-1]

    await console.submit("help T")
    assert editor.output[-1].startswith("Name:        test")

    await console.submit("help nothing")
    assert editor.output[-1] == "No such command: nothing"
