#!/usr/bin/env python3
# lineconsole/__main__.py
from __future__ import annotations

"""
Demo console: `python -m lineconsole`.
"""

from lineconsole.commands import Argument, Command, PresenceFlag, ValueFlag, prefix_completer
from lineconsole.config import load_config
from lineconsole.interface import Console, help_command
from lineconsole.ui import colorize, init_logger

MOVIES = ("TPM", "AOTC", "ROTS", "ANH", "TESB", "ROTJ", "Solo", "RogueOne")


def _test(console, arguments, flags):
    console.write(f"arguments: {arguments}")
    console.write(f"flags:     {flags}")


def _exit(console, arguments, flags):
    raise SystemExit(0)


def build_console() -> Console:
    config = load_config()
    init_logger("lineconsole", config.log_level, config.log_file_path)

    console = Console(config=config)
    console.commands.add(
        Command(
            "test",
            _test,
            arguments=[
                Argument("Movie", completer=prefix_completer(MOVIES), description="A film."),
            ],
            flags=[
                PresenceFlag("test1", short="t"),
                ValueFlag("hello", short="s", description="Greeting to echo."),
            ],
            aliases=["t"],
            description="Echo the parsed arguments and flags.",
            example='test ROTS -t --hello "there"',
        )
    ).add(
        Command("exit", _exit, aliases=["quit"], description="Leave the console.")
    ).add(help_command(console.commands))
    return console


def main() -> None:
    console = build_console()
    console.run(colorize(" Command-Line Interface ", "bg_blue", "white") + "\n")


if __name__ == "__main__":
    main()
