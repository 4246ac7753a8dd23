#!/usr/bin/env python3
# lineconsole/interface/handler.py
from __future__ import annotations

"""
Help formatting and the optional built-in `help` command.
"""

from lineconsole.commands import Argument, Command, CommandRegistry, ValueFlag
from lineconsole.interface.parser import build_usage
from lineconsole.ui import format_table


def format_command_list(registry: CommandRegistry) -> str:
    """Render the overview table of every registered command."""
    commands = registry.list()
    if not commands:
        return "No commands loaded."

    rows = []
    for command_obj in commands:
        alias_display = ", ".join(command_obj.aliases) if command_obj.aliases else "-"
        rows.append([command_obj.name, alias_display, command_obj.description])
    return format_table(rows, headers=["Command", "Aliases", "Description"])


def format_command_help(command_obj: Command) -> str:
    """Render help for a single command: summary block, then argument and flag tables."""
    alias_text = ", ".join(command_obj.aliases) if command_obj.aliases else "(none)"
    lines = [
        f"Name:        {command_obj.name}",
        f"Aliases:     {alias_text}",
        f"Description: {command_obj.description or '(none)'}",
        f"Example:     {command_obj.example or '(none)'}",
        f"Usage:       {build_usage(command_obj)}",
    ]

    if command_obj.arguments:
        rows = [
            [argument.name, "yes" if argument.mandatory else "no", argument.description]
            for argument in command_obj.arguments
        ]
        lines.append(format_table(rows, headers=["Argument", "Mandatory", "Description"]))

    if command_obj.flags:
        rows = [
            [f"--{flag.name}", f"-{flag.short}" if flag.short else "-",
             "value" if isinstance(flag, ValueFlag) else "presence", flag.description]
            for flag in command_obj.flags
        ]
        lines.append(format_table(rows, headers=["Flag", "Short", "Kind", "Description"]))

    return "\n".join(lines)


def help_command(registry: CommandRegistry, name: str = "help") -> Command:
    """
    Build a `help [command]` Command bound to `registry`.

    Without an argument it lists every command; with one it shows that
    command's help. The registry is only read, after it was frozen.
    """

    def _help(console, arguments, flags):
        target = arguments.get("command")
        if target is None:
            console.write(format_command_list(registry))
            return
        command_obj = registry.find_by_name(target.lower(), include_aliases=True)
        if command_obj is None:
            console.write(f"No such command: {target}")
        else:
            console.write(format_command_help(command_obj))

    return Command(
        name=name,
        handler=_help,
        arguments=[
            Argument(
                "command",
                mandatory=False,
                completer=registry.names,
                description="Command to describe.",
            )
        ],
        description="List commands, or describe one command.",
        example=f"{name} {name}",
    )
