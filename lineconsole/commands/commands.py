#!/usr/bin/env python3
# lineconsole/commands/commands.py
from __future__ import annotations

"""
Command registry and decorator utilities.

This module provides:
- CommandRegistry: ordered collection of commands, unique by name and alias,
  mutable until frozen and read-only afterwards.
- CommandRegistry.command: decorator that builds and adds a Command.
"""

import logging
from typing import Any, Callable, Iterator, Optional, Sequence

from lineconsole.commands.command_types import Argument, Command, Flag
from lineconsole.errors import RegistryError

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Holds all command definitions and provides lookup utilities.

    Lifecycle: commands are added/removed during setup; `freeze()` seals the
    registry once (the console does it on init) and every later mutation
    raises RegistryError.
    """

    def __init__(self) -> None:
        self._commands: list[Command] = []
        self._frozen = False

    # ---------------- Lifecycle ----------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Seal the registry. Idempotent; never reopened."""
        if not self._frozen:
            logger.debug("Registry frozen with %d command(s).", len(self._commands))
        self._frozen = True

    def _ensure_mutable(self, action: str) -> None:
        if self._frozen:
            raise RegistryError(f"Cannot {action} commands while the registry is frozen.")

    # ---------------- Registration ----------------

    def _name_exists(self, name: str) -> bool:
        return any(name in command_obj.names for command_obj in self._commands)

    def add(self, command_obj: Command) -> "CommandRegistry":
        """Add a command, rejecting any name/alias collision. Returns self for chaining."""
        self._ensure_mutable("add")
        if not isinstance(command_obj, Command):
            raise TypeError(f"Expected Command, got {type(command_obj).__name__}.")
        for name in command_obj.names:
            if self._name_exists(name):
                raise RegistryError(
                    f"Command '{name}' already exists (while adding '{command_obj.name}').")
        self._commands.append(command_obj)
        return self

    def remove(self, predicate: Callable[[Command, int], bool]) -> "CommandRegistry":
        """Remove every command for which `predicate(command, index)` is true."""
        self._ensure_mutable("remove")
        self._commands = [
            command_obj for index, command_obj in enumerate(self._commands)
            if not predicate(command_obj, index)
        ]
        return self

    def remove_by_name(self, name: str) -> "CommandRegistry":
        return self.remove(lambda command_obj, _index: command_obj.name == name)

    def command(
        self,
        *,
        name: str | None = None,
        arguments: Sequence[Argument] = (),
        flags: Sequence[Flag] = (),
        aliases: Sequence[str] = (),
        description: str | None = None,
        example: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator to register a function as a command.

        - Function name is transformed from snake_case to kebab-case for `name` if not provided.
        - The docstring becomes the description if none is given.
        """

        def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
            command_obj = Command(
                name=name or func.__name__.replace("_", "-"),
                handler=func,
                arguments=arguments,
                flags=flags,
                aliases=aliases,
                description=(description or (func.__doc__ or "")).strip(),
                example=example or "",
            )
            self.add(command_obj)
            return func

        return wrapper

    # ---------------- Lookup ----------------

    def find(self, predicate: Callable[[Command, int], bool]) -> Optional[Command]:
        """Return the first command matching `predicate(command, index)`, or None."""
        for index, command_obj in enumerate(self._commands):
            if predicate(command_obj, index):
                return command_obj
        return None

    def find_by_name(self, name: str, include_aliases: bool = False) -> Optional[Command]:
        """Return the command named `name` (or aliased, if requested), or None."""
        return self.find(
            lambda command_obj, _index: command_obj.name == name
            or (include_aliases and command_obj.has_alias(name))
        )

    resolve = find_by_name

    def list(self) -> list[Command]:
        """Snapshot of all commands in registration order."""
        return list(self._commands)

    def names(self, prefix: str | None = None) -> list[str]:
        """
        Return every name and alias in registration order.

        With `prefix`, keep only entries starting with it (case-insensitive).
        """
        every = [name for command_obj in self._commands for name in command_obj.names]
        if not prefix:
            return every
        lowered = prefix.lower()
        return [name for name in every if name.lower().startswith(lowered)]

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._name_exists(name)
