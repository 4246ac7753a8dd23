from __future__ import annotations

import pytest

from lineconsole.commands import Command, CommandRegistry
from lineconsole.errors import RegistryError
from tests.conftest import make_movie_command, noop


def test_add_returns_registry_for_chaining():
    registry = CommandRegistry()
    assert registry.add(Command("one", noop)).add(Command("two", noop)) is registry
    assert [c.name for c in registry.list()] == ["one", "two"]


def test_duplicate_name_fails():
    registry = CommandRegistry().add(Command("one", noop))
    with pytest.raises(RegistryError, match="already exists"):
        registry.add(Command("one", noop))


def test_name_equal_to_existing_alias_fails():
    registry = CommandRegistry().add(make_movie_command())
    with pytest.raises(RegistryError):
        registry.add(Command("t", noop))


def test_alias_equal_to_existing_name_fails():
    registry = CommandRegistry().add(Command("list", noop))
    with pytest.raises(RegistryError):
        registry.add(Command("show", noop, aliases=["list"]))


def test_failed_add_leaves_registry_unchanged():
    registry = CommandRegistry().add(Command("list", noop))
    with pytest.raises(RegistryError):
        registry.add(Command("show", noop, aliases=["ls", "list"]))
    assert registry.names() == ["list"]


def test_add_rejects_non_commands():
    with pytest.raises(TypeError):
        CommandRegistry().add("test")


def test_remove_and_remove_by_name():
    registry = CommandRegistry()
    for name in ("a", "b", "c"):
        registry.add(Command(name, noop))
    registry.remove(lambda command_obj, index: index == 0)
    assert [c.name for c in registry.list()] == ["b", "c"]
    registry.remove_by_name("c")
    assert [c.name for c in registry.list()] == ["b"]


def test_find_by_name_with_and_without_aliases():
    registry = CommandRegistry().add(make_movie_command())
    assert registry.find_by_name("test").name == "test"
    assert registry.find_by_name("t") is None
    assert registry.find_by_name("t", include_aliases=True).name == "test"
    assert registry.resolve("nope", True) is None


def test_find_with_predicate():
    registry = CommandRegistry().add(Command("a", noop)).add(Command("b", noop, description="second"))
    assert registry.find(lambda command_obj, _i: command_obj.description == "second").name == "b"
    assert registry.find(lambda command_obj, _i: False) is None


def test_list_is_a_snapshot():
    registry = CommandRegistry().add(Command("a", noop))
    snapshot = registry.list()
    registry.add(Command("b", noop))
    assert len(snapshot) == 1
    assert len(registry) == 2


def test_names_keep_registration_order_and_filter_case_insensitively():
    registry = CommandRegistry()
    registry.add(Command("status", noop, aliases=["st"])).add(Command("stop", noop)).add(Command("run", noop))
    assert registry.names() == ["status", "st", "stop", "run"]
    assert registry.names("ST") == ["status", "st", "stop"]
    assert "st" in registry
    assert "nope" not in registry


def test_freeze_blocks_mutation():
    registry = CommandRegistry().add(Command("a", noop))
    registry.freeze()
    assert registry.frozen
    with pytest.raises(RegistryError):
        registry.add(Command("b", noop))
    with pytest.raises(RegistryError):
        registry.remove(lambda command_obj, index: False)
    with pytest.raises(RegistryError):
        registry.remove_by_name("missing")


def test_freeze_is_idempotent():
    registry = CommandRegistry().add(Command("a", noop))
    registry.freeze()
    registry.freeze()
    assert registry.frozen
    assert [c.name for c in registry] == ["a"]
    with pytest.raises(RegistryError):
        registry.add(Command("b", noop))


def test_command_decorator_registers_function():
    registry = CommandRegistry()

    @registry.command(aliases=["ls"])
    def list_items(console, arguments, flags):
        """List the items."""

    command_obj = registry.find_by_name("list-items")
    assert command_obj.handler is list_items
    assert command_obj.description == "List the items."
    assert command_obj.aliases == ("ls",)


def test_command_decorator_respects_freeze():
    registry = CommandRegistry()
    registry.freeze()
    with pytest.raises(RegistryError):
        @registry.command()
        def late(console, arguments, flags):
            pass
