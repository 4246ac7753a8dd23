from __future__ import annotations

from lineconsole.commands import Argument, Command, CommandRegistry, ValueFlag, prefix_completer
from lineconsole.interface.completion import Completion, CompletionResolver, suggest
from tests.conftest import make_movie_command, noop


def _resolver(*commands, **kwargs) -> CompletionResolver:
    registry = CommandRegistry()
    for command_obj in commands:
        registry.add(command_obj)
    return CompletionResolver(registry, **kwargs)


def test_empty_line_lists_every_name_and_alias():
    resolver = _resolver(make_movie_command(), Command("stop", noop))
    assert resolver.resolve("") == Completion(("test", "t", "stop"), "")


def test_command_prefix_is_case_insensitive_and_replaces_line():
    resolver = _resolver(make_movie_command(), Command("stop", noop), Command("status", noop))
    candidates, replaced = resolver.resolve("ST")
    assert candidates == ("stop", "status")
    assert replaced == "ST"


def test_argument_completion_uses_completer_prefix():
    resolver = _resolver(make_movie_command(name="moviecmd", aliases=()))
    candidates, replaced = resolver.resolve("moviecmd ro")
    assert set(candidates) == {"ROTS", "ROTJ", "RogueOne"}
    assert "TPM" not in candidates
    assert replaced == "ro"


def test_alias_and_uppercase_command_resolve():
    resolver = _resolver(make_movie_command())
    assert resolver.resolve("T so").candidates == ("Solo",)


def test_empty_partial_token_lists_all_values():
    resolver = _resolver(make_movie_command())
    completion = resolver.resolve("test ")
    assert len(completion.candidates) == 8
    assert completion.replaced == ""


def test_unknown_command_has_no_candidates():
    assert _resolver(make_movie_command()).resolve("nope ro").candidates == ()


def test_flags_are_not_completed():
    assert _resolver(make_movie_command()).resolve("test -").candidates == ()
    assert _resolver(make_movie_command()).resolve("test --te").candidates == ()


def test_position_past_last_argument_has_no_candidates():
    assert _resolver(make_movie_command()).resolve("test ROTS r").candidates == ()


def test_flags_do_not_shift_positions():
    resolver = _resolver(make_movie_command())
    assert resolver.resolve("test -t ro").candidates == ("ROTS", "ROTJ", "RogueOne")


def test_value_of_value_flag_is_not_completed_as_argument():
    resolver = _resolver(make_movie_command())
    assert resolver.resolve("test --salut ro").candidates == ()
    assert resolver.resolve("test --salut hi ro").candidates == ("ROTS", "ROTJ", "RogueOne")


def test_second_argument_uses_its_own_completer():
    command_obj = Command(
        "copy", noop,
        arguments=[
            Argument("src", completer=prefix_completer(["alpha", "beta"])),
            Argument("dst", mandatory=False, completer=prefix_completer(["gamma", "delta"])),
        ],
        flags=[ValueFlag("mode", short="m")],
    )
    resolver = _resolver(command_obj)
    assert resolver.resolve("copy a").candidates == ("alpha",)
    assert resolver.resolve("copy alpha --mode fast ").candidates == ("gamma", "delta")


def test_candidates_are_capped():
    many = [f"item{i:03d}" for i in range(250)]
    command_obj = Command("pick", noop, arguments=[Argument("item", completer=lambda prefix: many)])
    assert len(_resolver(command_obj).resolve("pick ").candidates) == 100
    assert len(_resolver(command_obj, max_completions=5).resolve("pick ").candidates) == 5


def test_suggest_returns_plain_list():
    registry = CommandRegistry().add(make_movie_command())
    assert suggest(registry, "te") == ["test"]
