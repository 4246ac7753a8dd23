from __future__ import annotations

import dataclasses

import pytest

from lineconsole.commands import Argument, Command, PresenceFlag, ValueFlag
from lineconsole.errors import ValidationError
from tests.conftest import make_movie_command, noop


class TestCommandValidation:
    @pytest.mark.parametrize("name", ["Test", "1abc", "", "has space", "a" * 33, "-dash"])
    def test_rejects_malformed_name(self, name):
        with pytest.raises(ValidationError):
            Command(name, noop)

    @pytest.mark.parametrize("name", ["a", "test", "build-all", "run_2", "a" * 32])
    def test_accepts_well_formed_name(self, name):
        assert Command(name, noop).name == name

    def test_rejects_malformed_alias(self):
        with pytest.raises(ValidationError, match="alias 'Bad'"):
            Command("test", noop, aliases=["ok", "Bad"])

    def test_rejects_repeated_alias(self):
        with pytest.raises(ValidationError, match="declared twice"):
            Command("test", noop, aliases=["x", "x"])

    def test_rejects_alias_equal_to_name(self):
        with pytest.raises(ValidationError):
            Command("test", noop, aliases=["test"])

    def test_mandatory_after_optional_fails(self):
        with pytest.raises(ValidationError, match="Argument #2"):
            Command(
                "test",
                noop,
                arguments=[
                    Argument("first"),
                    Argument("second", mandatory=False),
                    Argument("third"),
                ],
            )

    def test_optional_tail_is_accepted(self):
        command_obj = Command(
            "test",
            noop,
            arguments=[Argument("first"), Argument("second", mandatory=False), Argument("third", mandatory=False)],
        )
        assert command_obj.argument_count() == (1, 3)

    def test_rejects_repeated_argument_name(self):
        with pytest.raises(ValidationError):
            Command("test", noop, arguments=[Argument("file"), Argument("file", mandatory=False)])

    @pytest.mark.parametrize("flag", [PresenceFlag("9lives"), PresenceFlag("ok", short="ab"), ValueFlag("ok", short="1")])
    def test_rejects_malformed_flag(self, flag):
        with pytest.raises(ValidationError):
            Command("test", noop, flags=[flag])

    def test_rejects_flag_name_collision(self):
        with pytest.raises(ValidationError, match="declared twice"):
            Command("test", noop, flags=[PresenceFlag("verbose"), ValueFlag("verbose")])

    def test_rejects_flag_short_collision(self):
        with pytest.raises(ValidationError):
            Command("test", noop, flags=[PresenceFlag("verbose", short="v"), ValueFlag("value", short="v")])

    def test_short_may_not_reuse_a_single_letter_name(self):
        with pytest.raises(ValidationError):
            Command("test", noop, flags=[PresenceFlag("x"), PresenceFlag("extra", short="x")])

    def test_validation_error_names_the_command(self):
        with pytest.raises(ValidationError) as info:
            Command("deploy", noop, aliases=["X"])
        assert info.value.command_name == "deploy"
        assert "(command 'deploy')" in str(info.value)

    def test_handler_must_be_callable(self):
        with pytest.raises(ValidationError):
            Command("test", "not callable")


class TestCommandQueries:
    def test_is_immutable(self, movie_command):
        with pytest.raises(dataclasses.FrozenInstanceError):
            movie_command.name = "other"

    def test_sequences_are_tuples(self):
        command_obj = Command("test", noop, arguments=[Argument("a")], flags=[PresenceFlag("f")], aliases=["x"])
        assert isinstance(command_obj.arguments, tuple)
        assert isinstance(command_obj.flags, tuple)
        assert command_obj.aliases == ("x",)

    def test_argument_count(self):
        assert Command("none", noop).argument_count() == (0, 0)
        assert make_movie_command().argument_count() == (1, 1)
        command_obj = Command("mixed", noop, arguments=[Argument("a"), Argument("b"), Argument("c", mandatory=False)])
        assert command_obj.argument_count() == (2, 3)
        assert command_obj.min_argument_count == 2
        assert command_obj.max_argument_count == 3

    def test_get_flag_by_name(self, movie_command):
        assert movie_command.get_flag("test1").name == "test1"
        assert movie_command.get_flag("salut").is_value_flag

    def test_get_flag_short_only_when_requested(self, movie_command):
        assert movie_command.get_flag("s") is None
        assert movie_command.get_flag("s", include_shorts=True).name == "salut"
        assert movie_command.get_flag("x", include_shorts=True) is None

    def test_names_and_aliases(self, movie_command):
        assert movie_command.names == ("test", "t")
        assert movie_command.has_alias("t")
        assert not movie_command.has_alias("test")
