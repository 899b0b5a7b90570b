"""Option-list expansion: +group inclusion, -item removal, and store failures."""

from __future__ import annotations

import pytest

from randomizer.core.context import OperationContext
from randomizer.core.errors import CommandError, ErrorKind
from randomizer.engine.expand import expand_options, remove_first
from tests.fakes.stores import CountingStore, FailingStore, FakeStore


@pytest.fixture
def ctx() -> OperationContext:
    return OperationContext.background()


def test_literal_options_pass_through(ctx):
    assert expand_options(ctx, FakeStore(), ["b", "a"]) == ("b", "a")


def test_group_plus_literal(ctx):
    store = FakeStore({"A": ["y", "x"]})
    assert sorted(expand_options(ctx, store, ["+A", "z"])) == ["x", "y", "z"]


def test_group_then_removal(ctx):
    store = FakeStore({"A": ["x", "y"]})
    assert expand_options(ctx, store, ["+A", "-x"]) == ("y",)


def test_removal_before_inclusion_fails(ctx):
    store = FakeStore({"A": ["x", "y"]})
    with pytest.raises(CommandError) as exc_info:
        expand_options(ctx, store, ["-x", "+A"])
    assert exc_info.value.help_text == 'Whoops, "x" wasn\'t available for me to remove!'


def test_removal_of_absent_item(ctx):
    store = FakeStore({"A": ["x", "y"]})
    with pytest.raises(CommandError) as exc_info:
        expand_options(ctx, store, ["+A", "-q"])
    assert exc_info.value.kind is ErrorKind.USAGE


def test_missing_group_names_help_command(ctx):
    with pytest.raises(CommandError) as exc_info:
        expand_options(ctx, FakeStore(), ["+nope"], name="/randomize")
    err = exc_info.value
    assert err.kind is ErrorKind.NOT_FOUND
    assert err.help_text == (
        'Whoops, I couldn\'t find the "nope" group in this channel. '
        '(Type "/randomize /help groups" to learn more about groups!)'
    )


def test_store_failure_is_wrapped_once(ctx):
    store = FailingStore()
    with pytest.raises(CommandError) as exc_info:
        expand_options(ctx, store, ["a", "+g", "+h"])
    err = exc_info.value
    assert err.kind is ErrorKind.BACKEND
    assert isinstance(err.cause, RuntimeError)
    assert store.call_count == 1


def test_stops_at_first_error(ctx):
    store = CountingStore(FakeStore({"A": ["x"]}))
    with pytest.raises(CommandError):
        expand_options(ctx, store, ["+missing", "+A"])
    assert store.calls["get"] == 1


def test_group_options_are_copied(ctx):
    store = FakeStore({"A": ["x", "y"]})
    expand_options(ctx, store, ["+A", "-x"])
    assert store.groups["A"] == ["x", "y"]


class TestRemoveFirst:
    def test_removes_first_occurrence(self):
        assert remove_first(("a", "b", "a"), "a") == ("b", "a")

    def test_absent_returns_none(self):
        assert remove_first(("a",), "b") is None

    def test_original_untouched(self):
        options = ("a", "b")
        remove_first(options, "a")
        assert options == ("a", "b")
