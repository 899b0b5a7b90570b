"""Request parser: operation flags, the /n modifier, and usage errors."""

from __future__ import annotations

import pytest

from randomizer.core.errors import CommandError, ErrorKind
from randomizer.core.types import Operation, Request
from randomizer.engine.request import parse_request


@pytest.mark.parametrize(
    "args,expected",
    [
        ([], Request(Operation.HELP)),
        (["/help"], Request(Operation.HELP)),
        (["help"], Request(Operation.HELP)),
        (["/help", "groups"], Request(Operation.HELP, args=("groups",))),
        (["/list"], Request(Operation.LIST)),
        (["/show", "snacks"], Request(Operation.SHOW, operand="snacks")),
        (["/delete", "snacks"], Request(Operation.DELETE, operand="snacks")),
        (
            ["/save", "snacks", "chips", "+more", "-dip"],
            Request(Operation.SAVE, operand="snacks", args=("chips", "+more", "-dip")),
        ),
        (["a", "b", "c"], Request(Operation.SELECT, args=("a", "b", "c"))),
        (["help", "me"], Request(Operation.SELECT, args=("help", "me"))),
        (["/n", "2", "a", "b"], Request(Operation.SELECT, args=("a", "b"), count=2)),
        (["a", "/n", "2", "b"], Request(Operation.SELECT, args=("a", "b"), count=2)),
        (["a", "b", "/n", "all"], Request(Operation.SELECT, args=("a", "b"), count=None)),
        (["a", "/list"], Request(Operation.SELECT, args=("a", "/list"))),
    ],
)
def test_parse_request(args, expected):
    assert parse_request(args) == expected


def test_last_count_wins():
    assert parse_request(["/n", "1", "a", "b", "/n", "2"]).count == 2


def test_input_is_not_mutated():
    args = ["/save", "x", "a", "b"]
    parse_request(args)
    assert args == ["/save", "x", "a", "b"]


@pytest.mark.parametrize("flag", ["/show", "/save", "/delete"])
def test_operand_required(flag):
    with pytest.raises(CommandError) as exc_info:
        parse_request([flag])
    assert exc_info.value.kind is ErrorKind.USAGE
    assert exc_info.value.help_text == f'Whoops, "{flag}" requires an argument!'


@pytest.mark.parametrize("token", ["/svae", "/LIST", "/lis", "/"])
def test_unknown_flag(token):
    with pytest.raises(CommandError) as exc_info:
        parse_request([token, "a", "b"], name="/randomize")
    err = exc_info.value
    assert err.kind is ErrorKind.USAGE
    assert f'"{token}" isn\'t a valid flag' in err.help_text
    assert '"/randomize help"' in err.help_text


@pytest.mark.parametrize("value", ["2.1", "wat", ""])
def test_invalid_count(value):
    with pytest.raises(CommandError) as exc_info:
        parse_request(["/n", value, "a", "b"])
    assert exc_info.value.help_text == f'Whoops, "{value}" isn\'t a valid count!'
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_count_range_is_not_checked_by_parser():
    assert parse_request(["/n", "0", "a"]).count == 0
    assert parse_request(["/n", "-3", "a"]).count == -3


@pytest.mark.parametrize(
    "args",
    [
        ["/save", "snacks", "chips", "pretzels", "/n", "1"],
        ["/list", "/n", "2"],
        ["/show", "snacks", "/n", "all"],
        ["/delete", "snacks", "/n", "1"],
    ],
)
def test_count_only_for_selection(args):
    with pytest.raises(CommandError) as exc_info:
        parse_request(args)
    assert exc_info.value.kind is ErrorKind.USAGE
    assert '"/n" only works when I\'m picking options' in exc_info.value.help_text


@pytest.mark.parametrize("args", [["/help", "/n"], ["/help", "/n", "wat"], ["/help", "/svae"]])
def test_help_topic_never_fails(args):
    assert parse_request(args) == Request(Operation.HELP, args=tuple(args[1:]))
