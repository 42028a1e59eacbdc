"""Tests for input decoding."""

import pytest

from checkpick.keys import ARROW_DOWN, ARROW_UP, ENTER, SPACE, decode
from checkpick.models import Action


@pytest.mark.parametrize(
    "chunk, expected",
    [
        ("\x1b[A", Action.MOVE_UP),
        ("\x1b[B", Action.MOVE_DOWN),
        ("\r", Action.SUBMIT),
        (" ", Action.TOGGLE_SELECT),
        (b"\x1b[A", Action.MOVE_UP),
        (b"\r", Action.SUBMIT),
    ],
)
def test_known_sequences(chunk, expected):
    assert decode(chunk) is expected


def test_constants_match_terminal_bytes():
    assert ARROW_UP == "\x1b[A"
    assert ARROW_DOWN == "\x1b[B"
    assert ENTER == "\x0d"
    assert SPACE == "\x20"


@pytest.mark.parametrize("chunk", ["", "x", "\n", "\x1b", "\x1b[", "\x1bOA", " \r", "\x1b[B "])
def test_anything_else_is_unrecognized(chunk):
    assert decode(chunk) is Action.UNRECOGNIZED


def test_split_escape_sequence_is_not_reassembled():
    """Each chunk decodes on its own."""
    assert [decode(part) for part in ("\x1b", "[A")] == [Action.UNRECOGNIZED] * 2


def test_invalid_utf8_is_unrecognized():
    assert decode(b"\xc3") is Action.UNRECOGNIZED
