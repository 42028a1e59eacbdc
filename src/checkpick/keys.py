"""Input decoding: raw terminal chunks to actions.

Each chunk is decoded on its own. A key sequence split across two chunks is
not reassembled and decodes as two unrecognized chunks.
"""

import readchar

from checkpick.models import Action

ARROW_UP = "\x1b[A"
ARROW_DOWN = "\x1b[B"
ENTER = readchar.key.CR
SPACE = readchar.key.SPACE

KEYMAP: dict[str, Action] = {
    ARROW_UP: Action.MOVE_UP,
    ARROW_DOWN: Action.MOVE_DOWN,
    ENTER: Action.SUBMIT,
    SPACE: Action.TOGGLE_SELECT,
}


def decode(chunk: bytes | str) -> Action:
    """Return the action for a whole input chunk.

    Anything that is not exactly one of the known sequences, including
    bytes that are not valid UTF-8, is Action.UNRECOGNIZED.
    """
    if isinstance(chunk, bytes):
        try:
            chunk = chunk.decode("utf-8")
        except UnicodeDecodeError:
            return Action.UNRECOGNIZED
    return KEYMAP.get(chunk, Action.UNRECOGNIZED)
