"""Where key presses come from: the player, a recording, or both."""

from __future__ import annotations

import enum
import random
import time
from pathlib import Path

from blockfall.blocks import NUM_TYPES, TetrisState
from blockfall.terminal import KeyReader

DEFAULT_KEY_FILE = "keyseq.txt"
QUIT_KEY = "q"


class PlayMode(enum.Enum):
    """How keys are obtained and whether they are recorded."""

    NORMAL = "normal"
    RECORD = "record"
    REPLAY = "replay"

    @property
    def from_user(self) -> bool:
        return self is not PlayMode.REPLAY

    @property
    def to_file(self) -> bool:
        return self is PlayMode.RECORD


def parse_mode(text: str) -> PlayMode:
    """The play mode named by ``text``: normal, record or replay."""
    try:
        return PlayMode(text)
    except ValueError:
        raise ValueError(
            f"mode must be one of normal/record/replay, got {text!r}"
        ) from None


class KeySource:
    """Supplies keys for a game.

    From the player, block keys are random digits and moves are read from
    the terminal; in replay they are read from a file, and ``q`` is returned
    once it runs out.  In record mode every key is also written to the file.
    """

    replay_delay = 0.1

    def __init__(
        self,
        mode: PlayMode = PlayMode.NORMAL,
        path: str | Path = DEFAULT_KEY_FILE,
        reader: KeyReader | None = None,
        rng: random.Random | None = None,
        num_types: int = NUM_TYPES,
    ) -> None:
        if num_types <= 0:
            raise ValueError("number of block types must be positive")
        self.mode = mode
        self.path = Path(path)
        self._reader = reader
        self.rng = rng if rng is not None else random.Random()
        self.num_types = num_types
        self._infile = None
        self._outfile = None

    def _from_user(self, state: TetrisState) -> str:
        if state is TetrisState.NEW_BLOCK:
            return chr(ord("0") + self.rng.randrange(self.num_types))
        if self._reader is None:
            self._reader = KeyReader()
        return self._reader.read()

    def _from_file(self) -> str:
        if self._infile is None:
            self._infile = open(self.path, encoding="latin-1", newline="")
        key = self._infile.read(1) or QUIT_KEY
        if self.replay_delay > 0:
            time.sleep(self.replay_delay)
        return key

    def _record(self, key: str) -> None:
        if self._outfile is None:
            self._outfile = open(self.path, "w", encoding="latin-1", newline="")
        self._outfile.write(key)
        self._outfile.flush()

    def next_key(self, state: TetrisState) -> str:
        """The next key for a board in ``state``."""
        key = self._from_user(state) if self.mode.from_user else self._from_file()
        if self.mode.to_file:
            self._record(key)
        return key

    def close(self) -> None:
        for handle in (self._infile, self._outfile):
            if handle is not None:
                handle.close()
        self._infile = None
        self._outfile = None

    def __enter__(self) -> KeySource:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()