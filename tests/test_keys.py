import random

import pytest

from blockfall.blocks import TetrisState
from blockfall.keys import KeySource, PlayMode, parse_mode


class FakeReader:
    def __init__(self, keys):
        self._keys = list(keys)

    def read(self):
        return self._keys.pop(0)


@pytest.mark.parametrize(
    "text, mode",
    [("normal", PlayMode.NORMAL), ("record", PlayMode.RECORD), ("replay", PlayMode.REPLAY)],
)
def test_parse_mode(text, mode):
    assert parse_mode(text) is mode


def test_parse_mode_rejects_unknown():
    with pytest.raises(ValueError):
        parse_mode("bogus")


@pytest.mark.parametrize(
    "text, from_user, to_file",
    [("normal", True, False), ("record", True, True), ("replay", False, False)],
)
def test_mode_flags(text, from_user, to_file):
    mode = parse_mode(text)
    assert (bool(mode.from_user), bool(mode.to_file)) == (from_user, to_file)


def test_new_block_key_is_digit(tmp_path):
    source = KeySource(PlayMode.NORMAL, tmp_path / "k.txt", FakeReader([]), random.Random(1), 7)
    keys = {source.next_key(TetrisState.NEW_BLOCK) for _ in range(50)}
    assert keys <= set("0123456")
    assert not (tmp_path / "k.txt").exists()


def test_running_key_comes_from_reader(tmp_path):
    source = KeySource(PlayMode.NORMAL, tmp_path / "k.txt", FakeReader("ad"), random.Random(0), 7)
    assert source.next_key(TetrisState.RUNNING) == "a"
    assert source.next_key(TetrisState.RUNNING) == "d"


def test_record_then_replay_round_trip(tmp_path):
    path = tmp_path / "keys.txt"
    recorded = []
    with KeySource(PlayMode.RECORD, path, FakeReader(["a", "\r", " "]), random.Random(3), 7) as rec:
        recorded.append(rec.next_key(TetrisState.NEW_BLOCK))
        for _ in range(3):
            recorded.append(rec.next_key(TetrisState.RUNNING))
    assert path.read_bytes().decode("latin-1") == "".join(recorded)

    replay = KeySource(PlayMode.REPLAY, path)
    replay.replay_delay = 0
    with replay:
        replayed = [replay.next_key(TetrisState.RUNNING) for _ in recorded]
        assert replayed == recorded
        assert replay.next_key(TetrisState.RUNNING) == "q"


def test_replay_missing_file(tmp_path):
    source = KeySource(PlayMode.REPLAY, tmp_path / "missing.txt")
    source.replay_delay = 0
    with pytest.raises(FileNotFoundError):
        source.next_key(TetrisState.RUNNING)


def test_non_positive_types_rejected(tmp_path):
    with pytest.raises(ValueError):
        KeySource(PlayMode.NORMAL, tmp_path / "k.txt", num_types=0)