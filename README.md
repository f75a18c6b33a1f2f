# blockfall

Falling-block puzzle games that run in a POSIX terminal (they use `termios`
and `curses`). Two games are included.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The fix game

```
blockfall-fix
```

Plays on a 10 × 10 board. After every key the play area is printed to the
terminal, with column numbers along the top and row numbers on the right.
Blocks do not fall on their own; they move freely:

| key     | action                                   |
|---------|------------------------------------------|
| `a`     | left                                     |
| `d`     | right                                    |
| `s`     | down (also sent once a second if idle)   |
| `e`     | up                                       |
| `w`     | rotate clockwise                         |
| space   | fix the block where it stands            |
| `q`     | quit                                     |

A move that would take the block into the wall around the play area is
undone. A block may pass over blocks already fixed, but it can only be fixed
with space where it overlaps nothing. When a block is fixed, every full row
and every full column of the play area that the block covers is emptied;
nothing else moves. Then a random new block appears at the top. The game ends
when a new block has no room, when `q` is pressed, or when input closes.

## The duel

```
blockfall-duel normal
blockfall-duel record
blockfall-duel replay
```

Two colour boards side by side in a curses screen, one per player:

| left board | right board | action          |
|------------|-------------|-----------------|
| `a`        | `j`         | left            |
| `d`        | `l`         | right           |
| `s`        | `k`         | down            |
| `w`        | `i`         | rotate          |
| space      | Enter       | drop            |

Blocks only move when a key is pressed; there is no timed fall. A block that
lands clears the full lines it covers and the rows above shift down, then a
random new block enters that board. The game ends when `q` is pressed or
when a new block has no room; the screen stays up for five seconds before
closing.

The mode argument is required; anything else prints a usage line:

- `normal` reads keys from the keyboard.
- `record` plays like `normal` and also writes every key, block choices
  included, to `keyseq.txt` in the current directory.
- `replay` plays back `keyseq.txt` from the current directory, one key every
  100 ms, and stops when the file ends.

## What the games do not do

There is no score, no level or speed-up, and no preview of the next block.
In the duel the two boards do not affect each other: cleared lines are not
sent to the opponent.

## Using the pieces

The game logic does not depend on the terminal and can be driven from code:

- `blockfall.matrix.Matrix` — the integer grid the boards are built on
  (`clip`, `paste`, `+`, `to_binary`, `any_greater_than`, …).
- `blockfall.blocks` — `mono_blocks()` and `color_blocks()` return a
  `BlockSet` with the seven standard blocks in four rotations;
  `TetrisState` is the board state (`NEW_BLOCK`, `RUNNING`, `FINISHED`).
- `blockfall.tetris.Tetris` — a board driven by `accept(key)`; in the
  `NEW_BLOCK` state the key is a block digit `0`–`6`. The key `N` together
  with `incoming` rows (`accept("N", incoming)`) pushes those rows in at the
  bottom of the output screen.
- `blockfall.ctetris.ColorTetris` — a `Tetris` that also keeps a coloured
  screen, available as `color_screen`.
- `blockfall.pluggable.PluggableTetris` — a board whose keys are bound to
  `ActionHandler`s through an `OperationTable`.
- `blockfall.render` — `render_text`, `render_numbered` and `draw_window`
  draw a screen as text or into a `blockfall.window.Window`.
- `blockfall.keys.KeySource` — supplies keys in the three duel modes.