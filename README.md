# chesscore

Building blocks for a chess engine, written in plain Python with no
third-party dependencies.

## What is inside

### `chesscore.bitboard`

A bitboard is a Python `int` holding a 64-bit set of squares, square 0 being
a1 and square 63 being h8.

- Enums `Color` (`~Color.WHITE` is `Color.BLACK`), `PieceType` and
  `Direction`.
- Square helpers: `make_square(file, rank)`, `file_of`, `rank_of`,
  `square_bb`, `rank_bb`, `file_bb`, and the masks `FILE_A_BB` … `FILE_H_BB`
  and `RANK_1_BB` … `RANK_8_BB`.
- `shift(b, direction)` moves every square one step, without wrapping
  around the board edges. `pawn_attacks_bb(color, b)` gives the squares that
  pawns of one colour on `b` attack.
- Distances: `file_distance`, `rank_distance`, `distance` (king steps) and
  `edge_distance(file)`.
- Bit scanning: `popcount`, `lsb`, `msb`, `least_significant_square_bb`,
  `pop_lsb` (returns the square and the bitboard without it), `iter_squares`
  and `more_than_one`. `lsb`, `msb` and `least_significant_square_bb` raise
  `ValueError` on an empty bitboard.
- Attacks: `attacks_bb(piece_type, square, occupied=0)` for knights, bishops,
  rooks, queens and kings, where sliders stop at the first occupied square.
  Bishop and rook attacks are looked up through `Magic` tables built when the
  module is imported. `pseudo_attacks(piece_type, square)` gives attacks on an
  empty board. Pawns and invalid squares raise `ValueError`.
- Lines: `line_bb(s1, s2)` is the full line through two aligned squares (0 if
  they are not aligned). `between_bb(s1, s2)` is the squares after `s1` up to
  and including `s2`, or just `s2` when they are not aligned.
  `aligned(s1, s2, s3)` tells whether three squares share a line.
- `pretty(b)` draws a bitboard as ASCII art, with rank 8 at the top.

### `chesscore.misc`

- `engine_version_info()`, `engine_info(to_uci=False)` and `compiler_info()`
  return version and runtime description strings.
- `PRNG(seed)` is a xorshift64* generator. It has `rand64()`/`rand()` and
  `sparse_rand()`, which returns values with about one bit in eight set. A
  zero seed raises `ValueError`.
- `mul_hi64(a, b)` returns the high 64 bits of a 64×64-bit product.
- `DebugStats` collects counters in 32 numbered slots: `hit_on`, `mean_of`,
  `stdev_of`, `extremes_of` and `correl_of`. `report()` returns one text line
  for each used slot. A module-level instance is available as `debug_stats`.
- `IOLogger` copies everything read from `sys.stdin` and written to
  `sys.stdout` into a log file, with lines marked `>> ` for input and `<< `
  for output. It has `start(fname)`, `stop()` and the `active` property, and
  it can be used as a context manager. `start_logger(fname)` drives a shared
  instance; an empty name stops logging.
- String and file helpers: `split`, `remove_whitespace`, `is_whitespace`,
  `str_to_size_t`, `read_file_to_string` (bytes, or `None` if unreadable),
  `get_working_directory`, `get_binary_directory(argv0)`,
  `move_to_front(items, pred)` and `now()` (monotonic milliseconds).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from chesscore.bitboard import (
    PieceType, attacks_bb, iter_squares, make_square, popcount, pretty, pseudo_attacks,
)

e4 = make_square(4, 3)
e6 = make_square(4, 5)
rook = attacks_bb(PieceType.ROOK, e4, 1 << e6)
print(pretty(rook))

print(popcount(attacks_bb(PieceType.ROOK, e4)))       # 14
print(list(iter_squares(pseudo_attacks(PieceType.KNIGHT, 0))))  # [10, 17]
```

```python
from chesscore.misc import PRNG, DebugStats

rng = PRNG(1070372)
print(rng.rand(), rng.sparse_rand())

stats = DebugStats()
for v in (1, 2, 3):
    stats.mean_of(v, 0)
print(stats.report())  # Mean #0: Total 3 Mean 2
```

## What this package does not do

There is no move generator, position model, evaluation, search, or command
loop for talking to a chess GUI. Nor are there built-in benchmark positions or
benchmark command lists. The package provides the board-set arithmetic and
utilities that such parts would be built on.