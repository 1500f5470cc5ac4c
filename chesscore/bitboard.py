"""Bitboards: 64-bit board sets, square helpers and precomputed attack tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterator, List, Tuple

MASK64 = (1 << 64) - 1
SQUARE_NB = 64

FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H = range(8)
RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8 = range(8)

FILE_A_BB = 0x0101010101010101
FILE_B_BB = FILE_A_BB << 1
FILE_C_BB = FILE_A_BB << 2
FILE_D_BB = FILE_A_BB << 3
FILE_E_BB = FILE_A_BB << 4
FILE_F_BB = FILE_A_BB << 5
FILE_G_BB = FILE_A_BB << 6
FILE_H_BB = FILE_A_BB << 7

RANK_1_BB = 0xFF
RANK_2_BB = RANK_1_BB << (8 * 1)
RANK_3_BB = RANK_1_BB << (8 * 2)
RANK_4_BB = RANK_1_BB << (8 * 3)
RANK_5_BB = RANK_1_BB << (8 * 4)
RANK_6_BB = RANK_1_BB << (8 * 5)
RANK_7_BB = RANK_1_BB << (8 * 6)
RANK_8_BB = RANK_1_BB << (8 * 7)


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def __invert__(self) -> "Color":
        return Color(self ^ 1)


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Direction(IntEnum):
    NORTH = 8
    EAST = 1
    SOUTH = -8
    WEST = -1
    NORTH_EAST = 9
    SOUTH_EAST = -7
    SOUTH_WEST = -9
    NORTH_WEST = 7


# ---------------------------------------------------------------------------
# Square helpers
# ---------------------------------------------------------------------------


def _check_square(square: int) -> None:
    if not 0 <= square < SQUARE_NB:
        raise ValueError(f"invalid square: {square}")


def make_square(file: int, rank: int) -> int:
    """Return the square index for a file and a rank, both 0..7."""
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"invalid file/rank: {file}, {rank}")
    return (rank << 3) + file


def file_of(square: int) -> int:
    return square & 7


def rank_of(square: int) -> int:
    return square >> 3


def square_bb(square: int) -> int:
    """Return the bitboard holding only ``square``."""
    _check_square(square)
    return 1 << square


def more_than_one(b: int) -> bool:
    return bool(b & (b - 1))


def rank_bb(rank: int) -> int:
    return RANK_1_BB << (8 * rank)


def file_bb(file: int) -> int:
    return FILE_A_BB << file


def shift(b: int, direction: int) -> int:
    """Move every square of ``b`` one step (or two pushes) in ``direction``."""
    b &= MASK64
    d = int(direction)
    if d == 8:
        return (b << 8) & MASK64
    if d == -8:
        return b >> 8
    if d == 16:
        return (b << 16) & MASK64
    if d == -16:
        return b >> 16
    if d == 1:
        return ((b & ~FILE_H_BB) << 1) & MASK64
    if d == -1:
        return (b & ~FILE_A_BB) >> 1
    if d == 9:
        return ((b & ~FILE_H_BB) << 9) & MASK64
    if d == 7:
        return ((b & ~FILE_A_BB) << 7) & MASK64
    if d == -7:
        return (b & ~FILE_H_BB) >> 7
    if d == -9:
        return (b & ~FILE_A_BB) >> 9
    return 0


def pawn_attacks_bb(color: Color, b: int) -> int:
    """Squares attacked by pawns of ``color`` standing on the squares of bitboard ``b``."""
    if color == Color.WHITE:
        return shift(b, Direction.NORTH_WEST) | shift(b, Direction.NORTH_EAST)
    return shift(b, Direction.SOUTH_WEST) | shift(b, Direction.SOUTH_EAST)


def file_distance(x: int, y: int) -> int:
    return abs(file_of(x) - file_of(y))


def rank_distance(x: int, y: int) -> int:
    return abs(rank_of(x) - rank_of(y))


def distance(x: int, y: int) -> int:
    """Number of king steps from ``x`` to ``y``."""
    return max(file_distance(x, y), rank_distance(x, y))


def edge_distance(file: int) -> int:
    return min(file, FILE_H - file)


# ---------------------------------------------------------------------------
# Bit scanning
# ---------------------------------------------------------------------------


def popcount(b: int) -> int:
    return (b & MASK64).bit_count()


def lsb(b: int) -> int:
    """Least significant set square of a non-empty bitboard."""
    b &= MASK64
    if not b:
        raise ValueError("lsb of an empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Most significant set square of a non-empty bitboard."""
    b &= MASK64
    if not b:
        raise ValueError("msb of an empty bitboard")
    return b.bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    b &= MASK64
    if not b:
        raise ValueError("least significant square of an empty bitboard")
    return b & -b


def pop_lsb(b: int) -> Tuple[int, int]:
    """Return the least significant square and the bitboard without it."""
    square = lsb(b)
    b &= MASK64
    return square, b & (b - 1)


def iter_squares(b: int) -> Iterator[int]:
    """Yield the squares of ``b`` from least to most significant."""
    b &= MASK64
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


# ---------------------------------------------------------------------------
# Magic bitboards (index by parallel bit extraction)
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Magic:
    """Attack lookup for one slider on one square."""

    mask: int
    attacks: List[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self._bits = [1 << s for s in iter_squares(self.mask)]

    def index(self, occupied: int) -> int:
        """Compress the relevant occupancy bits into a table index."""
        occ = occupied & self.mask
        idx = 0
        for i, bit in enumerate(self._bits):
            if occ & bit:
                idx |= 1 << i
        return idx

    def attacks_bb(self, occupied: int) -> int:
        return self.attacks[self.index(occupied)]


def _safe_destination(square: int, step: int) -> int:
    to = square + step
    if 0 <= to < SQUARE_NB and distance(square, to) <= 2:
        return 1 << to
    return 0


_ROOK_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
_BISHOP_DIRECTIONS = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)


def _build_rays() -> Dict[int, List[List[int]]]:
    rays: Dict[int, List[List[int]]] = {}
    for d in (*_ROOK_DIRECTIONS, *_BISHOP_DIRECTIONS):
        per_square = []
        for start in range(SQUARE_NB):
            ray = []
            s = start
            while _safe_destination(s, d):
                s += d
                ray.append(1 << s)
            per_square.append(ray)
        rays[int(d)] = per_square
    return rays


_RAYS = _build_rays()


def _sliding_attack(pt: PieceType, square: int, occupied: int) -> int:
    attacks = 0
    for d in _ROOK_DIRECTIONS if pt == PieceType.ROOK else _BISHOP_DIRECTIONS:
        for bit in _RAYS[int(d)][square]:
            attacks |= bit
            if occupied & bit:
                break
    return attacks


def _build_magics(pt: PieceType) -> List[Magic]:
    magics = []
    for s in range(SQUARE_NB):
        # Board edges are not part of the relevant occupancy.
        edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
            (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
        )
        mask = _sliding_attack(pt, s, 0) & ~edges
        # Carry-rippler enumerates subsets of the mask in index order.
        attacks = []
        b = 0
        while True:
            attacks.append(_sliding_attack(pt, s, b))
            b = (b - mask) & mask
            if not b:
                break
        magics.append(Magic(mask, attacks))
    return magics


_BISHOP_MAGICS = _build_magics(PieceType.BISHOP)
_ROOK_MAGICS = _build_magics(PieceType.ROOK)


def attacks_bb(piece_type: PieceType, square: int, occupied: int = 0) -> int:
    """Attacks of a non-pawn piece on ``square`` given the board occupancy."""
    _check_square(square)
    if piece_type == PieceType.BISHOP:
        return _BISHOP_MAGICS[square].attacks_bb(occupied)
    if piece_type == PieceType.ROOK:
        return _ROOK_MAGICS[square].attacks_bb(occupied)
    if piece_type == PieceType.QUEEN:
        return _BISHOP_MAGICS[square].attacks_bb(occupied) | _ROOK_MAGICS[square].attacks_bb(
            occupied
        )
    if piece_type in (PieceType.KNIGHT, PieceType.KING):
        return _PSEUDO_ATTACKS[piece_type][square]
    raise ValueError(f"no attack table for piece type {piece_type!r}")


def pseudo_attacks(piece_type: PieceType, square: int) -> int:
    """Attacks of a non-pawn piece on an empty board."""
    _check_square(square)
    if piece_type not in (
        PieceType.KNIGHT,
        PieceType.BISHOP,
        PieceType.ROOK,
        PieceType.QUEEN,
        PieceType.KING,
    ):
        raise ValueError(f"no attack table for piece type {piece_type!r}")
    return _PSEUDO_ATTACKS[piece_type][square]


def line_bb(s1: int, s2: int) -> int:
    """Full edge-to-edge line through both squares, or 0 if they are not aligned."""
    _check_square(s1)
    _check_square(s2)
    return _LINE_BB[s1][s2]


def between_bb(s1: int, s2: int) -> int:
    """Squares strictly after ``s1`` up to and including ``s2``; just ``s2`` if not aligned."""
    _check_square(s1)
    _check_square(s2)
    return _BETWEEN_BB[s1][s2]


def aligned(s1: int, s2: int, s3: int) -> bool:
    return bool(line_bb(s1, s2) & square_bb(s3))


def pretty(b: int) -> str:
    """ASCII drawing of a bitboard, rank 8 at the top."""
    border = "+---+---+---+---+---+---+---+---+\n"
    parts = [border]
    for r in range(RANK_8, RANK_1 - 1, -1):
        for f in range(FILE_A, FILE_H + 1):
            parts.append("| X " if b & (1 << make_square(f, r)) else "|   ")
        parts.append(f"| {1 + r}\n{border}")
    parts.append("  a   b   c   d   e   f   g   h\n")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Table initialisation
# ---------------------------------------------------------------------------

_PSEUDO_ATTACKS: List[List[int]] = [[0] * SQUARE_NB for _ in range(len(PieceType))]
_PAWN_ATTACKS: List[List[int]] = [[0] * SQUARE_NB for _ in range(2)]
_LINE_BB: List[List[int]] = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
_BETWEEN_BB: List[List[int]] = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]


def _init_tables() -> None:
    for s1 in range(SQUARE_NB):
        bb1 = 1 << s1
        _PAWN_ATTACKS[Color.WHITE][s1] = pawn_attacks_bb(Color.WHITE, bb1)
        _PAWN_ATTACKS[Color.BLACK][s1] = pawn_attacks_bb(Color.BLACK, bb1)

        for step in (-9, -8, -7, -1, 1, 7, 8, 9):
            _PSEUDO_ATTACKS[PieceType.KING][s1] |= _safe_destination(s1, step)
        for step in (-17, -15, -10, -6, 6, 10, 15, 17):
            _PSEUDO_ATTACKS[PieceType.KNIGHT][s1] |= _safe_destination(s1, step)

        bishop = attacks_bb(PieceType.BISHOP, s1, 0)
        rook = attacks_bb(PieceType.ROOK, s1, 0)
        _PSEUDO_ATTACKS[PieceType.BISHOP][s1] = bishop
        _PSEUDO_ATTACKS[PieceType.ROOK][s1] = rook
        _PSEUDO_ATTACKS[PieceType.QUEEN][s1] = bishop | rook

        for pt in (PieceType.BISHOP, PieceType.ROOK):
            for s2 in range(SQUARE_NB):
                bb2 = 1 << s2
                if _PSEUDO_ATTACKS[pt][s1] & bb2:
                    _LINE_BB[s1][s2] = (
                        attacks_bb(pt, s1, 0) & attacks_bb(pt, s2, 0)
                    ) | bb1 | bb2
                    _BETWEEN_BB[s1][s2] = attacks_bb(pt, s1, bb2) & attacks_bb(pt, s2, bb1)
                _BETWEEN_BB[s1][s2] |= bb2


_init_tables()