import pytest

from chesscore.bitboard import (
    FILE_A,
    FILE_A_BB,
    FILE_H,
    FILE_H_BB,
    MASK64,
    RANK_1_BB,
    RANK_2_BB,
    RANK_4_BB,
    RANK_8_BB,
    Color,
    Direction,
    Magic,
    PieceType,
    aligned,
    attacks_bb,
    between_bb,
    distance,
    edge_distance,
    file_bb,
    file_distance,
    file_of,
    iter_squares,
    least_significant_square_bb,
    line_bb,
    lsb,
    make_square,
    more_than_one,
    msb,
    pawn_attacks_bb,
    pop_lsb,
    popcount,
    pretty,
    pseudo_attacks,
    rank_bb,
    rank_distance,
    rank_of,
    shift,
    square_bb,
)


def sq(name):
    return make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)


def bb(*names):
    result = 0
    for name in names:
        result |= square_bb(sq(name))
    return result


ALL_SQUARES = range(64)


def test_documented_constants():
    assert FILE_A_BB == 0x0101010101010101
    assert RANK_1_BB == 0xFF
    assert file_bb(FILE_H) == FILE_H_BB
    assert rank_bb(7) == RANK_8_BB


def test_make_square_round_trip():
    for s in ALL_SQUARES:
        assert make_square(file_of(s), rank_of(s)) == s


def test_make_square_rejects_out_of_range():
    with pytest.raises(ValueError):
        make_square(8, 0)
    with pytest.raises(ValueError):
        square_bb(64)


def test_more_than_one():
    assert more_than_one(bb("a1", "h8"))
    assert not more_than_one(bb("e4"))
    assert not more_than_one(0)


def test_shift_edges():
    assert shift(FILE_H_BB, Direction.EAST) == 0
    assert shift(FILE_A_BB, Direction.WEST) == 0
    assert shift(RANK_8_BB, Direction.NORTH) == 0
    assert shift(RANK_1_BB, Direction.NORTH) == RANK_2_BB
    assert shift(RANK_2_BB, 16) == RANK_4_BB
    assert shift(RANK_4_BB, -16) == RANK_2_BB


def test_shift_stays_in_64_bits():
    assert shift(MASK64, Direction.NORTH_EAST) <= MASK64
    assert shift(MASK64, Direction.NORTH_WEST) & FILE_H_BB == 0


def test_pawn_attacks():
    assert pawn_attacks_bb(Color.WHITE, bb("e4")) == bb("d5", "f5")
    assert pawn_attacks_bb(Color.BLACK, bb("e4")) == bb("d3", "f3")
    assert pawn_attacks_bb(Color.WHITE, bb("a2")) == bb("b3")


def test_color_invert():
    assert pawn_attacks_bb(~Color.WHITE, bb("e4")) == bb("d3", "f3")
    assert pawn_attacks_bb(~Color.BLACK, bb("e4")) == bb("d5", "f5")


def test_line_bb_documented_example():
    assert line_bb(sq("c4"), sq("f7")) == bb("a2", "b3", "c4", "d5", "e6", "f7", "g8")


def test_line_bb_not_aligned_is_empty():
    assert line_bb(sq("e6"), sq("f8")) == 0


def test_between_bb_documented_examples():
    assert between_bb(sq("c4"), sq("f7")) == bb("d5", "e6", "f7")
    assert between_bb(sq("e6"), sq("f8")) == bb("f8")


def test_between_is_within_line():
    for s1 in (0, 27, 63):
        for s2 in ALL_SQUARES:
            if line_bb(s1, s2):
                assert between_bb(s1, s2) & ~line_bb(s1, s2) == 0
                assert between_bb(s1, s2) & square_bb(s1) == 0
                assert between_bb(s1, s2) & square_bb(s2)


def test_line_symmetric():
    for s1 in ALL_SQUARES:
        for s2 in ALL_SQUARES:
            assert line_bb(s1, s2) == line_bb(s2, s1)


def test_aligned():
    assert aligned(sq("a1"), sq("d4"), sq("h8"))
    assert not aligned(sq("a1"), sq("b3"), sq("c5"))


def test_distances():
    for x in ALL_SQUARES:
        for y in (0, 9, 36, 63):
            assert distance(x, y) == max(file_distance(x, y), rank_distance(x, y))
            assert distance(x, y) == distance(y, x)
    assert distance(sq("a1"), sq("a1")) == 0


def test_edge_distance():
    assert edge_distance(FILE_A) == 0
    assert edge_distance(FILE_H) == 0
    assert edge_distance(3) == edge_distance(4)


def test_rook_empty_board_attacks_are_rank_and_file():
    for s in ALL_SQUARES:
        expected = (file_bb(file_of(s)) | rank_bb(rank_of(s))) ^ square_bb(s)
        assert attacks_bb(PieceType.ROOK, s, 0) == expected


def test_queen_is_bishop_plus_rook():
    occ = bb("d5", "c3", "f6", "e2")
    for s in ALL_SQUARES:
        assert attacks_bb(PieceType.QUEEN, s, occ) == (
            attacks_bb(PieceType.BISHOP, s, occ) | attacks_bb(PieceType.ROOK, s, occ)
        )
        assert pseudo_attacks(PieceType.QUEEN, s) == attacks_bb(PieceType.QUEEN, s, 0)


def test_blocked_rook_attacks_include_blocker():
    occ = bb("a4", "d1")
    attacks = attacks_bb(PieceType.ROOK, sq("a1"), occ)
    assert attacks == bb("a2", "a3", "a4", "b1", "c1", "d1")


def test_blocked_attacks_subset_of_empty_board():
    occ = bb("b2", "g7", "d4", "e5", "c6")
    for pt in (PieceType.BISHOP, PieceType.ROOK):
        for s in ALL_SQUARES:
            assert attacks_bb(pt, s, occ) & ~attacks_bb(pt, s, 0) == 0


def test_occupancy_outside_rays_is_ignored():
    s = sq("d4")
    far = bb("a2", "h7", "b8")
    for pt in (PieceType.BISHOP, PieceType.ROOK):
        assert attacks_bb(pt, s, far) == attacks_bb(pt, s, 0)


def test_leaper_attacks_symmetric():
    for pt in (PieceType.KNIGHT, PieceType.KING):
        for s1 in ALL_SQUARES:
            for s2 in iter_squares(pseudo_attacks(pt, s1)):
                assert pseudo_attacks(pt, s2) & square_bb(s1)
                assert distance(s1, s2) <= 2


def test_knight_corner():
    assert pseudo_attacks(PieceType.KNIGHT, sq("a1")) == bb("b3", "c2")


def test_pawn_has_no_attack_table():
    with pytest.raises(ValueError):
        attacks_bb(PieceType.PAWN, 0, 0)
    with pytest.raises(ValueError):
        pseudo_attacks(PieceType.PAWN, 0)


def test_magic_index_in_range():
    m = Magic(bb("b2", "c3"), [10, 20, 30, 40])
    assert m.index(0) == 0
    assert m.index(bb("b2")) == 1
    assert m.index(bb("c3")) == 2
    assert m.index(bb("b2", "c3", "h8")) == 3
    assert m.attacks_bb(bb("c3")) == 30


def test_bit_scans():
    for s in ALL_SQUARES:
        assert lsb(square_bb(s)) == s
        assert msb(square_bb(s)) == s
    assert msb(MASK64) == 63
    assert lsb(MASK64) == 0


def test_bit_scans_reject_empty():
    with pytest.raises(ValueError):
        lsb(0)
    with pytest.raises(ValueError):
        msb(0)
    with pytest.raises(ValueError):
        pop_lsb(0)


def test_pop_lsb_and_least_significant():
    b = bb("c3", "e5", "h8")
    s, rest = pop_lsb(b)
    assert s == sq("c3")
    assert rest == bb("e5", "h8")
    assert least_significant_square_bb(b) == square_bb(sq("c3"))


def test_iter_squares_matches_popcount():
    b = bb("a1", "d4", "h8", "b7")
    squares = list(iter_squares(b))
    assert squares == sorted(squares)
    assert len(squares) == popcount(b)
    assert sum(1 << s for s in squares) == b


def test_pretty():
    text = pretty(bb("a1", "h8"))
    lines = text.splitlines()
    assert lines[0] == "+---+---+---+---+---+---+---+---+"
    assert lines[1] == "|   |   |   |   |   |   |   | X | 8"
    assert lines[15] == "| X |   |   |   |   |   |   |   | 1"
    assert lines[-1] == "  a   b   c   d   e   f   g   h"
    assert text.count("X") == 2