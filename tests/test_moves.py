import pytest

from moves import (
    ALL_MOVES,
    EDGE_BANDS,
    OPPOSITE_FACE,
    Move,
    invert_sequence,
    parse_move,
    parse_sequence,
    rotate_face,
)


def test_twelve_moves():
    assert len(ALL_MOVES) == 12
    assert {m.face for m in ALL_MOVES} == set("UDLRFB")
    assert [str(m) for m in ALL_MOVES][:2] == ["U", "U'"]


def test_rotate_face_clockwise_mapping():
    face = [str(i) for i in range(9)]
    assert rotate_face(face, True) == ['6', '3', '0', '7', '4', '1', '8', '5', '2']


def test_rotate_face_ccw_is_inverse():
    face = [str(i) for i in range(9)]
    assert rotate_face(rotate_face(face, True), False) == face
    assert rotate_face(rotate_face(face, False), True) == face


def test_rotate_face_four_times_identity():
    face = [str(i) for i in range(9)]
    out = face
    for _ in range(4):
        out = rotate_face(out)
    assert out == face


@pytest.mark.parametrize("face", list(EDGE_BANDS))
def test_edge_bands_touch_only_neighbours(face):
    bands = EDGE_BANDS[face]
    assert len(bands) == 4
    stickers = {(f, i) for f, idx in bands for i in idx}
    assert len(stickers) == 12
    touched = {f for f, _ in bands}
    assert face not in touched
    assert OPPOSITE_FACE[face] not in touched
    assert all(4 not in idx for _, idx in bands)


def test_parse_move_variants():
    assert parse_move("R") is Move.R
    assert parse_move("R'") is Move.R_PRIME
    assert parse_move("R_PRIME") is Move.R_PRIME
    assert parse_move(Move.B) is Move.B


@pytest.mark.parametrize("bad", ["R2", "X", "", "r", "RR", None, 3])
def test_parse_move_rejects(bad):
    with pytest.raises(ValueError):
        parse_move(bad)


def test_parse_sequence_expands_half_turns():
    assert parse_sequence("R U2, F'") == [Move.R, Move.U, Move.U, Move.F_PRIME]
    assert parse_sequence(["L", "D'"]) == [Move.L, Move.D_PRIME]
    assert parse_sequence("") == []


def test_parse_sequence_rejects_whole_sequence():
    with pytest.raises(ValueError):
        parse_sequence("R U Q")


def test_inverse_and_invert_sequence():
    for m in ALL_MOVES:
        assert m.inverse.inverse is m
        assert m.inverse.face == m.face
        assert m.inverse.clockwise != m.clockwise
    assert invert_sequence([Move.R, Move.U]) == [Move.U_PRIME, Move.R_PRIME]
