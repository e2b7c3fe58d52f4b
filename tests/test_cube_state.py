import random

import pytest

from config import COLOR_INIT_STATE, COLOR_ORDER, FACE_ORDER, FACE_TO_COLOR, FACES_INIT_STATE
from cube_state import CubeState
from moves import ALL_MOVES, Move, OPPOSITE_FACE, turn


def test_starts_solved(cube):
    assert cube.is_solved()
    assert cube.serialize() == COLOR_INIT_STATE
    assert COLOR_INIT_STATE == "r" * 9 + "g" * 9 + "y" * 9 + "o" * 9 + "b" * 9 + "w" * 9
    assert cube.history == []


def test_init_solved_after_moves(cube):
    cube.apply_sequence("R U F")
    assert not cube.is_solved()
    cube.init_solved()
    assert cube.is_solved()


def test_clone_is_independent(cube):
    copy = cube.clone()
    copy.apply_move("R")
    assert cube.is_solved()
    assert not copy.is_solved()
    cube.state['F'][0] = 'w'
    assert copy.state['F'][0] == 'r'


@pytest.mark.parametrize("move", ALL_MOVES, ids=str)
def test_single_turn_unsolves(cube, move):
    cube.apply_move(move)
    assert not cube.is_solved()


@pytest.mark.parametrize("move", ALL_MOVES, ids=str)
def test_inverse_law(scrambled, move):
    c = scrambled(7)
    before = c.serialize()
    c.apply_move(move)
    c.apply_move(move.inverse)
    assert c.serialize() == before


@pytest.mark.parametrize("move", ALL_MOVES, ids=str)
def test_order_four(scrambled, move):
    c = scrambled(11)
    before = c.serialize()
    for _ in range(4):
        c.apply_move(move)
    assert c.serialize() == before


@pytest.mark.parametrize("face", ["U", "L", "F"])
@pytest.mark.parametrize("cw_a,cw_b", [(True, True), (True, False), (False, False)])
def test_opposite_faces_commute(scrambled, face, cw_a, cw_b):
    a = turn(face, cw_a)
    b = turn(OPPOSITE_FACE[face], cw_b)
    c1 = scrambled(3)
    c2 = c1.clone()
    c1.apply_move(a)
    c1.apply_move(b)
    c2.apply_move(b)
    c2.apply_move(a)
    assert c1.serialize() == c2.serialize()


def test_adjacent_faces_do_not_commute(cube):
    c2 = cube.clone()
    cube.apply_sequence("R U")
    c2.apply_sequence("U R")
    assert cube.serialize() != c2.serialize()


@pytest.mark.parametrize("seed", range(10))
def test_sticker_conservation(seed):
    rng = random.Random(seed)
    c = CubeState()
    for n in (1, 2, 5, 13, 40):
        c.scramble(n, rng)
        counts = c.color_counts()
        assert all(counts[color] == 9 for color in COLOR_ORDER)
        assert c.is_well_formed()


def test_centers_never_move(scrambled):
    c = scrambled(5, 60)
    for face in FACE_ORDER:
        assert c.center(face) == FACE_TO_COLOR[face]


def test_u_turn_direction(cube):
    # a clockwise U carries the right face's top row onto the front
    cube.apply_move(Move.U)
    assert cube.state['F'][:3] == ['g'] * 3
    assert cube.state['L'][:3] == ['r'] * 3
    assert cube.state['F'][3:] == ['r'] * 6


def test_f_turn_direction(cube):
    cube.apply_move(Move.F)
    assert [cube.state['R'][i] for i in (0, 3, 6)] == ['y'] * 3
    assert cube.state['D'][:3] == ['g'] * 3
    assert [cube.state['L'][i] for i in (2, 5, 8)] == ['w'] * 3
    assert cube.state['U'][6:] == ['b'] * 3


def test_r_turn_matches_kociemba_facelets(cube):
    cube.apply_move(Move.R)
    assert cube.face_status == "UUFUUFUUFRRRRRRRRRFFDFFDFFDDDBDDBDDBLLLLLLLLLUBBUBBUBB"


def test_face_status_solved(cube):
    assert cube.face_status == FACES_INIT_STATE


def test_sexy_move_has_order_six(cube):
    for _ in range(4):
        cube.apply_sequence("R U R' U'")
    assert not cube.is_solved()
    cube.reset_state()
    for _ in range(6):
        cube.apply_sequence("R U R' U'")
    assert cube.is_solved()


def test_f_then_f_prime_restores(cube):
    before = cube.serialize()
    cube.apply_move("F")
    cube.apply_move("F'")
    assert cube.serialize() == before
    assert cube.history == [Move.F, Move.F_PRIME]


def test_invalid_move_is_ignored(cube, caplog):
    cube.apply_move("R")
    before = cube.serialize()
    assert cube.apply_move("Q") is False
    assert cube.apply_move("R2") is False
    assert cube.serialize() == before
    assert cube.history == [Move.R]
    assert "Invalid move" in caplog.text


def test_record_flag(cube):
    cube.apply_move("U", record=False)
    assert cube.history == []
    cube.apply_move("U_PRIME")
    assert cube.history == [Move.U_PRIME]
    assert cube.is_solved()


def test_apply_sequence_is_atomic(cube):
    with pytest.raises(ValueError):
        cube.apply_sequence("R U Z")
    assert cube.is_solved()
    assert cube.history == []


def test_half_turn_is_two_quarter_turns(cube):
    c2 = cube.clone()
    cube.apply_sequence("F2")
    c2.apply_sequence("F F")
    assert cube.serialize() == c2.serialize()


def test_scramble_is_reproducible_with_seed():
    a, b = CubeState(), CubeState()
    moves_a = a.scramble(30, 1234)
    moves_b = b.scramble(30, 1234)
    assert moves_a == moves_b
    assert a.serialize() == b.serialize()
    assert len(moves_a) == 30


def test_scramble_clears_history(cube):
    cube.apply_sequence("R U")
    cube.scramble(10, 1)
    assert cube.history == []


def test_scramble_zero_and_negative(cube):
    assert cube.scramble(0) == []
    assert cube.is_solved()
    with pytest.raises(ValueError):
        cube.scramble(-1)


def test_from_string_round_trip(scrambled):
    c = scrambled(9)
    assert CubeState.from_string(c.serialize()).serialize() == c.serialize()


@pytest.mark.parametrize("bad", ["r" * 53, "q" * 54, None])
def test_from_string_rejects(bad):
    with pytest.raises(ValueError):
        CubeState.from_string(bad)


def test_face_status_rejects_duplicate_centers():
    colors = list(COLOR_INIT_STATE)
    colors[4] = 'g'  # F centre now matches R
    c = CubeState.from_string("".join(colors))
    assert not c.is_well_formed()
    with pytest.raises(ValueError):
        _ = c.face_status
