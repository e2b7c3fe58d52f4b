"""
moves.py — quarter-turn move engine
===================================

Every move is built from two primitives:

* a 90° rotation of the turned face's own 9 stickers (`rotate_face`), and
* a 4-way cycle of the 3-sticker bands that the turned face shares with its
  four neighbours (`cycle_bands`).

The band tables follow the facelet convention of `config.py`: side faces are
read with U on top, U is read with B on top and D with F on top. Each table
lists the bands in the order stickers travel during a clockwise turn (seen
from outside the turned face), with the indices of consecutive bands aligned
sticker-for-sticker.

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, MutableMapping, Tuple

# mapping: _ROT_MAP[r][i] = source index (0..8) of sticker that should go to position i
_ROT_MAP = {
    0: [0, 1, 2, 3, 4, 5, 6, 7, 8],  # 0°
    1: [6, 3, 0, 7, 4, 1, 8, 5, 2],  # 90° CW
    2: [8, 7, 6, 5, 4, 3, 2, 1, 0],  # 180°
    3: [2, 5, 8, 1, 4, 7, 0, 3, 6],  # 270° CW (= 90° CCW)
}

Band = Tuple[str, Tuple[int, int, int]]

EDGE_BANDS: Dict[str, Tuple[Band, Band, Band, Band]] = {
    'U': (('F', (0, 1, 2)), ('L', (0, 1, 2)), ('B', (0, 1, 2)), ('R', (0, 1, 2))),
    'D': (('F', (6, 7, 8)), ('R', (6, 7, 8)), ('B', (6, 7, 8)), ('L', (6, 7, 8))),
    'R': (('F', (2, 5, 8)), ('U', (2, 5, 8)), ('B', (6, 3, 0)), ('D', (2, 5, 8))),
    'L': (('U', (0, 3, 6)), ('F', (0, 3, 6)), ('D', (0, 3, 6)), ('B', (8, 5, 2))),
    'F': (('U', (6, 7, 8)), ('R', (0, 3, 6)), ('D', (2, 1, 0)), ('L', (8, 5, 2))),
    'B': (('U', (2, 1, 0)), ('L', (0, 3, 6)), ('D', (6, 7, 8)), ('R', (8, 5, 2))),
}

OPPOSITE_FACE: Dict[str, str] = {'U': 'D', 'D': 'U', 'L': 'R', 'R': 'L', 'F': 'B', 'B': 'F'}


class Move(Enum):
    U = "U"
    U_PRIME = "U'"
    D = "D"
    D_PRIME = "D'"
    L = "L"
    L_PRIME = "L'"
    R = "R"
    R_PRIME = "R'"
    F = "F"
    F_PRIME = "F'"
    B = "B"
    B_PRIME = "B'"

    def __str__(self) -> str:
        return self.value

    @property
    def face(self) -> str:
        return MOVE_TABLE[self][0]

    @property
    def clockwise(self) -> bool:
        return MOVE_TABLE[self][1]

    @property
    def inverse(self) -> "Move":
        return turn(self.face, not self.clockwise)


# Move -> (face, clockwise)
MOVE_TABLE: Dict[Move, Tuple[str, bool]] = {m: (m.value[0], not m.value.endswith("'")) for m in Move}
_BY_FACE: Dict[Tuple[str, bool], Move] = {v: k for k, v in MOVE_TABLE.items()}

ALL_MOVES: List[Move] = list(Move)

_TOKEN_RE = re.compile(r"^([UDLRFB])(2|'|_PRIME)?$")


def turn(face: str, clockwise: bool = True) -> Move:
    """Return the quarter-turn move for a face letter and direction."""
    try:
        return _BY_FACE[(face, clockwise)]
    except KeyError:
        raise ValueError(f"Unknown face: {face!r}") from None


def parse_move(token) -> Move:
    """
    Convert a single quarter-turn token into a Move.

    Accepts Move instances, "R", "R'" and the "R_PRIME" spelling.
    Raises ValueError for anything else (including half turns such as "R2").
    """
    if isinstance(token, Move):
        return token
    if not isinstance(token, str):
        raise ValueError(f"Unknown move token: {token!r}")
    m = _TOKEN_RE.match(token.strip())
    if not m or m.group(2) == "2":
        raise ValueError(f"Unknown move token: {token!r}")
    return turn(m.group(1), m.group(2) is None)


def parse_sequence(seq) -> List[Move]:
    """
    Parse a move sequence ("R U R' U'", "R, U2" or an iterable of tokens).
    Half turns ("U2") expand to two quarter turns. The whole sequence is
    rejected with ValueError if any token is invalid.
    """
    if isinstance(seq, str):
        tokens = [t for t in re.split(r"[\s,]+", seq.strip()) if t]
    else:
        tokens = list(seq)
    moves: List[Move] = []
    for tok in tokens:
        if isinstance(tok, str):
            m = _TOKEN_RE.match(tok.strip())
            if m and m.group(2) == "2":
                quarter = turn(m.group(1), True)
                moves.extend([quarter, quarter])
                continue
        moves.append(parse_move(tok))
    return moves


def invert_sequence(moves: List[Move]) -> List[Move]:
    return [m.inverse for m in reversed(moves)]


def rotate_face(stickers: List[str], clockwise: bool = True) -> List[str]:
    """Return the 9 stickers of a face after a 90° turn."""
    small_map = _ROT_MAP[1] if clockwise else _ROT_MAP[3]
    return [stickers[src] for src in small_map]


def cycle_bands(state: MutableMapping[str, List[str]], face: str, clockwise: bool = True) -> None:
    """Cycle, in place, the four neighbour bands touched by a turn of `face`."""
    bands = EDGE_BANDS[face]
    values = [[state[f][i] for i in idx] for f, idx in bands]
    shift = 1 if clockwise else -1
    for k, (f, idx) in enumerate(bands):
        # clockwise: each band takes the previous band's stickers
        src = values[(k - shift) % 4]
        for i, color in zip(idx, src):
            state[f][i] = color


def apply_turn(state: MutableMapping[str, List[str]], move: Move) -> None:
    """Apply one quarter turn to a face->stickers mapping, in place."""
    face, clockwise = MOVE_TABLE[move]
    state[face] = rotate_face(state[face], clockwise)
    cycle_bands(state, face, clockwise)
