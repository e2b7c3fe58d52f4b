"""
cube_state.py — Facelet state of a 3x3x3 cube
=============================================

`CubeState` stores the 54 stickers as one 9-element list per face
(F, R, U, B, L, D) and owns the move history. Moves are applied through the
table-driven engine in `moves.py`; scrambles draw uniformly from the 12
quarter turns.

Serialization (`serialize`) is the only contract with the renderer: the
faces in F,R,U,B,L,D order, each row-major, one colour letter per sticker.
`face_status` gives the kociemba facelet string (U,R,F,D,L,B order) used by
the solvability checks in `cube_solver.py`.

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from config import (
    CENTER_INDEX,
    COLOR_ORDER,
    FACE_ORDER,
    FACE_TO_COLOR,
    KOCIEMBA_FACE_ORDER,
)
from moves import ALL_MOVES, Move, apply_turn, parse_move, parse_sequence

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _solved_faces() -> Dict[str, List[str]]:
    return {face: [FACE_TO_COLOR[face]] * 9 for face in FACE_ORDER}


@dataclass
class CubeState:
    state: Dict[str, List[str]] = field(default_factory=_solved_faces)
    history: List[Move] = field(default_factory=list)

    # ----- construction -----

    @classmethod
    def from_string(cls, colors: str) -> "CubeState":
        """
        Build a state from a 54-char colour string in F,R,U,B,L,D order.
        Raises ValueError on wrong length or unknown colour letters.
        """
        if not isinstance(colors, str) or len(colors) != 54:
            raise ValueError("colors must be a 54-character string (F,R,U,B,L,D each 9 stickers).")
        bad = sorted(set(colors) - set(COLOR_ORDER))
        if bad:
            raise ValueError(f"Unknown colour letters: {bad}")
        faces = {face: list(colors[i * 9:(i + 1) * 9]) for i, face in enumerate(FACE_ORDER)}
        return cls(state=faces)

    def init_solved(self) -> None:
        """Set every face to its identity colour."""
        self.state = _solved_faces()

    def reset_state(self) -> None:
        """
        Reset to canonical solved state and clear the history.
        """
        self.init_solved()
        self.history = []

    def clone(self) -> "CubeState":
        return CubeState(
            state={face: list(stickers) for face, stickers in self.state.items()},
            history=list(self.history),
        )

    # ----- queries -----

    def is_solved(self) -> bool:
        return all(
            all(sticker == FACE_TO_COLOR[face] for sticker in self.state[face])
            for face in FACE_ORDER
        )

    def serialize(self) -> str:
        return "".join("".join(self.state[face]) for face in FACE_ORDER)

    def center(self, face: str) -> str:
        return self.state[face][CENTER_INDEX]

    def color_counts(self) -> Counter:
        return Counter(self.serialize())

    def is_well_formed(self) -> bool:
        """True if every colour appears exactly 9 times and the centres are distinct."""
        cnt = self.color_counts()
        if any(cnt.get(c, 0) != 9 for c in COLOR_ORDER):
            return False
        return len({self.center(f) for f in FACE_ORDER}) == 6

    @property
    def face_status(self) -> str:
        """
        Kociemba facelet string (U,R,F,D,L,B order); every sticker becomes the
        letter of the face whose centre carries its colour.
        Raises ValueError if the centres do not identify six distinct faces.
        """
        color_to_face: Dict[str, str] = {}
        for face in FACE_ORDER:
            c = self.center(face)
            if c in color_to_face:
                raise ValueError(
                    f"Duplicate center color {c!r} between {color_to_face[c]!r} and {face!r}"
                )
            color_to_face[c] = face
        return "".join(
            color_to_face.get(c, "?") for face in KOCIEMBA_FACE_ORDER for c in self.state[face]
        )

    # ----- moves -----

    def apply_move(self, move: Union[Move, str], record: bool = True) -> bool:
        """
        Apply one quarter turn. Unknown symbols are logged and ignored
        (state unchanged); returns True when the move was applied.
        """
        try:
            mv = parse_move(move)
        except ValueError:
            logger.warning("Invalid move: %r", move)
            return False
        apply_turn(self.state, mv)
        if record:
            self.history.append(mv)
        return True

    def apply_sequence(self, seq, record: bool = True) -> List[Move]:
        """
        Apply a whole sequence ("R U R' U'", "F2 B", list of tokens).
        Raises ValueError before touching the state if any token is invalid.
        """
        moves = parse_sequence(seq)
        for mv in moves:
            self.apply_move(mv, record=record)
        return moves

    def scramble(self, num_moves: int, rng: Optional[Union[random.Random, int]] = None) -> List[Move]:
        """
        Apply `num_moves` moves drawn uniformly (with replacement) from the 12
        quarter turns. Scramble moves are not recorded and the history is
        left empty. Pass a seed or a random.Random for reproducible scrambles.
        """
        if num_moves < 0:
            raise ValueError("num_moves must be >= 0")
        if rng is None or isinstance(rng, int):
            rng = random.Random(rng)
        self.history = []
        moves = [rng.choice(ALL_MOVES) for _ in range(num_moves)]
        for mv in moves:
            self.apply_move(mv, record=False)
        logger.info("Scrambled cube with %d moves: %s", num_moves, " ".join(str(m) for m in moves))
        return moves

    def __str__(self) -> str:
        return self.serialize()
