"""
cube_solver.py — Narrated layer-by-layer solver with kociemba hints
===================================================================

This module drives the beginner (layer-by-layer) method on a `CubeState` and
narrates every attempt as a `SolutionStep`. Steps are produced by a generator
so the caller decides the pacing: the UI pulls one step at a time, tests simply
drain it.

### Core Classes

* **SolvePhase**: one stage of the method. Only the white cross is worked out;
  the remaining stages are `PlaceholderPhase` instances that narrate
  "(To be implemented)". A real implementation replaces a placeholder without
  touching the state, move or locator modules.

* **WhiteCrossPhase**: seats the four D-layer edges one at a time. Every
  attempt classifies where the piece is and applies one short sequence:

    - bottom layer, wrong slot or flipped: ``X X`` lifts it to the top layer,
    - middle layer between X and its right neighbour Y: ``Y U Y'``,
    - top layer: ``U`` turns bring it next to its slot, then ``T T`` or,
      when it would land flipped, ``Y' T Y`` with Y right of T.

  None of these sequences moves another D-layer edge, so an edge needs at most
  three attempts from any position; the attempt budget only guards against a
  corrupted state.

* **CubeSolver**: runs the phases and wraps kociemba for solvability checks
  and optimal-move hints (cached per facelet string).

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import logging
from typing import Dict, Generator, Iterable, Iterator, List, Optional, Tuple

import kociemba

from app_types import CubeStateError, EdgeLocation, SolutionStep, SolveResult
from config import COLOR_NAMES, COLOR_ORDER, CROSS_ATTEMPT_BUDGET, FACE_TO_COLOR
from locator import edge_at, find_edge
from moves import Move, turn

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

CROSS_FACES: List[str] = ['F', 'R', 'B', 'L']

# side face to the right of each side face, seen from above
RIGHT_OF: Dict[str, str] = {'F': 'R', 'R': 'B', 'B': 'L', 'L': 'F'}

# a clockwise U carries a top-layer edge from the key face to the value face
U_CARRIES_TO: Dict[str, str] = {'R': 'F', 'F': 'L', 'L': 'B', 'B': 'R'}


def _step(cube, description: str, moves: Iterable[Move] = ()) -> SolutionStep:
    return SolutionStep(description=description, moves=tuple(moves), snapshot=cube.serialize())


def _edge_label(color_a: str, color_b: str) -> str:
    return f"{COLOR_NAMES[color_a].upper()}-{COLOR_NAMES[color_b].upper()}"


def align_top_edge(src: str, dst: str) -> List[Move]:
    """U turns that carry a top-layer edge from side face `src` to side face `dst`."""
    k = 0
    face = src
    while face != dst:
        face = U_CARRIES_TO[face]
        k += 1
    if k == 3:
        return [Move.U_PRIME]
    return [Move.U] * k


# -----------------------
# Phases
# -----------------------

class SolvePhase:
    """One stage of the layer-by-layer method."""

    title: str = ""

    def run(self, cube) -> Iterator[SolutionStep]:
        raise NotImplementedError


class PlaceholderPhase(SolvePhase):
    """Stage not implemented yet; narrates itself and leaves the cube untouched."""

    def __init__(self, title: str, outline: str = ""):
        self.title = title
        self.outline = outline

    def run(self, cube) -> Iterator[SolutionStep]:
        logger.debug("Skipping %s; outline: %s", self.title, self.outline)
        yield _step(cube, f"{self.title} (To be implemented)")


class WhiteCrossPhase(SolvePhase):
    title = "Phase 1: Solving the White Cross"

    def __init__(self, attempt_budget: int = CROSS_ATTEMPT_BUDGET):
        self.attempt_budget = attempt_budget

    def run(self, cube) -> Iterator[SolutionStep]:
        yield _step(cube, self.title)
        placed = 0
        for face in CROSS_FACES:
            ok = yield from self.solve_edge(cube, face)
            if ok:
                placed += 1
        if placed == len(CROSS_FACES):
            yield _step(cube, "White Cross Solved!")
        else:
            yield _step(cube, f"White cross incomplete: {placed}/{len(CROSS_FACES)} edges placed.")

    @staticmethod
    def is_seated(cube, face: str) -> bool:
        slot = edge_at(face, 7)
        return (cube.state[face][7] == FACE_TO_COLOR[face]
                and cube.state['D'][slot.index_b] == FACE_TO_COLOR['D'])

    def solve_edge(self, cube, face: str) -> Generator[SolutionStep, None, bool]:
        """Seat the edge between `face` and D. Returns True once it is correctly placed."""
        color = FACE_TO_COLOR[face]
        down = FACE_TO_COLOR['D']
        label = _edge_label(color, down)

        attempts = 0
        while True:
            if self.is_seated(cube, face):
                yield _step(cube, f"Edge {label} is correctly placed.")
                return True
            if attempts >= self.attempt_budget:
                logger.warning("Cross edge %s not placed after %d attempts", label, attempts)
                yield _step(cube, f"Could not place {label} edge after {attempts} attempts.")
                return False
            attempts += 1

            try:
                loc = find_edge(cube, color, down)
            except CubeStateError as e:
                logger.error("Corrupted cube state: %s", e)
                yield _step(cube, f"Error: {label} edge piece found more than once.")
                return False
            if loc is None:
                yield _step(cube, f"Error: Could not find {label} edge piece.")
                return False

            moves, detail = self.plan(face, loc)
            for mv in moves:
                cube.apply_move(mv)
            logger.debug("Cross %s attempt %d: %s", label, attempts, " ".join(map(str, moves)))
            yield _step(cube, f"Placing {label} edge. {detail}", moves)

    @staticmethod
    def plan(face: str, loc: EdgeLocation) -> Tuple[List[Move], str]:
        """
        Moves for one attempt on the edge whose target colour is at loc.face_a
        and whose down colour is at loc.face_b.
        """
        if loc.touches('D'):
            side = loc.other_face('D')
            return [turn(side), turn(side)], f"Lifting it out of the bottom layer with {side}2."

        if loc.touches('U'):
            side = loc.other_face('U')
            if loc.face_a == side:
                # target colour faces sideways: a half turn seats it
                moves = align_top_edge(side, face) + [turn(face), turn(face)]
                return moves, f"Aligning it above its slot and inserting with {face}2."
            right = RIGHT_OF[face]
            moves = align_top_edge(side, right) + [turn(right, False), turn(face), turn(right)]
            return moves, f"Inserting it flipped from the {right} side."

        left = loc.face_a if loc.index_a == 5 else loc.face_b
        right = RIGHT_OF[left]
        moves = [turn(right), Move.U, turn(right, False)]
        return moves, f"Moving it from the middle layer ({left}-{right}) to the top layer."


def default_phases() -> List[SolvePhase]:
    return [
        WhiteCrossPhase(),
        PlaceholderPhase(
            "Phase 2: Solving White Corners",
            "Bring each white corner to the U layer above its slot and repeat R U R' U' until seated.",
        ),
        PlaceholderPhase(
            "Phase 3: Solving Middle Layer Edges",
            "Align a non-yellow U-layer edge with its centre and insert it left or right.",
        ),
        PlaceholderPhase(
            "Phase 4: Orienting Last Layer Edges (Yellow Cross)",
            "F R U R' U' F' from the dot, L-shape or line case.",
        ),
        PlaceholderPhase(
            "Phase 5: Orienting Last Layer Corners",
            "Sune (R U R' U R U2 R') or anti-Sune until the U face is yellow.",
        ),
        PlaceholderPhase(
            "Phase 6: Permuting Last Layer Corners",
            "T-permutation or corner 3-cycles.",
        ),
        PlaceholderPhase(
            "Phase 7: Permuting Last Layer Edges",
            "U-permutations cycling three edges.",
        ),
    ]


# -----------------------
# Solver
# -----------------------

class CubeSolver:
    def __init__(self, phases: Optional[List[SolvePhase]] = None):
        self.phases: List[SolvePhase] = phases if phases is not None else default_phases()
        self._solve_cache: Dict[str, Optional[str]] = {}

    def steps(self, cube) -> Iterator[SolutionStep]:
        """
        Run every phase on `cube` (mutating it) and yield the narrated steps.
        The last step states whether the cube ended up solved.
        """
        if cube.is_solved():
            yield _step(cube, "Cube is already solved!")
            return

        cube.history = []
        yield _step(cube, "Starting solution algorithm...")

        for phase in self.phases:
            yield from phase.run(cube)
            if cube.is_solved():
                yield _step(cube, "Cube Solved! Congratulations!")
                return

        yield _step(
            cube,
            "Could not fully solve the cube. (Algorithm incomplete or encountered an unhandled state)",
        )

    def solve(self, cube) -> SolveResult:
        steps = list(self.steps(cube))
        solved = cube.is_solved()
        message = "Solved" if solved else "Incomplete"
        logger.info("Layer-by-layer solve finished: %s (%d steps, %d moves)",
                    message, len(steps), len(cube.history))
        return SolveResult(solved=solved, message=message, steps=steps)

    # ----- kociemba -----

    def _solve(self, facelets: str) -> Optional[str]:
        """
        Solve using kociemba (with caching).
        Returns solution string or None on failure.
        """
        if facelets in self._solve_cache:
            logger.debug("Solver cache hit for facelets")
            return self._solve_cache[facelets]
        try:
            sol = kociemba.solve(facelets)
        except Exception as e:
            logger.debug("kociemba rejected facelets %s: %s", facelets, e)
            sol = None
        self._solve_cache[facelets] = sol
        return sol

    def validate_state(self, cube) -> Tuple[bool, str]:
        """
        Check that `cube` is a reachable state.
        Returns (ok, message).
        """
        counts = cube.color_counts()
        if any(counts.get(c, 0) != 9 for c in COLOR_ORDER):
            return False, f"Not all colors appear 9 times: {dict(counts)}"
        try:
            facelets = cube.face_status
        except ValueError as e:
            return False, str(e)
        if cube.is_solved():
            return True, "Cube OK"
        if self._solve(facelets) is None:
            return False, "kociemba rejected the state (twist, flip or parity error)"
        return True, "Cube OK"

    def suggest_solution(self, cube) -> Optional[str]:
        """Kociemba move string that solves `cube`, "" if already solved, None if unsolvable."""
        if cube.is_solved():
            return ""
        try:
            facelets = cube.face_status
        except ValueError as e:
            logger.warning("Cannot build facelets: %s", e)
            return None
        return self._solve(facelets)

    def clear_cache(self) -> None:
        """Clear the internal solve cache."""
        self._solve_cache.clear()
