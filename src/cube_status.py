"""
cube_status.py — session object owned by the pywebview API
===========================================================

`CubeStatus` bundles the current cube, the solver and the "solve in progress"
flag, and exposes the interactive command surface: the 12 quarter turns,
scramble, reset and solve. Messages for the user go through a status sink
`status(message, in_progress)`; the default sink just logs them.

Solving is cooperative: `start_solve()` prepares the step generator and every
`next_step()` call advances it by one narrated step, so the frontend controls
the pacing. `solve()` drains it in one go (optionally sleeping between steps).
While a solve is in progress, moves and scrambles are rejected.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from app_types import SolutionStep, SolveResult
from config import DEFAULT_SCRAMBLE_MOVES
from cube_solver import CubeSolver
from cube_state import CubeState
from moves import Move
from renderer import encode_png, render_net, render_svg

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

StatusSink = Callable[[str, bool], None]


def log_status(message: str, in_progress: bool = False) -> None:
    logger.info("[status]%s %s", " (in progress)" if in_progress else "", message)


class CubeStatus:
    def __init__(self, cube: Optional[CubeState] = None, solver: Optional[CubeSolver] = None,
                 status_sink: Optional[StatusSink] = None, seed: Optional[int] = None):
        self.cube = cube if cube is not None else CubeState()
        self.solver = solver if solver is not None else CubeSolver()
        self.status = status_sink or log_status
        self.rng = random.Random(seed)

        self.in_progress: bool = False
        self._steps: Optional[Iterator[SolutionStep]] = None
        self.last_steps: List[SolutionStep] = []

    # ----- commands -----

    def _busy(self, what: str) -> bool:
        if self.in_progress:
            self.status(f"Solve in progress; {what} ignored.", True)
            return True
        return False

    def move(self, symbol: Union[Move, str]) -> bool:
        if self._busy("move"):
            return False
        ok = self.cube.apply_move(symbol)
        if ok:
            self.status(f"Applied {symbol}", False)
        else:
            self.status(f"Invalid move: {symbol}", False)
        return ok

    def apply_sequence(self, seq) -> bool:
        if self._busy("sequence"):
            return False
        try:
            moves = self.cube.apply_sequence(seq)
        except ValueError as e:
            self.status(str(e), False)
            return False
        self.status(f"Applied {' '.join(map(str, moves))}", False)
        return True

    def scramble(self, num_moves: int = DEFAULT_SCRAMBLE_MOVES) -> List[Move]:
        if self._busy("scramble"):
            return []
        moves = self.cube.scramble(int(num_moves), self.rng)
        self.status(f"Scrambled cube with {len(moves)} moves.", False)
        return moves

    def reset(self) -> None:
        self.abandon_solve()
        self.cube.reset_state()
        self.status("Cube reset.", False)

    # ----- solving -----

    def start_solve(self) -> bool:
        if self._busy("solve"):
            return False
        self._steps = self.solver.steps(self.cube)
        self.last_steps = []
        self.in_progress = True
        self.status("Solving...", True)
        return True

    def next_step(self) -> Optional[SolutionStep]:
        """Advance the running solve by one step; None once it has finished."""
        if self._steps is None:
            return None
        try:
            step = next(self._steps)
        except StopIteration:
            self._finish()
            return None
        self.last_steps.append(step)
        self.status(step.description, True)
        return step

    def _finish(self) -> None:
        self._steps = None
        self.in_progress = False
        if self.cube.is_solved():
            self.status("Cube solved!", False)
        else:
            self.status("Solve incomplete: only the white cross is automated.", False)

    def abandon_solve(self) -> None:
        """Drop a running solve; the cube keeps the moves applied so far."""
        if self._steps is not None:
            self._steps.close()
            self._steps = None
        self.in_progress = False

    def solve(self, step_delay: float = 0.0,
              on_step: Optional[Callable[[SolutionStep], None]] = None) -> SolveResult:
        if not self.start_solve():
            return SolveResult(solved=False, message="Solve already in progress")
        while True:
            step = self.next_step()
            if step is None:
                break
            if on_step is not None:
                on_step(step)
            if step_delay > 0:
                time.sleep(step_delay)
        solved = self.cube.is_solved()
        return SolveResult(solved=solved, message="Solved" if solved else "Incomplete",
                           steps=list(self.last_steps))

    # ----- queries -----

    def hint(self) -> Optional[str]:
        return self.solver.suggest_solution(self.cube)

    def validate(self) -> Tuple[bool, str]:
        return self.solver.validate_state(self.cube)

    def render_svg(self) -> str:
        return render_svg(self.cube.serialize())

    def render_png(self) -> bytes:
        return encode_png(render_net(self.cube.serialize()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.cube.serialize(),
            "solved": self.cube.is_solved(),
            "history": [str(m) for m in self.cube.history],
            "in_progress": self.in_progress,
        }
