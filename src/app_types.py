from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


class CubeStateError(Exception):
    """Raised when a cube state breaks a structural invariant (e.g. an edge found twice)."""
    pass


@dataclass(frozen=True)
class EdgeLocation:
    """Where an edge piece sits: colour A is on face_a/index_a, colour B on face_b/index_b."""
    face_a: str
    index_a: int
    face_b: str
    index_b: int

    @property
    def faces(self) -> Tuple[str, str]:
        return (self.face_a, self.face_b)

    def touches(self, face: str) -> bool:
        return face in self.faces

    def index_on(self, face: str) -> Optional[int]:
        if face == self.face_a:
            return self.index_a
        if face == self.face_b:
            return self.index_b
        return None

    def other_face(self, face: str) -> Optional[str]:
        if face == self.face_a:
            return self.face_b
        if face == self.face_b:
            return self.face_a
        return None


@dataclass(frozen=True)
class SolutionStep:
    description: str
    moves: Tuple[Any, ...] = ()
    snapshot: Optional[str] = None  # 54-char serialized state after the step

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "moves": [str(m) for m in self.moves],
            "state": self.snapshot,
        }


@dataclass
class SolveResult:
    solved: bool
    message: str
    steps: list = field(default_factory=list)
