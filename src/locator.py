"""
locator.py — find where a two-coloured edge piece currently sits.

The 12 edge slots are listed once each as a pair of adjacent stickers. A
well-formed cube has exactly one slot matching any real colour pair, so a
second match means the state is corrupted and is reported as an error.
"""

import logging
from typing import List, Optional, Tuple

from app_types import CubeStateError, EdgeLocation

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# (face, index) paired with the geometrically adjacent (face, index)
EDGE_POSITIONS: List[Tuple[Tuple[str, int], Tuple[str, int]]] = [
    (('F', 1), ('U', 7)),
    (('F', 3), ('L', 5)),
    (('F', 5), ('R', 3)),
    (('F', 7), ('D', 1)),
    (('R', 1), ('U', 5)),
    (('R', 5), ('B', 3)),
    (('R', 7), ('D', 5)),
    (('B', 1), ('U', 1)),
    (('B', 5), ('L', 3)),
    (('B', 7), ('D', 7)),
    (('L', 1), ('U', 3)),
    (('L', 7), ('D', 3)),
]


def find_edge(cube, color_a: str, color_b: str) -> Optional[EdgeLocation]:
    """
    Locate the edge piece showing `color_a` and `color_b`.

    Returns an EdgeLocation whose face_a/index_a holds `color_a`, or None when
    no slot matches (the pair is not a real edge). Raises CubeStateError if
    more than one slot matches.
    """
    matches: List[EdgeLocation] = []
    for (f1, i1), (f2, i2) in EDGE_POSITIONS:
        c1 = cube.state[f1][i1]
        c2 = cube.state[f2][i2]
        if c1 == color_a and c2 == color_b:
            matches.append(EdgeLocation(f1, i1, f2, i2))
        elif c1 == color_b and c2 == color_a:
            matches.append(EdgeLocation(f2, i2, f1, i1))

    if len(matches) > 1:
        raise CubeStateError(
            f"Edge {color_a}-{color_b} found in {len(matches)} places: {matches}"
        )
    if not matches:
        logger.debug("Edge %s-%s not found", color_a, color_b)
        return None
    return matches[0]


def edge_at(face: str, index: int) -> Optional[EdgeLocation]:
    """Return the edge slot containing sticker (face, index), oriented from that sticker."""
    for (f1, i1), (f2, i2) in EDGE_POSITIONS:
        if (f1, i1) == (face, index):
            return EdgeLocation(f1, i1, f2, i2)
        if (f2, i2) == (face, index):
            return EdgeLocation(f2, i2, f1, i1)
    return None
