"""config.py — project configuration
------------------------------------

This file centralizes default runtime constants for the layer-by-layer cube
simulator. Keep in mind these are *defaults* for development; the entry point
(`main.py`) overrides a few of them from command-line flags.

Notes / warnings
- Face and colour tables below define the facelet convention used by every
  other module. Changing them silently breaks the move tables in `moves.py`.
- Paths are computed relative to this file so the app can be started from any
  working directory.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from pathlib import Path
from typing import Dict, List, Tuple

# ---------------- Rubik cube configurations ----------------

# Face order of the serialized 54-character colour string (render contract).
FACE_ORDER: List[str] = ['F', 'R', 'U', 'B', 'L', 'D']

# Identity colour of every face (its centre sticker never moves).
FACE_TO_COLOR: Dict[str, str] = {'F': 'r', 'R': 'g', 'U': 'y', 'B': 'o', 'L': 'b', 'D': 'w'}

COLOR_ORDER: List[str] = ['r', 'g', 'y', 'o', 'b', 'w']
COLOR_NAMES: Dict[str, str] = {
    'r': 'red',
    'g': 'green',
    'y': 'yellow',
    'o': 'orange',
    'b': 'blue',
    'w': 'white',
}

# 54-char solved layout in FACE_ORDER, row-major per face.
COLOR_INIT_STATE: str = "".join(FACE_TO_COLOR[f] * 9 for f in FACE_ORDER)

# Face order expected by kociemba and its facelet string of a solved cube.
KOCIEMBA_FACE_ORDER: List[str] = ['U', 'R', 'F', 'D', 'L', 'B']
FACES_INIT_STATE: str = "UUUUUUUUURRRRRRRRRFFFFFFFFFDDDDDDDDDLLLLLLLLLBBBBBBBBB"

CENTER_INDEX: int = 4

# ---------------- Solver ----------------

# Attempts allowed per cross edge before the edge is reported as failed.
# The insertion procedure needs at most 3, the rest is headroom.
CROSS_ATTEMPT_BUDGET: int = 20

DEFAULT_SCRAMBLE_MOVES: int = 20

# Seconds the presentation layer waits between narrated solve steps.
STEP_DELAY: float = 0.5


# ---------------- Rendering ----------------

# BGR colours used by the raster net (OpenCV convention).
COLOR_TO_BGR: Dict[str, Tuple[int, int, int]] = {
    'r': (30, 30, 200),
    'g': (0, 150, 40),
    'b': (180, 50, 0),
    'y': (0, 200, 200),
    'o': (10, 120, 230),
    'w': (220, 220, 220),
    'x': (104, 85, 74),
    'z': (104, 85, 74),
}
UNKNOWN_BGR: Tuple[int, int, int] = (128, 128, 128)

# CSS colours used by the SVG renderer; x and z mark faces that are not drawn.
COLOR_TO_CSS: Dict[str, str] = {
    'r': 'red',
    'g': 'green',
    'b': 'blue',
    'y': 'yellow',
    'o': 'orange',
    'w': 'white',
    'x': '#4A5568',
    'z': '#4A5568',
}

SVG_PIECE_SIZE: int = 30
SVG_GAP: int = 2
NET_TILE_SIZE: int = 24
NET_TILE_GAP: int = 4


# ---------------- Filesystem paths ----------------
ROOT = Path(__file__).resolve().parent
TEMPLATES_DIR = ROOT / "templates"
DEFAULT_HTML = TEMPLATES_DIR / "index.html"


# ---------------- Preview server ----------------

# Local Flask server used by the UI for cube previews (SVG/PNG) and for
# scripted move/scramble requests during development.
PREVIEW_HOST = "127.0.0.1"
PREVIEW_PORT = 5001
