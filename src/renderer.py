"""
renderer.py — render sinks for the 54-char colour string
========================================================

Two renderers consume `CubeState.serialize()` output (F,R,U,B,L,D order,
row-major, one letter per sticker):

* `render_svg`: the front view (U above F, R beside F) as an SVG document.
* `render_net`: the full unfolded net as a BGR numpy image drawn with OpenCV;
  `encode_png` turns it into bytes for the preview server.

A string of the wrong length never raises: both renderers return a visible
ERROR placeholder instead.
"""

import logging
from typing import Dict, Tuple

import cv2
import numpy as np

from config import (
    COLOR_TO_BGR,
    COLOR_TO_CSS,
    FACE_ORDER,
    NET_TILE_GAP,
    NET_TILE_SIZE,
    SVG_GAP,
    SVG_PIECE_SIZE,
    UNKNOWN_BGR,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

FACE_OFFSETS: Dict[str, int] = {face: i * 9 for i, face in enumerate(FACE_ORDER)}

# Net layout in face cells (column, row):
#        U
#     L  F  R  B
#        D
NET_LAYOUT: Dict[str, Tuple[int, int]] = {
    'U': (1, 0),
    'L': (0, 1),
    'F': (1, 1),
    'R': (2, 1),
    'B': (3, 1),
    'D': (1, 2),
}

ERROR_SVG = """<svg width="300" height="300" viewBox="0 0 300 300" xmlns="http://www.w3.org/2000/svg">
    <rect width="100%" height="100%" fill="#FF0000" />
    <text x="50%" y="50%" dominant-baseline="middle" text-anchor="middle" font-size="20" fill="white">ERROR</text>
</svg>"""


def _valid_length(colors) -> bool:
    if not isinstance(colors, str) or len(colors) != 54:
        logger.error("Invalid color string length. Expected 54 characters, got %r", colors)
        return False
    return True


def render_svg(colors: str) -> str:
    """SVG of the U, F and R faces; the other faces are part of the string but not drawn."""
    if not _valid_length(colors):
        return ERROR_SVG

    piece = SVG_PIECE_SIZE
    gap = SVG_GAP
    face_size = piece * 3 + gap * 2
    parts = []

    def draw_face(origin_x: float, origin_y: float, face: str) -> None:
        start = FACE_OFFSETS[face]
        for i in range(9):
            row, col = divmod(i, 3)
            x = origin_x + col * (piece + gap)
            y = origin_y + row * (piece + gap)
            fill = COLOR_TO_CSS.get(colors[start + i], 'gray')
            parts.append(
                f'<rect x="{x}" y="{y}" width="{piece}" height="{piece}" '
                f'fill="{fill}" stroke="#333" stroke-width="1"/>'
            )

    center_x = 150
    center_y = 150
    f_x = center_x - face_size / 2
    f_y = center_y - face_size / 2
    origins = {
        'U': (f_x, center_y - face_size - gap - face_size / 2),
        'F': (f_x, f_y),
        'R': (center_x + face_size / 2 + gap, f_y),
    }
    label_style = "font-family: Arial, sans-serif; font-size: 14px; fill: #eee; text-anchor: middle;"
    for face, (ox, oy) in origins.items():
        draw_face(ox, oy, face)
        parts.append(f'<text x="{ox + face_size / 2}" y="{oy - 10}" style="{label_style}">{face}</text>')

    return (
        '<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg">'
        '<rect x="0" y="0" width="400" height="400" fill="#1a202c"/>'
        f'<g transform="translate(50, 100)">{"".join(parts)}</g>'
        '</svg>'
    )


def _error_image(tile: int) -> np.ndarray:
    h, w = 9 * tile, 12 * tile
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[:] = (0, 0, 255)
    cv2.putText(img, "ERROR", (w // 2 - 2 * tile, h // 2 + tile // 2),
                cv2.FONT_HERSHEY_SIMPLEX, tile / 20.0, (255, 255, 255), 2, cv2.LINE_AA)
    return img


def render_net(colors: str, tile: int = NET_TILE_SIZE, gap: int = NET_TILE_GAP,
               label: bool = False) -> np.ndarray:
    """Draw the unfolded net (12x9 tiles plus face gaps) as a BGR image."""
    tile = int(tile)
    gap = int(gap)
    if not _valid_length(colors):
        return _error_image(tile)

    net_w = 12 * tile + 5 * gap
    net_h = 9 * tile + 4 * gap
    img = np.full((net_h, net_w, 3), 26, dtype=np.uint8)

    for face, (fc, fr) in NET_LAYOUT.items():
        start = FACE_OFFSETS[face]
        x0 = gap + fc * (3 * tile + gap)
        y0 = gap + fr * (3 * tile + gap)
        for i in range(9):
            row, col = divmod(i, 3)
            bgr = COLOR_TO_BGR.get(colors[start + i], UNKNOWN_BGR)
            x1, y1 = x0 + col * tile, y0 + row * tile
            x2, y2 = x1 + tile - 1, y1 + tile - 1
            cv2.rectangle(img, (x1, y1), (x2, y2), bgr, -1)
            cv2.rectangle(img, (x1, y1), (x2, y2), (10, 10, 10), 1)
        if label:
            cv2.putText(img, face, (x0 + tile + 4, y0 + 2 * tile - 4),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 2, cv2.LINE_AA)
    return img


def encode_png(img: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", img)
    if not ok:
        raise RuntimeError("PNG encode failed")
    return buf.tobytes()
