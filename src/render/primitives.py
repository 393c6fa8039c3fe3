"""
Drawing primitives in surface pixel coordinates (origin top-left, y down).
"""

from typing import NamedTuple, Optional, Tuple

import numpy as np
from config import FONT_FAMILY


class Clear(NamedTuple):
    width: float
    height: float


class Polyline(NamedTuple):
    points: np.ndarray  # [k, 2] surface points (px, py)
    color: str
    width: float
    dash: Optional[Tuple[float, float]] = None  # None = solid


class Rect(NamedTuple):
    x: float
    y: float  # Top edge
    width: float
    height: float
    color: str


class Text(NamedTuple):
    x: float
    y: float  # Baseline
    text: str
    color: str
    font_size: int
    font_family: str = FONT_FAMILY
    rotation: float = 0.0  # Degrees counter-clockwise as seen on screen


def segment(x0: float, y0: float, x1: float, y1: float, color: str, width: float) -> Polyline:
    """Straight two-point line."""
    return Polyline(np.array([[x0, y0], [x1, y1]], dtype=np.float64), color, width)


__all__ = ['Clear', 'Polyline', 'Rect', 'Text', 'segment']
