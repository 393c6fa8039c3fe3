"""
Coordinate mapping from domain values to surface pixels.

Time-domain: x in [-π, π] spans the full width, y in about [-1.5, 1.5]
spans the full height, flipped so larger y sits higher, with y = 0 at mid-height.

Spectrum: harmonic slot i (0-based) and a normalized amplitude map to bar geometry
inside the margins.
"""

from typing import List, Tuple

import numpy as np
from config import (
    SPECTRUM_MARGIN_LEFT, SPECTRUM_MARGIN_RIGHT, SPECTRUM_MARGIN_TOP,
    SPECTRUM_MARGIN_BOTTOM, SPECTRUM_AXIS_TOP, SPECTRUM_AXIS_RIGHT_INSET,
    SPECTRUM_BAR_FILL, SPECTRUM_HEIGHT_SCALE,
)

Y_SPAN: float = 3.0  # Range of y covered by the surface height


class TimeDomainMapper:
    """Affine map between (x, y) domain values and (px, py) surface pixels."""

    def __init__(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)

    def to_surface(self, x, y):
        """px = (x + π)/(2π) * W, py = H * (0.5 - y/3). Works on scalars and arrays."""
        px = (np.asarray(x, dtype=np.float64) + np.pi) / (2.0 * np.pi) * self.width
        py = self.height * (0.5 - np.asarray(y, dtype=np.float64) / Y_SPAN)
        if np.ndim(px) == 0 and np.ndim(py) == 0:
            return float(px), float(py)
        return px, py

    def to_domain(self, px, py):
        """Inverse of to_surface."""
        x = np.asarray(px, dtype=np.float64) / self.width * (2.0 * np.pi) - np.pi
        y = (0.5 - np.asarray(py, dtype=np.float64) / self.height) * Y_SPAN
        if np.ndim(x) == 0 and np.ndim(y) == 0:
            return float(x), float(y)
        return x, y

    def map_points(self, xs, ys) -> np.ndarray:
        """Map parallel x/y sequences to a [k, 2] array of surface points."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.broadcast_to(np.asarray(ys, dtype=np.float64), xs.shape)
        px, py = self.to_surface(xs, ys)
        return np.column_stack([np.atleast_1d(px), np.atleast_1d(py)])


class SpectrumLayout:
    """Bar geometry for the spectrum surface."""

    def __init__(self, width: float, height: float, visible_harmonics: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        self.visible_harmonics = int(visible_harmonics)
        self.margin_left = float(SPECTRUM_MARGIN_LEFT)
        self.margin_bottom = float(SPECTRUM_MARGIN_BOTTOM)
        self.plot_width = self.width - (SPECTRUM_MARGIN_LEFT + SPECTRUM_MARGIN_RIGHT)
        self.plot_height = self.height - (SPECTRUM_MARGIN_TOP + SPECTRUM_MARGIN_BOTTOM)
        self.bar_width = self.plot_width / (self.visible_harmonics + 1)

    @property
    def baseline(self) -> float:
        """Pixel row of the horizontal axis (bar bottoms)."""
        return self.height - self.margin_bottom

    def bar_center(self, i: int) -> float:
        return self.margin_left + (i + 0.5) * self.bar_width

    def bar_height(self, amplitude: float) -> float:
        return amplitude * self.plot_height * SPECTRUM_HEIGHT_SCALE

    def bar_top(self, amplitude: float) -> float:
        return self.baseline - self.bar_height(amplitude)

    def bar_rect(self, i: int, amplitude: float) -> Tuple[float, float, float, float]:
        """Filled rectangle (x, y, w, h) for slot i, centred on bar_center(i)."""
        fill = self.bar_width * SPECTRUM_BAR_FILL
        x = self.bar_center(i) - fill / 2.0
        return x, self.bar_top(amplitude), fill, self.bar_height(amplitude)

    def axis_segments(self) -> List[Tuple[float, float, float, float]]:
        """Horizontal then vertical axis, each as (x0, y0, x1, y1)."""
        return [
            (self.margin_left, self.baseline, self.width - SPECTRUM_AXIS_RIGHT_INSET, self.baseline),
            (self.margin_left, float(SPECTRUM_AXIS_TOP), self.margin_left, self.baseline),
        ]


__all__ = ['TimeDomainMapper', 'SpectrumLayout']
