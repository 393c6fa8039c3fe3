"""
Waveform model: ideal waveform values and analytic Fourier sine coefficients.
Every family here is odd on (-π, π), so a sine-only series represents it.
"""

from enum import Enum

import numpy as np


class UnknownWaveformFamily(ValueError):
    """Raised when a waveform selector does not name a known family."""


class WaveformFamily(Enum):
    """The three waveform families with analytic sine-series coefficients."""

    SQUARE = 'square'
    SAWTOOTH = 'sawtooth'
    TRIANGLE = 'triangle'

    @property
    def label(self) -> str:
        """Human readable name, as shown in the waveform selector."""
        return f"{self.value.capitalize()} Wave"

    @classmethod
    def parse(cls, value) -> 'WaveformFamily':
        """
        Resolve a selector value to a family.

        Accepts a WaveformFamily, its value ('square'), its member name
        ('SQUARE') or its label ('Square Wave'), case-insensitively.

        Raises:
            UnknownWaveformFamily: value does not name one of the three families
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key.endswith(' wave'):
                key = key[:-len(' wave')]
            for family in cls:
                if family.value == key:
                    return family
        raise UnknownWaveformFamily(f"Unknown waveform family: {value!r}")


# Triangle control points: zeros at -π, 0, π and ±1 at ±π/2
TRIANGLE_X = np.array([-np.pi, -np.pi / 2, 0.0, np.pi / 2, np.pi])
TRIANGLE_Y = np.array([0.0, -1.0, 0.0, 1.0, 0.0])


def _scalar_or_array(result: np.ndarray, x):
    if np.ndim(x) == 0:
        return float(result)
    return result


def ideal_value(family, x):
    """
    Evaluate the ideal (target) waveform.

    Square:   +1 for x >= 0, -1 otherwise
    Sawtooth: 1 + x/π for x < 0, -1 + x/π for x > 0, 0 at the jump (x = 0)
    Triangle: piecewise linear through (-π,0), (-π/2,-1), (0,0), (π/2,1), (π,0)

    Args:
        family: WaveformFamily (or anything WaveformFamily.parse accepts)
        x: Scalar or array of domain points in [-π, π]

    Returns:
        float for scalar x, otherwise an ndarray shaped like x
    """
    family = WaveformFamily.parse(family)
    xa = np.asarray(x, dtype=np.float64)

    if family is WaveformFamily.SQUARE:
        y = np.where(xa >= 0.0, 1.0, -1.0)
    elif family is WaveformFamily.SAWTOOTH:
        # Midpoint at the jump so the ideal curve has no spurious value at 0
        y = np.where(xa < 0.0, 1.0 + xa / np.pi,
                     np.where(xa > 0.0, -1.0 + xa / np.pi, 0.0))
    else:
        y = np.interp(xa, TRIANGLE_X, TRIANGLE_Y)

    return _scalar_or_array(y, x)


def coefficient(family, n: int) -> float:
    """
    Analytic sine-series coefficient c_n for the given family.

    Square:   c_n = 4/(π n) for odd n, 0 for even n
    Sawtooth: c_n = -2/(π n) for every n
    Triangle: c_n = (-1)^k 8/(π² n²) for odd n with k = (n-1)/2, 0 for even n

    Args:
        family: WaveformFamily (or anything WaveformFamily.parse accepts)
        n: Harmonic number, n >= 1

    Returns:
        Coefficient value
    """
    family = WaveformFamily.parse(family)
    if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"Harmonic number must be an integer, got {n!r}")
    n = int(n)
    if n < 1:
        raise ValueError(f"Harmonic number must be >= 1, got {n}")

    if family is WaveformFamily.SQUARE:
        if n % 2 == 1:
            return 4.0 / (np.pi * n)
        return 0.0
    if family is WaveformFamily.SAWTOOTH:
        return -2.0 / (np.pi * n)

    # Triangle: odd harmonics only, ~1/n² with the sign flipping every other odd n
    if n % 2 == 1:
        k = (n - 1) // 2
        sign = 1.0 if k % 2 == 0 else -1.0
        return sign * 8.0 / (np.pi * np.pi * n * n)
    return 0.0


def coefficients(family, n_terms: int) -> np.ndarray:
    """
    Coefficient vector [c_1, ..., c_n_terms].

    Args:
        family: WaveformFamily (or anything WaveformFamily.parse accepts)
        n_terms: Number of harmonics

    Returns:
        Array of shape [n_terms]; coeffs[0] is c_1
    """
    family = WaveformFamily.parse(family)
    coeffs = np.zeros(max(0, int(n_terms)))
    for n in range(1, len(coeffs) + 1):
        coeffs[n - 1] = coefficient(family, n)
    return coeffs


__all__ = [
    'WaveformFamily', 'UnknownWaveformFamily',
    'ideal_value', 'coefficient', 'coefficients',
]
