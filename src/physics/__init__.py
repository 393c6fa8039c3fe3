"""Fourier sine-series approximation of the ideal waveforms."""

import numpy as np
from config import MAX_HARMONICS, NUM_POINTS
from src.physics.waveforms import WaveformFamily, coefficient, ideal_value


def domain_samples(num_points: int = NUM_POINTS) -> np.ndarray:
    """
    Evenly spaced samples over [-π, π].

    First sample is exactly -π and the last exactly +π.
    """
    if num_points < 2:
        raise ValueError("domain_samples needs at least 2 points")
    return np.linspace(-np.pi, np.pi, num_points)


def mask_flags(mask) -> np.ndarray:
    """Flags for harmonics 1..MAX_HARMONICS from a HarmonicMask, a flag sequence or None."""
    if mask is None:
        return np.ones(MAX_HARMONICS, dtype=bool)
    if hasattr(mask, 'as_array'):
        return mask.as_array()
    flags = np.asarray(mask, dtype=bool)
    if flags.shape != (MAX_HARMONICS,):
        raise ValueError(f"mask must hold {MAX_HARMONICS} flags, got shape {flags.shape}")
    return flags


def partial_sum(family, n_terms: int, mask, x):
    """
    Truncated, masked sine series at x.

    Formula: f_N(x) = sum_{n=1}^{min(N, 50)} mask[n] * c_n * sin(n*x)

    Terms are accumulated in ascending n so rounding is reproducible.
    Harmonics with a zero coefficient are skipped.

    Args:
        family: WaveformFamily (or anything WaveformFamily.parse accepts)
        n_terms: Term count N
        mask: HarmonicMask, sequence of MAX_HARMONICS flags, or None for all enabled
        x: Scalar or array of domain points

    Returns:
        float for scalar x, otherwise an ndarray shaped like x
    """
    family = WaveformFamily.parse(family)
    flags = mask_flags(mask)
    xa = np.asarray(x, dtype=np.float64)

    total = np.zeros_like(xa)
    for n in range(1, min(int(n_terms), MAX_HARMONICS) + 1):
        if not flags[n - 1]:
            continue
        c = coefficient(family, n)
        if c == 0.0:
            continue
        total = total + c * np.sin(n * xa)

    if np.ndim(x) == 0:
        return float(total)
    return total


class FourierApproximator:
    """
    Evaluates one (family, N, mask) configuration against its ideal waveform.
    """

    def __init__(self, family, n_terms: int, mask=None):
        """
        Args:
            family: WaveformFamily (or anything WaveformFamily.parse accepts)
            n_terms: Term count N
            mask: HarmonicMask, flag sequence or None (all enabled)
        """
        self.family = WaveformFamily.parse(family)
        self.n_terms = int(n_terms)
        self.mask = mask

    def evaluate(self, x):
        return partial_sum(self.family, self.n_terms, self.mask, x)

    def ideal(self, x):
        return ideal_value(self.family, x)

    def sample(self, xs: np.ndarray | None = None):
        """
        Sample ideal and approximate curves on the same domain points.

        Returns:
            (xs, ideal, approx) arrays of equal length
        """
        if xs is None:
            xs = domain_samples()
        return xs, self.ideal(xs), self.evaluate(xs)

    def max_error(self, xs: np.ndarray | None = None) -> float:
        """Largest |ideal - approx| over the samples (Gibbs overshoot shows up here)."""
        _, ideal, approx = self.sample(xs)
        return float(np.max(np.abs(ideal - approx)))


__all__ = ['FourierApproximator', 'domain_samples', 'mask_flags', 'partial_sum']
