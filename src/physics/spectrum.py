"""
Spectrum analysis: normalized harmonic amplitudes for the bar chart.
"""

from typing import List, NamedTuple, Optional

import numpy as np
from config import SPECTRUM_MAX_BARS, SPECTRUM_EPSILON
from src.physics import mask_flags
from src.physics.waveforms import WaveformFamily, coefficient


class SpectrumBar(NamedTuple):
    harmonic: int  # n, 1-based
    amplitude: float  # Normalized to [0, 1]
    raw_amplitude: float  # |c_n|, or 0 when masked off
    enabled: bool  # Mask state, used for styling only


def visible_harmonics(n_terms: int) -> int:
    """Number of bars shown for term count N: min(N, SPECTRUM_MAX_BARS)."""
    return max(0, min(int(n_terms), SPECTRUM_MAX_BARS))


def compute_spectrum(family, n_terms: int, mask=None) -> List[SpectrumBar]:
    """
    Compute the bar set for the first min(N, 25) harmonics.

    Amplitude is |c_n| for enabled harmonics and 0 for disabled ones. All
    amplitudes are divided by max(amplitudes, 1e-6), so an all-zero
    spectrum yields all-zero bars rather than a division by zero.

    Args:
        family: WaveformFamily (or anything WaveformFamily.parse accepts)
        n_terms: Term count N
        mask: HarmonicMask, flag sequence or None (all enabled)

    Returns:
        One SpectrumBar per visible harmonic, in ascending n
    """
    family = WaveformFamily.parse(family)
    flags = mask_flags(mask)
    count = visible_harmonics(n_terms)

    amps = np.zeros(count)
    for i in range(count):
        if flags[i]:
            amps[i] = abs(coefficient(family, i + 1))

    max_amp = max(float(amps.max()) if count else 0.0, SPECTRUM_EPSILON)

    return [
        SpectrumBar(
            harmonic=i + 1,
            amplitude=float(amps[i] / max_amp),
            raw_amplitude=float(amps[i]),
            enabled=bool(flags[i]),
        )
        for i in range(count)
    ]


def peak_bar(bars: List[SpectrumBar]) -> Optional[SpectrumBar]:
    """Strongest bar, or None when the spectrum is empty or all zero."""
    best = None
    for bar in bars:
        if bar.raw_amplitude > 0.0 and (best is None or bar.raw_amplitude > best.raw_amplitude):
            best = bar
    return best


__all__ = ['SpectrumBar', 'compute_spectrum', 'peak_bar', 'visible_harmonics']
