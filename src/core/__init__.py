"""
Engine state for the visualizer.
Holds the harmonic mask and the engine context that every computation reads.
"""

import numpy as np
from config import MAX_HARMONICS, TERM_COUNT_MIN, TERM_COUNT_MAX, DEFAULT_TERM_COUNT
from src.physics.waveforms import WaveformFamily


class InvalidHarmonicIndex(ValueError):
    """Raised for a harmonic index outside [1, MAX_HARMONICS]."""


def validate_harmonic(n) -> int:
    """
    Check a harmonic index and return it as a plain int.

    Raises:
        InvalidHarmonicIndex: n is not an integer in [1, MAX_HARMONICS]
    """
    if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
        raise InvalidHarmonicIndex(f"Harmonic index must be an integer, got {n!r}")
    if not 1 <= n <= MAX_HARMONICS:
        raise InvalidHarmonicIndex(
            f"Harmonic index {n} outside [1, {MAX_HARMONICS}]"
        )
    return int(n)


def clamp_term_count(n, max_term_count: int = TERM_COUNT_MAX) -> int:
    """Clamp a term count to [TERM_COUNT_MIN, max_term_count] (never raises on range)."""
    return int(min(max(int(n), TERM_COUNT_MIN), max_term_count))


class HarmonicMask:
    """
    Enable/disable state for harmonics 1..MAX_HARMONICS.

    Structure:
    - Shape: (MAX_HARMONICS,), dtype bool
    - Entry n-1 holds the flag for harmonic n
    - Default: every harmonic enabled

    The array is never resized. Invalid indices are rejected before any
    mutation happens.
    """

    def __init__(self, enabled=None):
        """
        Args:
            enabled: Optional iterable of MAX_HARMONICS flags; defaults to all True
        """
        self._flags = np.ones(MAX_HARMONICS, dtype=bool)
        if enabled is not None:
            flags = np.asarray(list(enabled), dtype=bool)
            if flags.shape != self._flags.shape:
                raise ValueError(
                    f"Mask needs exactly {MAX_HARMONICS} flags, got {flags.size}"
                )
            self._flags[:] = flags

    def __len__(self) -> int:
        return MAX_HARMONICS

    def __iter__(self):
        # Flags for harmonics 1..MAX_HARMONICS in order; __getitem__ is 1-based
        return iter(self._flags.tolist())

    def __getitem__(self, n) -> bool:
        return self.is_enabled(n)

    def __setitem__(self, n, enabled) -> None:
        self.set(n, enabled)

    def __eq__(self, other) -> bool:
        if not isinstance(other, HarmonicMask):
            return NotImplemented
        return bool(np.array_equal(self._flags, other._flags))

    def __repr__(self) -> str:
        disabled = self.disabled_harmonics()
        return f"HarmonicMask(disabled={disabled})"

    def is_enabled(self, n) -> bool:
        return bool(self._flags[validate_harmonic(n) - 1])

    def set(self, n, enabled: bool) -> None:
        """Set the flag for harmonic n."""
        self._flags[validate_harmonic(n) - 1] = bool(enabled)

    def enable(self, n) -> None:
        self.set(n, True)

    def disable(self, n) -> None:
        self.set(n, False)

    def toggle(self, n) -> bool:
        """Flip harmonic n and return its new state."""
        index = validate_harmonic(n) - 1
        self._flags[index] = not self._flags[index]
        return bool(self._flags[index])

    def reset_all(self) -> None:
        """Re-enable every harmonic."""
        self._flags[:] = True

    def clear_all(self) -> None:
        """Disable every harmonic."""
        self._flags[:] = False

    def enabled_harmonics(self) -> list:
        return [int(i) + 1 for i in np.flatnonzero(self._flags)]

    def disabled_harmonics(self) -> list:
        return [int(i) + 1 for i in np.flatnonzero(~self._flags)]

    def as_array(self) -> np.ndarray:
        """Copy of the flags; entry n-1 belongs to harmonic n."""
        return self._flags.copy()

    def copy(self) -> 'HarmonicMask':
        return HarmonicMask(self._flags)


class VisualizerState:
    """
    Engine context passed by reference to the render pipeline and the
    animation scheduler. It replaces ambient globals: the mask, the waveform
    selection and the term count all live here.
    """

    def __init__(
        self,
        family=WaveformFamily.SQUARE,
        term_count: int = DEFAULT_TERM_COUNT,
        mask: HarmonicMask | None = None,
        spectrum_visible: bool = True,
        max_term_count: int = TERM_COUNT_MAX,
    ):
        if max_term_count < TERM_COUNT_MIN:
            raise ValueError(f"max_term_count must be >= {TERM_COUNT_MIN}")
        self.max_term_count = int(max_term_count)
        self.family = WaveformFamily.parse(family)
        self.mask = mask if mask is not None else HarmonicMask()
        self.spectrum_visible = bool(spectrum_visible)
        self._term_count = clamp_term_count(term_count, self.max_term_count)

    @property
    def term_count(self) -> int:
        return self._term_count

    @term_count.setter
    def term_count(self, value) -> None:
        self._term_count = clamp_term_count(value, self.max_term_count)

    def set_family(self, family) -> None:
        """Select a waveform family; unknown selectors raise UnknownWaveformFamily."""
        self.family = WaveformFamily.parse(family)

    def __repr__(self) -> str:
        return (f"VisualizerState(family={self.family.value}, N={self._term_count}, "
                f"spectrum={self.spectrum_visible}, {self.mask!r})")


__all__ = [
    'InvalidHarmonicIndex', 'HarmonicMask', 'VisualizerState',
    'validate_harmonic', 'clamp_term_count',
]
