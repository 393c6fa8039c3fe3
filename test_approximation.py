#!/usr/bin/env python3
"""
Approximation engine and harmonic mask tests.
"""

import sys

import numpy as np
import pytest

from config import MAX_HARMONICS, NUM_POINTS
from src.core import HarmonicMask, InvalidHarmonicIndex, VisualizerState, clamp_term_count
from src.physics import FourierApproximator, domain_samples, partial_sum
from src.physics.waveforms import WaveformFamily, coefficient

FAMILIES = list(WaveformFamily)


def test_domain_samples():
    """800 strictly increasing samples from exactly -π to exactly +π."""
    xs = domain_samples()
    assert xs.shape == (NUM_POINTS,)
    assert xs[0] == -np.pi
    assert xs[-1] == np.pi
    assert np.all(np.diff(xs) > 0)
    print(f"✓ Domain: {len(xs)} samples in [{xs[0]:.5f}, {xs[-1]:.5f}]")


def test_square_single_term():
    """Square, N=1, all enabled: f(π/2) = 4/π."""
    value = partial_sum(WaveformFamily.SQUARE, 1, HarmonicMask(), np.pi / 2)
    assert np.isclose(value, 4.0 / np.pi)
    assert isinstance(value, float)
    print(f"✓ Square N=1 at π/2: {value:.6f}")


def test_sawtooth_with_first_harmonic_disabled():
    """Sawtooth, N=2, harmonic 1 off: only c_2 sin(π) remains, i.e. 0."""
    mask = HarmonicMask()
    mask.disable(1)
    value = partial_sum(WaveformFamily.SAWTOOTH, 2, mask, np.pi / 2)
    expected = coefficient(WaveformFamily.SAWTOOTH, 2) * np.sin(np.pi)
    assert np.isclose(value, expected)
    assert abs(value) < 1e-12
    print("✓ Sawtooth N=2 without n=1 at π/2 is 0")


def test_all_disabled_is_zero():
    mask = HarmonicMask()
    mask.clear_all()
    xs = domain_samples()
    for family in FAMILIES:
        for n_terms in (1, 7, 50):
            assert np.all(partial_sum(family, n_terms, mask, xs) == 0.0)
    print("✓ Fully masked sum is identically 0")


def test_disabled_up_to_n_is_zero():
    """Harmonics above N being enabled does not matter."""
    mask = HarmonicMask()
    for n in range(1, 6):
        mask.disable(n)
    xs = domain_samples()
    assert np.all(partial_sum(WaveformFamily.SAWTOOTH, 5, mask, xs) == 0.0)
    assert np.any(partial_sum(WaveformFamily.SAWTOOTH, 6, mask, xs) != 0.0)


def test_partial_sum_is_odd():
    xs = domain_samples()
    mask = HarmonicMask()
    mask.disable(3)
    mask.disable(8)
    for family in FAMILIES:
        for n_terms in (1, 4, 17, 50):
            forward = partial_sum(family, n_terms, mask, xs)
            backward = partial_sum(family, n_terms, mask, -xs)
            assert np.allclose(backward, -forward, atol=1e-12)
    print("✓ partial_sum(-x) = -partial_sum(x) for every family")


def test_term_count_capped_at_max_harmonics():
    xs = domain_samples(64)
    a = partial_sum(WaveformFamily.SAWTOOTH, MAX_HARMONICS, None, xs)
    b = partial_sum(WaveformFamily.SAWTOOTH, MAX_HARMONICS + 25, None, xs)
    assert np.array_equal(a, b)


def test_matches_ascending_reference_sum():
    """Same rounding as an explicit ascending-n loop."""
    x = 0.731
    mask = HarmonicMask()
    mask.disable(2)
    expected = 0.0
    for n in range(1, 12):
        if n == 2:
            continue
        c = coefficient(WaveformFamily.TRIANGLE, n)
        if c == 0.0:
            continue
        expected = expected + c * np.sin(n * x)
    assert partial_sum(WaveformFamily.TRIANGLE, 11, mask, x) == expected


def test_mask_accepts_flag_sequences():
    flags = [True] * MAX_HARMONICS
    flags[0] = False
    assert partial_sum(WaveformFamily.SQUARE, 1, flags, 1.0) == 0.0
    with pytest.raises(ValueError):
        partial_sum(WaveformFamily.SQUARE, 1, [True] * 10, 1.0)


def test_approximation_converges():
    """Triangle is continuous, so the worst-case error shrinks as N grows."""
    errors = [FourierApproximator(WaveformFamily.TRIANGLE, n).max_error() for n in (1, 3, 9, 25)]
    assert all(a > b for a, b in zip(errors, errors[1:]))
    assert np.isclose(errors[0], 1.0 - 8.0 / np.pi ** 2, atol=5e-3)
    print(f"✓ Triangle max error by N: {[round(e, 4) for e in errors]}")


def test_harmonic_mask_defaults_and_ops():
    mask = HarmonicMask()
    assert len(mask) == MAX_HARMONICS
    assert mask.enabled_harmonics() == list(range(1, MAX_HARMONICS + 1))

    mask.disable(4)
    assert not mask[4]
    assert mask.disabled_harmonics() == [4]
    assert mask.toggle(4) is True
    mask[10] = False
    assert not mask.is_enabled(10)

    mask.clear_all()
    assert mask.enabled_harmonics() == []
    mask.reset_all()
    assert mask.disabled_harmonics() == []
    assert mask.as_array().shape == (MAX_HARMONICS,)
    print("✓ HarmonicMask operations OK")


def test_harmonic_mask_rejects_invalid_index():
    """Out-of-range or non-integer indices raise and leave the mask untouched."""
    mask = HarmonicMask()
    before = mask.copy()
    for bad in (0, -1, MAX_HARMONICS + 1, 2.5, True, '3', None):
        with pytest.raises(InvalidHarmonicIndex):
            mask.disable(bad)
        with pytest.raises(InvalidHarmonicIndex):
            mask.is_enabled(bad)
    assert mask == before
    assert len(mask) == MAX_HARMONICS
    mask.disable(np.int64(7))
    assert not mask[7]
    print("✓ Invalid harmonic indices rejected without mutation")


def test_mask_copy_is_independent():
    mask = HarmonicMask()
    snapshot = mask.copy()
    mask.disable(1)
    assert snapshot[1]
    with pytest.raises(ValueError):
        HarmonicMask([True] * 3)


def test_mask_iterates_flags_in_order():
    """Iteration yields the flags for harmonics 1..MAX_HARMONICS."""
    mask = HarmonicMask()
    mask.disable(1)
    mask.disable(4)

    flags = list(mask)
    assert len(flags) == MAX_HARMONICS
    assert flags[0] is False and flags[3] is False
    assert sum(flags) == MAX_HARMONICS - 2
    assert False in mask

    rebuilt = HarmonicMask(mask)
    assert rebuilt == mask
    assert rebuilt.disabled_harmonics() == [1, 4]
    print("✓ Mask iterates and rebuilds from another mask")


def test_term_count_clamps():
    assert clamp_term_count(0) == 1
    assert clamp_term_count(-5) == 1
    assert clamp_term_count(99) == 50
    assert clamp_term_count(12) == 12

    state = VisualizerState(term_count=500)
    assert state.term_count == 50
    state.term_count = 0
    assert state.term_count == 1
    state = VisualizerState(term_count=30, max_term_count=20)
    assert state.term_count == 20
    print("✓ Term count clamps silently")


def main():
    """Run all tests."""
    tests = [
        test_domain_samples, test_square_single_term,
        test_sawtooth_with_first_harmonic_disabled, test_all_disabled_is_zero,
        test_disabled_up_to_n_is_zero, test_partial_sum_is_odd,
        test_term_count_capped_at_max_harmonics, test_matches_ascending_reference_sum,
        test_mask_accepts_flag_sequences, test_approximation_converges,
        test_harmonic_mask_defaults_and_ops, test_harmonic_mask_rejects_invalid_index,
        test_mask_copy_is_independent, test_mask_iterates_flags_in_order,
        test_term_count_clamps,
    ]
    for test in tests:
        test()
    print("\nALL APPROXIMATION TESTS PASSED ✓")
    return 0


if __name__ == '__main__':
    sys.exit(main())
