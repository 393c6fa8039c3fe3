#!/usr/bin/env python3
"""
Spectrum analyzer and coordinate mapping tests.
"""

import sys

import numpy as np

from config import SPECTRUM_MAX_BARS
from src.core import HarmonicMask
from src.physics.spectrum import compute_spectrum, peak_bar, visible_harmonics
from src.physics.waveforms import WaveformFamily, coefficient
from src.render.mapping import TimeDomainMapper, SpectrumLayout


def test_triangle_spectrum():
    """Triangle, N=25, all enabled: n=1 normalizes to 1 and even bars are 0."""
    print("\n" + "="*70)
    print("TEST: Triangle spectrum")
    print("="*70)

    bars = compute_spectrum(WaveformFamily.TRIANGLE, 25, HarmonicMask())
    assert len(bars) == 25
    assert [b.harmonic for b in bars] == list(range(1, 26))
    assert bars[0].amplitude == 1.0
    assert np.isclose(bars[0].raw_amplitude, 8.0 / np.pi ** 2)
    for bar in bars:
        if bar.harmonic % 2 == 0:
            assert bar.amplitude == 0.0
        assert 0.0 <= bar.amplitude <= 1.0
        assert bar.enabled
    assert np.isclose(bars[2].amplitude, 1.0 / 9.0)
    print(f"✓ n=1 → {bars[0].amplitude}, n=3 → {bars[2].amplitude:.4f}")


def test_display_cap():
    """Only the first 25 harmonics are shown, whatever N is."""
    assert len(compute_spectrum(WaveformFamily.SAWTOOTH, 50, None)) == SPECTRUM_MAX_BARS
    assert len(compute_spectrum(WaveformFamily.SAWTOOTH, 7, None)) == 7
    assert visible_harmonics(40) == 25
    assert visible_harmonics(3) == 3


def test_max_normalized_is_one_when_anything_visible():
    mask = HarmonicMask()
    mask.disable(1)
    mask.disable(2)
    for family in WaveformFamily:
        bars = compute_spectrum(family, 12, mask)
        assert max(b.amplitude for b in bars) == 1.0
    # Square with n=1 off: n=3 becomes the reference
    bars = compute_spectrum(WaveformFamily.SQUARE, 12, mask)
    assert bars[2].amplitude == 1.0
    assert np.isclose(bars[4].amplitude, 3.0 / 5.0)
    print("✓ Largest visible bar normalizes to 1")


def test_degenerate_spectrum_is_all_zero():
    """All visible harmonics off, or only zero coefficients visible: every bar is 0."""
    mask = HarmonicMask()
    mask.clear_all()
    bars = compute_spectrum(WaveformFamily.SQUARE, 25, mask)
    assert all(b.amplitude == 0.0 for b in bars)
    assert not any(b.enabled for b in bars)
    assert peak_bar(bars) is None

    mask = HarmonicMask()
    mask.disable(1)
    bars = compute_spectrum(WaveformFamily.SQUARE, 2, mask)
    assert [b.amplitude for b in bars] == [0.0, 0.0]
    assert [b.enabled for b in bars] == [False, True]
    print("✓ Degenerate spectrum handled by the epsilon floor")


def test_masked_bar_tagging():
    mask = HarmonicMask()
    mask.disable(3)
    bars = compute_spectrum(WaveformFamily.SAWTOOTH, 5, mask)
    assert not bars[2].enabled
    assert bars[2].amplitude == 0.0
    assert bars[2].raw_amplitude == 0.0
    assert np.isclose(bars[1].raw_amplitude, abs(coefficient(WaveformFamily.SAWTOOTH, 2)))
    assert peak_bar(bars).harmonic == 1


def test_time_domain_mapping():
    mapper = TimeDomainMapper(900, 400)
    assert mapper.to_surface(-np.pi, 0.0) == (0.0, 200.0)
    px, py = mapper.to_surface(np.pi, 1.5)
    assert np.isclose(px, 900.0)
    assert np.isclose(py, 0.0)
    _, py = mapper.to_surface(0.0, -1.5)
    assert np.isclose(py, 400.0)
    # Larger y sits higher on the surface
    assert mapper.to_surface(0.0, 1.0)[1] < mapper.to_surface(0.0, -1.0)[1]

    points = mapper.map_points(np.array([-np.pi, 0.0, np.pi]), 0.0)
    assert points.shape == (3, 2)
    assert np.allclose(points[:, 1], 200.0)
    print("✓ Time-domain mapping OK")


def test_mapping_round_trip():
    """x = ±π maps to the surface edges and back within one pixel."""
    width = 900
    mapper = TimeDomainMapper(width, 400)
    pixel = 2.0 * np.pi / width
    for x in (-np.pi, np.pi):
        px, py = mapper.to_surface(x, 0.7)
        back_x, back_y = mapper.to_domain(round(px), py)
        assert abs(back_x - x) <= pixel
        assert np.isclose(back_y, 0.7)
    print("✓ Round trip within one pixel")


def test_spectrum_layout():
    layout = SpectrumLayout(900, 250, 25)
    assert layout.plot_width == 840
    assert layout.plot_height == 200
    assert np.isclose(layout.bar_width, 840 / 26)
    assert np.isclose(layout.bar_center(0), 40 + 0.5 * 840 / 26)
    assert np.isclose(layout.bar_height(1.0), 180.0)
    assert np.isclose(layout.bar_top(1.0), 40.0)
    assert layout.bar_top(0.0) == layout.baseline == 220.0

    x, y, w, h = layout.bar_rect(3, 0.5)
    assert np.isclose(x + w / 2, layout.bar_center(3))
    assert np.isclose(w, 0.8 * layout.bar_width)
    assert np.isclose(y + h, 220.0)

    horizontal, vertical = layout.axis_segments()
    assert horizontal == (40.0, 220.0, 890.0, 220.0)
    assert vertical == (40.0, 10.0, 40.0, 220.0)
    print("✓ Spectrum layout OK")


def main():
    """Run all tests."""
    tests = [
        test_triangle_spectrum, test_display_cap,
        test_max_normalized_is_one_when_anything_visible,
        test_degenerate_spectrum_is_all_zero, test_masked_bar_tagging,
        test_time_domain_mapping, test_mapping_round_trip, test_spectrum_layout,
    ]
    for test in tests:
        test()
    print("\nALL SPECTRUM TESTS PASSED ✓")
    return 0


if __name__ == '__main__':
    sys.exit(main())
