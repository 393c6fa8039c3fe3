"""
Render pipeline: turns the engine context into drawing primitives.
Pull-based: the host calls render(state) whenever any input changes.
"""

from typing import List, NamedTuple

from config import (
    PLOT_WIDTH, PLOT_HEIGHT, SPECTRUM_WIDTH, SPECTRUM_HEIGHT, NUM_POINTS,
    COLOR_AXIS, COLOR_IDEAL, COLOR_APPROX, COLOR_BAR_ENABLED, COLOR_BAR_DISABLED,
    COLOR_LABEL, AXIS_LINE_WIDTH, APPROX_LINE_WIDTH, IDEAL_LINE_WIDTH, IDEAL_DASH,
    LEGEND_FONT_SIZE, LABEL_FONT_SIZE, LEGEND_IDEAL, LEGEND_APPROX,
    SPECTRUM_X_LABEL, SPECTRUM_Y_LABEL, TICK_EVERY,
)
from src.core import VisualizerState
from src.physics import FourierApproximator, domain_samples
from src.physics.spectrum import SpectrumBar, compute_spectrum, visible_harmonics
from src.render.mapping import TimeDomainMapper, SpectrumLayout
from src.render.primitives import Clear, Polyline, Rect, Text, segment


class Frame(NamedTuple):
    plot: list  # Time-domain primitives
    spectrum: list  # Spectrum primitives (only a Clear when hidden)
    bars: List[SpectrumBar]  # Normalized bar set (empty when hidden)


class RenderPipeline:
    """
    Builds a Frame for a VisualizerState.

    Time-domain order: clear, axis, legend, approximation, ideal (ideal on top).
    Spectrum order: clear, axes, axis labels, bars with tick labels.
    """

    def __init__(
        self,
        plot_size=(PLOT_WIDTH, PLOT_HEIGHT),
        spectrum_size=(SPECTRUM_WIDTH, SPECTRUM_HEIGHT),
        num_points: int = NUM_POINTS,
    ):
        self.plot_width, self.plot_height = plot_size
        self.spectrum_width, self.spectrum_height = spectrum_size
        self.mapper = TimeDomainMapper(self.plot_width, self.plot_height)
        self.xs = domain_samples(num_points)
        self.last_frame: Frame | None = None

    def render(self, state: VisualizerState) -> Frame:
        spectrum, bars = self.render_spectrum(state)
        frame = Frame(plot=self.render_plot(state), spectrum=spectrum, bars=bars)
        self.last_frame = frame
        return frame

    def render_plot(self, state: VisualizerState) -> list:
        approximator = FourierApproximator(state.family, state.term_count, state.mask)
        xs, ideal, approx = approximator.sample(self.xs)

        primitives = [Clear(self.plot_width, self.plot_height)]

        # x-axis (y = 0) across the mapped domain
        primitives.append(Polyline(
            self.mapper.map_points(xs, 0.0), COLOR_AXIS, AXIS_LINE_WIDTH,
        ))

        # Legend
        primitives.append(Text(10, 20, LEGEND_IDEAL, COLOR_IDEAL, LEGEND_FONT_SIZE))
        primitives.append(Text(10, 40, LEGEND_APPROX, COLOR_APPROX, LEGEND_FONT_SIZE))

        primitives.append(Polyline(
            self.mapper.map_points(xs, approx), COLOR_APPROX, APPROX_LINE_WIDTH,
        ))
        primitives.append(Polyline(
            self.mapper.map_points(xs, ideal), COLOR_IDEAL, IDEAL_LINE_WIDTH,
            dash=tuple(IDEAL_DASH),
        ))
        return primitives

    def render_spectrum(self, state: VisualizerState):
        """Returns (primitives, bars); bars is empty when the spectrum is hidden."""
        width, height = self.spectrum_width, self.spectrum_height
        primitives = [Clear(width, height)]
        if not state.spectrum_visible:
            return primitives, []

        bars = compute_spectrum(state.family, state.term_count, state.mask)
        layout = SpectrumLayout(width, height, visible_harmonics(state.term_count))

        for x0, y0, x1, y1 in layout.axis_segments():
            primitives.append(segment(x0, y0, x1, y1, COLOR_AXIS, AXIS_LINE_WIDTH))

        primitives.append(Text(width / 2 - 50, height - 10, SPECTRUM_X_LABEL,
                               COLOR_LABEL, LABEL_FONT_SIZE))
        primitives.append(Text(10, height / 2 + 20, SPECTRUM_Y_LABEL,
                               COLOR_LABEL, LABEL_FONT_SIZE, rotation=90.0))

        for i, bar in enumerate(bars):
            x, y, w, h = layout.bar_rect(i, bar.amplitude)
            color = COLOR_BAR_ENABLED if bar.enabled else COLOR_BAR_DISABLED
            primitives.append(Rect(x, y, w, h, color))

            if bar.harmonic == 1 or bar.harmonic % TICK_EVERY == 0:
                primitives.append(Text(layout.bar_center(i) - 4, height - 15,
                                       str(bar.harmonic), COLOR_LABEL, LABEL_FONT_SIZE))
        return primitives, bars

    def snapshot_png(self) -> bytes:
        """Encode the last rendered time-domain surface as PNG bytes."""
        if self.last_frame is None:
            raise RuntimeError("Nothing rendered yet; call render() first")
        from src.render.raster import rasterize
        return rasterize(self.last_frame.plot, self.plot_width, self.plot_height)


__all__ = ['Frame', 'RenderPipeline']
