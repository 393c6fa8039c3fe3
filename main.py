"""
Main entry point for the Fourier Series Visualizer.
Launches the GUI, or renders snapshots / animation frames headless.
"""

import sys
import threading
import traceback
from pathlib import Path

import click

from config import (
    DEFAULT_TERM_COUNT, EXPORT_FILENAME, MAX_HARMONICS,
    PLOT_WIDTH, PLOT_HEIGHT, SPECTRUM_WIDTH, SPECTRUM_HEIGHT,
    TERM_COUNT_MIN, TERM_COUNT_MAX,
)
from src.core import HarmonicMask, VisualizerState
from src.core.animation import AnimationScheduler
from src.physics import FourierApproximator
from src.physics.waveforms import WaveformFamily
from src.render import RenderPipeline
from src.render.raster import save_image

WAVEFORM_CHOICE = click.Choice([f.value for f in WaveformFamily], case_sensitive=False)


def banner(title: str) -> None:
    print("=" * 70)
    print(title)
    print("=" * 70)


def build_state(waveform: str, terms: int, disable=(), spectrum: bool = True) -> VisualizerState:
    """Engine context from CLI options. Harmonic indices are validated by the mask."""
    mask = HarmonicMask()
    for n in disable:
        mask.disable(n)
    return VisualizerState(family=waveform, term_count=terms, mask=mask, spectrum_visible=spectrum)


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    Fourier Series Visualizer.

    Compares an ideal square, sawtooth or triangle wave with its truncated
    Fourier sine series. Without a subcommand, the GUI is launched.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(gui)


@cli.command()
def gui() -> None:
    """Launch the PyQt6 window."""
    from gui_interface import main_gui

    banner("Fourier Series Visualizer")
    sys.exit(main_gui())


@cli.command()
@click.option("--waveform", type=WAVEFORM_CHOICE, default="square", show_default=True)
@click.option(
    "--terms",
    type=click.IntRange(TERM_COUNT_MIN, TERM_COUNT_MAX, clamp=True),
    default=DEFAULT_TERM_COUNT,
    show_default=True,
    help="Term count N",
)
@click.option(
    "--disable",
    type=click.IntRange(1, MAX_HARMONICS),
    multiple=True,
    help="Harmonic to switch off (repeatable)",
)
@click.option("--spectrum/--no-spectrum", default=True, show_default=True)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=EXPORT_FILENAME,
    show_default=True,
    help="PNG for the time-domain plot; the spectrum goes next to it as *_spectrum.png",
)
def snapshot(waveform: str, terms: int, disable, spectrum: bool, output: str) -> None:
    """Render one configuration to PNG files."""
    banner("Fourier Series Visualizer - snapshot")
    state = build_state(waveform, terms, disable, spectrum)
    print(f"[Main] {state!r}")

    pipeline = RenderPipeline((PLOT_WIDTH, PLOT_HEIGHT), (SPECTRUM_WIDTH, SPECTRUM_HEIGHT))
    frame = pipeline.render(state)

    error = FourierApproximator(state.family, state.term_count, state.mask).max_error()
    print(f"[Main] Max |ideal - approx| = {error:.4f}")

    output_path = Path(output)
    save_image(frame.plot, PLOT_WIDTH, PLOT_HEIGHT, output_path)
    if state.spectrum_visible:
        spectrum_path = output_path.with_name(f"{output_path.stem}_spectrum{output_path.suffix}")
        save_image(frame.spectrum, SPECTRUM_WIDTH, SPECTRUM_HEIGHT, spectrum_path)
        for bar in frame.bars:
            if bar.amplitude > 0:
                print(f"  n={bar.harmonic:2d}  |c_n|={bar.raw_amplitude:.6f}  norm={bar.amplitude:.3f}")


@cli.command()
@click.option("--waveform", type=WAVEFORM_CHOICE, default="square", show_default=True)
@click.option(
    "--start",
    type=click.IntRange(TERM_COUNT_MIN, TERM_COUNT_MAX, clamp=True),
    default=TERM_COUNT_MIN,
    show_default=True,
    help="Term count before the first step",
)
@click.option("--frames", type=click.IntRange(1), default=20, show_default=True)
@click.option("--disable", type=click.IntRange(1, MAX_HARMONICS), multiple=True)
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False),
    default="frames",
    show_default=True,
)
def animate(waveform: str, start: int, frames: int, disable, out_dir: str) -> None:
    """Step the animation headless and write one PNG per step."""
    banner("Fourier Series Visualizer - animation export")
    state = build_state(waveform, start, disable, spectrum=False)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    pipeline = RenderPipeline((PLOT_WIDTH, PLOT_HEIGHT), (SPECTRUM_WIDTH, SPECTRUM_HEIGHT))
    written = []

    def redraw(context: VisualizerState) -> None:
        frame = pipeline.render(context)
        path = out / f"frame_{len(written):04d}_n{context.term_count:02d}.png"
        save_image(frame.plot, PLOT_WIDTH, PLOT_HEIGHT, path)
        written.append(path)

    scheduler = AnimationScheduler(state, redraw)
    stop_event = threading.Event()

    try:
        scheduler.run(stop_event, max_steps=frames, realtime=False)
    except KeyboardInterrupt:
        print("\n[Main] Ctrl+C detected, stopping...")
        stop_event.set()
    except Exception as e:
        print(f"[Main] Error: {e}")
        traceback.print_exc()
        raise click.Abort
    finally:
        print(f"[Main] {len(written)} frames in {out} "
              f"({scheduler.state.failed_steps} failed redraws)")


if __name__ == '__main__':
    cli()
