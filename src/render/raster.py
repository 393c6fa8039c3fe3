"""
Raster export: draws primitives with the matplotlib Agg canvas and returns
encoded image bytes.
"""

import io

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle
from config import COLOR_BACKGROUND, EXPORT_DPI
from src.render.primitives import Clear, Polyline, Rect, Text

# Primitive widths and sizes are pixels; matplotlib wants points
PX_TO_PT = 72.0 / EXPORT_DPI


def rasterize(primitives, width: float, height: float, fmt: str = 'png') -> bytes:
    """
    Draw primitives onto a width x height pixel surface.

    Args:
        primitives: Sequence of Clear/Polyline/Rect/Text in surface pixels
        width: Surface width in pixels
        height: Surface height in pixels
        fmt: Any format matplotlib can save ('png', 'svg', ...)

    Returns:
        Encoded image bytes
    """
    fig = Figure(figsize=(width / EXPORT_DPI, height / EXPORT_DPI), dpi=EXPORT_DPI)
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # Surface rows grow downward
    ax.set_axis_off()
    fig.patch.set_facecolor(COLOR_BACKGROUND)

    for z, prim in enumerate(primitives):
        if isinstance(prim, Clear):
            # Drop everything drawn so far
            for artist in list(ax.lines) + list(ax.patches) + list(ax.texts):
                artist.remove()
        elif isinstance(prim, Polyline):
            linestyle = '-'
            if prim.dash is not None:
                dash, gap = prim.dash
                linestyle = (0, (dash / prim.width, gap / prim.width))
            ax.plot(prim.points[:, 0], prim.points[:, 1], color=prim.color,
                    linewidth=prim.width * PX_TO_PT, linestyle=linestyle, zorder=z)
        elif isinstance(prim, Rect):
            ax.add_patch(Rectangle((prim.x, prim.y), prim.width, prim.height,
                                   facecolor=prim.color, edgecolor='none', zorder=z))
        elif isinstance(prim, Text):
            ax.text(prim.x, prim.y, prim.text, color=prim.color,
                    fontsize=prim.font_size * PX_TO_PT, family=prim.font_family,
                    rotation=prim.rotation, rotation_mode='anchor',
                    ha='left', va='baseline', zorder=z)
        else:
            raise TypeError(f"Unknown primitive: {type(prim).__name__}")

    buffer = io.BytesIO()
    fig.savefig(buffer, format=fmt, dpi=EXPORT_DPI, facecolor=COLOR_BACKGROUND)
    return buffer.getvalue()


def save_image(primitives, width: float, height: float, path) -> int:
    """Rasterize to PNG and write it to path. Returns the number of bytes written."""
    data = rasterize(primitives, width, height)
    with open(path, 'wb') as f:
        f.write(data)
    print(f"[Export] Wrote {len(data)} bytes to {path}")
    return len(data)


__all__ = ['rasterize', 'save_image']
