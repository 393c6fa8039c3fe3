"""
Qt side of the visualizer using PyQt6 and pyqtgraph.
PrimitiveView draws render primitives; QtTimer backs the animation scheduler.
"""

import numpy as np
from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtGui import QFont
import pyqtgraph as pg

from config import COLOR_BACKGROUND
from src.render.primitives import Clear, Polyline, Rect, Text


class QtTimer:
    """Timer backend for AnimationScheduler built on single-shot QTimers."""

    def __init__(self, parent=None):
        self.parent = parent

    def call_later(self, delay_ms: float, callback) -> QTimer:
        timer = QTimer(self.parent)
        timer.setSingleShot(True)

        def fire():
            timer.deleteLater()
            callback()

        timer.timeout.connect(fire)
        timer.start(int(delay_ms))
        return timer

    def cancel(self, handle: QTimer) -> None:
        handle.stop()
        handle.deleteLater()


class PrimitiveView(pg.PlotWidget):
    """
    Fixed-size pixel surface. The view box spans (0, 0)-(width, height) with
    y inverted, so primitives draw at their surface coordinates unchanged.
    """

    def __init__(self, width: float, height: float, parent=None):
        super().__init__(parent=parent)
        self.surface_width = float(width)
        self.surface_height = float(height)

        self.setBackground(COLOR_BACKGROUND)
        self.hideAxis('left')
        self.hideAxis('bottom')
        self.setMouseEnabled(x=False, y=False)
        self.hideButtons()
        self.setMenuEnabled(False)
        self.invertY(True)
        self.setRange(xRange=(0, width), yRange=(0, height), padding=0)
        self.setMinimumSize(int(width) // 2, int(height) // 2)

    def draw(self, primitives) -> None:
        """Replace the current content with the given primitives."""
        for z, prim in enumerate(primitives):
            if isinstance(prim, Clear):
                self.clear()
            elif isinstance(prim, Polyline):
                pen = pg.mkPen(color=prim.color, width=prim.width)
                if prim.dash is not None:
                    # Qt dash patterns are in units of the pen width
                    pen.setStyle(Qt.PenStyle.CustomDashLine)
                    pen.setDashPattern([d / prim.width for d in prim.dash])
                item = pg.PlotDataItem(prim.points[:, 0], prim.points[:, 1], pen=pen)
                item.setZValue(z)
                self.addItem(item)
            elif isinstance(prim, Rect):
                item = pg.BarGraphItem(
                    x0=np.array([prim.x]), y0=np.array([prim.y]),
                    width=np.array([prim.width]), height=np.array([prim.height]),
                    brush=pg.mkBrush(prim.color), pen=pg.mkPen(None),
                )
                item.setZValue(z)
                self.addItem(item)
            elif isinstance(prim, Text):
                item = pg.TextItem(prim.text, color=prim.color, anchor=(0, 1),
                                   angle=prim.rotation)
                item.setFont(QFont(prim.font_family, prim.font_size))
                item.setPos(prim.x, prim.y)
                item.setZValue(z)
                self.addItem(item)
            else:
                raise TypeError(f"Unknown primitive: {type(prim).__name__}")


__all__ = ['PrimitiveView', 'QtTimer']
