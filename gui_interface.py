#!/usr/bin/env python3
"""
GUI Interface for the Fourier Series Visualizer.
Features: waveform selection, term slider, harmonic toggles, spectrum view,
play/pause animation and PNG download.
"""

import sys
import traceback

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QComboBox, QSlider, QCheckBox, QGridLayout,
    QGroupBox, QSplitter, QFileDialog, QMessageBox,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
import pyqtgraph as pg

from config import (
    CHECKBOX_HARMONICS, DEFAULT_STEP_DELAY_MS, DEFAULT_TERM_COUNT, EXPORT_FILENAME,
    PLOT_WIDTH, PLOT_HEIGHT, SPECTRUM_WIDTH, SPECTRUM_HEIGHT,
    STEP_DELAY_MIN_MS, STEP_DELAY_MAX_MS, TERM_COUNT_MIN, TERM_COUNT_MAX,
)
from src.core import VisualizerState
from src.core.animation import AnimationScheduler
from src.gui import PrimitiveView, QtTimer
from src.physics import FourierApproximator
from src.physics.spectrum import peak_bar
from src.physics.waveforms import WaveformFamily
from src.render import RenderPipeline


class FourierVisualizerGUI(QMainWindow):
    """Main window: controls on the left, time-domain and spectrum surfaces on the right."""

    def __init__(self, state: VisualizerState | None = None):
        super().__init__()
        self.state = state if state is not None else VisualizerState(term_count=DEFAULT_TERM_COUNT)
        self.pipeline = RenderPipeline((PLOT_WIDTH, PLOT_HEIGHT), (SPECTRUM_WIDTH, SPECTRUM_HEIGHT))
        self.scheduler = AnimationScheduler(
            self.state,
            redraw=lambda _state: self.redraw(),
            timer=QtTimer(self),
            step_delay_ms=DEFAULT_STEP_DELAY_MS,
        )
        self.harmonic_checkboxes = {}

        self.init_ui()
        self.redraw()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle("Fourier Series Visualizer")
        self.setGeometry(50, 50, 1300, 800)

        pg.setConfigOptions(antialias=True)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QHBoxLayout(central_widget)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.create_control_panel())
        splitter.addWidget(self.create_plot_panel())
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        main_layout.addWidget(splitter)

    def create_control_panel(self):
        """Create waveform, terms, speed and harmonic controls."""
        widget = QWidget()
        layout = QVBoxLayout(widget)

        # Waveform / terms
        signal_box = QGroupBox("Waveform")
        signal_layout = QVBoxLayout()

        self.waveform_select = QComboBox()
        for family in WaveformFamily:
            self.waveform_select.addItem(family.label, family.value)
        self.waveform_select.setCurrentIndex(list(WaveformFamily).index(self.state.family))
        self.waveform_select.currentIndexChanged.connect(self.on_waveform_changed)
        signal_layout.addWidget(self.waveform_select)

        terms_row = QHBoxLayout()
        terms_row.addWidget(QLabel("Terms N:"))
        self.terms_label = QLabel(str(self.state.term_count))
        self.terms_label.setMinimumWidth(30)
        terms_row.addStretch()
        terms_row.addWidget(self.terms_label)
        signal_layout.addLayout(terms_row)

        self.terms_slider = QSlider(Qt.Orientation.Horizontal)
        self.terms_slider.setRange(TERM_COUNT_MIN, min(TERM_COUNT_MAX, self.state.max_term_count))
        self.terms_slider.setValue(self.state.term_count)
        self.terms_slider.valueChanged.connect(self.on_terms_changed)
        signal_layout.addWidget(self.terms_slider)

        self.spectrum_toggle = QCheckBox("Show spectrum")
        self.spectrum_toggle.setChecked(self.state.spectrum_visible)
        self.spectrum_toggle.toggled.connect(self.on_spectrum_toggled)
        signal_layout.addWidget(self.spectrum_toggle)

        signal_box.setLayout(signal_layout)
        layout.addWidget(signal_box)

        # Harmonics
        harmonics_box = QGroupBox(f"Harmonics (first {CHECKBOX_HARMONICS})")
        harmonics_layout = QVBoxLayout()
        grid = QGridLayout()
        for n in range(1, CHECKBOX_HARMONICS + 1):
            cb = QCheckBox(f"n={n}")
            cb.setChecked(self.state.mask.is_enabled(n))
            cb.toggled.connect(lambda checked, n=n: self.on_harmonic_toggled(n, checked))
            self.harmonic_checkboxes[n] = cb
            grid.addWidget(cb, (n - 1) // 5, (n - 1) % 5)
        harmonics_layout.addLayout(grid)

        btn_layout = QHBoxLayout()
        reset_btn = QPushButton("Enable All")
        reset_btn.clicked.connect(self.reset_harmonics)
        btn_layout.addWidget(reset_btn)
        clear_btn = QPushButton("Disable All")
        clear_btn.clicked.connect(self.clear_harmonics)
        btn_layout.addWidget(clear_btn)
        harmonics_layout.addLayout(btn_layout)

        harmonics_box.setLayout(harmonics_layout)
        layout.addWidget(harmonics_box)

        # Animation
        anim_box = QGroupBox("Animation")
        anim_layout = QVBoxLayout()

        speed_row = QHBoxLayout()
        speed_row.addWidget(QLabel("Step delay (ms):"))
        self.speed_label = QLabel(str(DEFAULT_STEP_DELAY_MS))
        speed_row.addStretch()
        speed_row.addWidget(self.speed_label)
        anim_layout.addLayout(speed_row)

        self.speed_slider = QSlider(Qt.Orientation.Horizontal)
        self.speed_slider.setRange(STEP_DELAY_MIN_MS, STEP_DELAY_MAX_MS)
        self.speed_slider.setValue(DEFAULT_STEP_DELAY_MS)
        self.speed_slider.valueChanged.connect(self.on_speed_changed)
        anim_layout.addWidget(self.speed_slider)

        play_row = QHBoxLayout()
        self.play_button = QPushButton("Play")
        self.play_button.setMinimumHeight(40)
        self.play_button.setStyleSheet("""
            QPushButton {
                background-color: #2196F3;
                color: white;
                border: none;
                border-radius: 5px;
                font-size: 14px;
                font-weight: bold;
            }
            QPushButton:hover {
                background-color: #1976D2;
            }
        """)
        self.play_button.clicked.connect(self.toggle_play)
        play_row.addWidget(self.play_button)

        step_button = QPushButton("Step")
        step_button.setMinimumHeight(40)
        step_button.clicked.connect(self.step_once)
        play_row.addWidget(step_button)
        anim_layout.addLayout(play_row)

        anim_box.setLayout(anim_layout)
        layout.addWidget(anim_box)

        layout.addStretch()

        self.status_label = QLabel("Ready")
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet("""
            QLabel {
                background-color: #e3f2fd;
                padding: 10px;
                border-radius: 5px;
            }
        """)
        layout.addWidget(self.status_label)

        download_btn = QPushButton("Download PNG")
        download_btn.clicked.connect(self.download_image)
        layout.addWidget(download_btn)

        return widget

    def create_plot_panel(self):
        """Create time-domain and spectrum surfaces."""
        widget = QWidget()
        layout = QVBoxLayout(widget)

        self.plot_view = PrimitiveView(PLOT_WIDTH, PLOT_HEIGHT)
        layout.addWidget(self.plot_view, stretch=3)

        self.spectrum_view = PrimitiveView(SPECTRUM_WIDTH, SPECTRUM_HEIGHT)
        layout.addWidget(self.spectrum_view, stretch=2)

        return widget

    def redraw(self):
        """Render the current state and push the primitives to both surfaces."""
        frame = self.pipeline.render(self.state)
        self.plot_view.draw(frame.plot)
        self.spectrum_view.draw(frame.spectrum)
        self.sync_controls()

        error = FourierApproximator(self.state.family, self.state.term_count, self.state.mask).max_error()
        status = f"{self.state.family.label}, N={self.state.term_count}, max |error| = {error:.3f}"
        peak = peak_bar(frame.bars)
        if peak is not None:
            status += f"\nStrongest harmonic: n={peak.harmonic} (|c_n| = {peak.raw_amplitude:.4f})"
        self.status_label.setText(status)

    def sync_controls(self):
        """Reflect state changes made by the scheduler without re-triggering handlers."""
        self.terms_label.setText(str(self.state.term_count))
        if self.terms_slider.value() != self.state.term_count:
            self.terms_slider.blockSignals(True)
            self.terms_slider.setValue(self.state.term_count)
            self.terms_slider.blockSignals(False)

    def safe_redraw(self):
        try:
            self.redraw()
        except Exception as e:
            print(f"[GUI] Redraw error: {e}")
            traceback.print_exc()

    def on_waveform_changed(self, index):
        self.state.set_family(self.waveform_select.itemData(index))
        print(f"[GUI] Waveform: {self.state.family.label}")
        self.safe_redraw()

    def on_terms_changed(self, value):
        self.state.term_count = value
        self.safe_redraw()

    def on_spectrum_toggled(self, checked):
        self.state.spectrum_visible = checked
        self.safe_redraw()

    def on_harmonic_toggled(self, n, checked):
        self.state.mask.set(n, checked)
        self.safe_redraw()

    def set_checkboxes(self, checked):
        for cb in self.harmonic_checkboxes.values():
            cb.blockSignals(True)
            cb.setChecked(checked)
            cb.blockSignals(False)

    def reset_harmonics(self):
        self.state.mask.reset_all()
        self.set_checkboxes(True)
        print("[GUI] All harmonics enabled")
        self.safe_redraw()

    def clear_harmonics(self):
        self.state.mask.clear_all()
        self.set_checkboxes(False)
        print("[GUI] All harmonics disabled")
        self.safe_redraw()

    def on_speed_changed(self, value):
        self.scheduler.set_step_delay(value)
        self.speed_label.setText(str(value))

    def toggle_play(self):
        playing = self.scheduler.toggle()
        self.play_button.setText("Pause" if playing else "Play")

    def step_once(self):
        self.scheduler.step()

    def download_image(self):
        """Save the time-domain surface as PNG."""
        path, _ = QFileDialog.getSaveFileName(self, "Save Image", EXPORT_FILENAME, "PNG Images (*.png)")
        if not path:
            return
        try:
            data = self.pipeline.snapshot_png()
            with open(path, 'wb') as f:
                f.write(data)
            print(f"[GUI] Saved {len(data)} bytes to {path}")
            self.status_label.setText(f"Saved {path}")
        except Exception as e:
            print(f"[GUI] Export error: {e}")
            traceback.print_exc()
            QMessageBox.critical(self, "Export Failed", str(e))

    def closeEvent(self, event):
        """Stop the animation before the window goes away."""
        self.scheduler.stop()
        event.accept()


def main_gui(state: VisualizerState | None = None):
    """Launch the GUI application."""
    app = QApplication(sys.argv)
    app.setStyle('Fusion')

    font = QFont("Arial", 10)
    app.setFont(font)

    window = FourierVisualizerGUI(state)
    window.show()

    return app.exec()


if __name__ == '__main__':
    sys.exit(main_gui())
