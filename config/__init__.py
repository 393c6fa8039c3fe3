"""
Global configuration constants for the Fourier Series Visualizer.
"""

# Harmonic Configuration
MAX_HARMONICS: int = 50  # Harmonics 1..50 can contribute to the partial sum
SPECTRUM_MAX_BARS: int = 25  # Display cap for the spectrum (distinct from MAX_HARMONICS)
SPECTRUM_EPSILON: float = 1e-6  # Normalization floor for an all-zero spectrum
CHECKBOX_HARMONICS: int = 10  # Harmonics exposed as checkboxes in the GUI

# Domain Sampling
NUM_POINTS: int = 800  # Samples over x in [-π, π]

# Term Count
TERM_COUNT_MIN: int = 1
TERM_COUNT_MAX: int = 50  # Slider-defined max (animation wraps back to 1 after this)
DEFAULT_TERM_COUNT: int = 5

# Animation
DEFAULT_STEP_DELAY_MS: int = 200
STEP_DELAY_MIN_MS: int = 50
STEP_DELAY_MAX_MS: int = 1000

# Surface Sizes (pixels)
PLOT_WIDTH: int = 900
PLOT_HEIGHT: int = 400
SPECTRUM_WIDTH: int = 900
SPECTRUM_HEIGHT: int = 250

# Spectrum Layout (pixels)
#   plot_width  = SPECTRUM_WIDTH  - (MARGIN_LEFT + MARGIN_RIGHT)
#   plot_height = SPECTRUM_HEIGHT - (MARGIN_TOP + MARGIN_BOTTOM)
SPECTRUM_MARGIN_LEFT: int = 40
SPECTRUM_MARGIN_RIGHT: int = 20
SPECTRUM_MARGIN_TOP: int = 20
SPECTRUM_MARGIN_BOTTOM: int = 30
SPECTRUM_AXIS_TOP: int = 10  # Vertical axis starts here
SPECTRUM_AXIS_RIGHT_INSET: int = 10  # Horizontal axis ends at width - inset
SPECTRUM_BAR_FILL: float = 0.8  # Fraction of each bar slot that is filled
SPECTRUM_HEIGHT_SCALE: float = 0.9  # Tallest bar uses 90% of plot height

# Colors
COLOR_AXIS: str = '#bbbbbb'
COLOR_IDEAL: str = '#cc0000'
COLOR_APPROX: str = '#0055ff'
COLOR_BAR_ENABLED: str = '#0055ff'
COLOR_BAR_DISABLED: str = '#cccccc'
COLOR_LABEL: str = '#333333'
COLOR_BACKGROUND: str = '#ffffff'

# Stroke Styles
AXIS_LINE_WIDTH: float = 1.0
APPROX_LINE_WIDTH: float = 2.5
IDEAL_LINE_WIDTH: float = 2.0
IDEAL_DASH: tuple = (6, 4)  # Dash, gap in pixels

# Text
FONT_FAMILY: str = 'Arial'
LEGEND_FONT_SIZE: int = 14
LABEL_FONT_SIZE: int = 12
LEGEND_IDEAL: str = 'Ideal waveform (target)'
LEGEND_APPROX: str = 'Fourier approximation'
SPECTRUM_X_LABEL: str = 'Harmonic index n'
SPECTRUM_Y_LABEL: str = 'Amplitude |c_n|'
TICK_EVERY: int = 5  # Tick labels at n = 1 and every multiple of this

# Export
EXPORT_FILENAME: str = 'fourier_visualization.png'
EXPORT_DPI: int = 100
