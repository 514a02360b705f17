"""Module-level configuration for the solver, the chart and the CLI."""
from typing import Tuple

# --- SOLVER ---
TOLERANCE = 1e-6

# Far-field points used to tell an unbounded region from an empty one
# when no vertex survives the feasibility filter.
FAR_FIELD_PROBES: Tuple[Tuple[float, float], ...] = (
    (1e6, 0.0),
    (0.0, 1e6),
    (1e6, 1e6),
)

# --- DISPLAY ---
DISPLAY_WINDOW = 15.0

COLORS: Tuple[str, ...] = ('#FF5722', '#4CAF50', '#2196F3', '#9C27B0', '#FFC107', '#795548')
REGION_COLOR = '#4CAF50'
REGION_ALPHA = 0.3
SOLUTION_COLOR = '#E91E63'

# Plotting constants
FIGURE_SIZE = (10, 8)
CONSTRAINT_LINE_WIDTH = 2
OBJECTIVE_LINE_WIDTH = 2.5
OPTIMAL_POINT_SIZE = 10
GRID_ALPHA = 0.3
ANNOTATION_OFFSET_X = 10
ANNOTATION_OFFSET_Y = 10
ANNOTATION_BOX_PADDING = 0.3
ANNOTATION_BOX_ALPHA = 0.8

# --- CROSS-CHECK ---
REFERENCE_VALUE_TOLERANCE = 1e-4
