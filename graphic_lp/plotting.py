"""Chart for a solved program: a pure display model and its matplotlib rendering."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

from .config import (
    ANNOTATION_BOX_ALPHA,
    ANNOTATION_BOX_PADDING,
    ANNOTATION_OFFSET_X,
    ANNOTATION_OFFSET_Y,
    COLORS,
    CONSTRAINT_LINE_WIDTH,
    DISPLAY_WINDOW,
    FIGURE_SIZE,
    GRID_ALPHA,
    OBJECTIVE_LINE_WIDTH,
    OPTIMAL_POINT_SIZE,
    REGION_ALPHA,
    REGION_COLOR,
    SOLUTION_COLOR,
    TOLERANCE,
)
from .geometry import enumerate_vertices, order_vertices
from .model import Constraint, Objective, Point, SolveResult
from .parsing import coefficients_of


@dataclass(frozen=True)
class ConstraintLine:
    """A constraint boundary clipped to the chart, with its legend entry."""
    label: str
    color: str
    start: Point
    end: Point

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x


@dataclass(frozen=True)
class DisplayModel:
    window: float
    lines: List[ConstraintLine] = field(default_factory=list)
    polygon: List[Point] = field(default_factory=list)
    optimum: Optional[Point] = None
    optimum_label: Optional[str] = None
    objective: Optional[Objective] = None
    optimal_value: Optional[float] = None
    title: str = "LP Optimization"


def display_probes(window: float) -> Tuple[Tuple[float, float], ...]:
    """Chart corners used to close the polygon of an unbounded region."""
    return ((0.0, window), (window, 0.0), (window, window))


def constraint_label(index: int, constraint: Constraint) -> str:
    return f"R{index + 1}: {constraint.lhs} {constraint.op} {constraint.rhs:g}"


def constraint_line(index: int, constraint: Constraint, window: float) -> Optional[ConstraintLine]:
    """Boundary across x in [0, window]; vertical when y has no coefficient."""
    coefficients = coefficients_of(constraint)
    a, b, c = coefficients.x, coefficients.y, constraint.rhs
    color = COLORS[index % len(COLORS)]
    label = constraint_label(index, constraint)

    if b != 0:
        return ConstraintLine(label, color, Point(0.0, c / b), Point(window, (c - a * window) / b))
    if a != 0:
        x_value = c / a
        return ConstraintLine(label, color, Point(x_value, 0.0), Point(x_value, window))
    return None


def build_display_model(
    result: SolveResult,
    objective: Optional[Objective] = None,
    window: float = DISPLAY_WINDOW,
) -> DisplayModel:
    """Everything needed to draw the chart, computed without touching matplotlib."""
    lines = []
    for index, constraint in enumerate(result.constraints):
        line = constraint_line(index, constraint, window)
        if line is not None:
            lines.append(line)

    polygon = order_vertices(enumerate_vertices(result.constraints, probes=display_probes(window)))

    optimum = result.solution.point
    title = "LP Optimization"
    if objective is not None:
        title = f"LP Optimization: {objective.direction.name}"

    return DisplayModel(
        window=window,
        lines=lines,
        polygon=polygon,
        optimum=optimum,
        optimum_label=f"Solution ({optimum.x:.2f}, {optimum.y:.2f})" if optimum is not None else None,
        objective=objective,
        optimal_value=result.solution.value,
        title=title,
    )


# --- RENDERING ---

def render(model: DisplayModel, ax=None):
    """Draw the display model; returns the matplotlib figure."""
    if ax is None:
        _, ax = plt.subplots(figsize=FIGURE_SIZE)

    _setup_axes(ax)
    _plot_feasible_region(ax, model)
    _plot_constraints(ax, model)
    _plot_objective_function(ax, model)
    _plot_optimal_point(ax, model)
    _configure_plot_appearance(ax, model)
    return ax.figure


def _setup_axes(ax) -> None:
    """Set up the x and y axes."""
    ax.axvline(0, color='black', linewidth=1)
    ax.axhline(0, color='black', linewidth=1)


def _plot_constraints(ax, model: DisplayModel) -> None:
    """Plot all constraint lines."""
    for line in model.lines:
        ax.plot([line.start.x, line.end.x], [line.start.y, line.end.y],
                color=line.color, linewidth=CONSTRAINT_LINE_WIDTH, label=line.label)


def _plot_feasible_region(ax, model: DisplayModel) -> None:
    """Shade the feasible polygon."""
    if not model.polygon:
        return
    xs = [point.x for point in model.polygon]
    ys = [point.y for point in model.polygon]
    ax.fill(xs, ys, facecolor=REGION_COLOR, alpha=REGION_ALPHA,
            edgecolor=REGION_COLOR, linewidth=1, label='Feasible region')


def _plot_objective_function(ax, model: DisplayModel) -> None:
    """Plot the objective iso-line through the optimum."""
    if model.objective is None or model.optimal_value is None:
        return
    objective = model.objective
    value = model.optimal_value
    label = f'Objective Z={value:.1f}'

    if abs(objective.y) > TOLERANCE:
        x_values = np.linspace(0, model.window, 2)
        y_values = (value - objective.x * x_values) / objective.y
        ax.plot(x_values, y_values, 'r-', linewidth=OBJECTIVE_LINE_WIDTH, label=label)
    elif abs(objective.x) > TOLERANCE:
        ax.axvline(value / objective.x, color='r', linewidth=OBJECTIVE_LINE_WIDTH, label=label)


def _plot_optimal_point(ax, model: DisplayModel) -> None:
    """Plot and annotate the optimal point with dashed guides to both axes."""
    optimum = model.optimum
    if optimum is None:
        return

    ax.plot([optimum.x, optimum.x, 0], [0, optimum.y, optimum.y],
            linestyle='--', color=SOLUTION_COLOR, linewidth=1)
    ax.plot(optimum.x, optimum.y, 'o', color=SOLUTION_COLOR,
            markersize=OPTIMAL_POINT_SIZE, zorder=5, label='Optimal Solution')
    ax.annotate(
        model.optimum_label,
        (optimum.x, optimum.y),
        xytext=(ANNOTATION_OFFSET_X, ANNOTATION_OFFSET_Y),
        textcoords='offset points',
        bbox=dict(boxstyle=f"round,pad={ANNOTATION_BOX_PADDING}",
                  fc="white", ec="black", alpha=ANNOTATION_BOX_ALPHA)
    )


def _configure_plot_appearance(ax, model: DisplayModel) -> None:
    """Configure the plot's labels, limits, and styling."""
    ax.set_xlim(0, model.window)
    ax.set_ylim(0, model.window)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_title(model.title)
    ax.legend()
    ax.grid(True, alpha=GRID_ALPHA)


def visualize_result(
    result: SolveResult,
    objective: Optional[Objective] = None,
    show: bool = True,
    save_path: Optional[str] = None,
):
    """Build, render and then show and/or save the chart."""
    figure = render(build_display_model(result, objective))
    if save_path:
        figure.savefig(save_path, dpi=150, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(figure)
    return figure
