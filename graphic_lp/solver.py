"""Vertex-method solve session: parse, enumerate, then optimize or classify."""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .config import FAR_FIELD_PROBES, TOLERANCE
from .errors import MissingObjective, NoConstraints
from .geometry import enumerate_vertices, is_feasible, recession_directions
from .model import (
    Constraint,
    ConstraintRow,
    Direction,
    Objective,
    Point,
    Solution,
    SolveResult,
    Status,
)
from .parsing import (
    constraint_from_row,
    parse_constraint,
    parse_constraint_lines,
    parse_objective,
    with_non_negativity,
)

logger = logging.getLogger(__name__)

ConstraintSource = Union[str, ConstraintRow, Constraint]

EXAMPLE_OBJECTIVE = "3x + 5y"
EXAMPLE_DIRECTION = Direction.MAXIMIZE
EXAMPLE_CONSTRAINTS = ("x + y <= 10", "2x + y <= 16", "x >= 0", "y >= 0")


@dataclass(frozen=True)
class SolverOptions:
    """Per-solve switches.

    recession_check: when vertices exist, also look for a feasible direction
        that improves the objective forever and report ``Unbounded`` if one
        exists. Disabling it reproduces the vertex-only classification.
    """
    recession_check: bool = True


def optimize(vertices: Sequence[Point], objective: Objective) -> Tuple[Point, float]:
    """Best vertex for the objective; the first one wins on ties."""
    if not vertices:
        raise ValueError("Cannot optimize over an empty vertex set; classify the region instead.")

    maximize = objective.is_maximization()
    best_point = None
    best_value = float('-inf') if maximize else float('inf')
    for vertex in vertices:
        value = objective.value_at(vertex)
        if (maximize and value > best_value) or (not maximize and value < best_value):
            best_value = value
            best_point = vertex
    return best_point, best_value


def classify_empty_region(constraints: Sequence[Constraint]) -> Status:
    """Unbounded if any far-field probe is feasible, infeasible otherwise.

    Heuristic: only the three probe rays are looked at.
    """
    for probe_x, probe_y in FAR_FIELD_PROBES:
        if is_feasible(Point(probe_x, probe_y), constraints):
            return Status.UNBOUNDED
    return Status.INFEASIBLE


def find_improving_ray(constraints: Sequence[Constraint], objective: Objective) -> Optional[Point]:
    """A recession direction along which the objective keeps improving, if any.

    Only meaningful when the region is known to be non-empty.
    """
    sign = 1.0 if objective.is_maximization() else -1.0
    gradient = Point(sign * objective.x, sign * objective.y)
    for direction in recession_directions(constraints, extra_directions=[gradient]):
        if sign * objective.value_at(direction) > TOLERANCE:
            return direction
    return None


def collect_constraints(sources: Iterable[ConstraintSource]) -> List[Constraint]:
    """Turn mixed text / row / constraint input into constraints, dropping bad text."""
    constraints = []
    for source in sources:
        if isinstance(source, Constraint):
            constraints.append(source)
        elif isinstance(source, ConstraintRow):
            constraints.append(constraint_from_row(source))
        elif isinstance(source, str):
            constraint = parse_constraint(source.strip())
            if constraint is None:
                logger.warning("Dropping malformed constraint line: %r", source)
                continue
            constraints.append(constraint)
        else:
            raise TypeError(f"Unsupported constraint source: {source!r}")
    return constraints


def solve(
    objective: Objective,
    sources: Iterable[ConstraintSource],
    options: Optional[SolverOptions] = None,
) -> SolveResult:
    """Solve the program with the vertex method.

    Non-negativity constraints are added when missing. The returned result
    holds the effective constraints and feasible vertices for display.
    """
    options = options or SolverOptions()
    if objective.coefficients.is_zero():
        raise MissingObjective()

    constraints = with_non_negativity(collect_constraints(sources))
    vertices = enumerate_vertices(constraints)

    if not vertices:
        status = classify_empty_region(constraints)
        logger.info("No feasible vertex; classified as %s", status.value)
        return SolveResult(Solution(None, None, status), constraints, vertices)

    if options.recession_check:
        ray = find_improving_ray(constraints, objective)
        if ray is not None:
            logger.info("Objective improves without bound along %s", ray)
            return SolveResult(Solution(None, None, Status.UNBOUNDED), constraints, vertices, ray=ray)

    point, value = optimize(vertices, objective)
    logger.info("Optimum %s with value %g over %d vertices", point, value, len(vertices))
    return SolveResult(Solution(point, value, Status.FEASIBLE), constraints, vertices)


def solve_text(
    objective_text: str,
    constraints_text: str,
    direction: Union[Direction, str] = Direction.MAXIMIZE,
    options: Optional[SolverOptions] = None,
) -> SolveResult:
    """Free-text form: one objective expression and one constraint per line."""
    objective = parse_objective(objective_text, direction)
    return solve(objective, parse_constraint_lines(constraints_text), options)


def solve_rows(
    objective: Objective,
    rows: Sequence[ConstraintRow],
    options: Optional[SolverOptions] = None,
) -> SolveResult:
    """Structured form: objective coefficients plus at least one constraint row."""
    if objective.coefficients.is_zero():
        raise MissingObjective()
    if not rows:
        raise NoConstraints()
    return solve(objective, rows, options)


def solve_example(options: Optional[SolverOptions] = None) -> SolveResult:
    """The built-in example problem."""
    objective = parse_objective(EXAMPLE_OBJECTIVE, EXAMPLE_DIRECTION)
    return solve(objective, EXAMPLE_CONSTRAINTS, options)
