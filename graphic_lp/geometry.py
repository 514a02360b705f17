"""Feasibility tests and vertex enumeration for the two-variable feasible region."""
import dataclasses
import logging
import math
from itertools import combinations
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import TOLERANCE
from .model import Constraint, Point
from .parsing import coefficients_of

logger = logging.getLogger(__name__)


def satisfies(constraint: Constraint, point: Point, tolerance: float = TOLERANCE) -> bool:
    """Check one constraint, relaxing it by ``tolerance`` so boundary points pass."""
    value = coefficients_of(constraint).evaluate(point)
    rhs = constraint.rhs
    operator = constraint.op
    if operator == '<=':
        return value <= rhs + tolerance
    if operator == '>=':
        return value >= rhs - tolerance
    if operator == '=':
        return abs(value - rhs) < tolerance
    if operator == '<':
        return value < rhs + tolerance
    if operator == '>':
        return value > rhs - tolerance
    return False


def is_feasible(point: Point, constraints: Iterable[Constraint], tolerance: float = TOLERANCE) -> bool:
    """True iff the point satisfies every constraint."""
    return all(satisfies(constraint, point, tolerance) for constraint in constraints)


def axis_intercepts(constraint: Constraint) -> List[Point]:
    """Where the constraint line crosses the x axis, then the y axis."""
    coefficients = coefficients_of(constraint)
    intercepts = []
    if coefficients.x != 0:
        intercepts.append(Point(constraint.rhs / coefficients.x, 0.0))
    if coefficients.y != 0:
        intercepts.append(Point(0.0, constraint.rhs / coefficients.y))
    return intercepts


def intersect(first: Constraint, second: Constraint, tolerance: float = TOLERANCE) -> Optional[Point]:
    """Intersection of two constraint lines; None for parallel or coincident lines."""
    a1, b1 = coefficients_of(first).x, coefficients_of(first).y
    a2, b2 = coefficients_of(second).x, coefficients_of(second).y
    c1, c2 = first.rhs, second.rhs

    determinant = a1 * b2 - a2 * b1
    if abs(determinant) <= tolerance:
        return None
    return Point(
        (c1 * b2 - c2 * b1) / determinant,
        (a1 * c2 - a2 * c1) / determinant,
    )


def dedupe(points: Iterable[Point], tolerance: float = TOLERANCE) -> List[Point]:
    """Drop points within tolerance of an earlier one; first occurrence wins."""
    kept: List[Point] = []
    for point in points:
        if not any(point.is_close(other, tolerance) for other in kept):
            kept.append(point)
    return kept


def _candidate_points(constraints: Sequence[Constraint], probes: Iterable[Tuple[float, float]]) -> Iterable[Point]:
    yield Point(0.0, 0.0)
    for constraint in constraints:
        yield from axis_intercepts(constraint)
    for first, second in combinations(constraints, 2):
        point = intersect(first, second)
        if point is not None:
            yield point
    for probe_x, probe_y in probes:
        yield Point(probe_x, probe_y)


def enumerate_vertices(
    constraints: Sequence[Constraint],
    probes: Iterable[Tuple[float, float]] = (),
) -> List[Point]:
    """Feasible candidate vertices of the region defined by ``constraints``.

    Candidates are tried in a fixed order: the origin, each constraint's
    x- and y-intercepts, every pairwise intersection, then ``probes``.
    ``probes`` is only meant for drawing a closed polygon of an unbounded
    region on a finite chart and must be left empty when optimizing.
    """
    feasible = [point for point in _candidate_points(constraints, probes) if is_feasible(point, constraints)]
    vertices = dedupe(feasible)
    logger.debug("Enumerated %d feasible vertices (%d before dedup) for %d constraints",
                 len(vertices), len(feasible), len(constraints))
    return vertices


def order_vertices(vertices: Sequence[Point]) -> List[Point]:
    """Sort vertices by angle around their centroid, for polygon drawing."""
    if not vertices:
        return []
    coordinates = np.array([[point.x, point.y] for point in vertices], dtype=float)
    centroid = coordinates.mean(axis=0)
    angles = np.arctan2(coordinates[:, 1] - centroid[1], coordinates[:, 0] - centroid[0])
    order = np.argsort(angles, kind='stable')
    return [vertices[index] for index in order]


def homogenize(constraints: Iterable[Constraint]) -> List[Constraint]:
    """The same relations with every right-hand side set to zero."""
    return [dataclasses.replace(constraint, rhs=0.0) for constraint in constraints]


def _unit(x: float, y: float) -> Point:
    norm = math.hypot(x, y)
    # adding 0.0 turns -0.0 into 0.0
    return Point(x / norm + 0.0, y / norm + 0.0)


def recession_directions(
    constraints: Sequence[Constraint],
    extra_directions: Iterable[Point] = (),
) -> List[Point]:
    """Unit directions along which a non-empty feasible region extends forever.

    Candidates are both directions of every constraint line plus
    ``extra_directions``; a candidate is kept when the homogenized
    constraints accept it.
    """
    candidates: List[Point] = []
    for constraint in constraints:
        coefficients = coefficients_of(constraint)
        if coefficients.is_zero():
            continue
        candidates.append(_unit(coefficients.y, -coefficients.x))
        candidates.append(_unit(-coefficients.y, coefficients.x))
    for direction in extra_directions:
        if direction.x != 0 or direction.y != 0:
            candidates.append(_unit(direction.x, direction.y))

    cone = homogenize(constraints)
    return dedupe(direction for direction in candidates if is_feasible(direction, cone))
