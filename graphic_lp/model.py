from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import TOLERANCE

RELATIONAL_OPERATORS = ('<=', '>=', '=', '<', '>')


@dataclass(frozen=True)
class Point:
    """Represents a point in the x/y plane."""
    x: float
    y: float

    def is_close(self, other: 'Point', tolerance: float = TOLERANCE) -> bool:
        """Both coordinates lie within tolerance of the other point."""
        return abs(self.x - other.x) < tolerance and abs(self.y - other.y) < tolerance

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


@dataclass(frozen=True)
class LinearCoefficients:
    """Coefficients of the linear expression x_coefficient*x + y_coefficient*y."""
    x: float
    y: float

    def evaluate(self, point: Point) -> float:
        return self.x * point.x + self.y * point.y

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0


@dataclass(frozen=True)
class Constraint:
    """One relation ``lhs op rhs``.

    ``coefficients`` is only set for constraints built from structured rows;
    text constraints derive theirs from ``lhs``.
    """
    lhs: str
    op: str
    rhs: float
    coefficients: Optional[LinearCoefficients] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.lhs} {self.op} {self.rhs:g}"


@dataclass(frozen=True)
class ConstraintRow:
    """A structured form row: coef_x*x + coef_y*y op rhs."""
    coef_x: float
    coef_y: float
    op: str
    rhs: float


class Direction(Enum):
    MAXIMIZE = "max"
    MINIMIZE = "min"

    @classmethod
    def from_text(cls, text: str) -> 'Direction':
        """Accepts anything starting with 'max' or 'min' (case-insensitive)."""
        mode = text.strip().lower()
        if mode.startswith('max'):
            return cls.MAXIMIZE
        if mode.startswith('min'):
            return cls.MINIMIZE
        raise ValueError(f"Unknown optimization direction: '{text}'")


@dataclass(frozen=True)
class Objective:
    """Objective coefficients plus the optimization direction."""
    x: float
    y: float
    direction: Direction = Direction.MAXIMIZE

    @property
    def coefficients(self) -> LinearCoefficients:
        return LinearCoefficients(self.x, self.y)

    def value_at(self, point: Point) -> float:
        return self.x * point.x + self.y * point.y

    def is_maximization(self) -> bool:
        return self.direction == Direction.MAXIMIZE


class Status(Enum):
    FEASIBLE = "Feasible"
    UNBOUNDED = "Unbounded"
    INFEASIBLE = "Infeasible"


@dataclass(frozen=True)
class Solution:
    """Stores the optimal result or the classification of the program."""
    point: Optional[Point]
    value: Optional[float]
    status: Status

    @property
    def is_successful(self) -> bool:
        return self.status == Status.FEASIBLE

    def __str__(self) -> str:
        if not self.is_successful:
            return f"No Solution: {self.status.value}"
        return f"Optimal Z = {self.value:.2f} (x={self.point.x:.2f}, y={self.point.y:.2f})"


@dataclass(frozen=True)
class SolveResult:
    """Everything the presentation layer needs after one solve."""
    solution: Solution
    constraints: List[Constraint]
    vertices: List[Point]
    ray: Optional[Point] = None

    @property
    def status(self) -> Status:
        return self.solution.status
