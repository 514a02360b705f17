"""Two-variable linear programming by the vertex (graphical) method."""
from .errors import LPInputError, MalformedConstraint, MissingObjective, NoConstraints
from .model import (
    Constraint,
    ConstraintRow,
    Direction,
    LinearCoefficients,
    Objective,
    Point,
    Solution,
    SolveResult,
    Status,
)
from .parsing import extract_coefficients, parse_constraint, parse_objective
from .solver import SolverOptions, solve, solve_example, solve_rows, solve_text

__version__ = "0.1.0"
