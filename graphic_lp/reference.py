"""Independent cross-check of a solve with sympy parsing and scipy's linprog.

The left-hand sides are re-read with sympy rather than with the solver's own
coefficient extractor, so a disagreement can point at either side.
"""
import logging
from tokenize import TokenError
from typing import List, Sequence

import sympy as sp
from scipy.optimize import linprog
from sympy.parsing.sympy_parser import parse_expr, standard_transformations, implicit_multiplication_application
from sympy.polys.polyerrors import PolynomialError

from .config import REFERENCE_VALUE_TOLERANCE
from .errors import LPInputError
from .model import Constraint, LinearCoefficients, Objective, Point, Solution, Status

logger = logging.getLogger(__name__)

X_SYMBOL, Y_SYMBOL = sp.symbols('x y')
_SYMBOL_MAP = {'x': X_SYMBOL, 'y': Y_SYMBOL, 'X': X_SYMBOL, 'Y': Y_SYMBOL}

_LINPROG_STATUS = {
    0: Status.FEASIBLE,
    2: Status.INFEASIBLE,
    3: Status.UNBOUNDED,
}


def _parse_expression_safely(expression_string: str) -> sp.Expr:
    """Parses a string into a Sympy expression with implicit multiplication support."""
    transformations = standard_transformations + (implicit_multiplication_application,)
    return parse_expr(expression_string, local_dict=dict(_SYMBOL_MAP), transformations=transformations)


def symbolic_coefficients(expression_string: str) -> LinearCoefficients:
    """Extract the x and y coefficients of an expression through sympy."""
    try:
        expression = _parse_expression_safely(expression_string)
        polynomial = sp.Poly(expression, [X_SYMBOL, Y_SYMBOL])
    except (SyntaxError, TokenError, sp.SympifyError, PolynomialError) as error:
        raise LPInputError(f"Cannot read '{expression_string}' as a linear expression: {error}") from error

    coefficients = []
    for variable in (X_SYMBOL, Y_SYMBOL):
        try:
            coefficient = float(polynomial.coeff_monomial(variable))
        except (ValueError, TypeError):
            coefficient = 0.0
        coefficients.append(coefficient)
    return LinearCoefficients(*coefficients)


def _row_for(constraint: Constraint) -> List[float]:
    coefficients = constraint.coefficients or symbolic_coefficients(constraint.lhs)
    return [coefficients.x, coefficients.y]


def reference_solve(objective: Objective, constraints: Sequence[Constraint]) -> Solution:
    """Solve with scipy's linprog; strict inequalities are treated as non-strict."""
    objective_coefficients = [objective.x, objective.y]
    if objective.is_maximization():
        objective_coefficients = [-value for value in objective_coefficients]

    inequality_matrix = []
    inequality_bounds = []
    equality_matrix = []
    equality_bounds = []

    for constraint in constraints:
        row = _row_for(constraint)
        if constraint.op == '=':
            equality_matrix.append(row)
            equality_bounds.append(constraint.rhs)
        elif constraint.op in ('<=', '<'):
            inequality_matrix.append(row)
            inequality_bounds.append(constraint.rhs)
        elif constraint.op in ('>=', '>'):
            inequality_matrix.append([-value for value in row])
            inequality_bounds.append(-constraint.rhs)
        else:
            raise ValueError(f"Unknown relational operator: '{constraint.op}'")

    result = linprog(
        objective_coefficients,
        A_ub=inequality_matrix if inequality_matrix else None,
        b_ub=inequality_bounds if inequality_bounds else None,
        A_eq=equality_matrix if equality_matrix else None,
        b_eq=equality_bounds if equality_bounds else None,
        bounds=[(None, None), (None, None)],
        method='highs'
    )

    status = _LINPROG_STATUS.get(result.status)
    if status is None:
        raise RuntimeError(f"linprog did not finish: {result.message}")
    if status != Status.FEASIBLE:
        return Solution(None, None, status)

    objective_value = result.fun * (-1 if objective.is_maximization() else 1)
    return Solution(Point(float(result.x[0]), float(result.x[1])), float(objective_value), status)


def agrees(solution: Solution, reference: Solution, tolerance: float = REFERENCE_VALUE_TOLERANCE) -> bool:
    """Same status and, when feasible, the same optimal value.

    Points are not compared: with several optimal vertices the two methods may
    legitimately pick different ones.
    """
    if solution.status != reference.status:
        return False
    if solution.status != Status.FEASIBLE:
        return True
    scale = max(1.0, abs(reference.value))
    return abs(solution.value - reference.value) <= tolerance * scale


def cross_check(objective: Objective, constraints: Sequence[Constraint], solution: Solution) -> Solution:
    """Run the reference solve and log a warning when it disagrees."""
    reference = reference_solve(objective, constraints)
    if not agrees(solution, reference):
        logger.warning("Reference solver disagrees: vertex method gave %s, linprog gave %s", solution, reference)
    return reference
