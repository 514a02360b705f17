"""Text and form-row input turned into constraints and objectives.

Coefficient extraction deliberately keeps two simplifications of the form
grammar: each variable is expected at most once per expression (a repeated
variable overwrites the earlier coefficient instead of adding to it), and the
non-negativity default looks at the left-hand side *text*, so ``y + x >= 0``
counts as a lower bound for ``x``. Both are relied upon by existing answers.
"""
import logging
import math
import re
from typing import Iterable, List, Optional, Union

from .errors import MalformedConstraint, MissingObjective, LPInputError
from .model import (
    RELATIONAL_OPERATORS,
    Constraint,
    ConstraintRow,
    Direction,
    LinearCoefficients,
    Objective,
)

logger = logging.getLogger(__name__)

# Leftmost run of expression characters, then the operator in fixed precedence.
_constraint_re = re.compile(r"([-+*/xXyY0-9 .]+)(<=|>=|=|<|>)(.+)")
_term_re = re.compile(r"([+-]?\s*\d*\.?\d*)\s*([xy])", re.IGNORECASE)
_decimal_re = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_decimal(text: str) -> Optional[float]:
    text = text.strip()
    if not _decimal_re.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def _coefficient_value(coefficient_text: str) -> float:
    """'' and '+' mean 1, '-' means -1, otherwise the signed decimal."""
    compact = re.sub(r"\s+", "", coefficient_text)
    sign = -1.0 if compact.startswith('-') else 1.0
    magnitude = compact.lstrip('+-')
    if magnitude in ('', '.'):
        return sign
    return sign * float(magnitude)


def extract_coefficients(expression: str) -> LinearCoefficients:
    """Turn a linear expression such as ``3x - 2.5y`` into its x/y coefficients.

    Terms are scanned left to right; a later term for the same variable
    replaces the earlier one. Variables that never appear get 0.
    """
    stripped = expression.strip()
    if stripped == 'x':
        return LinearCoefficients(1.0, 0.0)
    if stripped == 'y':
        return LinearCoefficients(0.0, 1.0)

    found = {'x': 0.0, 'y': 0.0}
    for match in _term_re.finditer(expression):
        coefficient_text, variable = match.groups()
        found[variable.lower()] = _coefficient_value(coefficient_text)
    return LinearCoefficients(found['x'], found['y'])


def coefficients_of(constraint: Constraint) -> LinearCoefficients:
    """Explicit row coefficients when present, else the ones read from ``lhs``."""
    if constraint.coefficients is not None:
        return constraint.coefficients
    return extract_coefficients(constraint.lhs)


def parse_constraint(line: str) -> Optional[Constraint]:
    """Parse ``3x + 5y <= 10``; returns None when the line is not a constraint."""
    match = _constraint_re.search(line)
    if not match:
        return None
    lhs_text, operator, rhs_text = match.groups()
    rhs = _parse_decimal(rhs_text)
    if rhs is None:
        return None
    lhs = lhs_text.strip()
    coefficients = extract_coefficients(lhs)
    if not (math.isfinite(coefficients.x) and math.isfinite(coefficients.y)):
        return None
    return Constraint(lhs=lhs, op=operator, rhs=rhs)


def parse_constraint_strict(line: str) -> Constraint:
    """Like :func:`parse_constraint` but raises :class:`MalformedConstraint`."""
    constraint = parse_constraint(line.strip())
    if constraint is None:
        raise MalformedConstraint(line)
    return constraint


def parse_constraint_lines(text: Union[str, Iterable[str]]) -> List[Constraint]:
    """Parse one constraint per non-blank line, dropping lines that fail."""
    lines = text.splitlines() if isinstance(text, str) else text
    constraints = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        constraint = parse_constraint(line)
        if constraint is None:
            logger.warning("Dropping malformed constraint line: %r", line)
            continue
        constraints.append(constraint)
    return constraints


def _format_number(value: float) -> str:
    return f"{value:g}"


def format_linear_expression(coef_x: float, coef_y: float) -> str:
    """Render coefficients the way a user would type them: ``3x - y``."""
    parts: List[str] = []
    for coefficient, variable in ((coef_x, 'x'), (coef_y, 'y')):
        if coefficient == 0:
            continue
        magnitude = abs(coefficient)
        term = variable if magnitude == 1 else f"{_format_number(magnitude)}{variable}"
        if not parts:
            parts.append(f"-{term}" if coefficient < 0 else term)
        else:
            parts.append(f"- {term}" if coefficient < 0 else f"+ {term}")
    return " ".join(parts) if parts else "0"


def constraint_from_row(row: ConstraintRow) -> Constraint:
    """Build a constraint from a structured form row."""
    if row.op not in RELATIONAL_OPERATORS:
        raise LPInputError(f"Unknown relational operator: '{row.op}'")
    values = [float(row.coef_x), float(row.coef_y), float(row.rhs)]
    if not all(math.isfinite(value) for value in values):
        raise LPInputError(f"Constraint row has a non-finite number: {row}")
    coef_x, coef_y, rhs = values
    return Constraint(
        lhs=format_linear_expression(coef_x, coef_y),
        op=row.op,
        rhs=rhs,
        coefficients=LinearCoefficients(coef_x, coef_y),
    )


def with_non_negativity(constraints: Iterable[Constraint]) -> List[Constraint]:
    """Append ``x >= 0`` / ``y >= 0`` unless a ``>=`` constraint mentions the variable."""
    effective = list(constraints)
    for variable in ('x', 'y'):
        if not any(variable in constraint.lhs and constraint.op == '>=' for constraint in effective):
            effective.append(Constraint(lhs=variable, op='>=', rhs=0.0))
    return effective


def parse_objective(objective_text: str, direction: Union[Direction, str] = Direction.MAXIMIZE) -> Objective:
    """Parse ``3x + 5y`` (optionally ``Z = 3x + 5y``) into an Objective."""
    if isinstance(direction, str):
        direction = Direction.from_text(direction)
    if not objective_text or not objective_text.strip():
        raise MissingObjective()

    if "=" in objective_text:
        objective_text = objective_text.split("=", 1)[1]

    coefficients = extract_coefficients(objective_text)
    if not (math.isfinite(coefficients.x) and math.isfinite(coefficients.y)):
        raise LPInputError(f"Objective coefficients must be finite: '{objective_text.strip()}'")
    if coefficients.is_zero():
        raise MissingObjective()
    return Objective(coefficients.x, coefficients.y, direction)
