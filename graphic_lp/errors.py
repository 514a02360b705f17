"""Errors raised for unusable solver input.

Infeasible and unbounded programs are not errors; they are reported through
:class:`graphic_lp.model.Status`.
"""


class LPInputError(ValueError):
    """Base class for input the solver cannot work with."""


class MissingObjective(LPInputError):
    """The objective is blank or both of its coefficients are zero."""

    def __init__(self, message: str = "Please provide the objective function.") -> None:
        super().__init__(message)


class NoConstraints(LPInputError):
    """Structured input was submitted without a single constraint row."""

    def __init__(self, message: str = "Please add at least one constraint.") -> None:
        super().__init__(message)


class MalformedConstraint(LPInputError):
    """A constraint line has no operator or a non-numeric right-hand side."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Cannot parse constraint: '{line}'")
        self.line = line
