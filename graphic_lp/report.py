"""Plain-text result panel."""
from enum import Enum

from .model import SolveResult, Status


class Method(Enum):
    MATHEMATICAL = "Mathematical (extreme points)"
    GRAPHICAL = "Graphical (see the chart)"


UNBOUNDED_MESSAGE = "The problem is unbounded. The objective function can reach infinite values."
INFEASIBLE_MESSAGE = "There is no feasible solution for the given constraints."


def format_result(result: SolveResult, method: Method = Method.MATHEMATICAL) -> str:
    solution = result.solution
    if solution.status == Status.UNBOUNDED:
        message = UNBOUNDED_MESSAGE
        if result.ray is not None:
            message += f"\nImproving direction: ({result.ray.x:.4f}, {result.ray.y:.4f})"
        return message
    if solution.status == Status.INFEASIBLE:
        return INFEASIBLE_MESSAGE

    return "\n".join([
        "Optimal solution found:",
        "",
        "Variable values:",
        f"x = {solution.point.x:.4f}",
        f"y = {solution.point.y:.4f}",
        "",
        f"Objective function value: {solution.value:.4f}",
        "",
        f"Method: {method.value}",
        f"Vertices analysed: {len(result.vertices)}",
    ])
