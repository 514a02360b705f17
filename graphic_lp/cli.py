import argparse
import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import LPInputError
from .model import Constraint, Direction, Objective
from .parsing import parse_constraint_lines, parse_constraint_strict, parse_objective
from .plotting import visualize_result
from .reference import cross_check
from .report import Method, format_result
from .solver import (
    EXAMPLE_CONSTRAINTS,
    EXAMPLE_DIRECTION,
    EXAMPLE_OBJECTIVE,
    ConstraintSource,
    SolverOptions,
    solve,
)


# --- INPUT PARSING LOGIC ---

def parse_user_input(read: Callable[[str], str] = input) -> Tuple[Objective, List[Constraint]]:
    """Handles the interactive user input session."""
    print("\n--- LINEAR PROGRAMMING SOLVER (x, y) ---")

    print("\nOptimization Goal:")
    mode_string = read("Type 'max' to Maximize or 'min' to Minimize: ").strip().lower()
    direction = Direction.MINIMIZE if mode_string.startswith('min') else Direction.MAXIMIZE

    objective_string = read("Enter Objective Function (e.g., '3x + 5y'): ")
    objective = parse_objective(objective_string, direction)

    constraints = []
    print("\nEnter Constraints.")
    print("Examples: 'x + y <= 10', '2x + y <= 16', 'y >= 3'.")
    print("Type 'done' when finished.")

    count = 1
    while True:
        entry = read(f"Constraint {count}: ").strip()
        if entry.lower() == 'done':
            break
        if not entry:
            continue

        try:
            constraints.append(parse_constraint_strict(entry))
            count += 1
        except LPInputError as error:
            print(f"Error parsing constraint: {error}. Try again.")

    return objective, constraints


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphic-lp",
        description="Solve a two-variable linear program with the vertex method.",
    )
    parser.add_argument("--objective", "-o", type=str, default=None, help="Objective, e.g. '3x + 5y'")
    parser.add_argument("--direction", "-d", type=str, default="max", choices=["max", "min"])
    parser.add_argument("--constraint", "-c", action="append", default=[],
                        help="A constraint such as 'x + y <= 10'. Repeat for more.")
    parser.add_argument("--file", "-f", type=str, default=None, help="File with one constraint per line")
    parser.add_argument("--example", action="store_true", help="Solve the built-in example problem")
    parser.add_argument("--graphical", action="store_true",
                        help="Report the graphical method and render the chart")
    parser.add_argument("--plot", action="store_true", help="Show the chart")
    parser.add_argument("--save", type=str, default=None, help="Save the chart to this path")
    parser.add_argument("--check", action="store_true", help="Cross-check the answer with scipy's linprog")
    parser.add_argument("--legacy-unbounded", action="store_true",
                        help="Only classify as unbounded when no feasible vertex exists")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _read_constraint_file(path: str) -> List[Constraint]:
    with open(path, "r", encoding="utf-8") as handle:
        return parse_constraint_lines(handle.read())


def _collect_problem(args: argparse.Namespace) -> Tuple[Objective, List[ConstraintSource]]:
    if args.example:
        return parse_objective(EXAMPLE_OBJECTIVE, EXAMPLE_DIRECTION), list(EXAMPLE_CONSTRAINTS)

    if args.objective is not None or args.constraint or args.file:
        objective = parse_objective(args.objective or "", args.direction)
        sources: List[ConstraintSource] = []
        if args.file:
            sources.extend(_read_constraint_file(args.file))
        sources.extend(args.constraint)
        return objective, sources

    objective, constraints = parse_user_input()
    return objective, list(constraints)


# --- MAIN ---
def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the linear programming solver."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        objective, sources = _collect_problem(args)
        options = SolverOptions(recession_check=not args.legacy_unbounded)
        result = solve(objective, sources, options)

        method = Method.GRAPHICAL if args.graphical else Method.MATHEMATICAL
        print("\n" + str(result.solution))
        print(format_result(result, method))

        if args.check:
            reference = cross_check(objective, result.constraints, result.solution)
            print(f"\nlinprog reference: {reference}")

        if args.plot or args.save or args.graphical:
            show = args.plot or (args.graphical and not args.save)
            visualize_result(result, objective, show=show, save_path=args.save)
    except EOFError:
        print("\nInput ended before the problem was complete.")
        return 1
    except (ValueError, RuntimeError, OSError) as error:
        print(f"\nAn error occurred: {error}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
