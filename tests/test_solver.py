import pytest

from graphic_lp.errors import MissingObjective, NoConstraints
from graphic_lp.geometry import is_feasible
from graphic_lp.model import Constraint, ConstraintRow, Direction, Objective, Point, Status
from graphic_lp.parsing import parse_constraint_lines
from graphic_lp.solver import (
    SolverOptions,
    classify_empty_region,
    find_improving_ray,
    optimize,
    solve,
    solve_example,
    solve_rows,
    solve_text,
)


class TestOptimize:
    def test_first_vertex_wins_ties(self):
        vertices = [Point(0, 10), Point(10, 0)]
        assert optimize(vertices, Objective(1, 1, Direction.MAXIMIZE)) == (Point(0, 10), 10)
        assert optimize(vertices, Objective(1, 1, Direction.MINIMIZE)) == (Point(0, 10), 10)

    def test_deterministic(self):
        vertices = [Point(0, 0), Point(3, 1), Point(2, 2), Point(0, 4)]
        objective = Objective(1, 1, Direction.MAXIMIZE)
        assert optimize(vertices, objective) == optimize(vertices, objective) == (Point(3, 1), 4)

    def test_empty_vertex_set_is_rejected(self):
        with pytest.raises(ValueError):
            optimize([], Objective(1, 1))


class TestClassifyEmptyRegion:
    def test_far_field_probe_passes(self):
        assert classify_empty_region(parse_constraint_lines("x >= 0\ny >= 0")) == Status.UNBOUNDED

    def test_no_probe_passes(self):
        assert classify_empty_region(parse_constraint_lines("x >= 5\nx <= 2\ny >= 0")) == Status.INFEASIBLE


class TestScenarios:
    def test_max_example_picks_best_vertex(self):
        result = solve_text("3x + 5y", "x + y <= 10\n2x + y <= 16", "max")
        assert result.status == Status.FEASIBLE
        assert result.solution.point == Point(0, 10)
        assert result.solution.value == pytest.approx(50)

    def test_max_at_pairwise_intersection(self):
        result = solve_text("3x + 2y", "x + y <= 10\n2x + y <= 16", "max")
        assert result.solution.point == Point(6, 4)
        assert result.solution.value == pytest.approx(26)

    def test_min_with_lower_bounds(self):
        result = solve_text("x + y", "x >= 2\ny >= 3", "min")
        assert result.solution.point == Point(2, 3)
        assert result.solution.value == pytest.approx(5)
        assert [c.lhs for c in result.constraints] == ["x", "y"]

    def test_unbounded_first_quadrant(self):
        result = solve_text("x + y", "x >= 0\ny >= 0", "max")
        assert result.status == Status.UNBOUNDED
        assert result.solution.point is None
        assert result.solution.value is None
        assert result.ray == Point(0, 1)
        assert result.vertices == [Point(0, 0)]

    def test_legacy_classification_reports_origin(self):
        result = solve_text("x + y", "x >= 0\ny >= 0", "max", SolverOptions(recession_check=False))
        assert result.status == Status.FEASIBLE
        assert result.solution.point == Point(0, 0)

    def test_contradictory_constraints_are_infeasible(self):
        result = solve_text("x + y", "x >= 5\nx <= 2", "max")
        assert result.status == Status.INFEASIBLE
        assert result.solution.point is None
        assert result.vertices == []
        assert [str(c) for c in result.constraints] == ["x >= 5", "x <= 2", "y >= 0"]

    def test_equality_constraint(self):
        result = solve_text("x", "x + y = 4\nx <= 3", "min")
        assert result.solution.point == Point(0, 4)
        assert result.solution.value == pytest.approx(0)

    def test_malformed_lines_are_dropped(self):
        result = solve_text("x + y", "x + y <= 4\nnonsense\n", "max")
        assert result.solution.point == Point(4, 0)
        assert result.solution.value == pytest.approx(4)
        assert len(result.constraints) == 3

    def test_returned_vertices_are_feasible(self):
        result = solve_text("2x + 3y", "x + 2y <= 14\n3x - y >= 0\nx - y <= 2", "max")
        for vertex in result.vertices:
            assert is_feasible(vertex, result.constraints)

    def test_example(self):
        result = solve_example()
        assert result.solution.point == Point(0, 10)
        assert len(result.vertices) == 4


class TestSolveInputs:
    def test_mixed_sources(self):
        sources = ["x <= 3", ConstraintRow(0, 1, "<=", 2), Constraint(lhs="x + y", op="<=", rhs=4.0)]
        result = solve(Objective(1, 0), sources)
        assert result.solution.point == Point(3, 0)
        assert [c.lhs for c in result.constraints] == ["x", "y", "x + y", "x", "y"]

    def test_unsupported_source(self):
        with pytest.raises(TypeError):
            solve(Objective(1, 1), [42])

    def test_rows(self):
        rows = [ConstraintRow(1, 1, "<=", 10), ConstraintRow(2, 1, "<=", 16)]
        result = solve_rows(Objective(3, 2, Direction.MAXIMIZE), rows)
        assert result.solution.point == Point(6, 4)
        assert [c.lhs for c in result.constraints] == ["x + y", "2x + y", "x", "y"]

    def test_rows_require_at_least_one_row(self):
        with pytest.raises(NoConstraints):
            solve_rows(Objective(1, 1), [])

    @pytest.mark.parametrize("objective_text", ["", "0x + 0y"])
    def test_missing_objective(self, objective_text):
        with pytest.raises(MissingObjective):
            solve_text(objective_text, "x <= 1")

    def test_zero_objective_aborts_structured_solve(self):
        with pytest.raises(MissingObjective):
            solve_rows(Objective(0, 0), [ConstraintRow(1, 0, "<=", 1)])


class TestImprovingRay:
    def test_min_over_unbounded_region_is_bounded(self):
        constraints = parse_constraint_lines("x >= 2\ny >= 3")
        assert find_improving_ray(constraints, Objective(1, 1, Direction.MINIMIZE)) is None

    def test_max_along_a_strip(self):
        constraints = parse_constraint_lines("y <= 2\nx >= 0\ny >= 0")
        assert find_improving_ray(constraints, Objective(1, 0, Direction.MAXIMIZE)) == Point(1, 0)

    def test_objective_orthogonal_to_recession_is_bounded(self):
        result = solve_text("y", "y <= 2", "max")
        assert result.status == Status.FEASIBLE
        assert result.solution.value == pytest.approx(2)
