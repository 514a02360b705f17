import math

import pytest

from graphic_lp.model import Constraint, Point
from graphic_lp.parsing import parse_constraint, parse_constraint_lines
from graphic_lp.geometry import (
    axis_intercepts,
    dedupe,
    enumerate_vertices,
    intersect,
    is_feasible,
    order_vertices,
    recession_directions,
    satisfies,
)


def _coordinates(points):
    return [(point.x, point.y) for point in points]


class TestFeasibilityOracle:
    def test_boundary_points_pass_within_tolerance(self):
        constraint = parse_constraint("x + y <= 10")
        assert satisfies(constraint, Point(5, 5 + 1e-7))
        assert not satisfies(constraint, Point(5, 5.001))

    @pytest.mark.parametrize("line", ["x < 3", "x > 3", "x = 3", "x <= 3", "x >= 3"])
    def test_every_operator_accepts_the_boundary(self, line):
        assert satisfies(parse_constraint(line), Point(3, 0))

    def test_equality_rejects_points_off_the_line(self):
        assert not satisfies(parse_constraint("x = 3"), Point(3.01, 0))

    def test_unknown_operator_is_infeasible(self):
        assert not satisfies(Constraint(lhs="x", op="!=", rhs=1.0), Point(0, 0))

    def test_point_must_satisfy_every_constraint(self, example_constraints):
        assert is_feasible(Point(6, 4), example_constraints)
        assert not is_feasible(Point(10, 0), example_constraints)


class TestVertexPieces:
    def test_axis_intercepts(self):
        assert _coordinates(axis_intercepts(parse_constraint("2x + 4y <= 8"))) == [(4.0, 0.0), (0.0, 2.0)]
        assert _coordinates(axis_intercepts(parse_constraint("y >= 3"))) == [(0.0, 3.0)]

    def test_intersection(self):
        point = intersect(parse_constraint("x + y <= 10"), parse_constraint("2x + y <= 16"))
        assert (point.x, point.y) == (6.0, 4.0)

    def test_parallel_lines_do_not_intersect(self):
        assert intersect(parse_constraint("x + y <= 10"), parse_constraint("x + y <= 5")) is None

    def test_dedupe_keeps_first_occurrence(self):
        points = dedupe([Point(0, 0), Point(1e-7, 0), Point(1, 1), Point(1, 1 + 1e-8)])
        assert points == [Point(0, 0), Point(1, 1)]


class TestEnumerateVertices:
    def test_enumeration_order(self, example_constraints):
        vertices = enumerate_vertices(example_constraints)
        assert _coordinates(vertices) == [(0.0, 0.0), (0.0, 10.0), (8.0, 0.0), (6.0, 4.0)]

    def test_parallel_constraints_contribute_no_intersection(self):
        constraints = parse_constraint_lines("x + y <= 10\nx + y <= 5\nx >= 0\ny >= 0")
        vertices = enumerate_vertices(constraints)
        assert _coordinates(vertices) == [(0.0, 0.0), (5.0, 0.0), (0.0, 5.0)]

    def test_every_vertex_is_feasible_and_distinct(self):
        constraints = parse_constraint_lines("x + 2y <= 14\n3x - y >= 0\nx - y <= 2\nx >= 0\ny >= 0")
        vertices = enumerate_vertices(constraints)
        assert vertices
        for vertex in vertices:
            assert is_feasible(vertex, constraints)
        for index, vertex in enumerate(vertices):
            assert not any(vertex.is_close(other) for other in vertices[index + 1:])

    def test_probes_are_appended_when_feasible(self):
        constraints = parse_constraint_lines("x >= 0\ny >= 0")
        vertices = enumerate_vertices(constraints, probes=((0, 15), (15, 0), (15, 15)))
        assert _coordinates(vertices) == [(0.0, 0.0), (0.0, 15.0), (15.0, 0.0), (15.0, 15.0)]

    def test_infeasible_probes_are_filtered(self, example_constraints):
        with_probes = enumerate_vertices(example_constraints, probes=((0, 15), (15, 0), (15, 15)))
        assert with_probes == enumerate_vertices(example_constraints)

    def test_empty_region(self):
        assert enumerate_vertices(parse_constraint_lines("x >= 5\nx <= 2\ny >= 0")) == []


class TestOrderVertices:
    def test_angular_order_around_centroid(self):
        ordered = order_vertices([Point(0, 0), Point(1, 1), Point(1, 0), Point(0, 1)])
        assert _coordinates(ordered) == [(0, 0), (1, 0), (1, 1), (0, 1)]

    def test_empty(self):
        assert order_vertices([]) == []


class TestRecessionDirections:
    def test_first_quadrant_extends_along_both_axes(self):
        directions = recession_directions(parse_constraint_lines("x >= 0\ny >= 0"))
        assert directions == [Point(0.0, 1.0), Point(1.0, 0.0)]

    def test_bounded_region_has_none(self, example_constraints):
        assert recession_directions(example_constraints) == []

    def test_extra_directions_are_normalized(self):
        directions = recession_directions(parse_constraint_lines("x >= 0\ny >= 0"), [Point(3, 3)])
        assert directions[-1].x == pytest.approx(1 / math.sqrt(2))
        assert directions[-1].y == pytest.approx(1 / math.sqrt(2))
