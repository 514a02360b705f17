from graphic_lp.report import INFEASIBLE_MESSAGE, UNBOUNDED_MESSAGE, Method, format_result
from graphic_lp.solver import solve_example, solve_text


def test_feasible_panel():
    text = format_result(solve_example())
    assert "x = 0.0000" in text
    assert "y = 10.0000" in text
    assert "Objective function value: 50.0000" in text
    assert "Method: Mathematical (extreme points)" in text
    assert "Vertices analysed: 4" in text


def test_graphical_method_label():
    assert "Method: Graphical" in format_result(solve_example(), Method.GRAPHICAL)


def test_unbounded_panel_names_direction():
    text = format_result(solve_text("x + y", "x >= 0\ny >= 0", "max"))
    assert text.startswith(UNBOUNDED_MESSAGE)
    assert "Improving direction: (0.0000, 1.0000)" in text


def test_infeasible_panel():
    assert format_result(solve_text("x + y", "x >= 5\nx <= 2", "max")) == INFEASIBLE_MESSAGE
