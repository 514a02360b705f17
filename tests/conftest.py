import matplotlib

matplotlib.use("Agg")

import pytest

from graphic_lp.parsing import parse_constraint_lines

EXAMPLE_TEXT = "x + y <= 10\n2x + y <= 16\nx >= 0\ny >= 0"


@pytest.fixture
def example_constraints():
    return parse_constraint_lines(EXAMPLE_TEXT)
