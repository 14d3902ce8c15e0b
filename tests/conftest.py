"""
tests/conftest
~~~~~~~~~~~~~~
"""

import matplotlib

# Headless rendering for every chart test
matplotlib.use("Agg", force=True)

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from upsetviz import UpsetChart, UpsetMatrix, parse_upset_matrix  # noqa: E402

SCENARIO_A = "SetA\t120\nSetB\t150\nSetA,SetB\t45\n"


@pytest.fixture(scope="session")
def scenario_text():
    """
    Returns the three-row example file used throughout the suite.

    Returns:
        str: Tab-separated file contents.
    """
    return SCENARIO_A


@pytest.fixture(scope="session")
def toy_matrix(scenario_text):
    """
    Returns the matrix parsed from the example file.

    Args:
        scenario_text (str): Example file contents.

    Returns:
        UpsetMatrix: Parsed matrix with sets SetA, SetB.
    """
    return parse_upset_matrix(scenario_text)


@pytest.fixture(scope="session")
def wide_matrix():
    """
    Returns a matrix with eight short set names and one row per set plus pairs.

    Returns:
        UpsetMatrix: Matrix with 8 sets.
    """
    names = [f"S{i}" for i in range(8)]
    records = [(name, 10 * (i + 1)) for i, name in enumerate(names)]
    records += [(f"{a},{b}", 3) for a, b in zip(names, names[1:])]
    return UpsetMatrix.from_records(records)


@pytest.fixture
def toy_chart(toy_matrix):
    """
    Returns a drawn, non-interactive chart of the toy matrix and closes it afterwards.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix.

    Yields:
        UpsetChart: Drawn chart.
    """
    chart = UpsetChart(toy_matrix, width=500, height=400, font_size=12, interactive=False)
    chart.draw()
    yield chart
    chart.close()


@pytest.fixture(autouse=True)
def _close_figures():
    """
    Closes every figure left open by a test.
    """
    yield
    plt.close("all")
