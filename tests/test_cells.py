import numpy as np
import pandas as pd

from core.cells import get_cell, get_number, to_number


def _grid():
    return pd.DataFrame([[1.5, "text", np.nan], ["  ", "1,234", 0]], dtype=object)


def test_get_cell_returns_raw_values():
    grid = _grid()
    assert get_cell(grid, 0, 0) == 1.5
    assert get_cell(grid, 0, 1) == "text"
    assert get_cell(grid, 1, 2) == 0


def test_get_cell_unset_and_out_of_range_are_none():
    grid = _grid()
    assert get_cell(grid, 0, 2) is None
    assert get_cell(grid, 1, 0) is None
    assert get_cell(grid, 99, 0) is None
    assert get_cell(grid, 0, 99) is None
    assert get_cell(grid, -1, 0) is None
    assert get_cell(None, 0, 0) is None


def test_get_number_coerces_text():
    grid = _grid()
    assert get_number(grid, 1, 1) == 1234.0
    assert get_number(grid, 0, 1) is None
    assert get_number(grid, 1, 2) == 0.0


def test_to_number_edge_values():
    assert to_number("$2,500") == 2500.0
    assert to_number(True) is None
    assert to_number(float("nan")) is None
    assert to_number(np.int64(7)) == 7.0
    assert to_number(pd.Timestamp("2024-01-01")) is None
