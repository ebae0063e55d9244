from __future__ import annotations

import math
import numbers
import re
from typing import Optional, Union

import pandas as pd

CellValue = Union[float, int, str, None]


def get_cell(grid: pd.DataFrame, row: int, col: int) -> CellValue:
    """Return the raw value at zero-based (row, col), or None when unset or out of range."""
    if grid is None or row < 0 or col < 0:
        return None
    n_rows, n_cols = grid.shape
    if row >= n_rows or col >= n_cols:
        return None
    value = grid.iat[row, col]
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if pd.isna(value):
        return None
    return value


def to_number(value: object) -> Optional[float]:
    """Coerce a raw cell value to float; text that is not a number yields None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        out = float(value)
        return None if math.isnan(out) else out
    if isinstance(value, str):
        s = re.sub(r"[,$\s]", "", value)
        if not s:
            return None
        out = pd.to_numeric(s, errors="coerce")
        return None if pd.isna(out) else float(out)
    return None


def get_number(grid: pd.DataFrame, row: int, col: int) -> Optional[float]:
    return to_number(get_cell(grid, row, col))
