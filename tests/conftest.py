from __future__ import annotations

from io import BytesIO
from typing import Dict, Tuple

import numpy as np
import pandas as pd
import pytest

from core.layout import LATEST_COL, MOM_ROWS, MORTGAGE_ROWS, PERIOD_COLUMNS, POPPY_ROWS, PRIMARY_ROWS, SHEET_NAME

GRID_SHAPE = (230, 42)

NICK_VALUES: Dict[str, float] = {
    "total_assets_usd": 40_000_000,
    "total_liabilities_usd": 12_000_000,
    "net_assets_usd": 28_000_000,
    "liquid_assets_usd": 18_000_000,
    "illiquid_assets_usd": 22_000_000,
    "btc_holdings": 50,
    "jpm_margin_loans_usd": 3_000_000,
    "jpm_investments_usd": 13_000_000,
    "anz_mortgages_aud": 1_500_000,
    "commsec_aud": 400_000,
    "forager_aud": 100_000,
    "au_super_aud": 600_000,
    "au_house1_aud": 2_000_000,
    "au_house2_aud": 1_000_000,
    "credit_cards_usd": 20_000,
    "holding_for_mom_aud": 250_000,
}

MORTGAGE_VALUES: Dict[str, float] = {
    "street88th": 2_600_000,
    "hollywood88": 560_000,
    "hollywood90": 550_000,
    "main73": 580_000,
    "whitney": 350_000,
    "virginia167_1": 460_000,
    "virginia167_4": 455_000,
}

MOM_VALUES: Dict[str, float] = {
    "total_assets_usd": 5_000_000,
    "total_liabilities_usd": 50_000,
    "net_assets_usd": 4_950_000,
    "liquid_assets_usd": 3_000_000,
    "illiquid_assets_usd": 2_000_000,
}

POPPY_TOTAL = 750_000

# Net worth / debt / assets per period, oldest first.
HISTORY = {
    "Jan 23": (20_000_000, 10_000_000, 30_000_000),
    "Jun 23": (21_000_000, 10_500_000, 31_500_000),
    "Dec 23": (22_000_000, 11_000_000, 33_000_000),
    "Jun 24": (24_000_000, 11_200_000, 35_200_000),
    "Dec 24": (25_000_000, 11_500_000, 36_500_000),
    "Jun 25": (26_500_000, 11_800_000, 38_300_000),
}


def blank_grid(shape: Tuple[int, int] = GRID_SHAPE) -> pd.DataFrame:
    return pd.DataFrame(np.full(shape, np.nan, dtype=object))


def put(grid: pd.DataFrame, row: int, col: int, value: object) -> None:
    grid.iat[row, col] = value


@pytest.fixture
def full_grid() -> pd.DataFrame:
    grid = blank_grid()
    put(grid, 0, 0, "Family finances")
    for name, row in PRIMARY_ROWS.items():
        put(grid, row, LATEST_COL, NICK_VALUES[name])
    for name, row in MORTGAGE_ROWS.items():
        put(grid, row, LATEST_COL, MORTGAGE_VALUES[name])
    for name, row in MOM_ROWS.items():
        put(grid, row, LATEST_COL, MOM_VALUES[name])
    put(grid, POPPY_ROWS["total_assets_usd"], LATEST_COL, POPPY_TOTAL)
    for period, (net_worth, debt, assets) in HISTORY.items():
        col = PERIOD_COLUMNS[period]
        put(grid, 153, col, net_worth)
        put(grid, 150, col, debt)
        put(grid, 125, col, assets)
    return grid


def workbook_bytes(grid: pd.DataFrame, sheet_name: str = SHEET_NAME) -> bytes:
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        grid.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return buf.getvalue()


@pytest.fixture
def full_workbook(full_grid: pd.DataFrame) -> bytes:
    return workbook_bytes(full_grid)
