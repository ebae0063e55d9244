from __future__ import annotations

import logging
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Mapping, Tuple

import pandas as pd

from core.cells import get_number
from core.errors import MalformedFileError, MissingSheetError
from core.layout import (
    ACCEPTED_EXTENSIONS,
    HISTORY_ROWS,
    HOUSEHOLD_DEFAULTS,
    LATEST_COL,
    MOM_NAME,
    MOM_ROWS,
    MORTGAGE_DEFAULTS,
    MORTGAGE_ROWS,
    PERIOD_COLUMNS,
    POPPY_NAME,
    POPPY_ROWS,
    PRIMARY_DEFAULTS,
    PRIMARY_NAME,
    PRIMARY_ROWS,
    PROPERTY_VALUES,
    SHEET_NAME,
)
from core.models import EntityHistory, FamilyData, HistoricalPoint, HistoricalSeries, HouseholdEntity, PrimaryEntity

logger = logging.getLogger(__name__)


# ---------------- Workbook ----------------
def check_extension(filename: str) -> None:
    if not filename:
        return
    suffix = Path(filename).suffix.lower()
    if suffix not in ACCEPTED_EXTENSIONS:
        raise MalformedFileError(f"Unsupported file type '{suffix or filename}'. Upload an .xlsx or .xls file.")


def read_sheet_grid(content: bytes, filename: str = "", sheet_name: str = SHEET_NAME) -> pd.DataFrame:
    """Parse workbook bytes and return the named sheet as a positional (header-less) grid."""
    check_extension(filename)
    if not content:
        raise MalformedFileError("The uploaded file is empty.")
    try:
        book = pd.ExcelFile(BytesIO(content))
    except Exception as exc:
        logger.warning("could not parse %s as a workbook: %s", filename or "<upload>", exc)
        raise MalformedFileError() from exc

    with book:
        if sheet_name not in book.sheet_names:
            logger.info("sheet %r missing from %s (found %s)", sheet_name, filename or "<upload>", book.sheet_names)
            raise MissingSheetError(sheet_name)
        try:
            grid = book.parse(sheet_name=sheet_name, header=None, index_col=None)
        except Exception as exc:
            logger.warning("could not read sheet %r from %s: %s", sheet_name, filename or "<upload>", exc)
            raise MalformedFileError() from exc
    return grid


# ---------------- Entity resolution ----------------
def _read_fields(
    grid: pd.DataFrame,
    rows: Mapping[str, int],
    col: int,
    defaults: Mapping[str, float],
) -> Tuple[Dict[str, float], List[str]]:
    values: Dict[str, float] = {}
    defaulted: List[str] = []
    for name, row in rows.items():
        value = get_number(grid, row, col)
        if value is None:
            value = defaults.get(name, 0.0)
            defaulted.append(name)
        values[name] = value
    return values, defaulted


def sample_series(grid: pd.DataFrame, row: int, columns: Mapping[str, int] = PERIOD_COLUMNS) -> HistoricalSeries:
    """Sample one row across the period columns, dropping blank and zero samples."""
    points = []
    for period, col in columns.items():
        value = get_number(grid, row, col)
        if value:
            points.append(HistoricalPoint(period=period, value=value))
    return tuple(points)


def resolve_history(grid: pd.DataFrame) -> EntityHistory:
    return EntityHistory(
        net_worth=sample_series(grid, HISTORY_ROWS["net_worth"]),
        debt=sample_series(grid, HISTORY_ROWS["debt"]),
        gross_assets=sample_series(grid, HISTORY_ROWS["gross_assets"]),
    )


def resolve_primary(grid: pd.DataFrame, col: int = LATEST_COL) -> PrimaryEntity:
    fields, defaulted = _read_fields(grid, PRIMARY_ROWS, col, PRIMARY_DEFAULTS)
    mortgages, mortgages_defaulted = _read_fields(grid, MORTGAGE_ROWS, col, MORTGAGE_DEFAULTS)
    defaulted += [f"mortgages.{name}" for name in mortgages_defaulted]
    if defaulted:
        logger.info("%s: %d field(s) fell back to defaults: %s", PRIMARY_NAME, len(defaulted), ", ".join(defaulted))
    return PrimaryEntity(
        name=PRIMARY_NAME,
        mortgages=mortgages,
        properties=dict(PROPERTY_VALUES),
        history=resolve_history(grid),
        defaulted_fields=tuple(defaulted),
        **fields,
    )


def resolve_household(grid: pd.DataFrame, name: str, rows: Mapping[str, int], col: int = LATEST_COL) -> HouseholdEntity:
    fields, defaulted = _read_fields(grid, rows, col, HOUSEHOLD_DEFAULTS)
    if defaulted:
        logger.info("%s: %d field(s) fell back to defaults: %s", name, len(defaulted), ", ".join(defaulted))
    return HouseholdEntity(name=name, defaulted_fields=tuple(defaulted), **fields)


def resolve_family(grid: pd.DataFrame, source_name: str = "") -> FamilyData:
    return FamilyData(
        nick=resolve_primary(grid),
        mom=resolve_household(grid, MOM_NAME, MOM_ROWS),
        poppy=resolve_household(grid, POPPY_NAME, POPPY_ROWS),
        source_name=source_name,
    )


# ---------------- Public API (Streamlit + FastAPI use) ----------------
@lru_cache(maxsize=4)
def _load_dashboard_data_cached(content: bytes, filename: str) -> FamilyData:
    grid = read_sheet_grid(content, filename)
    logger.info("loaded %s: sheet %r is %d x %d", filename or "<upload>", SHEET_NAME, grid.shape[0], grid.shape[1])
    return resolve_family(grid, source_name=filename)


def load_dashboard_data(content: bytes, filename: str = "") -> FamilyData:
    """Parse an uploaded workbook into the three family entities.

    Raises MissingSheetError or MalformedFileError; both leave no state behind.
    """
    return _load_dashboard_data_cached(bytes(content), filename or "")
