"""Fixed coordinates of the family finances workbook template.

All positions are zero-based (row, column) indices into the "2023 ->" sheet.
Nothing here is inferred from headers: if the template's rows move, the
resolver reads whatever now sits at these coordinates.
"""

from __future__ import annotations

from typing import Dict

SHEET_NAME = "2023 ->"
ACCEPTED_EXTENSIONS = (".xlsx", ".xls")

LATEST_COL = 40

# Period label -> column. Ordered oldest first; the last entry is the latest column.
PERIOD_COLUMNS: Dict[str, int] = {
    "Jan 23": 4,
    "Jun 23": 10,
    "Dec 23": 16,
    "Jun 24": 22,
    "Dec 24": 28,
    "Jun 25": 34,
    "Dec 25": 40,
}

# ---------------- Nick (NWB) ----------------
PRIMARY_NAME = "Nick (NWB)"

# Field -> row. Fields ending in _aud are Australian dollars, everything else USD
# (btc_holdings is a coin count).
PRIMARY_ROWS: Dict[str, int] = {
    "total_assets_usd": 125,
    "total_liabilities_usd": 150,
    "net_assets_usd": 153,
    "liquid_assets_usd": 71,
    "illiquid_assets_usd": 122,
    "btc_holdings": 19,
    "jpm_margin_loans_usd": 133,
    "jpm_investments_usd": 54,
    "anz_mortgages_aud": 128,
    "commsec_aud": 60,
    "forager_aud": 59,
    "au_super_aud": 61,
    "au_house1_aud": 75,
    "au_house2_aud": 76,
    "credit_cards_usd": 145,
    "holding_for_mom_aud": 63,
}

MORTGAGE_ROWS: Dict[str, int] = {
    "street88th": 135,
    "hollywood88": 136,
    "hollywood90": 137,
    "main73": 138,
    "whitney": 139,
    "virginia167_1": 140,
    "virginia167_4": 141,
}

HISTORY_ROWS: Dict[str, int] = {
    "net_worth": 153,
    "debt": 150,
    "gross_assets": 125,
}

# Used when the sheet cell is blank or not a number. Fields not listed default to 0,
# so a reviewer can tell a masked gap (non-zero here) from a true zero.
PRIMARY_DEFAULTS: Dict[str, float] = {
    "jpm_investments_usd": 12_000_000.0,
    "credit_cards_usd": 25_000.0,
    "jpm_margin_loans_usd": 2_900_000.0,
}

MORTGAGE_DEFAULTS: Dict[str, float] = {
    "street88th": 2_665_000.0,
    "hollywood88": 570_000.0,
    "hollywood90": 570_000.0,
    "main73": 583_000.0,
    "whitney": 357_000.0,
    "virginia167_1": 465_000.0,
    "virginia167_4": 465_000.0,
}

# US property valuations (USD). Maintained by hand; the sheet carries no per-property values.
PROPERTY_VALUES: Dict[str, float] = {
    "hollywood84": 950_000.0,
    "hollywood88": 850_000.0,
    "hollywood90": 850_000.0,
    "main73": 790_000.0,
    "street88th": 2_670_000.0,
    "whitney2610": 471_000.0,
    "virginia167_1": 425_000.0,
    "virginia167_4": 425_000.0,
    "virginiaDev": 800_000.0,
    "locustAve": 686_000.0,
    "lihtc": 269_000.0,
    "communipaw": 850_000.0,
    "vanNess": 323_000.0,
    "ridgecut107H": 204_000.0,
    "ridgecut25OCR": 80_000.0,
    "ridgecut131BB": 126_000.0,
    "arkviewLogan": 200_000.0,
    "bergen": 1_074_000.0,
    "fifthSt": 400_000.0,
}

# Property -> the JPM loan secured on it. Properties not listed are unencumbered.
PROPERTY_MORTGAGES: Dict[str, str] = {
    "hollywood88": "hollywood88",
    "hollywood90": "hollywood90",
    "main73": "main73",
    "street88th": "street88th",
    "whitney2610": "whitney",
    "virginia167_1": "virginia167_1",
    "virginia167_4": "virginia167_4",
}

PROPERTY_LABELS: Dict[str, str] = {
    "hollywood84": "Hollywood 84",
    "hollywood88": "Hollywood 88",
    "hollywood90": "Hollywood 90",
    "main73": "73 S Main",
    "street88th": "88th Street",
    "whitney2610": "Whitney 2610",
    "virginia167_1": "Virginia 167-1",
    "virginia167_4": "Virginia 167-4",
    "virginiaDev": "Virginia Dev",
    "locustAve": "Locust Ave",
    "lihtc": "LIHTC",
    "communipaw": "Communipaw",
    "vanNess": "Van Ness",
    "ridgecut107H": "Ridgecut 107H",
    "ridgecut25OCR": "Ridgecut 25OCR",
    "ridgecut131BB": "Ridgecut 131BB",
    "arkviewLogan": "Arkview Logan",
    "bergen": "Bergen",
    "fifthSt": "Fifth St",
}

MORTGAGE_LABELS: Dict[str, str] = {
    "street88th": "88th St Mortgage",
    "hollywood88": "Hollywood 88 Mortgage",
    "hollywood90": "Hollywood 90 Mortgage",
    "main73": "73 S Main Mortgage",
    "whitney": "Whitney Mortgage",
    "virginia167_1": "Virginia 167-1 Mortgage",
    "virginia167_4": "Virginia 167-4 Mortgage",
}

# ---------------- Mom (MMB) / Poppy (PGB) ----------------
MOM_NAME = "Mom (MMB)"
MOM_ROWS: Dict[str, int] = {
    "total_assets_usd": 213,
    "total_liabilities_usd": 222,
    "net_assets_usd": 225,
    "liquid_assets_usd": 185,
    "illiquid_assets_usd": 210,
}

# Poppy's block is a single total; it stands in for assets, net worth and liquidity.
POPPY_NAME = "Poppy (PGB)"
POPPY_ROWS: Dict[str, int] = {
    "total_assets_usd": 161,
    "net_assets_usd": 161,
    "liquid_assets_usd": 161,
}

HOUSEHOLD_DEFAULTS: Dict[str, float] = {}


def describe_layout() -> Dict[str, object]:
    """JSON-serializable view of the coordinate table, for auditing the template contract."""
    return {
        "sheet_name": SHEET_NAME,
        "latest_col": LATEST_COL,
        "period_columns": dict(PERIOD_COLUMNS),
        "primary_rows": dict(PRIMARY_ROWS),
        "mortgage_rows": dict(MORTGAGE_ROWS),
        "history_rows": dict(HISTORY_ROWS),
        "mom_rows": dict(MOM_ROWS),
        "poppy_rows": dict(POPPY_ROWS),
        "primary_defaults": dict(PRIMARY_DEFAULTS),
        "mortgage_defaults": dict(MORTGAGE_DEFAULTS),
    }
