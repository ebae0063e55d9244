"""Core (UI-agnostic) dashboard logic.

This package contains:
- workbook loading (XLSX/XLS -> pandas grid) and entity resolution
- the fixed coordinate table of the family finances template
- derivations (ratios, LTV, stress scenarios) over resolved entities
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
