"""Utilities for reading provider CSV downloads into row mappings."""
from __future__ import annotations

import io
from typing import Any, Dict, List, Optional

import pandas as pd


def parse_order_csv(text: str) -> List[Dict[str, Optional[str]]]:
    """Parse an order download into one mapping per row.

    Column names are kept as sent. Cells are returned as trimmed strings and
    blank or missing cells become ``None``. Empty input yields no rows.
    """

    if not text or not text.strip():
        return []

    dataframe = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    rows: List[Dict[str, Optional[str]]] = []
    for _, row in dataframe.iterrows():
        if _row_is_empty(row):
            continue
        rows.append({str(column): _clean_text(value) for column, value in row.items()})
    return rows


def _row_is_empty(row: pd.Series) -> bool:
    return all(_clean_text(value) is None for value in row.values)


def _clean_text(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


__all__ = ["parse_order_csv"]
