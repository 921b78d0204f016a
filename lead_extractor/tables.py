"""Parse HTML tables embedded in scraped text fields into row mappings."""
from __future__ import annotations

import re
from typing import Dict, List, Union

from .text import strip_cell

TableRow = Dict[str, str]

_ROW_RE = re.compile(r"<tr[^>]*>(.*?)</tr>", re.IGNORECASE | re.DOTALL)
_CELL_RE = re.compile(r"<t[dh][^>]*>(.*?)</t[dh]>", re.IGNORECASE | re.DOTALL)


def contains_table(value: str) -> bool:
    return isinstance(value, str) and "</table>" in value.lower()


def extract_cells(html: str) -> List[List[str]]:
    """Return the cleaned cell text of every ``<tr>`` block, in document order."""

    return [[strip_cell(cell) for cell in _CELL_RE.findall(row)] for row in _ROW_RE.findall(html)]


def parse_table(html: str) -> Union[List[TableRow], str]:
    """Convert table markup into rows keyed by the lower-cased header text.

    The first row supplies the headers. Short rows are padded with empty
    strings. Input without a closing ``</table>`` tag, or with fewer than two
    rows, is returned unchanged.
    """

    if not contains_table(html):
        return html

    rows = extract_cells(html)
    if len(rows) < 2:
        return html

    headers = [header.lower() for header in rows[0]]
    return [
        {header: (row[index] if index < len(row) else "") for index, header in enumerate(headers)}
        for row in rows[1:]
    ]


__all__ = ["TableRow", "contains_table", "extract_cells", "parse_table"]
