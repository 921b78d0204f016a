"""Export utilities for extracted lead records."""
from __future__ import annotations

import csv
import logging
import uuid
from pathlib import Path
from typing import Iterable, List, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import LeadRecord

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

EXPORT_COLUMNS = ["lead", "username", "userLink", "emails", "phones", "summary"]
MISSING_PHONE = "-"


def export_lead_records(
    records: Sequence[LeadRecord],
    path: PathLike,
    *,
    sheet_name: str = "Leads",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write lead records to a CSV or Excel file."""

    dataframe = records_to_dataframe(records)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(dataframe, output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def records_to_dataframe(records: Sequence[LeadRecord]) -> pd.DataFrame:
    """Convert lead records into a :class:`pandas.DataFrame` with fixed columns."""

    return pd.DataFrame([_record_to_row(record) for record in records], columns=EXPORT_COLUMNS)


def _record_to_row(record: LeadRecord) -> MutableMapping[str, str]:
    return {
        "lead": record.lead,
        "username": record.username,
        "userLink": record.user_link,
        "emails": _join_list(record.emails),
        "phones": _join_list(record.phones) or MISSING_PHONE,
        "summary": record.summary,
    }


def _join_list(values: Iterable[Optional[str]]) -> str:
    cleaned: List[str] = []
    for value in values:
        if not value:
            continue
        text = str(value).strip()
        if text:
            cleaned.append(text)
    return "; ".join(cleaned)


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix == ".csv":
        exporter_kwargs.setdefault("quoting", csv.QUOTE_ALL)
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xlsx", ".xlsm"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


class CsvExportStore:
    """Persists CSV exports under random names inside one directory."""

    def __init__(self, directory: PathLike) -> None:
        self.directory = Path(directory)

    def save(self, records: Sequence[LeadRecord]) -> str:
        """Write ``records`` and return the generated file name."""

        filename = f"{uuid.uuid4()}.csv"
        export_lead_records(records, self.directory / filename)
        LOGGER.info("Exported %s records to %s", len(records), filename)
        return filename

    def path_for(self, filename: str) -> Path:
        return self.directory / filename


__all__ = ["EXPORT_COLUMNS", "CsvExportStore", "export_lead_records", "records_to_dataframe"]
