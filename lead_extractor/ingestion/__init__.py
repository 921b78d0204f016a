"""Reading provider downloads and exporting extracted leads."""

from .exporters import EXPORT_COLUMNS, CsvExportStore, export_lead_records, records_to_dataframe  # noqa: F401
from .loaders import parse_order_csv  # noqa: F401

__all__ = [
    "EXPORT_COLUMNS",
    "CsvExportStore",
    "export_lead_records",
    "records_to_dataframe",
    "parse_order_csv",
]
