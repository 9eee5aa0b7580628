"""
Tabular parsing for uploaded show files.

Turns the raw bytes of a CSV or Excel upload into a list of row dicts keyed by
the header text. No validation happens here: an empty result is a valid
outcome and is judged by the caller.
"""
import csv
import io
import logging
from pathlib import PurePath

import pandas as pd

from .types import RawRow

log = logging.getLogger(__name__)

CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}


class IngestionError(Exception):
    """Base class for whole-file ingestion failures."""


class UnsupportedFormatError(IngestionError):
    """The file extension is neither CSV nor Excel."""


class TabularParseError(IngestionError):
    """The file has a supported extension but could not be read."""


def file_kind(file_name: str) -> str | None:
    """Return "csv", "excel" or None based on the file extension."""
    ext = PurePath(file_name or "").suffix.lower()
    if ext in CSV_EXTENSIONS:
        return "csv"
    if ext in EXCEL_EXTENSIONS:
        return "excel"
    return None


def parse_table(buffer: bytes, file_name: str) -> list[RawRow]:
    """
    Parse an uploaded file into rows.

    Raises:
        UnsupportedFormatError: unknown extension.
        TabularParseError: content could not be decoded/read.
    """
    kind = file_kind(file_name)
    if kind == "csv":
        rows = parse_csv(buffer)
    elif kind == "excel":
        rows = parse_excel(buffer)
    else:
        raise UnsupportedFormatError(f"unsupported file type: {file_name!r}")
    log.info("parsed %s: %d row(s) (%s)", file_name, len(rows), kind)
    return rows


def parse_csv(buffer: bytes) -> list[RawRow]:
    """First non-empty line is the header. Keys and values are trimmed."""
    try:
        text = buffer.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise TabularParseError(f"file is not valid UTF-8 text ({e.reason} at byte {e.start})") from e

    reader = csv.reader(io.StringIO(text, newline=""))
    header: list[str] | None = None
    rows: list[RawRow] = []
    try:
        for cells in reader:
            cells = [c.strip() for c in cells]
            if not any(cells):
                continue  # blank line
            if header is None:
                header = cells
                continue
            # short rows are padded, surplus cells dropped
            padded = cells + [""] * (len(header) - len(cells))
            rows.append({key: value for key, value in zip(header, padded) if key})
    except csv.Error as e:
        raise TabularParseError(f"malformed CSV at line {reader.line_num}: {e}") from e
    return rows


def parse_excel(buffer: bytes) -> list[RawRow]:
    """Read the first worksheet only. Empty cells are left out of the row."""
    try:
        df = pd.read_excel(io.BytesIO(buffer), sheet_name=0, dtype=object)
    except Exception as e:  # openpyxl/xlrd raise a zoo of types for bad workbooks
        raise TabularParseError(f"could not read workbook: {e}") from e

    rows: list[RawRow] = []
    for record in df.to_dict(orient="records"):
        row = {
            str(key).strip(): value
            for key, value in record.items()
            if not _is_empty_cell(value)
        }
        if row:
            rows.append(row)
    return rows


def _is_empty_cell(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
