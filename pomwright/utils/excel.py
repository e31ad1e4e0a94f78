"""
Test Data Files

Reads Excel (.xlsx) and CSV test data for data-driven tests. Every value is
returned as a string; the header row is used for column names and never
returned as data.
"""

import csv
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Optional

from openpyxl import load_workbook

logger = logging.getLogger(__name__)


class DataFileError(RuntimeError):
    """A test data file could not be read."""


def cell_to_string(cell) -> str:
    """Convert an openpyxl cell to the string handed to tests."""
    value = cell.value
    if value is None:
        return ""
    if cell.data_type == 'f':
        formula = getattr(value, 'text', value)
        return str(formula)[1:] if str(formula).startswith('=') else str(formula)
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        # Numbers are truncated to integers, matching the data sheets in use.
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _trim_row(values: List[str], cells) -> List[str]:
    # Trailing blank cells are not part of the row.
    last = len(values)
    while last > 0 and cells[last - 1].value is None:
        last -= 1
    return values[:last]


def read_sheet(path, sheet_name: str) -> List[List[str]]:
    """
    Read an Excel sheet into rows of strings.

    Args:
        path: Path to the .xlsx file
        sheet_name: Sheet to read

    Returns:
        Data rows without the header row; empty if the sheet does not exist

    Raises:
        DataFileError: the workbook cannot be opened or parsed
    """
    try:
        workbook = load_workbook(filename=str(path), data_only=False)
    except Exception as e:
        raise DataFileError(f"Failed to read Excel sheet: {e}") from e

    try:
        if sheet_name not in workbook.sheetnames:
            logger.warning(f"Sheet '{sheet_name}' not found in {path}")
            return []

        rows: List[List[str]] = []
        for cells in workbook[sheet_name].iter_rows(min_row=2):
            if all(cell.value is None for cell in cells):
                continue
            rows.append(_trim_row([cell_to_string(cell) for cell in cells], cells))
        return rows
    except Exception as e:
        raise DataFileError(f"Failed to read Excel sheet: {e}") from e
    finally:
        workbook.close()


def _read_header(path, sheet_name: str) -> List[str]:
    try:
        workbook = load_workbook(filename=str(path), data_only=False)
    except Exception as e:
        raise DataFileError(f"Failed to read Excel sheet: {e}") from e
    try:
        if sheet_name not in workbook.sheetnames:
            return []
        for cells in workbook[sheet_name].iter_rows(min_row=1, max_row=1):
            return _trim_row([cell_to_string(cell) for cell in cells], cells)
        return []
    finally:
        workbook.close()


def read_records(path, sheet_name: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Read a data file into dicts keyed by the header row.

    ``.csv`` files are read with the csv module; anything else is treated as
    an Excel workbook, defaulting to its first sheet.
    """
    path = Path(path)
    if path.suffix.lower() == '.csv':
        try:
            with open(path, 'r', encoding='utf-8-sig', newline='') as handle:
                return [
                    {key: (value or "") for key, value in row.items() if key is not None}
                    for row in csv.DictReader(handle)
                ]
        except (OSError, csv.Error) as e:
            raise DataFileError(f"Failed to read CSV file: {e}") from e

    if sheet_name is None:
        sheet_name = first_sheet_name(path)
    header = _read_header(path, sheet_name)
    records = []
    for row in read_sheet(path, sheet_name):
        padded = row + [""] * (len(header) - len(row))
        records.append(dict(zip(header, padded)))
    return records


def first_sheet_name(path) -> str:
    try:
        workbook = load_workbook(filename=str(path), read_only=True)
    except Exception as e:
        raise DataFileError(f"Failed to read Excel sheet: {e}") from e
    try:
        return workbook.sheetnames[0]
    finally:
        workbook.close()


def read_rows(path, sheet_name: Optional[str] = None) -> List[List[Any]]:
    """Rows of any supported data file, header excluded."""
    path = Path(path)
    if path.suffix.lower() == '.csv':
        return [list(record.values()) for record in read_records(path)]
    return read_sheet(path, sheet_name or first_sheet_name(path))
