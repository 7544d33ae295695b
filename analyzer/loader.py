"""Read CSV/XLS/XLSX statement files into text grids.

Every cell becomes a string; numeric and date interpretation is left to
the field parsers so that locale conventions are handled in one place.
"""

import csv
import io
import logging
import zipfile
from datetime import datetime
from pathlib import Path

import pandas as pd
import xlrd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError

from errors import StatementFileError
from models import RawSheet

logger = logging.getLogger(__name__)

VALID_EXTENSIONS = (".xlsx", ".xls", ".csv")

# Central European exports are often not UTF-8
CSV_ENCODINGS = ("utf-8-sig", "cp1250")

# Candidate delimiters, preferred first on equal counts
CSV_DELIMITERS = (";", "\t", ",")

# Date cells are rendered the way the supported banks write them
DATE_CELL_FORMAT = "%d.%m.%Y"

# What pandas and its Excel engines raise for corrupt or foreign files
EXCEL_READ_ERRORS = (
    OSError,
    ValueError,
    KeyError,
    zipfile.BadZipFile,
    pd.errors.OptionError,
    InvalidFileException,
    xlrd.XLRDError,
    CompDocError,
)


def is_valid_file_type(file_path: Path) -> bool:
    """Check the file extension against the supported spreadsheet types."""
    return file_path.suffix.lower() in VALID_EXTENSIONS


def load_sheets(file_path: Path) -> list[RawSheet]:
    """
    Load all sheets of a statement file.

    Args:
        file_path: Path to a .xlsx, .xls or .csv file

    Returns:
        One RawSheet per non-empty sheet, first row as headers

    Raises:
        StatementFileError: for unsupported, unreadable or empty files
    """
    if not is_valid_file_type(file_path):
        raise StatementFileError(
            "Please select a valid Excel file (.xlsx, .xls, or .csv)"
        )

    if file_path.suffix.lower() == ".csv":
        frames = {file_path.stem: _read_csv(file_path)}
    else:
        try:
            frames = pd.read_excel(
                file_path, sheet_name=None, header=None, dtype=object
            )
        except EXCEL_READ_ERRORS as e:
            raise StatementFileError(f"Error parsing file: {e}") from e

    sheets = []
    for sheet_name, df in frames.items():
        grid = dataframe_to_grid(df)
        if not grid:
            continue
        sheets.append(RawSheet(sheet_name=str(sheet_name), headers=grid[0], rows=grid[1:]))

    if not sheets:
        raise StatementFileError("No data found in the file")

    logger.info("Loaded %d sheet(s) from %s", len(sheets), file_path.name)
    return sheets


def _decode_csv(file_path: Path) -> str:
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise StatementFileError(f"Error reading file: {e}") from e

    last_error = None
    for encoding in CSV_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            logger.debug("%s is not %s encoded", file_path.name, encoding)
            last_error = e
    raise StatementFileError(f"Error reading file: {last_error}") from last_error


def detect_delimiter(lines: list[str]) -> str:
    """Delimiter that splits some line into the most fields."""
    return max(
        CSV_DELIMITERS,
        key=lambda d: max((line.count(d) for line in lines), default=0),
    )


def _read_csv(file_path: Path) -> pd.DataFrame:
    """
    Read a CSV export whose rows may have different widths.

    Title rows above the real header are usually narrower than the table,
    so the column count comes from the widest row rather than the first.
    """
    text = _decode_csv(file_path)
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise StatementFileError("No data found in the file")

    delimiter = detect_delimiter(lines)
    width = max(len(row) for row in csv.reader(lines, delimiter=delimiter))

    try:
        return pd.read_csv(
            io.StringIO(text),
            header=None,
            names=range(width),
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
        )
    except (ValueError, pd.errors.ParserError) as e:
        raise StatementFileError(f"Error parsing file: {e}") from e


def dataframe_to_grid(df: pd.DataFrame) -> list[list[str]]:
    """Convert a headerless DataFrame into rows of text, dropping blank rows."""
    grid = []
    for values in df.itertuples(index=False, name=None):
        row = [cell_to_text(value) for value in values]
        while row and not row[-1]:
            row.pop()
        if row:
            grid.append(row)
    return grid


def cell_to_text(value) -> str:
    """Render one spreadsheet cell as the text a user would see."""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, (pd.Timestamp, datetime)):
        return value.strftime(DATE_CELL_FORMAT)
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    return str(value).strip()
