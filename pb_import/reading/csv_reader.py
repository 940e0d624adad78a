# ==============================================
# CSV Reader
# ==============================================
#
# PURPOSE:
#   Read a CSV file into string-valued raw rows, keyed by the
#   header line, in file order.
#
# OPTIONS (CsvOptions):
# ---------------------
#   delimiter → column separator         (default ",")
#   quote     → quote character          (default "'")
#   lf        → LF line endings if True, CRLF otherwise
#
# FAILURES:
# ---------
#   - missing / unreadable file        → InputFileError
#   - malformed CSV, extra row fields,
#     duplicate header names           → InvalidInputError
#   - header only, no data rows        → EmptyInputError
#
# ==============================================

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from pb_import.errors import EmptyInputError, InputFileError, InvalidInputError
from pb_import.inference.schema import InputFormat

from .dataset import RawDataset


@dataclass(frozen=True)
class CsvOptions:
    """Tokenizer settings for one CSV file."""
    delimiter: str = ","
    quote: str = "'"
    lf: bool = False

    @property
    def line_terminator(self) -> str:
        return "\n" if self.lf else "\r\n"


def read_csv(path: Path, options: CsvOptions = CsvOptions()) -> RawDataset:
    """
    Parse a CSV file into raw rows.

    Args:
        path: Path of the .csv file
        options: Delimiter, quote and line ending settings

    Returns:
        RawDataset with one dict per data line (every value a string)

    Raises:
        InputFileError: If the file cannot be opened or decoded
        InvalidInputError: If the CSV content is malformed
        EmptyInputError: If the file holds no data rows
    """
    _validate_options(options)

    if not path.is_file():
        raise InputFileError(f"Could not read {path}: file does not exist")

    rows: List[Dict[str, str]] = []
    try:
        # newline="" lets the csv module see the raw line endings
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(
                handle,
                delimiter=options.delimiter,
                quotechar=options.quote,
                lineterminator=options.line_terminator,
                restval="",
            )
            _check_header(path, reader.fieldnames or [])
            for line_number, row in enumerate(reader, 2):
                if None in row:
                    raise InvalidInputError(
                        f"{path}:{line_number} has more fields than the header"
                    )
                rows.append(row)
    except OSError as error:
        raise InputFileError(f"Could not read {path}: {error}") from error
    except UnicodeDecodeError as error:
        raise InputFileError(f"Could not decode {path} as UTF-8: {error}") from error
    except csv.Error as error:
        raise InvalidInputError(f"Malformed CSV in {path}: {error}") from error

    if not rows:
        raise EmptyInputError(f"No data to import from {path}")

    return RawDataset(rows=rows, format=InputFormat.CSV, source=path)


def _validate_options(options: CsvOptions) -> None:
    if len(options.delimiter) != 1:
        raise InvalidInputError(f"Delimiter must be a single character, got '{options.delimiter}'")
    if len(options.quote) != 1:
        raise InvalidInputError(f"Quote must be a single character, got '{options.quote}'")


def _check_header(path: Path, fieldnames: List[str]) -> None:
    duplicates = sorted({name for name in fieldnames if fieldnames.count(name) > 1})
    if duplicates:
        raise InvalidInputError(
            f"{path} has duplicate column names: {', '.join(duplicates)}"
        )
