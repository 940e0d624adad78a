# ==============================================
# JSON Reader
# ==============================================
#
# PURPOSE:
#   Read a JSON file whose root is an array of objects into raw
#   rows. Values keep their native JSON types.
#
# FAILURES:
# ---------
#   - missing / unreadable file        → InputFileError
#   - invalid JSON, root not an array,
#     element not an object            → InvalidInputError
#   - empty array                      → EmptyInputError
#
# ==============================================

import json
from pathlib import Path

from pb_import.errors import EmptyInputError, InputFileError, InvalidInputError
from pb_import.inference.schema import InputFormat

from .dataset import RawDataset


def read_json(path: Path) -> RawDataset:
    """
    Read an array of rows from a JSON file.

    Args:
        path: Path of the .json file

    Returns:
        RawDataset with one dict per array element

    Raises:
        InputFileError: If the file cannot be read
        InvalidInputError: If the content is not an array of objects
        EmptyInputError: If the array is empty
    """
    if not path.is_file():
        raise InputFileError(f"Could not read {path}: file does not exist")

    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as error:
        raise InputFileError(f"Could not read {path}: {error}") from error

    try:
        data = json.loads(content)
    except json.JSONDecodeError as error:
        raise InvalidInputError(
            f"Invalid JSON in {path} at line {error.lineno}: {error.msg}"
        ) from error

    if not isinstance(data, list):
        raise InvalidInputError(f"{path} is not an array")

    if not data:
        raise EmptyInputError(f"No data in {path}")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise InvalidInputError(
                f"{path}: element {index} is a {type(item).__name__}, expected an object"
            )

    return RawDataset(rows=data, format=InputFormat.JSON, source=path)
