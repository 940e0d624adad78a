# ==============================================
# STAGE 1: READING
# ==============================================
#
# This package reads input files into raw rows. Nothing here
# knows about types; every value is returned as found.
#
# Modules:
# --------
# - dataset.py      → RawDataset, input path / collection name helpers
# - csv_reader.py   → CSV file → string-valued rows
# - json_reader.py  → JSON array file → native-valued rows
#
# ==============================================

from .dataset import RawDataset, collection_name_for, resolve_input_path
from .csv_reader import CsvOptions, read_csv
from .json_reader import read_json

__all__ = [
    "CsvOptions",
    "RawDataset",
    "collection_name_for",
    "read_csv",
    "read_json",
    "resolve_input_path",
]
