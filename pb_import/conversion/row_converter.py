# ==============================================
# RowConverter
# ==============================================
#
# PURPOSE:
#   Turn raw rows into typed rows using the inferred Schema.
#   Keys are renamed with the exact rule the SchemaBuilder used,
#   so every typed row key is an effective name of the schema.
#
# CONVERSION BY TYPE TAG (CSV origin, string values):
# ---------------------------------------------------
#   any     → "" / None            → None
#   BOOL    → True iff "1" or "true", else False
#   NUMBER  → float(value)
#   JSON    → json.loads(value)
#   EMAIL / DATE / URL / TEXT → unchanged
#
# JSON origin:
# ------------
#   Values are already native. "" / None → None, numbers become
#   float for NUMBER columns, everything else is kept as parsed.
#   A value of the wrong kind is left for the server to reject.
#
# FAILURES (all fatal):
# ---------------------
#   - row key absent from the schema     → SchemaMismatchError
#   - type tag without a converter       → UnsupportedTypeError
#   - NUMBER / JSON string not parseable → ValueConversionError
#
# ==============================================

import json
from typing import Any, Callable, Dict, List, Sequence

from pb_import.errors import SchemaMismatchError, UnsupportedTypeError, ValueConversionError
from pb_import.inference.schema import InputFormat, Schema, TypeTag, effective_name
from pb_import.inference.type_classifier import CsvTypeClassifier, reject_json_constant

TRUTHY_VALUES = frozenset({"1", "true"})


def parse_bool(value: str) -> bool:
    """Truthy values are "1" and "true"; anything else is False."""
    return value in TRUTHY_VALUES


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


# ======================================
# CSV value parsers
# ======================================
def _csv_bool(value: Any) -> Any:
    return parse_bool(value)


def _csv_number(value: Any) -> Any:
    if not CsvTypeClassifier.is_number(value):
        raise ValueConversionError(f"'{value}' is not a number")
    return float(value)


def _csv_json(value: Any) -> Any:
    try:
        return json.loads(value, parse_constant=reject_json_constant)
    except (TypeError, ValueError) as error:
        raise ValueConversionError(f"'{value}' is not valid JSON: {error}") from error


def _passthrough(value: Any) -> Any:
    return value


# ======================================
# JSON value parsers
# ======================================
def _json_bool(value: Any) -> Any:
    if isinstance(value, str):
        return parse_bool(value)
    return value


def _json_number(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return value


ValueParser = Callable[[Any], Any]

_PARSERS: Dict[InputFormat, Dict[TypeTag, ValueParser]] = {
    InputFormat.CSV: {
        TypeTag.BOOL: _csv_bool,
        TypeTag.NUMBER: _csv_number,
        TypeTag.JSON: _csv_json,
        TypeTag.EMAIL: _passthrough,
        TypeTag.DATE: _passthrough,
        TypeTag.URL: _passthrough,
        TypeTag.TEXT: _passthrough,
    },
    InputFormat.JSON: {
        TypeTag.BOOL: _json_bool,
        TypeTag.NUMBER: _json_number,
        TypeTag.JSON: _passthrough,
        TypeTag.EMAIL: _passthrough,
        TypeTag.DATE: _passthrough,
        TypeTag.URL: _passthrough,
        TypeTag.TEXT: _passthrough,
    },
}


class RowConverter:
    """
    Converts raw rows into typed rows for one schema.

    The raw rows are never modified; every call returns new dicts.
    """

    def __init__(self, schema: Schema, input_format: InputFormat = InputFormat.CSV):
        self.schema = schema
        self.input_format = input_format
        self._types = schema.type_map()
        self._parsers = _PARSERS[input_format]

    def convert_row(self, raw_row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert one raw row.

        Args:
            raw_row: Mapping of original column name → raw value

        Returns:
            Mapping of effective column name → typed value

        Raises:
            SchemaMismatchError: If a column is missing from the schema
            UnsupportedTypeError: If a column type has no converter
            ValueConversionError: If a value cannot be converted
        """
        typed_row: Dict[str, Any] = {}

        for key, value in raw_row.items():
            target = effective_name(key)

            type_tag = self._types.get(target)
            if type_tag is None:
                raise SchemaMismatchError(
                    f"Column '{key}' (stored as '{target}') is not in the collection schema"
                )

            typed_row[target] = self.convert_value(value, type_tag, column=target)

        return typed_row

    def convert_rows(self, raw_rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Convert every row, reporting the 1-based row number on failure."""
        typed_rows = []
        for row_number, raw_row in enumerate(raw_rows, 1):
            try:
                typed_rows.append(self.convert_row(raw_row))
            except (SchemaMismatchError, ValueConversionError) as error:
                raise type(error)(f"Row {row_number}: {error}") from error
        return typed_rows

    def convert_value(self, value: Any, type_tag: TypeTag, column: str = "") -> Any:
        """
        Convert a single value to the native representation of its type.

        Args:
            value: Raw value
            type_tag: Type inferred for the column
            column: Column name, only used in error messages

        Returns:
            The converted value, or None for empty values
        """
        parser = self._parsers.get(type_tag)
        if parser is None:
            raise UnsupportedTypeError(
                f"Value parser for type '{type_tag}' of column '{column}' is not implemented"
            )

        if _is_empty(value):
            return None

        try:
            return parser(value)
        except ValueConversionError as error:
            raise ValueConversionError(f"Column '{column}': {error}") from error


def convert_rows(
    raw_rows: Sequence[Dict[str, Any]],
    schema: Schema,
    input_format: InputFormat = InputFormat.CSV
) -> List[Dict[str, Any]]:
    """Convenience wrapper around RowConverter.convert_rows()."""
    return RowConverter(schema, input_format).convert_rows(raw_rows)


def convert_row(
    raw_row: Dict[str, Any],
    schema: Schema,
    input_format: InputFormat = InputFormat.CSV
) -> Dict[str, Any]:
    """Convenience wrapper around RowConverter.convert_row()."""
    return RowConverter(schema, input_format).convert_row(raw_row)
