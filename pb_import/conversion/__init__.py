# ==============================================
# STAGE 3: CONVERSION
# ==============================================
#
# This package turns raw rows into typed rows whose values match
# the types recorded in the schema, ready to be sent to the server.
#
# Modules:
# --------
# - row_converter.py → Rename reserved keys, convert values per TypeTag
#
# ==============================================

from .row_converter import RowConverter, convert_row, convert_rows, parse_bool

__all__ = ["RowConverter", "convert_row", "convert_rows", "parse_bool"]
