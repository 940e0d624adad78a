# ==============================================
# STAGE 2: TYPE INFERENCE
# ==============================================
#
# This package decides, from raw values only, which typed
# representation each column gets and builds the ordered schema.
#
# Modules:
# --------
# - schema.py           → TypeTag, ColumnDescriptor, Schema, renaming rule
# - type_classifier.py  → CSV (consensus) and JSON (native type) classifiers
# - schema_builder.py   → Sample rows, classify columns, resolve name conflicts
#
# ==============================================

from .schema import (
    ColumnDescriptor,
    InputFormat,
    RESERVED_FIELD_NAMES,
    Schema,
    TypeTag,
    effective_name,
    is_reserved,
)
from .type_classifier import CsvTypeClassifier, JsonTypeClassifier, classify, get_classifier
from .schema_builder import SchemaBuilder, build_schema

__all__ = [
    "ColumnDescriptor",
    "CsvTypeClassifier",
    "InputFormat",
    "JsonTypeClassifier",
    "RESERVED_FIELD_NAMES",
    "Schema",
    "SchemaBuilder",
    "TypeTag",
    "build_schema",
    "classify",
    "effective_name",
    "get_classifier",
    "is_reserved",
]
