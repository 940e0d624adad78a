# ==============================================
# SchemaBuilder
# ==============================================
#
# PURPOSE:
#   Runs the type classifier over every column of a bounded sample
#   of rows and produces the ordered Schema for the collection.
#
# RULES (applied per column, in first-row key order):
# ---------------------------------------------------
#   RULE 1: SAMPLING CAP
#     Only the first `sample_size` rows (default 1000) are inspected,
#     to bound classification cost on large files.
#
#   RULE 2: COLUMN LIST = FIRST ROW KEYS
#     CSV rows share their keys by construction. For JSON, keys that
#     only appear in later rows are NOT discovered.
#
#   RULE 3: FORCED TEXT ID
#     With force_text_id, a column named "id" (any case) is TEXT
#     without classification, so identifiers are never NUMBER.
#
#   RULE 4: RESERVED NAMES → "_" PREFIX
#     Columns colliding with a system field are renamed, whatever
#     their type. Two columns ending up under the same effective
#     name is an error.
#
# ==============================================

from typing import Any, Dict, List, Sequence

from pb_import.config import DEFAULT_SAMPLE_SIZE
from pb_import.errors import DuplicateColumnError, EmptyInputError

from .schema import ColumnDescriptor, InputFormat, Schema, TypeTag, is_reserved
from .type_classifier import get_classifier


class SchemaBuilder:
    """
    Builds a Schema from raw rows.

    Stateless apart from its sampling limit: rows in, schema out.
    """

    def __init__(self, sample_size: int = DEFAULT_SAMPLE_SIZE):
        self.sample_size = sample_size

    def build(
        self,
        rows: Sequence[Dict[str, Any]],
        force_text_id: bool = False,
        input_format: InputFormat = InputFormat.CSV
    ) -> Schema:
        """
        Infer the column schema of a dataset.

        Args:
            rows: Raw rows, fully materialized
            force_text_id: Always type an "id" column as TEXT
            input_format: Declared origin format, selects the classifier

        Returns:
            Schema with one descriptor per first-row column

        Raises:
            EmptyInputError: If there are no rows
            DuplicateColumnError: If two columns share an effective name
        """
        if not rows:
            raise EmptyInputError("No rows to infer a schema from")

        sample = self.sample(rows)
        classifier = get_classifier(input_format)

        columns: List[ColumnDescriptor] = []
        seen: Dict[str, str] = {}

        for name in sample[0].keys():
            if force_text_id and name.lower() == "id":
                type_tag = TypeTag.TEXT
            else:
                type_tag = classifier.classify(row.get(name) for row in sample)

            column = ColumnDescriptor(name=name, type_tag=type_tag, renamed=is_reserved(name))

            if column.effective_name in seen:
                raise DuplicateColumnError(
                    f"Columns '{seen[column.effective_name]}' and '{name}' both map to "
                    f"'{column.effective_name}'. Rename one of them in the source file."
                )
            seen[column.effective_name] = name
            columns.append(column)

        return Schema(columns=tuple(columns))

    def sample(self, rows: Sequence[Dict[str, Any]]) -> Sequence[Dict[str, Any]]:
        """First `sample_size` rows, or all of them if there are fewer."""
        return rows[:self.sample_size]


def build_schema(
    rows: Sequence[Dict[str, Any]],
    force_text_id: bool = False,
    input_format: InputFormat = InputFormat.CSV,
    sample_size: int = DEFAULT_SAMPLE_SIZE
) -> Schema:
    """Convenience wrapper around SchemaBuilder.build()."""
    return SchemaBuilder(sample_size).build(rows, force_text_id, input_format)
