# ==============================================
# Schema (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of type inference:
#   the type tag of a column, the column descriptor, and the
#   ordered, immutable schema shared by the row converter and
#   the collection-creation call.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the classifiers clean.
#   The conversion stage and the storage stage both import from here,
#   and both must apply the SAME renaming rule, so it lives here too.
#
# ENUMS:
# ------
# - InputFormat(Enum): CSV, JSON
# - TypeTag(Enum): BOOL, NUMBER, EMAIL, JSON, DATE, URL, TEXT
#     Values are the PocketBase field type names.
#
# FUNCTIONS:
# ----------
# - is_reserved(name) -> bool
# - effective_name(name) -> str
#     "_" + name when the name collides (case-insensitively)
#     with a PocketBase system field, else the name unchanged.
#
# CLASSES:
# --------
# - ColumnDescriptor (frozen dataclass)
#     name: str            → Original source column name
#     type_tag: TypeTag    → Inferred type
#     renamed: bool        → True if prefixed with "_"
#
# - Schema (frozen dataclass)
#     columns: tuple[ColumnDescriptor, ...]  (first-seen order)
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple


class InputFormat(Enum):
    """Declared origin format of the raw rows."""
    CSV = "csv"
    JSON = "json"


class TypeTag(Enum):
    """
    Semantic value kinds the classifier can produce.

    Declared in precedence order, most restrictive first.
    TEXT is the universal fallback and accepts any value.
    """
    BOOL = "bool"
    NUMBER = "number"
    EMAIL = "email"
    JSON = "json"
    DATE = "date"
    URL = "url"
    TEXT = "text"


# PocketBase base-collection system fields, compared lowercased
RESERVED_FIELD_NAMES = frozenset({
    "id",
    "created",
    "updated",
    "collectionid",
    "collectionname",
    "expand",
})

RENAME_PREFIX = "_"


def is_reserved(name: str) -> bool:
    """True if the column name collides with a system field name."""
    return name.lower() in RESERVED_FIELD_NAMES


def effective_name(name: str) -> str:
    """
    Name a source column is stored under.

    Args:
        name: Original source column name

    Returns:
        "_" + name for reserved names, otherwise name unchanged
    """
    if is_reserved(name):
        return f"{RENAME_PREFIX}{name}"
    return name


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Schema entry for a single source column.

    `name` always holds the ORIGINAL source name; downstream code
    uses `effective_name`.
    """

    name: str
    type_tag: TypeTag
    renamed: bool = False

    @property
    def effective_name(self) -> str:
        if self.renamed:
            return f"{RENAME_PREFIX}{self.name}"
        return self.name

    def to_dict(self) -> Dict[str, object]:
        """Serialize for display."""
        return {
            "name": self.effective_name,
            "source": self.name,
            "type": self.type_tag.value,
            "renamed": self.renamed,
        }


@dataclass(frozen=True)
class Schema:
    """Ordered column schema, derived once and never modified."""

    columns: Tuple[ColumnDescriptor, ...] = ()

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def effective_names(self) -> Tuple[str, ...]:
        return tuple(column.effective_name for column in self.columns)

    def get(self, effective: str) -> Optional[ColumnDescriptor]:
        """
        Find the descriptor stored under an effective name.

        Args:
            effective: Effective (possibly renamed) column name

        Returns:
            The descriptor, or None if the schema has no such column
        """
        for column in self.columns:
            if column.effective_name == effective:
                return column
        return None

    def type_map(self) -> Dict[str, TypeTag]:
        """Mapping of effective name → type tag, in column order."""
        return {column.effective_name: column.type_tag for column in self.columns}
