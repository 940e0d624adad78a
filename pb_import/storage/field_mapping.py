# ==============================================
# Field Mapping
# ==============================================
#
# PURPOSE:
#   Map an inferred Schema onto the PocketBase collection payload
#   accepted by POST /api/collections.
#
#   TypeTag → PocketBase field options:
#     BOOL   → (none)
#     NUMBER → min, max, onlyInt
#     EMAIL  → exceptDomains, onlyDomains
#     JSON   → maxSize
#     DATE   → min, max
#     URL    → exceptDomains, onlyDomains
#     TEXT   → min, max, pattern, autogeneratePattern
#
#   Every field is optional and non-unique; every API rule is
#   null (superusers only), as for a freshly imported table.
#
# ==============================================

from typing import Any, Dict

from pb_import.errors import UnsupportedTypeError
from pb_import.inference.schema import ColumnDescriptor, Schema, TypeTag

COLLECTION_TYPE = "base"

_FIELD_OPTIONS: Dict[TypeTag, Dict[str, Any]] = {
    TypeTag.BOOL: {},
    TypeTag.NUMBER: {"min": None, "max": None, "onlyInt": False},
    TypeTag.EMAIL: {"exceptDomains": None, "onlyDomains": None},
    TypeTag.JSON: {"maxSize": 0},
    TypeTag.DATE: {"min": "", "max": ""},
    TypeTag.URL: {"exceptDomains": None, "onlyDomains": None},
    TypeTag.TEXT: {"min": 0, "max": 0, "pattern": "", "autogeneratePattern": ""},
}


def build_field(column: ColumnDescriptor) -> Dict[str, Any]:
    """
    Build the PocketBase field definition for one column.

    Raises:
        UnsupportedTypeError: If the type tag has no field mapping
    """
    options = _FIELD_OPTIONS.get(column.type_tag)
    if options is None:
        raise UnsupportedTypeError(f"No PocketBase field type for '{column.type_tag}'")

    field = {
        "name": column.effective_name,
        "type": column.type_tag.value,
        "system": False,
        "required": False,
        "hidden": False,
        "presentable": False,
    }
    field.update(options)
    return field


def build_collection_payload(name: str, schema: Schema) -> Dict[str, Any]:
    """
    Build the body of a collection-creation request.

    Args:
        name: Collection name
        schema: Inferred schema, one field per column

    Returns:
        JSON-serializable collection definition
    """
    return {
        "name": name,
        "type": COLLECTION_TYPE,
        "system": False,
        "fields": [build_field(column) for column in schema],
        "indexes": [],
        "listRule": None,
        "viewRule": None,
        "createRule": None,
        "updateRule": None,
        "deleteRule": None,
    }
