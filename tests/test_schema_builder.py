# ==============================================
# Tests for Schema Builder Module
# ==============================================
#
# class TestSchemaBuilder → column order, sampling cap, forced id
# class TestReservedNames → "_" renaming and name collisions
# class TestSchema        → lookups on the built schema
# ==============================================

import pytest

from pb_import.errors import DuplicateColumnError, EmptyInputError
from pb_import.inference.schema import (
    ColumnDescriptor,
    InputFormat,
    Schema,
    TypeTag,
    effective_name,
    is_reserved,
)
from pb_import.inference.schema_builder import SchemaBuilder, build_schema


class TestSchemaBuilder:
    def test_columns_follow_first_row_order(self, people_rows):
        schema = build_schema(people_rows)
        assert [column.name for column in schema] == ["id", "name", "age", "active", "email"]

    def test_inferred_types(self, people_rows):
        schema = build_schema(people_rows)
        assert schema.type_map() == {
            "_id": TypeTag.NUMBER,
            "name": TypeTag.TEXT,
            "age": TypeTag.NUMBER,
            "active": TypeTag.BOOL,
            "email": TypeTag.EMAIL,
        }

    def test_only_sample_is_classified(self):
        """A dissenting value beyond the sample does not change the type."""
        rows = [{"score": "1"}, {"score": "2"}, {"score": "3"}, {"score": "abc"}]
        schema = SchemaBuilder(sample_size=3).build(rows)
        assert schema.type_map() == {"score": TypeTag.NUMBER}

    def test_default_sample_is_thousand_rows(self):
        rows = [{"n": str(i)} for i in range(1000)] + [{"n": "abc"}]
        builder = SchemaBuilder()
        assert len(builder.sample(rows)) == 1000
        assert builder.build(rows).type_map() == {"n": TypeTag.NUMBER}

    def test_small_input_is_fully_sampled(self):
        rows = [{"n": "5"}, {"n": "abc"}]
        assert build_schema(rows).type_map() == {"n": TypeTag.TEXT}

    def test_force_text_id(self, people_rows):
        schema = build_schema(people_rows, force_text_id=True)
        column = schema.get("_id")
        assert column.type_tag == TypeTag.TEXT
        assert column.renamed

    def test_force_text_id_is_case_insensitive(self):
        schema = build_schema([{"ID": "5"}], force_text_id=True)
        assert schema.columns == (ColumnDescriptor("ID", TypeTag.TEXT, renamed=True),)

    def test_force_text_id_leaves_other_columns(self):
        schema = build_schema([{"user_id": "5"}], force_text_id=True)
        assert schema.type_map() == {"user_id": TypeTag.NUMBER}

    def test_json_keys_of_later_rows_are_not_discovered(self):
        rows = [{"a": 1}, {"a": 2, "b": "late"}]
        schema = build_schema(rows, input_format=InputFormat.JSON)
        assert schema.effective_names == ("a",)

    def test_json_rows_use_native_types(self):
        rows = [{"flag": True, "n": 3, "meta": {"k": 1}, "when": "2024-05-01"}]
        schema = build_schema(rows, input_format=InputFormat.JSON)
        assert schema.type_map() == {
            "flag": TypeTag.BOOL,
            "n": TypeTag.NUMBER,
            "meta": TypeTag.JSON,
            "when": TypeTag.DATE,
        }

    def test_missing_json_values_do_not_vote(self):
        rows = [{"a": None, "b": 1}, {"b": 2}, {"a": 4, "b": 3}]
        schema = build_schema(rows, input_format=InputFormat.JSON)
        assert schema.type_map()["a"] == TypeTag.NUMBER

    def test_no_rows(self):
        with pytest.raises(EmptyInputError):
            build_schema([])


class TestReservedNames:
    @pytest.mark.parametrize(
        "name", ["id", "created", "updated", "collectionId", "collectionName", "expand", "CREATED"]
    )
    def test_reserved_names_are_prefixed(self, name):
        assert is_reserved(name)
        assert effective_name(name) == f"_{name}"

    def test_ordinary_names_unchanged(self):
        assert not is_reserved("identity")
        assert effective_name("identity") == "identity"

    def test_renaming_is_independent_of_type(self):
        schema = build_schema([{"created": "2024-01-01", "expand": "x"}])
        assert schema.effective_names == ("_created", "_expand")
        assert all(column.renamed for column in schema)

    def test_collision_after_renaming(self):
        """"id" becomes "_id" and would clash with an existing "_id"."""
        with pytest.raises(DuplicateColumnError, match="_id"):
            build_schema([{"id": "1", "_id": "2"}])


class TestSchema:
    def test_get_by_effective_name(self, people_rows):
        schema = build_schema(people_rows)
        assert schema.get("_id").name == "id"
        assert schema.get("id") is None

    def test_len_and_iteration(self, people_rows):
        schema = build_schema(people_rows)
        assert len(schema) == 5
        assert len(list(schema)) == 5

    def test_schema_is_immutable(self):
        schema = Schema(columns=(ColumnDescriptor("a", TypeTag.TEXT),))
        with pytest.raises(AttributeError):
            schema.columns = ()

    def test_descriptor_to_dict(self):
        column = ColumnDescriptor("id", TypeTag.TEXT, renamed=True)
        assert column.to_dict() == {
            "name": "_id",
            "source": "id",
            "type": "text",
            "renamed": True,
        }
