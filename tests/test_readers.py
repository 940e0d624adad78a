# ==============================================
# Tests for Reading Module
# ==============================================
#
# class TestCsvReader   → options, malformed and empty files
# class TestJsonReader  → array-of-objects files
# class TestInputPaths  → input directory and collection names
# ==============================================

import pytest

from pb_import.errors import EmptyInputError, InputFileError, InvalidInputError
from pb_import.inference.schema import InputFormat
from pb_import.reading import (
    CsvOptions,
    collection_name_for,
    read_csv,
    read_json,
    resolve_input_path,
)


class TestCsvReader:
    def test_reads_rows_keyed_by_header(self, write_input):
        path = write_input("people.csv", "name,age\r\nAnn,30\r\nBob,\r\n")

        dataset = read_csv(path)

        assert dataset.format == InputFormat.CSV
        assert dataset.source == path
        assert dataset.rows == [{"name": "Ann", "age": "30"}, {"name": "Bob", "age": ""}]
        assert len(dataset) == 2

    def test_default_quote_is_single_quote(self, write_input):
        path = write_input("notes.csv", "name,note\r\nAnn,'hello, world'\r\n")
        assert read_csv(path).rows == [{"name": "Ann", "note": "hello, world"}]

    def test_custom_delimiter_and_quote(self, write_input):
        path = write_input("notes.csv", 'name;note\r\nAnn;"a;b"\r\n')
        rows = read_csv(path, CsvOptions(delimiter=";", quote='"')).rows
        assert rows == [{"name": "Ann", "note": "a;b"}]

    def test_lf_line_endings(self, write_input):
        path = write_input("people.csv", "name,age\nAnn,30\nBob,31\n")
        rows = read_csv(path, CsvOptions(lf=True)).rows
        assert rows == [{"name": "Ann", "age": "30"}, {"name": "Bob", "age": "31"}]

    def test_line_terminator_option(self):
        assert CsvOptions().line_terminator == "\r\n"
        assert CsvOptions(lf=True).line_terminator == "\n"

    def test_byte_order_mark_is_ignored(self, write_input):
        path = write_input("people.csv", "\ufeffname\r\nAnn\r\n")
        assert read_csv(path).rows == [{"name": "Ann"}]

    def test_short_rows_are_padded(self, write_input):
        path = write_input("people.csv", "name,age\r\nAnn\r\n")
        assert read_csv(path).rows == [{"name": "Ann", "age": ""}]

    def test_extra_fields(self, write_input):
        path = write_input("people.csv", "name\r\nAnn,30\r\n")
        with pytest.raises(InvalidInputError, match=":2"):
            read_csv(path)

    def test_duplicate_header_names(self, write_input):
        path = write_input("people.csv", "name,age,name\r\nAnn,30,Bob\r\n")
        with pytest.raises(InvalidInputError, match="duplicate column names: name"):
            read_csv(path)

    def test_header_only(self, write_input):
        path = write_input("people.csv", "name,age\r\n")
        with pytest.raises(EmptyInputError):
            read_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileError, match="does not exist"):
            read_csv(tmp_path / "nope.csv")

    def test_invalid_delimiter(self, write_input):
        path = write_input("people.csv", "name\r\nAnn\r\n")
        with pytest.raises(InvalidInputError, match="Delimiter"):
            read_csv(path, CsvOptions(delimiter="::"))

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes("name\r\nJosé\r\n".encode("latin-1"))
        with pytest.raises(InputFileError):
            read_csv(path)


class TestJsonReader:
    def test_reads_native_values(self, write_input):
        path = write_input("people.json", '[{"name": "Ann", "age": 30, "tags": ["a"]}, {"name": null}]')

        dataset = read_json(path)

        assert dataset.format == InputFormat.JSON
        assert dataset.rows == [{"name": "Ann", "age": 30, "tags": ["a"]}, {"name": None}]

    def test_root_must_be_array(self, write_input):
        path = write_input("people.json", '{"name": "Ann"}')
        with pytest.raises(InvalidInputError, match="not an array"):
            read_json(path)

    def test_elements_must_be_objects(self, write_input):
        path = write_input("people.json", '[{"name": "Ann"}, 3]')
        with pytest.raises(InvalidInputError, match="element 1"):
            read_json(path)

    def test_empty_array(self, write_input):
        path = write_input("people.json", "[]")
        with pytest.raises(EmptyInputError):
            read_json(path)

    def test_invalid_json(self, write_input):
        path = write_input("people.json", '[{"name": }]')
        with pytest.raises(InvalidInputError, match="Invalid JSON"):
            read_json(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileError):
            read_json(tmp_path / "nope.json")


class TestInputPaths:
    def test_relative_names_use_input_dir(self, tmp_path):
        assert resolve_input_path("people.csv", tmp_path) == tmp_path / "people.csv"

    def test_absolute_paths_are_kept(self, tmp_path):
        absolute = tmp_path / "elsewhere" / "people.csv"
        assert resolve_input_path(absolute, "input/") == absolute

    def test_collection_name_is_file_stem(self):
        assert collection_name_for("input/people.csv") == "people"
        assert collection_name_for("orders.2024.json") == "orders.2024"
