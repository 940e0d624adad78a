# ==============================================
# Type Classifier
# ==============================================
#
# PURPOSE:
#   Given the sampled values of ONE column, decide a single TypeTag.
#   No metadata is available: the decision is made from the raw
#   values only.
#
# TWO STRATEGIES (selected by declared input format):
# ---------------------------------------------------
# - CsvTypeClassifier   → every value is a string; tags are tested in
#                         precedence order and a tag wins only if ALL
#                         non-empty values match it (100% consensus).
#
#       BOOL   → "0" | "1" | "true" | "false"   (case-sensitive)
#       NUMBER → integer or decimal, optional leading "-"
#       EMAIL  → [\w-.]+@([\w-]+\.)+[\w-]{2,4}
#       JSON   → parses as strict JSON
#       DATE   → contains a digit and parses with dateutil
#       URL    → well-formed absolute URL
#       TEXT   → default
#
# - JsonTypeClassifier  → switches on the NATIVE type of the first
#                         non-null value (bool / number / string /
#                         object-or-array); strings are further tested
#                         for EMAIL then DATE.
#
# Empty strings and None never vote, but do not disqualify a column.
# A column without any voting value is TEXT.
#
# ==============================================

import json
import re
from typing import Any, Callable, Iterable, List, Tuple, Type, Union
from urllib.parse import urlsplit

from dateutil import parser as dateparser

from .schema import InputFormat, TypeTag


def voting_values(values: Iterable[Any]) -> List[Any]:
    """Drop the values that do not take part in classification (None and "")."""
    return [value for value in values if value is not None and value != ""]


def reject_json_constant(constant: str) -> Any:
    # json.loads accepts NaN / Infinity, which are not JSON
    raise ValueError(f"Invalid JSON constant: {constant}")


class CsvTypeClassifier:
    """Consensus classifier for string values (CSV origin)."""

    BOOL_VALUES = frozenset({"0", "1", "true", "false"})

    INTEGER_PATTERN = re.compile(r"-?[0-9]+")
    DECIMAL_PATTERN = re.compile(r"-?[0-9]+\.[0-9]*")

    EMAIL_PATTERN = re.compile(r"[\w\-.]+@([\w-]+\.)+[\w-]{2,4}", re.ASCII)

    URL_SCHEME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
    # schemes that are meaningless without a host part
    NETWORK_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

    @classmethod
    def classify(cls, values: Iterable[Any]) -> TypeTag:
        """
        Pick the most restrictive tag every non-empty value agrees on.

        Args:
            values: Sampled raw values of one column

        Returns:
            The first tag (in precedence order) matched by all voting values
        """
        present = voting_values(values)
        if not present:
            return TypeTag.TEXT

        for tag, predicate in cls._precedence():
            if all(predicate(value) for value in present):
                return tag

        return TypeTag.TEXT

    @classmethod
    def _precedence(cls) -> List[Tuple[TypeTag, Callable[[Any], bool]]]:
        return [
            (TypeTag.BOOL, cls.is_bool),
            (TypeTag.NUMBER, cls.is_number),
            (TypeTag.EMAIL, cls.is_email),
            (TypeTag.JSON, cls.is_json),
            (TypeTag.DATE, cls.is_date),
            (TypeTag.URL, cls.is_url),
        ]

    # ======================================
    # Predicates (one value each)
    # ======================================
    @classmethod
    def is_bool(cls, value: Any) -> bool:
        return isinstance(value, str) and value in cls.BOOL_VALUES

    @classmethod
    def is_number(cls, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return bool(cls.INTEGER_PATTERN.fullmatch(value) or cls.DECIMAL_PATTERN.fullmatch(value))

    @classmethod
    def is_email(cls, value: Any) -> bool:
        return isinstance(value, str) and bool(cls.EMAIL_PATTERN.fullmatch(value))

    @classmethod
    def is_json(cls, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            json.loads(value, parse_constant=reject_json_constant)
            return True
        except ValueError:
            return False

    @classmethod
    def is_date(cls, value: Any) -> bool:
        # at least one digit; bare month or weekday names are not dates
        if not isinstance(value, str) or not any(char.isdigit() for char in value):
            return False
        try:
            dateparser.parse(value)
            return True
        except (ValueError, OverflowError):
            return False

    @classmethod
    def is_url(cls, value: Any) -> bool:
        if not isinstance(value, str) or any(char.isspace() for char in value):
            return False
        try:
            parts = urlsplit(value)
        except ValueError:
            return False
        if not cls.URL_SCHEME_PATTERN.fullmatch(parts.scheme):
            return False
        if parts.scheme.lower() in cls.NETWORK_SCHEMES:
            return bool(parts.netloc)
        return bool(parts.netloc or parts.path)


class JsonTypeClassifier:
    """Native-type classifier for parsed JSON values (JSON origin)."""

    @classmethod
    def classify(cls, values: Iterable[Any]) -> TypeTag:
        """
        Classify by the native type of the first non-null value.

        Args:
            values: Sampled values of one column, as parsed from JSON

        Returns:
            BOOL / NUMBER / JSON from the native type; EMAIL / DATE / TEXT
            for strings; TEXT for an all-null column
        """
        present = voting_values(values)
        if not present:
            return TypeTag.TEXT

        first = present[0]

        # bool is a subclass of int, so it must be tested first
        if isinstance(first, bool):
            return TypeTag.BOOL
        if isinstance(first, (int, float)):
            return TypeTag.NUMBER
        if isinstance(first, (dict, list)):
            return TypeTag.JSON
        if isinstance(first, str):
            return cls._classify_strings(present)

        return TypeTag.TEXT

    @classmethod
    def _classify_strings(cls, present: List[Any]) -> TypeTag:
        if all(CsvTypeClassifier.is_email(value) for value in present):
            return TypeTag.EMAIL
        if all(CsvTypeClassifier.is_date(value) for value in present):
            return TypeTag.DATE
        return TypeTag.TEXT


Classifier = Union[Type[CsvTypeClassifier], Type[JsonTypeClassifier]]

_CLASSIFIERS = {
    InputFormat.CSV: CsvTypeClassifier,
    InputFormat.JSON: JsonTypeClassifier,
}


def get_classifier(input_format: InputFormat) -> Classifier:
    """Return the classification strategy for an input format."""
    return _CLASSIFIERS[input_format]


def classify(values: Iterable[Any], input_format: InputFormat = InputFormat.CSV) -> TypeTag:
    """Classify one column's sampled values with the strategy for `input_format`."""
    return get_classifier(input_format).classify(values)
