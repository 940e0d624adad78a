# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One exception hierarchy for the whole import pipeline.
#   Every error carries the pipeline STAGE it belongs to and the
#   process exit code the CLI should return for it.
#
# STAGES:
# -------
#   config  → invalid environment / CLI values
#   read    → input file missing, malformed or empty
#   schema  → schema building or row conversion failed
#   auth    → admin authentication rejected
#   create  → collection could not be created
#   write   → a batch request failed (recoverable, never fatal)
#
# ==============================================


class PbImportError(Exception):
    """Base exception for all import failures."""

    stage = "import"
    exit_code = 1


class ConfigError(PbImportError):
    """Raised for invalid runtime configuration."""

    stage = "config"
    exit_code = 1


# --- read stage ---

class InputError(PbImportError):
    """Raised when the input file cannot be turned into rows."""

    stage = "read"
    exit_code = 2


class InputFileError(InputError):
    """The input file is missing or unreadable."""


class InvalidInputError(InputError):
    """The input file was read but its content is malformed."""


class EmptyInputError(InputError):
    """The input file holds no data rows."""


# --- schema stage ---

class SchemaError(PbImportError):
    """Raised when rows and the inferred schema disagree."""

    stage = "schema"
    exit_code = 3


class SchemaMismatchError(SchemaError):
    """A row holds a column that is absent from the schema."""


class DuplicateColumnError(SchemaError):
    """Two source columns resolve to the same effective name."""


class UnsupportedTypeError(SchemaError):
    """A type tag has no value converter."""


class ValueConversionError(SchemaError):
    """A value could not be converted to its column type."""


# --- remote stages ---

class AuthenticationError(PbImportError):
    """Admin authentication against the server failed."""

    stage = "auth"
    exit_code = 4


class CollectionCreateError(PbImportError):
    """The target collection could not be created."""

    stage = "create"
    exit_code = 5


class CollectionExistsError(CollectionCreateError):
    """A collection with the requested name already exists."""


class BatchWriteError(PbImportError):
    """A whole batch request failed at the transport level."""

    stage = "write"
    exit_code = 6
