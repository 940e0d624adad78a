# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides the command-line interface to run one import.
#   This is how users interact with the system.
#
# COMMANDS:
# ---------
# 1. Import a CSV file from the input directory:
#    python -m pb_import.cli csv --input people.csv
#    python -m pb_import.cli csv --input people.csv --delimiter ";" --quote '"' --id
#
# 2. Import a JSON file (an array of objects):
#    python -m pb_import.cli json --input people.json --max-batch 100
#
# EXIT CODES:
# -----------
#   0  every row imported
#   1  configuration error
#   2  input file missing / malformed / empty
#   3  schema or conversion error
#   4  authentication failed
#   5  collection could not be created
#   6  some rows were not imported
#
# ==============================================

import argparse
import sys
from typing import List, Optional

from pb_import import __version__
from pb_import.config import get_config, parse_positive_int
from pb_import.errors import PbImportError
from pb_import.importer import FileImporter, ImportOptions
from pb_import.inference.schema import InputFormat
from pb_import.reading.csv_reader import CsvOptions

PARTIAL_IMPORT_EXIT_CODE = 6


def _batch_size(raw_value: str) -> int:
    try:
        return parse_positive_int(raw_value, "--max-batch")
    except PbImportError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input", required=True,
        help="Input file, relative to the input directory (INPUT_DIR)",
    )
    parser.add_argument(
        "--id", dest="force_text_id", action="store_true",
        help="Treat an 'id' column as text instead of inferring its type",
    )
    parser.add_argument(
        "--max-batch", dest="max_batch", type=_batch_size, default=None,
        help="Maximum records per batch request (default: BATCH_SIZE or 50)",
    )
    parser.add_argument(
        "--name", default=None,
        help="Collection name (default: input file name without extension)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pb-import",
        description="Create a PocketBase collection from a CSV or JSON file and import its rows.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="format", required=True)

    csv_parser = subparsers.add_parser("csv", help="Import a CSV file")
    _add_common_arguments(csv_parser)
    csv_parser.add_argument("--delimiter", default=",", help="Column delimiter (default: ,)")
    csv_parser.add_argument("--quote", default="'", help="Quote character (default: ')")
    csv_parser.add_argument(
        "--lf", action="store_true",
        help="Rows end with LF instead of CRLF",
    )

    json_parser = subparsers.add_parser("json", help="Import a JSON file")
    _add_common_arguments(json_parser)

    return parser


def options_from_args(args: argparse.Namespace) -> ImportOptions:
    options = ImportOptions(
        input_format=InputFormat(args.format),
        force_text_id=args.force_text_id,
        batch_size=args.max_batch,
        collection_name=args.name,
    )
    if options.input_format == InputFormat.CSV:
        options.csv = CsvOptions(delimiter=args.delimiter, quote=args.quote, lf=args.lf)
    return options


def main(argv: Optional[List[str]] = None, importer: Optional[FileImporter] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:]
        importer: Importer to use. Built from the environment if None.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        options = options_from_args(args)
        importer = importer or FileImporter(get_config())
        result = importer.run(args.input, options)
    except PbImportError as e:
        print(f"✗ [{e.stage}] {e}", file=sys.stderr)
        return e.exit_code

    if not result.report.is_complete:
        print(
            f"⚠ [Import] {result.report.total_failed} of {result.report.total_rows} "
            f"rows were not imported into '{result.collection_name}'",
            file=sys.stderr,
        )
        return PARTIAL_IMPORT_EXIT_CODE

    print(f"✓ [Import] Collection '{result.collection_name}' is ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
