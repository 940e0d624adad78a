# ==============================================
# FileImporter: Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the 4 stages together into a
#   single import run. The CLI only talks to this class.
#
# HOW IT CONNECTS THE 4 STAGES:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                      FileImporter                        │
#   │                                                          │
#   │  STAGE 1: READING      read_csv / read_json              │
#   │                 │ raw rows (fully in memory)             │
#   │                 ▼                                        │
#   │  STAGE 2: INFERENCE    SchemaBuilder → Schema            │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  STAGE 3: CONVERSION   RowConverter → typed rows         │
#   │                 │                                        │
#   │ ─ ─ ─ ─ ─ ─ ─ ─ ┼ ─ no network access above this line ─ │
#   │                 ▼                                        │
#   │  STAGE 4: STORAGE      PocketBaseClient.authenticate()   │
#   │                        PocketBaseClient.create_collection│
#   │                        BatchIngestor.ingest()            │
#   └──────────────────────────────────────────────────────────┘
#
# Any fatal error raises a PbImportError subclass tagged with the
# stage that failed. Batch failures are not fatal; they show up in
# the returned IngestionReport.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Optional

from pb_import.config import AppConfig, get_config
from pb_import.inference.schema import InputFormat, Schema
from pb_import.inference.schema_builder import SchemaBuilder
from pb_import.conversion.row_converter import RowConverter
from pb_import.reading.csv_reader import CsvOptions, read_csv
from pb_import.reading.dataset import RawDataset, collection_name_for, resolve_input_path
from pb_import.reading.json_reader import read_json
from pb_import.storage.batch_ingestor import BatchIngestor, IngestionReport
from pb_import.storage.pocketbase_client import PocketBaseClient


@dataclass
class ImportOptions:
    """Per-run options, usually taken from the command line."""
    input_format: InputFormat = InputFormat.CSV
    force_text_id: bool = False
    batch_size: Optional[int] = None  # None → config.importing.batch_size
    collection_name: Optional[str] = None  # None → input file stem
    csv: CsvOptions = field(default_factory=CsvOptions)


@dataclass
class ImportResult:
    collection_name: str
    schema: Schema
    report: IngestionReport


class FileImporter:
    """
    Imports one CSV or JSON file into a new PocketBase collection.
    """

    def __init__(self, config: Optional[AppConfig] = None, client=None):
        """
        Args:
            config: Application configuration. If None, loads from environment.
            client: Object with authenticate / create_collection / send_batch.
                    If None, a PocketBaseClient is built from the config.
        """
        self._config = config or get_config()
        self._client = client
        self._schema_builder = SchemaBuilder(self._config.importing.sample_size)

    def read(self, filename: str, options: ImportOptions) -> RawDataset:
        """Read the input file into raw rows (STAGE 1)."""
        path = resolve_input_path(filename, self._config.importing.input_dir)
        if options.input_format == InputFormat.JSON:
            return read_json(path)
        return read_csv(path, options.csv)

    def run(self, filename: str, options: Optional[ImportOptions] = None) -> ImportResult:
        """
        Run the whole import.

        Args:
            filename: Input file, relative to the input directory or absolute
            options: Per-run options

        Returns:
            ImportResult with the collection name, schema and ingestion report
        """
        options = options or ImportOptions()

        # STAGE 1: Read
        dataset = self.read(filename, options)
        collection_name = options.collection_name or collection_name_for(dataset.source)
        print(f"✓ [Import] Read {len(dataset)} rows from {dataset.source}")

        # STAGE 2: Infer the schema
        schema = self._schema_builder.build(
            dataset.rows,
            force_text_id=options.force_text_id,
            input_format=dataset.format,
        )
        self._print_schema(collection_name, schema)

        # STAGE 3: Convert every row before touching the network
        typed_rows = RowConverter(schema, dataset.format).convert_rows(dataset.rows)

        # STAGE 4: Create the collection and send the rows
        batch_size = options.batch_size or self._config.importing.batch_size
        client = self._client or PocketBaseClient.from_config(self._config.pocketbase)
        try:
            client.authenticate()
            client.create_collection(collection_name, schema)
            print(f"✓ [Import] Collection '{collection_name}' created!")

            report = BatchIngestor(client, batch_size).ingest(typed_rows, collection_name)
        finally:
            if self._client is None:
                client.close()

        return ImportResult(collection_name=collection_name, schema=schema, report=report)

    def _print_schema(self, collection_name: str, schema: Schema) -> None:
        print(f"[Import] Collection '{collection_name}' schema:")
        for column in schema:
            renamed = f" (renamed from '{column.name}')" if column.renamed else ""
            print(f"   → {column.effective_name}: {column.type_tag.value}{renamed}")
