# ==============================================
# STAGE 4: STORAGE (PocketBase)
# ==============================================
#
# This package handles every remote operation: logging in,
# creating the collection from the inferred schema, and sending
# the typed rows in bounded batches.
#
# Modules:
# --------
# - field_mapping.py     → Schema → PocketBase collection payload
# - pocketbase_client.py → HTTP session, auth, collection + batch API
# - batch_ingestor.py    → Chunk rows, send batches, tally results
#
# ==============================================

from .field_mapping import build_collection_payload, build_field
from .pocketbase_client import OperationResult, PocketBaseClient
from .batch_ingestor import (
    BatchIngestor,
    BatchReport,
    IngestionReport,
    batch_count,
    ingest,
    plan_batches,
)

__all__ = [
    "BatchIngestor",
    "BatchReport",
    "IngestionReport",
    "OperationResult",
    "PocketBaseClient",
    "batch_count",
    "build_collection_payload",
    "build_field",
    "ingest",
    "plan_batches",
]
