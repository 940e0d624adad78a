# ==============================================
# BatchIngestor
# ==============================================
#
# PURPOSE:
#   Partition typed rows into fixed-size batches, submit each batch
#   to the remote write API, and tally successes per batch and
#   overall.
#
# CHUNKING:
# ---------
#   batches    = ceil(row_count / batch_size)
#   last batch = row_count % batch_size, or a full batch_size when
#                the remainder is zero (120/50 → 50,50,20 ; 100/50 → 50,50)
#
# FAILURE POLICY:
# ---------------
#   - An operation counts as created iff its status is 200.
#   - A batch whose submission raises any exception is reported,
#     counts 0 successes, and the NEXT batch still runs.
#   - Nothing is retried; batches run strictly one after another.
#
# WRITER CONTRACT:
# ----------------
#   writer.send_batch(collection_name, rows) -> list[OperationResult]
#   (PocketBaseClient implements it.)
#
# DATA CLASSES: BatchReport, IngestionReport
#
# ==============================================

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pb_import.config import DEFAULT_BATCH_SIZE
from pb_import.errors import ConfigError


@dataclass
class BatchReport:
    index: int  # 1-based batch number
    attempted: int
    succeeded: int = 0
    error: Optional[str] = None  # set when the whole request failed

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded


@dataclass
class IngestionReport:
    total_rows: int = 0
    total_succeeded: int = 0
    batches: List[BatchReport] = field(default_factory=list)

    @property
    def total_failed(self) -> int:
        return self.total_rows - self.total_succeeded

    @property
    def is_complete(self) -> bool:
        return self.total_succeeded == self.total_rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_rows": self.total_rows,
            "total_succeeded": self.total_succeeded,
            "per_batch": [
                {
                    "index": batch.index,
                    "attempted": batch.attempted,
                    "succeeded": batch.succeeded,
                    "error": batch.error,
                }
                for batch in self.batches
            ],
        }


def batch_count(row_count: int, batch_size: int) -> int:
    """Number of batches needed for row_count rows."""
    return math.ceil(row_count / batch_size)


def plan_batches(row_count: int, batch_size: int) -> List[Tuple[int, int]]:
    """
    Slice bounds of every batch.

    Args:
        row_count: Number of rows to send
        batch_size: Maximum rows per batch

    Returns:
        List of (start, end) index pairs, end exclusive
    """
    bounds = []
    batches = batch_count(row_count, batch_size)
    for chunk in range(batches):
        start = chunk * batch_size
        size = batch_size
        if chunk == batches - 1:
            size = row_count % batch_size or batch_size
        bounds.append((start, start + size))
    return bounds


class BatchIngestor:
    SUCCESS_STATUS = 200

    def __init__(self, writer, batch_size: int = DEFAULT_BATCH_SIZE, verbose: bool = True):
        self.writer = writer
        self.batch_size = batch_size
        self.verbose = verbose

    def ingest(
        self,
        rows: Sequence[Dict[str, Any]],
        collection_name: str,
        batch_size: Optional[int] = None
    ) -> IngestionReport:
        """
        Send all rows to a collection in sequential batches.

        Args:
            rows: Typed rows
            collection_name: Target collection
            batch_size: Overrides the ingestor's batch size for this call

        Returns:
            IngestionReport with per-batch and total counts

        Raises:
            ConfigError: If the batch size is not a positive integer
        """
        size = self.batch_size if batch_size is None else batch_size
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ConfigError(f"Batch size must be a positive integer, got {size!r}")

        report = IngestionReport(total_rows=len(rows))
        self._print(f"[Import] Importing {len(rows)} rows...")

        for index, (start, end) in enumerate(plan_batches(len(rows), size), 1):
            batch = self._send(index, collection_name, rows[start:end])
            report.batches.append(batch)
            report.total_succeeded += batch.succeeded

        self._print_summary(report)
        return report

    def _send(self, index: int, collection_name: str, chunk: Sequence[Dict[str, Any]]) -> BatchReport:
        batch = BatchReport(index=index, attempted=len(chunk))
        self._print(f"[Import] Batch request #{index}")

        try:
            results = self.writer.send_batch(collection_name, list(chunk))
        except Exception as e:
            batch.error = str(e)
            self._print(f"✗ [Import] Batch request #{index} failed: {e}")
            return batch

        batch.succeeded = sum(1 for result in results if result.status == self.SUCCESS_STATUS)

        marker = "✓" if batch.succeeded == batch.attempted else "⚠"
        self._print(
            f"{marker} [Import] Batch request #{index} - imported rows: "
            f"{batch.succeeded}/{batch.attempted}"
        )
        return batch

    def _print_summary(self, report: IngestionReport) -> None:
        marker = "✓" if report.is_complete else "⚠"
        self._print(
            f"{marker} [Import] Imported rows: {report.total_succeeded}/{report.total_rows}"
        )

    def _print(self, message: str) -> None:
        if self.verbose:
            print(message)


def ingest(
    rows: Sequence[Dict[str, Any]],
    collection_name: str,
    batch_size: int,
    writer
) -> IngestionReport:
    """Convenience wrapper around BatchIngestor.ingest()."""
    return BatchIngestor(writer, batch_size).ingest(rows, collection_name)
