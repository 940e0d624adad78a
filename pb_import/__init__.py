# ==============================================
# PocketBase File Importer
# ==============================================
#
# Package Structure (4 Stages + Orchestrator):
#
# pb_import/
# ├── reading/      # Stage 1: Read CSV / JSON files into raw rows
# ├── inference/    # Stage 2: Classify column types, build the schema
# ├── conversion/   # Stage 3: Convert raw rows into typed rows
# ├── storage/      # Stage 4: Create the collection, send batches
# ├── config.py     # Configuration management
# ├── errors.py     # Stage-tagged exceptions
# ├── importer.py   # Final orchestrator class
# └── cli.py        # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
