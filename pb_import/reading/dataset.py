# ==============================================
# RawDataset
# ==============================================
#
# PURPOSE:
#   What every reader returns: the fully materialized raw rows,
#   the declared origin format, and the file they came from.
#   Also resolves input file names and derives collection names.
#
# ==============================================

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from pb_import.inference.schema import InputFormat


@dataclass(frozen=True)
class RawDataset:
    """Raw rows read from one input file."""
    rows: List[Dict[str, Any]]
    format: InputFormat
    source: Path

    def __len__(self) -> int:
        return len(self.rows)


def resolve_input_path(filename: Union[str, Path], input_dir: Union[str, Path]) -> Path:
    """
    Locate an input file.

    Relative names are looked up under the input directory;
    absolute paths are used as given.
    """
    return Path(input_dir).expanduser() / Path(filename).expanduser()


def collection_name_for(path: Union[str, Path]) -> str:
    """Collection name for an input file: its name without the extension."""
    return Path(path).stem
