"""yaml-split library.

Splits a stream of kubernetes YAML documents into one file per resource,
named after the resource kind and metadata.name.
"""

__version__ = "0.1.0"

from .models import Record, derive_filename
from .splitter import (
    SplitError,
    ensure_output_dir,
    overwrite_to_file,
    read_input,
    split,
    split_documents,
    write_records,
)

__all__ = [
    "Record",
    "SplitError",
    "derive_filename",
    "ensure_output_dir",
    "overwrite_to_file",
    "read_input",
    "split",
    "split_documents",
    "write_records",
]
