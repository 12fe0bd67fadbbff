"""Last-write-wins merge of record lists."""

from .errors import LoadError, MergeListsError, UsageError
from .merge_logic import MergeBuilder, MergeSummary, merge_batches
from .printer import dump_records, render_records
from .records import Record, load_records, parse_records

__all__ = [
    "LoadError",
    "MergeListsError",
    "UsageError",
    "MergeBuilder",
    "MergeSummary",
    "merge_batches",
    "dump_records",
    "render_records",
    "Record",
    "load_records",
    "parse_records",
]
