"""Core last-write-wins merge of record batches.

Key concepts
------------
* Every record is identified by ``num``. Across batches the record with the
  strictly greatest ``timestamp`` wins for its ``num``.
* On an exact timestamp tie the record seen first is kept. Re-adding the
  same batch therefore never changes the result.
* The builder keeps references to the caller's :class:`Record` objects and
  never copies them. ``build`` returns those same objects, sorted ascending
  by ``timestamp``.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .records import Record

_LOG = logging.getLogger(__name__)


@dataclass
class MergeSummary:
    """Counters accumulated by :class:`MergeBuilder`."""

    batches: int = 0
    processed: int = 0
    inserted: int = 0
    replaced: int = 0
    kept: int = 0
    distinct_keys: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Return a serialisable representation of the summary."""

        return {
            "batches": self.batches,
            "processed": self.processed,
            "inserted": self.inserted,
            "replaced": self.replaced,
            "kept": self.kept,
            "distinct_keys": self.distinct_keys,
        }


class MergeBuilder:
    """Accumulate batches of records and select one winner per ``num``."""

    def __init__(self) -> None:
        self._winners: Dict[int, Record] = {}
        self._summary = MergeSummary()

    def __len__(self) -> int:
        return len(self._winners)

    def add_batch(self, records: Iterable[Record]) -> None:
        """Merge ``records`` into the current set of winners.

        Parameters
        ----------
        records:
            Validated records, in input order. They are stored by reference,
            so the caller must not mutate them while the builder is in use.
        """

        summary = self._summary
        summary.batches += 1
        for record in records:
            summary.processed += 1
            existing = self._winners.get(record.num)
            if existing is None:
                self._winners[record.num] = record
                summary.inserted += 1
                continue
            # Strictly greater only: ties keep the first-seen record
            if record.timestamp > existing.timestamp:
                self._winners[record.num] = record
                summary.replaced += 1
            else:
                summary.kept += 1
        summary.distinct_keys = len(self._winners)

    def build(self) -> List[Record]:
        """Return the current winners sorted ascending by ``timestamp``.

        The builder state is left untouched, so ``build`` may be called again
        after more batches are added.
        """

        return sorted(self._winners.values(), key=lambda record: record.timestamp)

    def summary(self) -> MergeSummary:
        """Return a snapshot of the merge counters."""

        return MergeSummary(**self._summary.to_dict())


def merge_batches(batches: Sequence[Sequence[Record]]) -> List[Record]:
    """Merge ``batches`` in order with a fresh builder and return the result."""

    builder = MergeBuilder()
    for batch in batches:
        builder.add_batch(batch)
    _LOG.info("Merge summary: %s", builder.summary().to_dict())
    return builder.build()
