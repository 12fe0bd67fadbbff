"""Record model and JSON loading for mergelists inputs.

Each input file holds a JSON array of objects shaped like::

    {"num": 1, "title": "a", "created": 10}
    {"num": 1, "title": "a2", "deleted": 20}

Key concepts
------------
* ``num`` identifies the logical entity; it repeats across files.
* Exactly one of ``created``/``deleted`` is present. Its value is copied
  into :attr:`Record.timestamp` once, at load time, so the merge never has
  to look at which of the two fields was set.
* Validation is all-or-nothing. A single bad element rejects the whole
  file with a :class:`~mergelists.errors.LoadError`.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import LoadError

FIELD_NUM = "num"
FIELD_TITLE = "title"
FIELD_CREATED = "created"
FIELD_DELETED = "deleted"

NUM_MIN = -(2**31)
NUM_MAX = 2**31 - 1
TIMESTAMP_MAX = 2**64 - 1

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Record:
    """A single creation or deletion event for entity ``num``."""

    num: int
    title: str
    created: Optional[int]
    deleted: Optional[int]
    timestamp: int

    def __post_init__(self) -> None:
        if self.created is not None and self.deleted is not None:
            raise ValueError("a record cannot be both created and deleted")
        if self.created is None and self.deleted is None:
            raise ValueError("a record needs either created or deleted")
        event = self.created if self.created is not None else self.deleted
        if self.timestamp != event:
            raise ValueError(f"timestamp {self.timestamp} does not match event time {event}")

    @classmethod
    def from_event(
        cls,
        num: int,
        title: str,
        *,
        created: Optional[int] = None,
        deleted: Optional[int] = None,
    ) -> "Record":
        """Build a record, deriving ``timestamp`` from the event field."""

        timestamp = created if created is not None else deleted
        return cls(num, title, created, deleted, timestamp)

    def to_dict(self) -> Dict[str, object]:
        """Return the JSON shape of the record, without the absent field."""

        payload: Dict[str, object] = {FIELD_NUM: self.num, FIELD_TITLE: self.title}
        if self.created is not None:
            payload[FIELD_CREATED] = self.created
        if self.deleted is not None:
            payload[FIELD_DELETED] = self.deleted
        return payload


def load_records(path: str | Path) -> List[Record]:
    """Read ``path`` and return its validated records.

    Every failure, from a missing file to a bad element, is reported as a
    :class:`LoadError` naming ``path``.
    """

    source = str(path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise LoadError(source, f"Failed to open a file stream ({exc.strerror})") from exc
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise LoadError(source, f"Malformed JSON: {exc}") from exc

    records = parse_records(payload, source)
    _LOG.debug("Loaded %s records from %s", len(records), source)
    return records


def parse_records(payload: Any, source: str = "<input>") -> List[Record]:
    """Validate a decoded JSON document and convert it into records."""

    if not isinstance(payload, list):
        raise LoadError(source, "The root JSON object is not an array")

    records: List[Record] = []
    for index, element in enumerate(payload):
        records.append(_parse_element(element, index, source))
    return records


# Helper functions


def _parse_element(element: Any, index: int, source: str) -> Record:
    if not isinstance(element, dict):
        raise LoadError(source, f"Element #{index} of the root JSON array is not an object")

    num = _require(element, FIELD_NUM, index, source)
    if not _is_int(num) or not NUM_MIN <= num <= NUM_MAX:
        raise LoadError(source, f"Field `{FIELD_NUM}` of element #{index} is not a 32-bit integer")

    title = _require(element, FIELD_TITLE, index, source)
    if not isinstance(title, str):
        raise LoadError(source, f"Field `{FIELD_TITLE}` of element #{index} is not a string")

    has_created = FIELD_CREATED in element
    has_deleted = FIELD_DELETED in element
    if has_created and has_deleted:
        raise LoadError(
            source,
            f"Both `{FIELD_CREATED}` and `{FIELD_DELETED}` fields are present in element #{index}",
        )
    if not (has_created or has_deleted):
        raise LoadError(
            source,
            f"Both `{FIELD_CREATED}` and `{FIELD_DELETED}` fields are absent in element #{index}",
        )

    field = FIELD_CREATED if has_created else FIELD_DELETED
    value = element[field]
    if not _is_int(value) or not 0 <= value <= TIMESTAMP_MAX:
        raise LoadError(
            source, f"Field `{field}` of element #{index} is not an unsigned 64-bit integer"
        )

    if has_created:
        return Record.from_event(num, title, created=value)
    return Record.from_event(num, title, deleted=value)


def _require(element: Dict[str, Any], key: str, index: int, source: str) -> Any:
    try:
        return element[key]
    except KeyError as exc:
        raise LoadError(source, f"Failed to get field `{key}` of element #{index}") from exc


def _is_int(value: Any) -> bool:
    # bool is a subclass of int; JSON true/false are not valid numbers here
    return isinstance(value, int) and not isinstance(value, bool)
