"""Render merged records as pretty-printed JSON."""

import json
from typing import Dict, Iterable, List, TextIO

from .records import Record

DEFAULT_INDENT = 2


def render_records(records: Iterable[Record]) -> List[Dict[str, object]]:
    """Return the JSON shape of ``records`` in the same order."""

    return [record.to_dict() for record in records]


def dump_records(records: Iterable[Record], stream: TextIO, indent: int = DEFAULT_INDENT) -> None:
    stream.write(json.dumps(render_records(records), indent=indent, ensure_ascii=False))
    stream.write("\n")
