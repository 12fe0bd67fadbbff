"""Merge JSON record lists, keeping the latest event for every ``num``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from mergelists import merge_logic, printer, records
from mergelists.errors import MergeListsError, UsageError

DEFAULT_MIN_FILES = 2
USAGE = "%(prog)s <filename1> <filename2> ..."
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mergelists",
        usage=USAGE,
        description=__doc__,
    )
    parser.add_argument("files", nargs="*", help="JSON files holding record arrays")
    parser.add_argument(
        "--min-files",
        type=int,
        default=DEFAULT_MIN_FILES,
        help=f"Minimum number of input files (default: {DEFAULT_MIN_FILES})",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=printer.DEFAULT_INDENT,
        help=f"Indentation of the JSON output (default: {printer.DEFAULT_INDENT})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log loading and merge details to stderr",
    )
    return parser


def load_all(paths: Sequence[str]) -> List[List[records.Record]]:
    """Load every input before merging; the first failure aborts the run."""

    batches = []
    for path in paths:
        batches.append(records.load_records(path))
    _LOG.info("Loaded %s batches", len(batches))
    return batches


def run(paths: Sequence[str], min_files: int = DEFAULT_MIN_FILES) -> List[records.Record]:
    if len(paths) < min_files:
        raise UsageError(f"expected at least {min_files} input files, got {len(paths)}")

    # Batches stay referenced here for as long as the merged result is in use
    batches = load_all(paths)
    return merge_logic.merge_batches(batches)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )

    try:
        merged = run(args.files, args.min_files)
    except UsageError as exc:
        print(f"Usage: {USAGE % {'prog': parser.prog}}", file=sys.stderr)
        print(exc, file=sys.stderr)
        return 1
    except MergeListsError as exc:
        print(exc, file=sys.stderr)
        return 1

    printer.dump_records(merged, sys.stdout, indent=args.indent)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
