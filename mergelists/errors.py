"""Exceptions raised while loading and merging record lists."""


class MergeListsError(Exception):
    """Base class for errors reported by the command line tool."""


class UsageError(MergeListsError):
    """Raised when the tool is invoked with too few input files."""


class LoadError(MergeListsError):
    """An input source could not be turned into a batch of records."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to read a file content of `{source}`: {reason}")
