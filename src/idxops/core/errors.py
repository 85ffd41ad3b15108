"""Error kinds raised by the source inspection commands.

Every failure of a command surfaces as one of these exceptions. The CLI
maps them to exit codes; the core never catches them itself.
"""

from __future__ import annotations


class SourceCliError(RuntimeError):
    """Base class for all failures of a source command."""


class ArgumentError(SourceCliError):
    """Raised when a CLI argument is missing or invalid."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class MetastoreError(SourceCliError):
    """Raised when the metastore returns something we cannot use."""


class MetastoreUnavailable(MetastoreError):
    """Raised when a metastore URI cannot be resolved or reached."""


class IndexNotFound(MetastoreError):
    """Raised when the requested index does not exist in the metastore."""

    def __init__(self, index_id: str) -> None:
        super().__init__(f"Index `{index_id}` does not exist.")
        self.index_id = index_id


class SourceNotFound(SourceCliError):
    """Raised when the requested source does not exist within an index."""

    def __init__(self, source_id: str) -> None:
        super().__init__(f"Source `{source_id}` does not exist.")
        self.source_id = source_id
