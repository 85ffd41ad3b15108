"""Typed source commands and their construction from raw CLI input.

Parsing is synchronous and performs no I/O: every argument problem is
reported before the metastore is contacted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from idxops.core.errors import ArgumentError
from idxops.core.uri import normalize_uri

METASTORE_URI = "metastore-uri"
INDEX_ID = "index-id"
SOURCE_ID = "source-id"


@dataclass(frozen=True)
class DescribeSourceArgs:
    """Arguments of `source describe`."""

    metastore_uri: str
    index_id: str
    source_id: str


@dataclass(frozen=True)
class ListSourcesArgs:
    """Arguments of `source list`."""

    metastore_uri: str
    index_id: str


SourceCommand = DescribeSourceArgs | ListSourcesArgs


def _required(matches: Mapping[str, str | None], name: str) -> str:
    value = matches.get(name)
    if value is None or not str(value).strip():
        raise ArgumentError(f"`--{name}` is a required argument.", argument=name)
    return str(value).strip()


def _metastore_uri(matches: Mapping[str, str | None]) -> str:
    raw = _required(matches, METASTORE_URI)
    try:
        return normalize_uri(raw)
    except ValueError as exc:
        raise ArgumentError(
            f"Invalid `--{METASTORE_URI}`: {exc}", argument=METASTORE_URI
        ) from exc


def parse_describe_args(matches: Mapping[str, str | None]) -> DescribeSourceArgs:
    """Build `DescribeSourceArgs` from raw argument values."""
    return DescribeSourceArgs(
        metastore_uri=_metastore_uri(matches),
        index_id=_required(matches, INDEX_ID),
        source_id=_required(matches, SOURCE_ID),
    )


def parse_list_args(matches: Mapping[str, str | None]) -> ListSourcesArgs:
    """Build `ListSourcesArgs` from raw argument values."""
    return ListSourcesArgs(
        metastore_uri=_metastore_uri(matches),
        index_id=_required(matches, INDEX_ID),
    )


def parse_cli_args(
    subcommand: str | None, matches: Mapping[str, str | None]
) -> SourceCommand:
    """
    Translate a subcommand name and its raw arguments into a command.

    Args:
        subcommand: Name of the `source` subcommand (`describe` or `list`).
        matches: Raw argument values keyed by option name without dashes
                 (for example `index-id`). Missing values may be absent
                 or None.

    Returns:
        A DescribeSourceArgs or ListSourcesArgs instance.

    Raises:
        ArgumentError: If the subcommand is unknown, a required argument
                       is missing or blank, or the metastore URI is
                       malformed.
    """
    if subcommand == "describe":
        return parse_describe_args(matches)
    if subcommand == "list":
        return parse_list_args(matches)
    raise ArgumentError(f"Source subcommand `{subcommand}` is not implemented.")
