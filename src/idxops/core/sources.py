"""Execution of the source inspection commands.

This module fetches index metadata through a metastore resolver and
turns it into sorted display rows. It is intentionally free of CLI
concerns: printing goes through a `SourceRenderer` supplied by the
caller, so the same logic can be driven from the CLI or from tests.
"""

from __future__ import annotations

import logging
from typing import Protocol

from idxops.core.commands import DescribeSourceArgs, ListSourcesArgs, SourceCommand
from idxops.core.errors import SourceNotFound
from idxops.core.flatten import flatten_json
from idxops.core.metastore import MetastoreResolver
from idxops.core.models import (
    CheckpointRow,
    IndexMetadata,
    ParamsRow,
    SourceDescription,
    SourceRow,
)

log = logging.getLogger(__name__)


class SourceRenderer(Protocol):
    """Interface for displaying command results."""

    def source_description(self, description: SourceDescription) -> None:
        """Display the Source, Parameters and Checkpoint tables."""
        ...

    def sources_table(self, rows: list[SourceRow], title: str = "Sources") -> None:
        """Display a table of sources."""
        ...


async def fetch_index_metadata(
    resolver: MetastoreResolver, metastore_uri: str, index_id: str
) -> IndexMetadata:
    """Resolve the metastore and fetch the metadata of one index."""
    metastore = await resolver.resolve(metastore_uri)
    index_metadata = await metastore.index_metadata(index_id)
    log.debug(
        "Fetched index %s: %d source(s), %d checkpoint partition(s)",
        index_id,
        len(index_metadata.sources),
        len(index_metadata.checkpoint),
    )
    return index_metadata


async def describe_source(
    resolver: MetastoreResolver, args: DescribeSourceArgs
) -> SourceDescription:
    """
    Build the rows describing one source of an index.

    Parameters are flattened to dotted keys and sorted by key; checkpoint
    entries are sorted by partition id.

    Raises:
        MetastoreUnavailable: If the metastore cannot be resolved.
        IndexNotFound: If the index does not exist.
        SourceNotFound: If the index has no source with `args.source_id`.
    """
    index_metadata = await fetch_index_metadata(
        resolver, args.metastore_uri, args.index_id
    )

    source = next(
        (s for s in index_metadata.sources if s.source_id == args.source_id),
        None,
    )
    if source is None:
        raise SourceNotFound(args.source_id)

    params_rows = sorted(
        (ParamsRow(key=key, value=value) for key, value in flatten_json(source.params)),
        key=lambda row: row.key,
    )
    checkpoint_rows = sorted(
        (
            CheckpointRow(partition_id=partition_id, offset=position)
            for partition_id, position in index_metadata.checkpoint.items()
        ),
        key=lambda row: row.partition_id,
    )
    return SourceDescription(
        source=[SourceRow(source_id=source.source_id, source_type=source.source_type)],
        params=params_rows,
        checkpoint=checkpoint_rows,
    )


async def list_sources(
    resolver: MetastoreResolver, args: ListSourcesArgs
) -> list[SourceRow]:
    """Return one row per source of the index, sorted by source id."""
    index_metadata = await fetch_index_metadata(
        resolver, args.metastore_uri, args.index_id
    )
    return sorted(
        (
            SourceRow(source_id=s.source_id, source_type=s.source_type)
            for s in index_metadata.sources
        ),
        key=lambda row: row.source_id,
    )


async def execute(
    command: SourceCommand,
    *,
    resolver: MetastoreResolver,
    renderer: SourceRenderer,
) -> None:
    """Run a source command and hand its rows to the renderer."""
    if isinstance(command, DescribeSourceArgs):
        description = await describe_source(resolver, command)
        renderer.source_description(description)
        return
    if isinstance(command, ListSourcesArgs):
        rows = await list_sources(resolver, command)
        renderer.sources_table(rows, title="Sources")
        return
    raise TypeError(f"Unsupported source command: {command!r}")
