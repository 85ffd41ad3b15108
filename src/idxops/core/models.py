"""Core domain models for index sources.

These models represent fetched index metadata and the rows displayed by
the source commands. They are immutable and free of any metastore
backend or CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from idxops.core.errors import MetastoreError


def _position(partition_id: str, value: Any) -> str:
    """Return a checkpoint position as text; only strings and integers are valid."""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise MetastoreError(
        f"Malformed checkpoint position for partition `{partition_id}`: {value!r}"
    )


@dataclass(frozen=True)
class SourceConfig:
    """
    A data source attached to an index.

    Attributes:
        source_id: Identifier of the source, unique within its index.
        source_type: Kind of source (for example `file` or `kafka`).
        params: Arbitrary nested JSON configuration of the source.
    """

    source_id: str
    source_type: str
    params: Any = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> SourceConfig:
        """Build a source from its metastore JSON representation."""
        try:
            source_id = payload["source_id"]
            source_type = payload["source_type"]
        except (KeyError, TypeError) as exc:
            raise MetastoreError(f"Malformed source definition: {payload!r}") from exc
        return cls(
            source_id=str(source_id),
            source_type=str(source_type),
            params=payload.get("params", {}),
        )


@dataclass(frozen=True)
class IndexMetadata:
    """
    Metadata of an index as stored in the metastore.

    Attributes:
        index_id: Identifier of the index.
        sources: Sources attached to the index, in metastore order.
        checkpoint: Mapping of partition id to position (offset).
    """

    index_id: str
    sources: tuple[SourceConfig, ...] = ()
    checkpoint: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> IndexMetadata:
        """Build index metadata from the metastore JSON document."""
        if not isinstance(payload, Mapping) or "index_id" not in payload:
            raise MetastoreError("Malformed index metadata: missing `index_id`.")

        raw_sources = payload.get("sources") or []
        raw_checkpoint = payload.get("checkpoint") or {}
        if not isinstance(raw_sources, list) or not isinstance(raw_checkpoint, Mapping):
            raise MetastoreError(
                f"Malformed index metadata for `{payload['index_id']}`."
            )

        return cls(
            index_id=str(payload["index_id"]),
            sources=tuple(SourceConfig.from_dict(s) for s in raw_sources),
            checkpoint={
                str(k): _position(str(k), v) for k, v in raw_checkpoint.items()
            },
        )


@dataclass(frozen=True)
class SourceRow:
    """One line of the Source(s) table."""

    source_id: str
    source_type: str


@dataclass(frozen=True)
class ParamsRow:
    """One flattened source parameter."""

    key: str
    value: Any


@dataclass(frozen=True)
class CheckpointRow:
    """Position reached on one partition."""

    partition_id: str
    offset: str


@dataclass(frozen=True)
class SourceDescription:
    """All rows displayed by `source describe`, ready to render."""

    source: list[SourceRow]
    params: list[ParamsRow]
    checkpoint: list[CheckpointRow]
