from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from idxops.core.errors import IndexNotFound, MetastoreError, MetastoreUnavailable
from idxops.core.models import IndexMetadata
from idxops.core.uri import PROTOCOL_SEPARATOR

log = logging.getLogger(__name__)


class FileBackedMetastore:
    """Metastore stored on the local filesystem, one directory per index."""

    METADATA_FILENAME = "metastore.json"

    def __init__(self, root: Path) -> None:
        self.root = root

    @classmethod
    async def open(cls, uri: str) -> FileBackedMetastore:
        """Open the metastore rooted at a `file://` URI."""
        # Everything after `file://` is the path, including any `#` or `?`.
        root = Path(uri.split(PROTOCOL_SEPARATOR, 1)[1])
        is_dir = await asyncio.to_thread(root.is_dir)
        if not is_dir:
            raise MetastoreUnavailable(
                f"Metastore directory `{root}` does not exist or is not a directory."
            )
        return cls(root)

    def _metadata_path(self, index_id: str) -> Path:
        """Return the metadata file path for an index."""
        return self.root / index_id / self.METADATA_FILENAME

    async def index_metadata(self, index_id: str) -> IndexMetadata:
        """Load and parse the metadata document of an index."""
        if "/" in index_id or index_id in {".", ".."}:
            raise IndexNotFound(index_id)
        path = self._metadata_path(index_id)
        log.debug("Reading index metadata from %s", path)
        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError as exc:
            raise IndexNotFound(index_id) from exc
        except OSError as exc:
            raise MetastoreUnavailable(
                f"Failed to read metadata of index `{index_id}`: {exc}"
            ) from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MetastoreError(
                f"Metadata of index `{index_id}` is not valid JSON: {exc}"
            ) from exc
        return IndexMetadata.from_dict(payload)
