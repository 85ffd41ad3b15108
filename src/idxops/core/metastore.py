"""Metastore access used by the source commands.

The commands only need one read operation from a metastore, fetching the
metadata of an index. Backends are selected from the URI scheme by
`MetastoreUriResolver`.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Mapping, Protocol

from idxops.core.adapters.filemetastore import FileBackedMetastore
from idxops.core.adapters.httpmetastore import HttpMetastore
from idxops.core.errors import MetastoreError, MetastoreUnavailable
from idxops.core.models import IndexMetadata
from idxops.core.uri import PROTOCOL_SEPARATOR

log = logging.getLogger(__name__)


class Metastore(Protocol):
    """Interface for index metadata lookups."""

    async def index_metadata(self, index_id: str) -> IndexMetadata:
        """Return the metadata of an index or raise IndexNotFound."""
        ...


MetastoreFactory = Callable[[str], Awaitable[Metastore]]


class MetastoreResolver(Protocol):
    """Interface for turning a normalized URI into a metastore handle."""

    async def resolve(self, uri: str) -> Metastore:
        """Return a metastore for the URI or raise MetastoreUnavailable."""
        ...


async def _open_http(uri: str) -> Metastore:
    return HttpMetastore(uri)


DEFAULT_FACTORIES: Mapping[str, MetastoreFactory] = {
    "file": FileBackedMetastore.open,
    "http": _open_http,
    "https": _open_http,
}


class MetastoreUriResolver:
    """Resolve normalized metastore URIs to backend instances."""

    def __init__(self, factories: Mapping[str, MetastoreFactory] | None = None):
        self._factories = dict(DEFAULT_FACTORIES if factories is None else factories)

    @property
    def schemes(self) -> list[str]:
        """Return the supported URI schemes."""
        return sorted(self._factories)

    async def resolve(self, uri: str) -> Metastore:
        """
        Return a metastore handle for a normalized URI.

        Raises:
            MetastoreUnavailable: If the scheme has no backend or the
                                  backend cannot be opened.
        """
        scheme = uri.split(PROTOCOL_SEPARATOR, 1)[0] if PROTOCOL_SEPARATOR in uri else ""
        factory = self._factories.get(scheme)
        if factory is None:
            raise MetastoreUnavailable(
                f"Unsupported metastore URI `{uri}`. "
                f"Supported schemes: {', '.join(self.schemes)}."
            )

        log.debug("Resolving metastore %s with %s backend", uri, scheme)
        try:
            return await factory(uri)
        except MetastoreError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise MetastoreUnavailable(
                f"Failed to resolve metastore `{uri}`: {exc}"
            ) from exc
