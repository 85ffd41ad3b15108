from __future__ import annotations

import logging
import os
from urllib.parse import quote

import httpx

from idxops.core.errors import IndexNotFound, MetastoreError, MetastoreUnavailable
from idxops.core.models import IndexMetadata

log = logging.getLogger(__name__)


class HttpMetastore:
    """Metastore reached through the REST API of a running index server."""

    _TIMEOUT_ENV = "IDXOPS_METASTORE_TIMEOUT"
    _DEFAULT_TIMEOUT_SECONDS = 10.0

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create a client for the server at `base_url`."""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else self._timeout_seconds()
        self._transport = transport

    def _timeout_seconds(self) -> float:
        """Return the request timeout in seconds, honoring env override."""
        raw = os.getenv(self._TIMEOUT_ENV)
        if raw is None:
            return self._DEFAULT_TIMEOUT_SECONDS
        try:
            value = float(raw)
        except ValueError:
            return self._DEFAULT_TIMEOUT_SECONDS
        return value if value > 0 else self._DEFAULT_TIMEOUT_SECONDS

    def _index_url(self, index_id: str) -> str:
        return f"{self.base_url}/api/v1/indexes/{quote(index_id, safe='')}"

    async def index_metadata(self, index_id: str) -> IndexMetadata:
        """Fetch the metadata of an index from the server."""
        url = self._index_url(index_id)
        log.debug("GET %s (timeout=%ss)", url, self.timeout)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json"},
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise MetastoreUnavailable(
                f"Failed to reach metastore at {self.base_url}: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MetastoreUnavailable(f"Request to {url} failed: {exc}") from exc

        if response.status_code == 404:
            raise IndexNotFound(index_id)
        if response.status_code != 200:
            raise MetastoreError(
                f"Metastore returned HTTP {response.status_code} for index `{index_id}`."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise MetastoreError(
                f"Metastore returned invalid JSON for index `{index_id}`."
            ) from exc
        return IndexMetadata.from_dict(payload)
