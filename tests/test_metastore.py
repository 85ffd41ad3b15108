import asyncio
import json

import httpx
import pytest

from idxops.core.adapters.filemetastore import FileBackedMetastore
from idxops.core.adapters.httpmetastore import HttpMetastore
from idxops.core.errors import IndexNotFound, MetastoreError, MetastoreUnavailable
from idxops.core.metastore import MetastoreUriResolver
from idxops.core.models import IndexMetadata, SourceConfig
from idxops.core.uri import normalize_uri

METADATA = {
    "index_id": "my-index",
    "index_uri": "file:///data/indexes/my-index",
    "checkpoint": {"p1": 5, "p2": "10"},
    "sources": [
        {"source_id": "kafka", "source_type": "kafka", "params": {"topic": "t1"}},
    ],
}


def _write_index(root, payload=METADATA, index_id="my-index"):
    index_dir = root / index_id
    index_dir.mkdir(parents=True)
    (index_dir / "metastore.json").write_text(json.dumps(payload), encoding="utf-8")


def test_index_metadata_from_dict_stringifies_positions():
    metadata = IndexMetadata.from_dict(METADATA)

    assert metadata.index_id == "my-index"
    assert metadata.sources == (
        SourceConfig(source_id="kafka", source_type="kafka", params={"topic": "t1"}),
    )
    assert metadata.checkpoint == {"p1": "5", "p2": "10"}


@pytest.mark.parametrize(
    "payload",
    [
        {},
        [],
        {"index_id": "i", "sources": {"not": "a list"}},
        {"index_id": "i", "sources": [{"source_type": "file"}]},
        {"index_id": "i", "sources": ["oops"]},
    ],
)
def test_index_metadata_from_dict_rejects_malformed_documents(payload):
    with pytest.raises(MetastoreError):
        IndexMetadata.from_dict(payload)


def test_file_metastore_reads_index_metadata(tmp_path):
    _write_index(tmp_path)

    metastore = asyncio.run(MetastoreUriResolver().resolve(f"file://{tmp_path}"))
    metadata = asyncio.run(metastore.index_metadata("my-index"))

    assert isinstance(metastore, FileBackedMetastore)
    assert [s.source_id for s in metadata.sources] == ["kafka"]


def test_file_metastore_missing_index(tmp_path):
    metastore = FileBackedMetastore(tmp_path)

    with pytest.raises(IndexNotFound, match="other"):
        asyncio.run(metastore.index_metadata("other"))
    with pytest.raises(IndexNotFound):
        asyncio.run(metastore.index_metadata("../escape"))


def test_file_metastore_missing_root(tmp_path):
    with pytest.raises(MetastoreUnavailable):
        asyncio.run(FileBackedMetastore.open(f"file://{tmp_path / 'missing'}"))


def test_file_metastore_corrupt_json(tmp_path):
    (tmp_path / "my-index").mkdir()
    (tmp_path / "my-index" / "metastore.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(MetastoreError, match="not valid JSON"):
        asyncio.run(FileBackedMetastore(tmp_path).index_metadata("my-index"))


def test_resolver_rejects_unsupported_scheme():
    with pytest.raises(MetastoreUnavailable, match="Supported schemes: file, http, https"):
        asyncio.run(MetastoreUriResolver().resolve("postgres://localhost/metastore"))


def test_resolver_wraps_backend_failures():
    async def _broken(uri: str):
        raise RuntimeError("boom")

    resolver = MetastoreUriResolver({"ram": _broken})

    with pytest.raises(MetastoreUnavailable, match="boom"):
        asyncio.run(resolver.resolve("ram:///"))


def _http_metastore(handler) -> HttpMetastore:
    return HttpMetastore(
        "http://localhost:7280/", timeout=1.0, transport=httpx.MockTransport(handler)
    )


def test_http_metastore_fetches_index_metadata():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=METADATA)

    metadata = asyncio.run(_http_metastore(handler).index_metadata("my-index"))

    assert seen == ["http://localhost:7280/api/v1/indexes/my-index"]
    assert metadata.checkpoint == {"p1": "5", "p2": "10"}


def test_http_metastore_maps_404_to_index_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "not found"})

    with pytest.raises(IndexNotFound):
        asyncio.run(_http_metastore(handler).index_metadata("missing"))


def test_http_metastore_maps_connection_errors_to_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MetastoreUnavailable, match="connection refused"):
        asyncio.run(_http_metastore(handler).index_metadata("my-index"))


def test_http_metastore_reports_unexpected_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="internal error")

    with pytest.raises(MetastoreError, match="HTTP 500"):
        asyncio.run(_http_metastore(handler).index_metadata("my-index"))


def test_http_metastore_timeout_env_override(monkeypatch):
    monkeypatch.setenv("IDXOPS_METASTORE_TIMEOUT", "2.5")
    assert HttpMetastore("http://h").timeout == 2.5

    monkeypatch.setenv("IDXOPS_METASTORE_TIMEOUT", "not-a-number")
    assert HttpMetastore("http://h").timeout == 10.0

    monkeypatch.setenv("IDXOPS_METASTORE_TIMEOUT", "0")
    assert HttpMetastore("http://h").timeout == 10.0


@pytest.mark.parametrize("dirname", ["my#dir", "my?dir"])
def test_file_metastore_opens_paths_with_url_special_characters(tmp_path, dirname):
    root = tmp_path / dirname
    _write_index(root)

    metastore = asyncio.run(MetastoreUriResolver().resolve(normalize_uri(str(root))))
    metadata = asyncio.run(metastore.index_metadata("my-index"))

    assert metastore.root == root
    assert metadata.index_id == "my-index"


def test_index_metadata_from_dict_rejects_null_or_nested_positions():
    for position in (None, {"offset": 1}, [1], True):
        payload = {"index_id": "i", "checkpoint": {"p1": position}}
        with pytest.raises(MetastoreError, match="p1"):
            IndexMetadata.from_dict(payload)
