from __future__ import annotations

import sys
from pathlib import Path

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from idxops.core.errors import IndexNotFound  # noqa: E402
from idxops.core.models import IndexMetadata, SourceConfig  # noqa: E402


class MetastoreStub:
    """In-memory metastore holding a fixed set of indexes."""

    def __init__(self, indexes: dict[str, IndexMetadata]):
        self.indexes = indexes
        self.calls: list[str] = []

    async def index_metadata(self, index_id: str) -> IndexMetadata:
        self.calls.append(index_id)
        if index_id not in self.indexes:
            raise IndexNotFound(index_id)
        return self.indexes[index_id]


class ResolverStub:
    """Resolver returning the same metastore and recording every URI."""

    def __init__(self, metastore: MetastoreStub):
        self.metastore = metastore
        self.calls: list[str] = []

    async def resolve(self, uri: str) -> MetastoreStub:
        self.calls.append(uri)
        return self.metastore


@pytest.fixture
def index_metadata() -> IndexMetadata:
    # Sources are deliberately stored out of order.
    return IndexMetadata(
        index_id="my-index",
        sources=(
            SourceConfig(
                source_id="b",
                source_type="kafka",
                params={"topic": "t1", "auth": {"user": "bob", "token": "x"}},
            ),
            SourceConfig(source_id="a", source_type="file", params={"filepath": "/a.json"}),
        ),
        checkpoint={"p2": "10", "p1": "5"},
    )


@pytest.fixture
def resolver(index_metadata: IndexMetadata) -> ResolverStub:
    return ResolverStub(MetastoreStub({index_metadata.index_id: index_metadata}))
