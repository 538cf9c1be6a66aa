"""
Storefront API - Firestore Store Unit Tests (Mocked)
====================================================

What:  FirestoreStore query construction against a mocked AsyncClient.
Why:   Tests should not need a Firestore project or the emulator.

What we test:
    ✅ StoreQuery → where / order_by / start_after / limit chain
    ✅ Document-id lookups compare against a DocumentReference
    ✅ Snapshots become Documents with normalized values
    ✅ Health check and close
    ❌ Real queries (run against the emulator for that)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.cloud import firestore
from google.cloud.firestore_v1.base_document import BaseDocumentReference

from storefront.services.firestore_store import FirestoreStore, normalize_value
from storefront.services.store_base import DESCENDING, Document, StoreQuery


async def _agen(items):
    for item in items:
        yield item


def _snapshot(doc_id, data):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.to_dict.return_value = data
    return snapshot


@pytest.fixture
def mock_client():
    """
    AsyncClient mock whose query methods all return the same query mock,
    so the chain can be inspected afterwards.
    """
    client = MagicMock()
    collection_ref = MagicMock()
    query = MagicMock()

    client.collection.return_value = collection_ref
    for method in ("where", "order_by", "start_after", "limit"):
        getattr(collection_ref, method).return_value = query
        getattr(query, method).return_value = query

    collection_ref.stream.side_effect = lambda: _agen([])
    query.stream.side_effect = lambda: _agen([])

    client.collection_ref = collection_ref
    client.query = query
    return client


class TestNormalizeValue:

    def test_plain_values_pass_through(self):
        value = {"title": "Mug", "price": 8.5, "tags": ["kitchen"], "active": True, "note": None}
        assert normalize_value(value) == value

    def test_geopoint(self):
        assert normalize_value(firestore.GeoPoint(52.5, 13.4)) == {"latitude": 52.5, "longitude": 13.4}

    def test_document_reference_becomes_path(self):
        ref = MagicMock(spec=BaseDocumentReference)
        ref.path = "categories/electronics"
        assert normalize_value({"category_ref": ref}) == {"category_ref": "categories/electronics"}

    def test_bytes_become_base64(self):
        assert normalize_value(b"\x00\x01") == "AAE="

    def test_nested_structures(self):
        value = {"variants": [{"location": firestore.GeoPoint(1.0, 2.0)}]}
        assert normalize_value(value) == {"variants": [{"location": {"latitude": 1.0, "longitude": 2.0}}]}


class TestFirestoreStoreQueries:

    @pytest.mark.asyncio
    async def test_stream_collection(self, mock_client):
        mock_client.collection_ref.stream.side_effect = lambda: _agen(
            [_snapshot("c1", {"name": "Toys"}), _snapshot("c2", None)]
        )
        store = FirestoreStore(client=mock_client)

        documents = await store.stream("categories")

        mock_client.collection.assert_called_with("categories")
        assert documents == [Document(id="c1", data={"name": "Toys"}), Document(id="c2", data={})]

    @pytest.mark.asyncio
    async def test_filtered_ordered_limited_query(self, mock_client):
        snapshot = _snapshot("p1", {"title": "iPhone", "price": 500})
        mock_client.query.stream.side_effect = lambda: _agen([snapshot])
        store = FirestoreStore(client=mock_client)

        documents = await store.run_query(
            StoreQuery(
                collection="products",
                filters=[("category", "electronics")],
                order_by="price",
                direction=DESCENDING,
                limit=2,
            )
        )

        field_filter = mock_client.collection_ref.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "category"
        assert field_filter.op_string == "=="
        assert field_filter.value == "electronics"
        mock_client.query.order_by.assert_called_once_with("price", direction=firestore.Query.DESCENDING)
        mock_client.query.limit.assert_called_once_with(2)
        mock_client.query.start_after.assert_not_called()

        assert documents == [Document(id="p1", data={"title": "iPhone", "price": 500})]
        assert documents[0].snapshot is snapshot

    @pytest.mark.asyncio
    async def test_ascending_order(self, mock_client):
        store = FirestoreStore(client=mock_client)
        await store.run_query(StoreQuery(collection="products", order_by="price"))

        mock_client.collection_ref.order_by.assert_called_once_with(
            "price", direction=firestore.Query.ASCENDING
        )

    @pytest.mark.asyncio
    async def test_start_after_uses_anchor_snapshot(self, mock_client):
        anchor_snapshot = _snapshot("p2", {"price": 300})
        store = FirestoreStore(client=mock_client)

        await store.run_query(
            StoreQuery(
                collection="products",
                order_by="price",
                start_after=Document(id="p2", data={"price": 300}, snapshot=anchor_snapshot),
                limit=10,
            )
        )

        mock_client.query.start_after.assert_called_once_with(anchor_snapshot)

    @pytest.mark.asyncio
    async def test_start_after_without_snapshot_uses_field_values(self, mock_client):
        store = FirestoreStore(client=mock_client)

        await store.run_query(
            StoreQuery(
                collection="products",
                order_by="price",
                start_after=Document(id="p2", data={"price": 300}),
            )
        )

        mock_client.query.start_after.assert_called_once_with({"price": 300})

    @pytest.mark.asyncio
    async def test_document_id_lookup(self, mock_client):
        doc_ref = MagicMock()
        mock_client.collection_ref.document.return_value = doc_ref
        store = FirestoreStore(client=mock_client)

        await store.run_query(
            StoreQuery(collection="products", document_id="p2", order_by="price", limit=1)
        )

        mock_client.collection_ref.document.assert_called_once_with("p2")
        field_filter = mock_client.collection_ref.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "__name__"
        assert field_filter.value is doc_ref

    @pytest.mark.asyncio
    async def test_illegal_document_id_raises_before_querying(self, mock_client):
        store = FirestoreStore(client=mock_client)

        with pytest.raises(ValueError):
            await store.run_query(StoreQuery(collection="products", document_id="a/b"))

        mock_client.collection_ref.document.assert_not_called()


class TestFirestoreStoreLifecycle:

    @pytest.mark.asyncio
    async def test_health_check_true(self, mock_client):
        mock_client.collections = MagicMock(side_effect=lambda: _agen([MagicMock()]))
        assert await FirestoreStore(client=mock_client).health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_false_on_error(self, mock_client):
        mock_client.collections = MagicMock(side_effect=RuntimeError("no credentials"))
        assert await FirestoreStore(client=mock_client).health_check() is False

    @pytest.mark.asyncio
    async def test_close_awaits_async_close(self, mock_client):
        mock_client.close = AsyncMock()
        store = FirestoreStore(client=mock_client)

        await store.close()

        mock_client.close.assert_awaited_once()
        assert store._client is None

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        await FirestoreStore().close()
