"""
Storefront API - Cloud Firestore Store
======================================

What:  DocumentStore implementation backed by google-cloud-firestore's
       AsyncClient.
How:   Translates StoreQuery values into chained Firestore queries
       (where → order_by → start_after → limit) and streams the results.
Who:   Created once per process by storefront.database; used by every request.

Emulator:
    When FIRESTORE_EMULATOR_HOST is exported the client library connects to
    the emulator on its own; nothing here changes.

Value normalization:
    Firestore returns a few types JSON cannot carry. They are converted as
    documents leave the store:
        DatetimeWithNanoseconds → datetime (ISO 8601 once serialized)
        GeoPoint                → {"latitude": ..., "longitude": ...}
        DocumentReference       → "collection/doc" path string
        bytes                   → base64 text
"""

import base64
import inspect
import logging
from typing import Any, Dict, List, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_document import BaseDocumentReference
from google.cloud.firestore_v1.base_query import FieldFilter
from google.cloud.firestore_v1.field_path import FieldPath

from storefront.config import settings
from storefront.services.store_base import (
    DESCENDING,
    Document,
    DocumentStore,
    StoreQuery,
    validate_document_id,
)

logger = logging.getLogger(__name__)


def normalize_value(value: Any) -> Any:
    """Recursively convert Firestore value types into JSON-friendly ones."""
    if isinstance(value, dict):
        return {key: normalize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_value(item) for item in value]
    if isinstance(value, firestore.GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, BaseDocumentReference):
        return value.path
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    return value


def build_client() -> firestore.AsyncClient:
    """
    Create the AsyncClient from settings.

    Credentials come from FIRESTORE_CREDENTIALS_FILE when set, otherwise from
    Application Default Credentials.
    """
    credentials = None
    if settings.firestore_credentials_file:
        from google.oauth2 import service_account

        credentials = service_account.Credentials.from_service_account_file(
            settings.firestore_credentials_file
        )

    logger.info(
        "Connecting to Firestore project=%s database=%s",
        settings.firestore_project or "<inferred>",
        settings.firestore_database,
    )
    return firestore.AsyncClient(
        project=settings.firestore_project or None,
        credentials=credentials,
        database=settings.firestore_database,
    )


class FirestoreStore(DocumentStore):
    """
    Reads collections through a Firestore AsyncClient.

    Ordering:
        Firestore appends an implicit order on the document id in the
        direction of the last explicit order_by, so ties on `price` resolve
        deterministically and start_after(snapshot) has a total order.
        Documents without the ordered field are excluded by Firestore itself.
    """

    name = "firestore"

    def __init__(self, client: Optional[firestore.AsyncClient] = None):
        self._client = client

    @property
    def client(self) -> firestore.AsyncClient:
        # Built on first use so importing the app never needs credentials
        if self._client is None:
            self._client = build_client()
        return self._client

    @staticmethod
    def _to_document(snapshot) -> Document:
        data: Dict[str, Any] = snapshot.to_dict() or {}
        return Document(id=snapshot.id, data=normalize_value(data), snapshot=snapshot)

    async def stream(self, collection: str) -> List[Document]:
        return [
            self._to_document(snapshot)
            async for snapshot in self.client.collection(collection).stream()
        ]

    def _build(self, query: StoreQuery):
        """Chain the StoreQuery onto a collection reference."""
        collection_ref = self.client.collection(query.collection)
        fs_query = collection_ref

        for field_name, value in query.filters:
            fs_query = fs_query.where(filter=FieldFilter(field_name, "==", value))

        if query.document_id is not None:
            doc_ref = collection_ref.document(validate_document_id(query.document_id))
            fs_query = fs_query.where(
                filter=FieldFilter(FieldPath.document_id(), "==", doc_ref)
            )

        if query.order_by:
            direction = (
                firestore.Query.DESCENDING
                if query.direction == DESCENDING
                else firestore.Query.ASCENDING
            )
            fs_query = fs_query.order_by(query.order_by, direction=direction)

        if query.start_after is not None:
            # A snapshot carries every ordered value plus the id tiebreaker
            anchor = query.start_after.snapshot
            if anchor is None:
                anchor = {query.order_by: query.start_after.data.get(query.order_by)}
            fs_query = fs_query.start_after(anchor)

        if query.limit is not None:
            fs_query = fs_query.limit(query.limit)

        return fs_query

    async def run_query(self, query: StoreQuery) -> List[Document]:
        fs_query = self._build(query)
        documents = [self._to_document(snapshot) async for snapshot in fs_query.stream()]
        logger.debug(
            "Firestore query on %s returned %d documents", query.collection, len(documents)
        )
        return documents

    async def health_check(self) -> bool:
        """Fetch at most one collection id; any error means unreachable."""
        try:
            async for _ in self.client.collections():
                break
            return True
        except Exception as e:
            logger.warning("Firestore health check failed: %s", str(e))
            return False

    async def close(self) -> None:
        if self._client is None:
            return
        # AsyncClient.close() returns a coroutine on gRPC async transports
        result = self._client.close()
        if inspect.isawaitable(result):
            await result
        self._client = None
