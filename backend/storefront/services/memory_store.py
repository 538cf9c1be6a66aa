"""
Storefront API - In-Memory Document Store
=========================================

What:  DocumentStore that keeps collections in process memory.
Who:   Selected with STORE_BACKEND=memory for local development, and used by
       the test suite in place of Firestore.

Ordering rules mirror Firestore so pagination behaves the same:
    - documents missing the ordered field are left out of ordered queries
    - values of different types order by type: null < bool < number < string < other
    - ties break on document id, in the query's direction
    - start_after() resumes strictly after the anchor's (value, id) position
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from storefront.services.store_base import (
    DESCENDING,
    Document,
    DocumentStore,
    StoreQuery,
    validate_document_id,
)

logger = logging.getLogger(__name__)

Collections = Dict[str, Dict[str, Dict[str, Any]]]


def _sort_value(value: Any) -> Tuple[int, Any]:
    """Rank a field value so mixed types compare without TypeError."""
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (1, value)
    if isinstance(value, (int, float)):
        return (2, value)
    if isinstance(value, str):
        return (3, value)
    return (4, str(value))


class MemoryStore(DocumentStore):
    """
    Dict-backed store: {collection: {doc_id: fields}}.

    Insertion order is the "natural" order returned by stream().
    """

    name = "memory"

    def __init__(self, collections: Optional[Collections] = None):
        self._collections: Collections = {
            name: dict(documents) for name, documents in (collections or {}).items()
        }

    @classmethod
    def from_file(cls, path: str) -> "MemoryStore":
        """Load collections from a JSON seed file."""
        with Path(path).open(encoding="utf-8") as fh:
            collections = json.load(fh)
        if not isinstance(collections, dict):
            raise ValueError(f"Seed file {path} must contain a JSON object of collections")
        store = cls(collections)
        logger.info(
            "Loaded seed data from %s: %s",
            path,
            {name: len(docs) for name, docs in store._collections.items()},
        )
        return store

    def add(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """Insert or replace a document."""
        self._collections.setdefault(collection, {})[validate_document_id(doc_id)] = dict(data)

    def _documents(self, collection: str) -> List[Document]:
        return [
            Document(id=doc_id, data=dict(data))
            for doc_id, data in self._collections.get(collection, {}).items()
        ]

    async def stream(self, collection: str) -> List[Document]:
        return self._documents(collection)

    async def run_query(self, query: StoreQuery) -> List[Document]:
        documents = self._documents(query.collection)

        for field_name, value in query.filters:
            documents = [
                doc for doc in documents
                if field_name in doc.data
                and _sort_value(doc.data[field_name]) == _sort_value(value)
            ]

        if query.document_id is not None:
            validate_document_id(query.document_id)
            documents = [doc for doc in documents if doc.id == query.document_id]

        if query.order_by:
            reverse = query.direction == DESCENDING
            documents = [doc for doc in documents if query.order_by in doc.data]
            documents.sort(key=lambda doc: self._position(doc, query.order_by), reverse=reverse)

            if query.start_after is not None:
                anchor = self._position(query.start_after, query.order_by)
                if reverse:
                    documents = [
                        doc for doc in documents
                        if self._position(doc, query.order_by) < anchor
                    ]
                else:
                    documents = [
                        doc for doc in documents
                        if self._position(doc, query.order_by) > anchor
                    ]

        if query.limit is not None:
            documents = documents[: query.limit]

        return documents

    @staticmethod
    def _position(doc: Document, order_by: str) -> Tuple[Tuple[int, Any], str]:
        return (_sort_value(doc.data.get(order_by)), doc.id)

    async def health_check(self) -> bool:
        return True
