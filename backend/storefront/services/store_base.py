"""
Storefront API - Abstract Document Store Interface
==================================================

What:  The narrow set of read primitives the listing services rely on.
How:   Concrete stores (FirestoreStore, MemoryStore) implement DocumentStore.
       Services build StoreQuery values and hand them to `run_query()`.
Who:   Called by CategoryService and ProductService.

Capability set:
    - full collection scan
    - equality filters on fields
    - lookup by document id
    - ordering on one field, ascending or descending
    - limit
    - "start strictly after this document" pagination

Any backend offering those primitives can be substituted.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

ASCENDING = "asc"
DESCENDING = "desc"

# Firestore document id limit, in UTF-8 bytes
MAX_DOCUMENT_ID_BYTES = 1500


def validate_document_id(doc_id: str) -> str:
    """
    Reject values that cannot name a document directly under a collection.

    Rules: non-empty, no "/", not "." or "..", not of the reserved form
    "__...__", at most 1500 bytes.

    Raises:
        ValueError: with the reason, for the caller to translate.
    """
    if not doc_id:
        raise ValueError("document id is empty")
    if "/" in doc_id:
        raise ValueError("document id contains '/'")
    if doc_id in {".", ".."}:
        raise ValueError("document id cannot be '.' or '..'")
    if len(doc_id) > 4 and doc_id.startswith("__") and doc_id.endswith("__"):
        raise ValueError("document id uses the reserved __name__ form")
    if len(doc_id.encode("utf-8")) > MAX_DOCUMENT_ID_BYTES:
        raise ValueError("document id is longer than 1500 bytes")
    return doc_id


@dataclass
class Document:
    """
    A document returned by a store.

    `snapshot` holds the backend's native handle (a Firestore
    DocumentSnapshot) so the same store can resume a query after it.
    It is excluded from equality and repr.
    """

    id: str
    data: Dict[str, Any]
    snapshot: Any = field(default=None, repr=False, compare=False)

    def to_record(self) -> Dict[str, Any]:
        """Plain record: the document id followed by the stored fields."""
        return {"id": self.id, **self.data}


@dataclass
class StoreQuery:
    """
    A single read against one collection.

    Attributes:
        collection:  Collection name
        filters:     (field, value) equality predicates, all must hold
        document_id: Restrict to the document with this id
        order_by:    Field to order on; documents lacking it are excluded
        direction:   ASCENDING or DESCENDING
        limit:       Maximum number of documents returned
        start_after: Anchor document; results begin strictly after it
    """

    collection: str
    filters: List[Tuple[str, Any]] = field(default_factory=list)
    document_id: Optional[str] = None
    order_by: Optional[str] = None
    direction: str = ASCENDING
    limit: Optional[int] = None
    start_after: Optional[Document] = None


class DocumentStore(ABC):
    """
    Abstract interface for the backing document database.

    Contract:
        - Methods are read-only
        - Backend exceptions propagate unchanged; callers translate them
        - Returned Document.data contains JSON-serializable values only
    """

    #: Short backend name reported by the health endpoint
    name: str = "unknown"

    @abstractmethod
    async def stream(self, collection: str) -> List[Document]:
        """Return every document in `collection`, in the store's natural order."""
        ...

    @abstractmethod
    async def run_query(self, query: StoreQuery) -> List[Document]:
        """
        Execute `query` and return the matching documents.

        Ordering: when `order_by` is set, ties are broken by document id in
        the same direction, which gives `start_after` a total order to
        resume from.

        Raises:
            ValueError: `document_id` is not a legal document id.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight reachability check. Returns False instead of raising."""
        ...

    async def close(self) -> None:
        """Release client resources. Stores without any keep the default."""
        return None
