"""
Storefront API - Document Store Lifecycle
=========================================

What:  Creates the process-wide DocumentStore, exposes it as a FastAPI
       dependency, and closes it on shutdown.
How:   STORE_BACKEND selects FirestoreStore or MemoryStore. The store is built
       lazily on the first request so importing the app (tests, tooling)
       never needs credentials.
Who:   Route handlers receive the store via Depends(get_store); tests replace
       it through app.dependency_overrides.

Example usage in a route:
    @router.get("/api/categories")
    async def list_categories(store: DocumentStore = Depends(get_store)):
        return await category_service.list_categories(store)
"""

import logging
from typing import Optional

from storefront.config import settings
from storefront.services.store_base import DocumentStore

logger = logging.getLogger(__name__)

_store: Optional[DocumentStore] = None


def build_store() -> DocumentStore:
    """Instantiate the store selected by STORE_BACKEND."""
    if settings.store_backend == "memory":
        from storefront.services.memory_store import MemoryStore

        if settings.seed_file:
            return MemoryStore.from_file(settings.seed_file)
        logger.warning("STORE_BACKEND=memory without SEED_FILE: serving empty collections")
        return MemoryStore()

    from storefront.services.firestore_store import FirestoreStore

    return FirestoreStore()


async def get_store() -> DocumentStore:
    """
    FastAPI dependency returning the shared store.

    The store (and the Firestore client inside it) is shared by all requests;
    queries hold no per-request state. Declared async so FastAPI runs it on
    the event loop rather than the threadpool, which keeps the lazy build
    single-threaded.
    """
    global _store
    if _store is None:
        _store = build_store()
        logger.info("Document store initialised: %s", _store.name)
    return _store


async def close_store() -> None:
    """Close the shared store during application shutdown."""
    global _store
    if _store is not None:
        await _store.close()
        _store = None
