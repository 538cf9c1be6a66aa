"""
Storefront API - Product Listing Service
========================================

What:  The product listing pipeline behind GET /api/products.
How:   Builds a price-ordered StoreQuery (optionally filtered by category),
       resumes after the cursor document, executes it, and optionally narrows
       the fetched page with fuzzy title search.
Who:   Called by the products route handler.

Pipeline:
    ┌──────────┐   ┌───────────────┐   ┌───────────┐   ┌──────────────┐
    │  Build   │──▶│ Resolve cursor│──▶│  Execute  │──▶│ Fuzzy narrow │
    │  query   │   │ (aux lookup)  │   │ main query│   │ (this page)  │
    └──────────┘   └───────────────┘   └───────────┘   └──────────────┘

Pagination:
    The cursor is the id of the last product of the previous page. It is
    resolved with a one-document lookup ordered the same way as the main
    query, and the main query starts strictly after that document. Nothing
    is kept between requests.

Known limitation:
    Search is applied after pagination, so a term only narrows the page that
    was fetched; it never searches the whole collection. The next cursor is
    taken from the unfiltered page so paging through a search keeps moving.
"""

import logging
from typing import Any, Dict, List, Optional

from storefront.config import settings
from storefront.exceptions import InvalidCursorError, StoreError, StorefrontError
from storefront.schemas.catalog import ProductPage
from storefront.services.fuzzy_service import FuzzyMatcher, fuzzy_matcher
from storefront.services.store_base import (
    ASCENDING,
    DESCENDING,
    Document,
    DocumentStore,
    StoreQuery,
    validate_document_id,
)

logger = logging.getLogger(__name__)

SORT_FIELD = "price"
CATEGORY_FIELD = "category"
SEARCH_FIELD = "title"


def normalize_sort(sort: Optional[str]) -> str:
    """'desc' sorts descending; any other value falls back to ascending."""
    return DESCENDING if sort == DESCENDING else ASCENDING


class ProductService:
    """
    Stateless product listing.

    The matcher is injectable so tests can substitute a fake; by default the
    module-level RapidFuzzMatcher is used.
    """

    def __init__(self, matcher: Optional[FuzzyMatcher] = None):
        self.matcher = matcher or fuzzy_matcher

    async def resolve_cursor(
        self, store: DocumentStore, cursor: str, direction: str
    ) -> Document:
        """
        Look up the anchor document named by `cursor`.

        The lookup is ordered by price like the main query, so a document
        without a price (which the main ordering skips) does not resolve.

        Raises:
            InvalidCursorError: id is malformed or no such product exists.
        """
        try:
            validate_document_id(cursor)
        except ValueError as e:
            raise InvalidCursorError(cursor=cursor, context={"reason": str(e)})

        lookup = StoreQuery(
            collection=settings.products_collection,
            document_id=cursor,
            order_by=SORT_FIELD,
            direction=direction,
            limit=1,
        )
        anchors = await store.run_query(lookup)

        if not anchors:
            raise InvalidCursorError(cursor=cursor)
        return anchors[0]

    async def list_products(
        self,
        store: DocumentStore,
        page: int = 1,
        page_size: int = 10,
        cursor: Optional[str] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: str = ASCENDING,
    ) -> ProductPage:
        """
        Fetch one page of products.

        Args:
            store: Backing document store
            page: Informational page counter, echoed back as page + 1
            page_size: Maximum number of products fetched from the store
            cursor: Id of the last product of the previous page
            search: Free text matched approximately against titles
            category: Exact category filter
            sort: "asc" or "desc" by price

        Returns:
            ProductPage with the (possibly narrowed) products, the next cursor
            and the next page number (both None when the page was empty).

        Raises:
            InvalidCursorError: The cursor does not resolve (→ 400)
            StoreError: Anything else went wrong (→ 500)
        """
        direction = normalize_sort(sort)

        try:
            query = StoreQuery(
                collection=settings.products_collection,
                order_by=SORT_FIELD,
                direction=direction,
                limit=page_size,
            )
            if category:
                query.filters.append((CATEGORY_FIELD, category))
            if cursor:
                query.start_after = await self.resolve_cursor(store, cursor, direction)

            documents = await store.run_query(query)
            products: List[Dict[str, Any]] = [doc.to_record() for doc in documents]

            last_visible_id = documents[-1].id if documents else None

            if search and search.strip():
                unfiltered = len(products)
                products = self.matcher.match(
                    products,
                    search.strip(),
                    key=SEARCH_FIELD,
                    threshold=settings.search_threshold,
                )
                logger.debug(
                    "Search %r kept %d of %d products", search, len(products), unfiltered
                )

            return ProductPage(
                products=products,
                last_visible_id=last_visible_id,
                next_page=page + 1 if last_visible_id else None,
            )

        except StorefrontError:
            raise
        except Exception as e:
            logger.error("Error fetching products: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch products",
                context={
                    "cursor": cursor,
                    "category": category,
                    "sort": direction,
                    "error_type": type(e).__name__,
                },
            )


product_service = ProductService()
