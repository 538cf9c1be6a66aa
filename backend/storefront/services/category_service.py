"""
Storefront API - Category Listing Service
=========================================

What:  Returns every document of the categories collection as a plain record.
Who:   Called by the categories route handler.
"""

import logging
from typing import Any, Dict, List

from storefront.config import settings
from storefront.exceptions import StoreError
from storefront.services.store_base import DocumentStore

logger = logging.getLogger(__name__)


class CategoryService:
    """Stateless category listing."""

    async def list_categories(self, store: DocumentStore) -> List[Dict[str, Any]]:
        """
        Fetch all categories in the store's natural order.

        Raises:
            StoreError: The store failed; no partial list is returned (→ 500)
        """
        try:
            documents = await store.stream(settings.categories_collection)
            return [doc.to_record() for doc in documents]
        except Exception as e:
            logger.error("Error fetching categories: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch categories",
                context={
                    "collection": settings.categories_collection,
                    "error_type": type(e).__name__,
                },
            )


category_service = CategoryService()
