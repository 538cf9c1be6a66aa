"""
Storefront API - Categories Route Handler
=========================================

What:  GET /api/categories, every category record in the store.
How:   Delegates to CategoryService and adds a short public cache lifetime;
       categories change far less often than products.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response

from storefront.config import settings
from storefront.database import get_store
from storefront.schemas.catalog import ErrorResponse
from storefront.services.category_service import category_service
from storefront.services.store_base import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Categories"])


@router.get(
    "/categories",
    response_model=List[Dict[str, Any]],
    responses={
        200: {"description": "All categories as {id, ...fields}"},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List all categories",
)
async def list_categories(
    response: Response,
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    categories = await category_service.list_categories(store)

    if settings.categories_cache_seconds:
        response.headers["Cache-Control"] = f"public, max-age={settings.categories_cache_seconds}"
    else:
        response.headers["Cache-Control"] = "no-cache"

    return categories
