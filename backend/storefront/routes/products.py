"""
Storefront API - Products Route Handler
=======================================

What:  GET /api/products, the paginated, filterable, searchable product list.
How:   Reads the query string, delegates to ProductService, returns JSON.
Who:   Called by the storefront's product grid and its "load more" button.

Example client usage:
    Page 1: GET /api/products?limit=12&category=electronics&sort=desc
    Page 2: GET /api/products?limit=12&category=electronics&sort=desc&page=2&lastVisibleId=<id>
    (lastVisibleId and page come from lastVisibleId / nextPage of the previous response)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.config import settings
from storefront.database import get_store
from storefront.schemas.catalog import ErrorResponse, ProductPage
from storefront.services.product_service import product_service
from storefront.services.store_base import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


@router.get(
    "/products",
    response_model=ProductPage,
    responses={
        200: {"description": "One page of products", "model": ProductPage},
        400: {"description": "Invalid cursor or query parameters", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List products ordered by price",
    description=(
        "Returns products ordered by price with cursor pagination, an optional exact "
        "category filter, and optional fuzzy title search. Search only narrows the "
        "page that was fetched."
    ),
)
async def list_products(
    page: int = Query(default=1, description="Informational page counter, echoed as nextPage"),
    limit: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Maximum products per page",
    ),
    last_visible_id: Optional[str] = Query(
        default=None,
        alias="lastVisibleId",
        description="Cursor: id of the last product of the previous page",
    ),
    search: Optional[str] = Query(default=None, description="Fuzzy match against product titles"),
    category: Optional[str] = Query(default=None, description="Exact category filter"),
    sort: str = Query(default="asc", description="Price order: 'asc' or 'desc' (anything else is asc)"),
    store: DocumentStore = Depends(get_store),
) -> ProductPage:
    return await product_service.list_products(
        store=store,
        page=page,
        page_size=limit,
        cursor=last_visible_id,
        search=search,
        category=category,
        sort=sort,
    )
