"""
Storefront API - Pydantic Response Schemas
==========================================

What:  Pydantic models defining the JSON returned by the API.
How:   FastAPI serializes route return values through these models (by alias,
       so `last_visible_id` goes out as `lastVisibleId`) and documents them in
       the OpenAPI schema.

Products and categories themselves stay untyped dicts: the store holds
whatever fields it holds and they are passed through unchanged.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ProductPage(BaseModel):
    """
    One page of the product listing.

    Cursor semantics:
        last_visible_id is the id of the last product the store returned for
        this page, before any search narrowing. Send it back as
        `lastVisibleId` to get the next page. null means the page was empty.
    """

    products: List[Dict[str, Any]] = Field(description="Products on this page, after search narrowing")
    last_visible_id: Optional[str] = Field(
        default=None,
        alias="lastVisibleId",
        description="Cursor for the next page (id of the last fetched product)",
    )
    next_page: Optional[int] = Field(
        default=None,
        alias="nextPage",
        description="page + 1 when a next cursor exists, otherwise null",
    )

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "Invalid lastVisibleId", "request_id": "a1b2c3d4"}
    """

    error: str = Field(description="Human-readable error description")
    details: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Per-parameter problems for invalid query strings"
    )
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Store connectivity: connected, disconnected")
    backend: str = Field(description="Configured store backend: firestore, memory")
    uptime_seconds: float = Field(description="Seconds since service started")
