"""
Storefront API - Application Package
====================================

What: Read-only catalog API serving category and product listings from a
      hosted document store (Cloud Firestore).
Who:  Imported by uvicorn (`uvicorn storefront.main:app`), pytest, and the
      package's own modules (`from storefront.config import settings`).

Architecture Note:
    The service is organised in thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← query params, status codes
    ├─────────────────────────────────────┤
    │      Services (Listing Pipelines)   │  ← filter, sort, paginate, search
    ├─────────────────────────────────────┤
    │     Store + Matcher Interfaces      │  ← Firestore / in-memory, rapidfuzz
    └─────────────────────────────────────┘

    Routes never talk to the store directly; services receive the store as
    an argument so they can be exercised against the in-memory store.
"""

__version__ = "1.0.0"
