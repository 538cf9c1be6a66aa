"""
Storefront API - Middleware Package
===================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    The request id is assigned first so the access log line and any error
    body produced further down carry it.
"""
