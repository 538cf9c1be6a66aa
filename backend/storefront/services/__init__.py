"""
Storefront API - Services Layer
===============================

Listing logic sitting between routes (HTTP) and the document store.

Service Inventory:
    - DocumentStore (abstract): read primitives of the backing database
    - FirestoreStore: Cloud Firestore implementation
    - MemoryStore: in-process implementation (local development, tests)
    - FuzzyMatcher (abstract) / RapidFuzzMatcher: approximate title matching
    - CategoryService: category listing
    - ProductService: filter → sort → paginate → search pipeline

Services take the store as an argument on every call and keep no
per-request state, so one instance serves all requests.
"""
