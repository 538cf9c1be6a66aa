"""
Storefront API - Routes Package
===============================

Route Inventory:
    - categories.py:  GET /api/categories   (all categories)
    - products.py:    GET /api/products     (paginated product listing)
    - health.py:      GET /health           (store reachability)

Routes stay thin: they read the query string, call a service with the
store from Depends(get_store), and return its result.
"""
