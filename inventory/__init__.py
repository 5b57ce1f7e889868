"""
Product Inventory API: Package Initializer
==========================================

What: Marks the `inventory` directory as a Python package.
Why:  Enables imports like `from inventory.config import settings`.
Who:  Used by the Lambda runtime, uvicorn, Alembic and pytest.

Architecture Note:
    The service is a thin CRUD facade over a key-value store:

    ┌─────────────────────────────────────┐
    │  Transports (Lambda handler, HTTP)  │  ← event in, envelope out
    ├─────────────────────────────────────┤
    │        Router (routes/router)       │  ← (method, path) → handler
    ├─────────────────────────────────────┤
    │   ProductService + collector        │  ← one store call per request
    ├─────────────────────────────────────┤
    │   ProductStore (DynamoDB | SQL)     │  ← persistence
    └─────────────────────────────────────┘

    The store is constructed from settings and passed down explicitly, so
    any layer can be exercised against a test double.
"""

__version__ = "1.0.0"
