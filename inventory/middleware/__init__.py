"""
Product Inventory API: Middleware Package
=========================================

What:  Cross-cutting concerns for the HTTP transport.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → proxy route → ProductRouter

    Request ID runs first so the access log line and any error body carry
    the same correlation ID.
"""
