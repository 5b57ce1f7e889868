"""
Product Inventory API: Routing Package
======================================

    router.py     ProductRouter: route table and event dispatch
    responses.py  build_response: status + body → proxy envelope
    http.py       FastAPI catch-all that feeds HTTP requests to ProductRouter
"""
