# Services package init
"""
Product Inventory API: Services Layer
=====================================

What:  Operation logic between the router (events) and the store (persistence).

Service Inventory:
    - ProductService: the six operations, each one store call
    - collect_all:    exhaustive paginated scan used by get-all
"""
