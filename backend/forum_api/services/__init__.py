# Services package init
"""
Forum Comments API: Services Layer
====================================

What:  Logic between routes (HTTP) and the document store.

Service Inventory:
    - CommentService: list/get/create/update/delete, one store call each
"""
