# Services package init
"""
Cheese Catalog Backend — Services Layer
=========================================

What:  Business logic between the request handlers and the repositories.

Service Inventory:
    - CheeseService: create/read/update/delete orchestration, imageData decoration
    - ImageService:  reads multipart uploads into memory, builds data URIs
"""
