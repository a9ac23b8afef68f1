# Services package init
"""
Blog Backend - Services Layer
===============================

What:  Business logic between routes (HTTP) and the store (persistence).
How:   Services take a BlogStore, run presence checks, call one store
       operation, and turn its StoreResult into a schema or an exception.
       They are injected into routes via FastAPI's dependency injection
       (see app.dependencies).

Service Inventory:
    - BlogStore:        Data-access client; typed CRUD returning StoreResult
    - results:          StoreOutcome / StoreResult and the outcome table (unwrap)
    - CategoryService:  Category CRUD rules
    - PostService:      Post CRUD rules, body coercion
"""
