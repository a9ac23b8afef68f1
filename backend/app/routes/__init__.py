# Routes package init
"""
Blog Backend - Routes Package
===============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - categories.py:  /api/categories, /api/categories/{id}
    - posts.py:       /api/posts, /api/posts/{id}
    - pages.py:       /  (post list page), /posts/{id}  (post detail page)
    - health.py:      GET /health

Routes are thin: extract the id and body, call a service, choose the success
status. Error statuses come from the exceptions the services raise.
"""
