# Middleware package init
"""
Blog Backend - Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so the access log line carries the id
    - Logging captures response status and duration on the way back out
"""
