# Middleware package init
"""
Cheese Catalog Backend — Middleware Package
=============================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first, so the access log line and any error log share an id
    - Logging measures everything downstream, handler and serialization included
    - CORS is Starlette's CORSMiddleware, configured from settings.cors_origins
"""
