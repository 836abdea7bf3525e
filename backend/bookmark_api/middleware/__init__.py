# Middleware package init
"""
Bookmarks API — Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Router

    1. Request ID first, so every later log line can carry it
    2. Access log measures the full handling time, auth rejections included

The bearer-token check is NOT middleware: it is a router dependency
(auth.py), so /health and the OpenAPI docs stay reachable without a token.
"""
