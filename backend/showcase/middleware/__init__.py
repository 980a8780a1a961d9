# Middleware package init
"""
Showcase Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Upload Size Limit] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line and error body can carry it
    2. Logging: records method, path, status and duration, including
       requests the size limit rejects
    3. Upload size limit: refuses oversized bodies, declared or streamed,
       before they are buffered
    4. GZip / CORS: applied by Starlette's stock middleware
"""
