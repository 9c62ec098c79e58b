"""
Exercise Tracker — Middleware Package
=======================================

Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route

    - Request ID wraps everything, so even a 429 carries X-Request-ID
    - Rate Limit rejects before any route work is done
    - Request ID is set before Logging so access lines carry it
    - CORS answers preflight OPTIONS requests for browser clients
"""
