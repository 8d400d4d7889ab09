# Middleware package init
"""
fontseca.dev Backend — Middleware Package
===========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    The request ID is assigned before the access log runs so each access
    line can be correlated with the application log entries it produced.
"""
