# Middleware package init
"""
Poker Study Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [Rate Limit] → [GZip] → [CORS] → Route

    - Request ID must be set before the access log line is written, so the
      line and every log entry of the handler share one ID.
    - Rate limit sits inside both, so rejected requests are logged and their
      429 body carries the request ID.
"""
