# Middleware package init
"""
StackIt Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Rate Limit] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies, 429s included
    2. Logging: one access line per request, tagged with the request ID
    3. Rate Limit: abusive clients are rejected before any DB work, with a
       tighter bucket for login/register submissions (credential guessing)
    4. CORS: FastAPI's CORSMiddleware (handles preflight)

    Responses travel back through the chain in reverse, so the request ID
    header and the logged status/duration are both available.
"""
