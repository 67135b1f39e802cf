# Middleware package init
"""
MyGram Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Responses pass back through in reverse, so the logging middleware sees
    the final status code and the request ID header is set last.

Authentication is not middleware: protected routes resolve the session with
the `get_current_session` dependency, which keeps /users/register,
/users/login and /health public.
"""
