# Middleware package init
"""
Employee API - Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate the correlation ID used by logs and error bodies
    2. Logging: Log method, path, status and duration with that ID
    3. CORS: FastAPI's CORSMiddleware (handles browser preflight requests)
"""
