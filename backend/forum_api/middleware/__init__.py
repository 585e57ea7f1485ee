# Middleware package init
"""
Forum Comments API: Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: assign the correlation ID used by every later log line
    2. Logging: one access log line per request, tagged with that ID
    3. CORS: FastAPI's CORSMiddleware (preflight + allow-origin headers)
"""
