# Middleware package init
"""
VerseNotes Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: records method, path, status and duration with that ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
"""
