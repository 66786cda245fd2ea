"""
Space Facts API - Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → [Unhandled Error] → Route Handler

    1. Request ID first: every later log line can be correlated
    2. Logging: records status and duration once the response exists
    3. CORS: FastAPI's CORSMiddleware, answers preflight for the single
       configured origin
    4. Unhandled Error: crashes become a 500 JSON body that still passes
       back through CORS and Request ID
"""
