# Middleware package init
"""
Notes API — Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID
"""
