# Routes package init
"""
Notes API — API Routes Package
================================

Route Inventory:
    - notes.py:   GET/POST /api/notes, GET /api/notes/title/{title},
                  GET/PUT/PATCH/DELETE /api/notes/{id}
    - keyword.py: GET /say?keyword=...   (relay to the remote keyword function)
    - health.py:  GET /health            (service health check)

Routes stay thin: extract parameters, call a service, return its result.
"""
