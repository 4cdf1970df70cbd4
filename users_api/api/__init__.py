"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every JSON endpoint returns a {success, data|message} envelope

Design Decisions:
    - Thin routes delegate to the repository
"""
