"""API Layer — FastAPI routes, the authorization guard, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (except the liveness text)

Design Decisions:
    - Thin routes delegate to services
"""
