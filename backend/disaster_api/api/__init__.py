"""API Layer - FastAPI routes, caller identity and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the uniform {status, message, data} envelope

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
