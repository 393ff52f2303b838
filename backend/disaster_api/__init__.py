"""Disaster API - FastAPI service for user-owned disaster locations.

Invariants:
    - Layered: api -> services -> core/models; core never imports outward
    - Every request handled independently (no in-process shared state)

Design Decisions:
    - FastAPI + async SQLAlchemy (ADR: one async stack from route to driver)
"""
