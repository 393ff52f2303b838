"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Referential checks (does this type id exist?) live in the service, not here

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
