"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Conversion to/from core dataclasses via to_domain / from_domain

Design Decisions:
    - Separate from core dataclasses: schemas are API contracts, core types carry the rules
"""
