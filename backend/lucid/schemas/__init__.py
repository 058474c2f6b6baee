"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain types from core/ used for enum fields; stored records come from core/records.py

Design Decisions:
    - Separate from records: schemas are API contracts, records are what the store holds
"""
