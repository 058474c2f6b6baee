"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return pydantic response models or structured JSON errors

Design Decisions:
    - Thin routes delegate to services; services never see Request objects
"""
