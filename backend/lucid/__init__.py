"""Lucid Tarot — single-user tarot reading backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
