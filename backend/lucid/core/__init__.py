"""Core Layer — domain records, deck, spreads, prompts, and JSON recovery.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO; the only async code is Protocol signatures
"""
