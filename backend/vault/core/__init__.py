"""Core Layer — pure exchange rules, domain types, errors and boundary protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (coordinator + SQL collaborators)
"""
