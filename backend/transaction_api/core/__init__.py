"""Core Layer - pure validation and pricing logic, no IO, no async, no framework.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - Every stage is a pure function of its inputs plus the immutable registry
"""
