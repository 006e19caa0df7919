"""Pydantic Schemas - wire contracts for the transaction endpoint.

Invariants:
    - Schemas only bind JSON types; business constraints live in core/
    - Field names on the wire are PascalCase aliases
"""
