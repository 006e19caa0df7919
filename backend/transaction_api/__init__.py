"""Partner Transaction API Package.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
