"""API Layer - FastAPI routes, dependency wiring and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes run the pipeline only through services/ (TransactionService.submit)
    - From core/, routes import outcome types only, to map them to HTTP status
"""
