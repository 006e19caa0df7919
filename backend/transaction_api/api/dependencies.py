"""Dependency Wiring - process-wide registry and service for FastAPI Depends.

Invariants:
    - One registry and one service per process (lru_cache), built from Settings
    - Tests replace get_transaction_service via app.dependency_overrides
"""

from datetime import timedelta
from functools import lru_cache

from transaction_api.config import get_settings
from transaction_api.core.partner_registry import InMemoryPartnerRegistry
from transaction_api.services.transaction_service import TransactionService


@lru_cache
def get_partner_registry() -> InMemoryPartnerRegistry:
    return InMemoryPartnerRegistry(get_settings().partners)


@lru_cache
def get_transaction_service() -> TransactionService:
    settings = get_settings()
    return TransactionService(
        get_partner_registry(),
        freshness_window=timedelta(seconds=settings.freshness_window_seconds),
        privileged_marker=settings.privileged_partner_marker,
    )
