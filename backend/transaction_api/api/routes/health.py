"""Health Check - liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
    - Reports the number of registered partners, never their keys
"""

import logging
from fastapi import APIRouter, status

from transaction_api.api.dependencies import get_partner_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "partner-transaction-api",
        "version": "1.0.0",
        "partners": len(get_partner_registry()),
    }
