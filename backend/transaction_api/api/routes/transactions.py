"""Transaction Route - POST /submittrxmessage, the partner submission endpoint.

Invariants:
    - One call to TransactionService.submit per request; no stage is invoked here
    - 200 with Result=1 on success, 400 with Result=0 on any business rejection
    - Unexpected faults propagate to the catch-all handler (500, distinct envelope)
    - Request and response logged; credentials masked by TransactionRequest.__repr__
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from transaction_api.api.dependencies import get_transaction_service
from transaction_api.core.outcomes import Rejected
from transaction_api.schemas.transaction import TransactionRequestIn, TransactionResponse
from transaction_api.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["transactions"])


@router.post("/submittrxmessage", response_model=None)
async def submit_transaction(
    body: TransactionRequestIn,
    service: TransactionService = Depends(get_transaction_service),
) -> JSONResponse:
    """Authenticate, validate and price a partner transaction."""
    request = body.to_domain()
    extra = {"partner_key": request.partner_key, "partner_ref_no": request.partner_ref_no}
    logger.info(f"Request: {request!r}", extra=extra)

    outcome = service.submit(request)
    if isinstance(outcome, Rejected):
        response = TransactionResponse.from_outcome(outcome).to_wire()
        logger.info(
            f"Response[Validation Failed]: {response}",
            extra={**extra, "status_code": status.HTTP_400_BAD_REQUEST},
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=response)

    response = TransactionResponse.from_outcome(outcome).to_wire()
    logger.info(
        f"Response[Success]: {response}",
        extra={**extra, "status_code": status.HTTP_200_OK},
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=response)
