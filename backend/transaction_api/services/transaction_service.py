"""Transaction Service - runs Authenticator -> Validator -> Discount Engine.

Invariants:
    - Stages run in order and short-circuit on the first Rejected
    - The specific rejection reason is logged, never returned to the caller
    - Any unexpected exception raised while authenticating or validating becomes
      an INTERNAL Rejected ("Access Denied!"); the request is never accepted on fault
    - process_transaction faults propagate to the transport's catch-all handler

Design Decisions:
    - Clock injected as a callable: freshness boundaries testable without patching datetime
    - One service instance per process, shared across requests; it holds only the
      immutable registry and settings
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from transaction_api.core.authenticate import (
    FRESHNESS_WINDOW, PRIVILEGED_MARKER, authenticate_request,
)
from transaction_api.core.discount import calculate_discount
from transaction_api.core.domain_types import RejectionReason
from transaction_api.core.outcomes import Accepted, Rejected, ValidationOutcome
from transaction_api.core.partner_registry import PartnerRegistry
from transaction_api.core.transaction import TransactionRequest
from transaction_api.core.validate_request import check_fields, validate_transaction

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An error occurred while processing the request."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionService:
    """Validation-and-scoring pipeline for partner transactions."""

    def __init__(
        self,
        registry: PartnerRegistry,
        clock: Callable[[], datetime] = utc_now,
        freshness_window: timedelta = FRESHNESS_WINDOW,
        privileged_marker: str = PRIVILEGED_MARKER,
    ):
        self._registry = registry
        self._clock = clock
        self._freshness_window = freshness_window
        self._privileged_marker = privileged_marker

    def validate_transaction_request(
        self, request: TransactionRequest,
    ) -> ValidationOutcome:
        """Authenticate then validate. Returns provisional Accepted or Rejected."""
        try:
            auth = authenticate_request(
                request, self._registry, self._clock(),
                window=self._freshness_window,
                privileged_marker=self._privileged_marker,
            )
            if isinstance(auth, Rejected):
                return self._reject(request, auth)
            if auth.privileged:
                logger.info(
                    "Privileged partner: freshness and signature checks skipped",
                    extra={"partner_key": request.partner_key},
                )

            outcome = validate_transaction(request)
            if isinstance(outcome, Rejected):
                if outcome.reason_code is RejectionReason.FIELD_VALIDATION:
                    for violation in check_fields(request):
                        logger.error(violation, extra=self._log_extra(request))
                return self._reject(request, outcome)
            return outcome
        except Exception:
            logger.error(
                "Error thrown in validate_transaction_request",
                exc_info=True, extra=self._log_extra(request),
            )
            return self._reject(
                request, Rejected(RejectionReason.INTERNAL, INTERNAL_ERROR_MESSAGE),
            )

    def process_transaction(self, request: TransactionRequest) -> Accepted:
        """Apply the discount engine to a request that passed validation."""
        result = calculate_discount(request.total_amount)
        return Accepted(
            total_amount=result.total_amount,
            total_discount=result.total_discount,
            final_amount=result.final_amount,
        )

    def submit(self, request: TransactionRequest) -> ValidationOutcome:
        """Full pipeline: validation outcome, then discount on acceptance."""
        outcome = self.validate_transaction_request(request)
        if isinstance(outcome, Rejected):
            return outcome
        return self.process_transaction(request)

    @staticmethod
    def _log_extra(request: TransactionRequest) -> dict:
        return {
            "partner_key": request.partner_key,
            "partner_ref_no": request.partner_ref_no,
        }

    def _reject(self, request: TransactionRequest, rejected: Rejected) -> Rejected:
        logger.error(
            rejected.message,
            extra={**self._log_extra(request), "reason_code": rejected.reason_code.value},
        )
        return rejected
