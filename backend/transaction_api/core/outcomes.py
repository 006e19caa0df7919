"""Stage Outcomes - tagged success/rejection results shared by every stage.

Invariants:
    - All outcome types are frozen: never mutated after creation
    - Rejected carries the internal reason_code + message; the caller-visible
      message is derived from reason_code (Expired. vs Access Denied!)
    - DiscountResult.final_amount == total_amount - total_discount, always

Design Decisions:
    - Return values over exceptions for expected failures: the pipeline short-circuits
      on the first Rejected, keeping error path identical in shape to success path
"""

from dataclasses import dataclass
from typing import ClassVar

from transaction_api.core.domain_types import (
    ACCESS_DENIED_MESSAGE, EXPIRED_MESSAGE, RejectionReason, ResultCode,
)


@dataclass(frozen=True)
class Authenticated:
    """Authenticator success. `privileged` records the freshness/signature bypass."""
    partner_key: str
    privileged: bool = False


@dataclass(frozen=True)
class Accepted:
    """Success outcome carrying amounts forward to the response."""
    total_amount: int
    total_discount: int
    final_amount: int

    result: ClassVar[ResultCode] = ResultCode.ACCEPTED


@dataclass(frozen=True)
class Rejected:
    """Failure outcome. `message` is internal detail, see caller_message."""
    reason_code: RejectionReason
    message: str

    result: ClassVar[ResultCode] = ResultCode.REJECTED

    @property
    def caller_message(self) -> str:
        if self.reason_code is RejectionReason.EXPIRED:
            return EXPIRED_MESSAGE
        return ACCESS_DENIED_MESSAGE


@dataclass(frozen=True)
class DiscountResult:
    """Discount engine output, all non-negative integers."""
    total_amount: int
    total_discount: int

    @property
    def final_amount(self) -> int:
        return self.total_amount - self.total_discount


ValidationOutcome = Accepted | Rejected
