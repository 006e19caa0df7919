"""Error Hierarchy - typed, categorized exceptions for unexpected failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Expected rejections (bad partner, expired, invalid fields) are NOT exceptions;
      they are Rejected outcomes (see core/outcomes.py)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TransactionAPIError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class TransactionAPIError(Exception):
    """Base exception for all Transaction API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error envelope.

        Only code/category/severity/timestamp are exposed; the message and
        context stay in the logs.
        """
        return {
            "error": {
                "code": self.code,
                "message": "An unexpected error occurred",
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Configuration Errors ───────────────────────────────────────

class PartnerRegistryError(TransactionAPIError):
    """Partner registry configuration is unusable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid partner registry: {message}",
            "PARTNER_REGISTRY_INVALID", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Internal Errors ────────────────────────────────────────────

class DiscountComputationError(TransactionAPIError):
    """Discount engine invoked with an amount the validator should have rejected."""
    def __init__(self, total_amount: object, context: ErrorContext | None = None):
        super().__init__(
            f"Discount requires a positive integer total, got {total_amount!r}",
            "DISCOUNT_PRECONDITION_VIOLATED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.total_amount = total_amount
