"""Domain Types - enums and constants shared by every stage.

Invariants:
    - Reason codes and result codes encoded as Enums, no raw string matching
    - Caller-visible messages live here as constants, one source of truth

Design Decisions:
    - str/int Enums: serialize to JSON without custom encoders
"""

from enum import Enum, IntEnum


# ─── Enums ───────────────────────────────────────────────────────

class ResultCode(IntEnum):
    """Wire-level `Result` field."""
    REJECTED = 0
    ACCEPTED = 1


class RejectionReason(str, Enum):
    """Why a request was rejected. Logged internally, never returned."""
    INVALID_PARTNER = "invalid_partner"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    FIELD_VALIDATION = "field_validation"
    ITEM_VALIDATION = "item_validation"
    ITEM_TOTAL_MISMATCH = "item_total_mismatch"
    MALFORMED_REQUEST = "malformed_request"
    INTERNAL = "internal"


# ─── Caller-visible messages ─────────────────────────────────────

ACCESS_DENIED_MESSAGE = "Access Denied!"
EXPIRED_MESSAGE = "Expired."
