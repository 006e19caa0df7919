"""Request Authentication - partner lookup, privileged bypass, freshness, integrity.

Invariants:
    - All functions are PURE: the clock reading is passed in, never read here
    - check_* functions return Rejected on violation, None on success
    - authenticate_request runs the checks in order, first rejection wins
    - Privileged partners skip freshness AND signature, never the partner lookup
    - Unparseable timestamps are rejected as EXPIRED, not as invalid signature

Design Decisions:
    - Privileged detection is a case-insensitive substring match on the partner key,
      kept as-is for compatibility with existing partner integrations
"""

from datetime import datetime, timedelta

from transaction_api.core.domain_types import RejectionReason
from transaction_api.core.outcomes import Authenticated, Rejected
from transaction_api.core.partner_registry import PartnerRegistry
from transaction_api.core.signature import compute_signature, parse_timestamp
from transaction_api.core.transaction import TransactionRequest


FRESHNESS_WINDOW = timedelta(minutes=5)
PRIVILEGED_MARKER = "admin"

INVALID_PARTNER_MESSAGE = "Access Denied: Invalid PartnerKey or PartnerPassword"
INVALID_SIGNATURE_MESSAGE = "Access Denied: Invalid Signature"
EXPIRED_REASON_MESSAGE = "Expired."


def check_partner(
    request: TransactionRequest, registry: PartnerRegistry,
) -> Rejected | None:
    """Step 1: partner key must be registered and its secret match exactly."""
    if request.partner_key is None:
        return Rejected(RejectionReason.INVALID_PARTNER, INVALID_PARTNER_MESSAGE)
    secret = registry.lookup(request.partner_key)
    if secret is None or secret != request.partner_password:
        return Rejected(RejectionReason.INVALID_PARTNER, INVALID_PARTNER_MESSAGE)
    return None


def is_privileged_partner(
    partner_key: str | None, marker: str = PRIVILEGED_MARKER,
) -> bool:
    """Step 2: True when the marker appears anywhere in the key, any case."""
    if not partner_key or not marker:
        return False
    return marker.lower() in partner_key.lower()


def check_freshness(
    timestamp: str | None, now: datetime,
    window: timedelta = FRESHNESS_WINDOW,
) -> Rejected | None:
    """Step 3: |now - timestamp| <= window, inclusive on both sides."""
    parsed = parse_timestamp(timestamp)
    if parsed is None or abs(now - parsed) > window:
        return Rejected(RejectionReason.EXPIRED, EXPIRED_REASON_MESSAGE)
    return None


def check_signature(request: TransactionRequest) -> Rejected | None:
    """Step 4: submitted signature must equal the recomputed digest."""
    parsed = parse_timestamp(request.timestamp)
    if parsed is None:
        return Rejected(RejectionReason.INVALID_SIGNATURE, INVALID_SIGNATURE_MESSAGE)
    expected = compute_signature(
        parsed,
        request.partner_key,
        request.partner_ref_no,
        request.total_amount,
        request.partner_password,
    )
    if request.sig != expected:
        return Rejected(RejectionReason.INVALID_SIGNATURE, INVALID_SIGNATURE_MESSAGE)
    return None


def authenticate_request(
    request: TransactionRequest,
    registry: PartnerRegistry,
    now: datetime,
    window: timedelta = FRESHNESS_WINDOW,
    privileged_marker: str = PRIVILEGED_MARKER,
) -> Authenticated | Rejected:
    """Chain all authentication checks. Returns first rejection or Authenticated."""
    rejected = check_partner(request, registry)
    if rejected:
        return rejected

    if is_privileged_partner(request.partner_key, privileged_marker):
        return Authenticated(partner_key=request.partner_key, privileged=True)

    rejected = (
        check_freshness(request.timestamp, now, window)
        or check_signature(request)
    )
    if rejected:
        return rejected
    return Authenticated(partner_key=request.partner_key)
