"""Request Validation - field constraints then item reconciliation.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Field violations are aggregated ("; "-joined); item checks stop at the first failure
    - Item reconciliation runs only after every field constraint passes
    - Item reconciliation requires 1 < qty <= 5, stricter than the 1..5 field range
    - Accepted from this stage is provisional: discount 0, final == total

Design Decisions:
    - The qty == 1 rejection in reconciliation is kept for compatibility with the
      existing partner contract, even though the field-level range admits it
"""

from transaction_api.core.domain_types import RejectionReason
from transaction_api.core.outcomes import Accepted, Rejected, ValidationOutcome
from transaction_api.core.transaction import ItemLine, TransactionRequest


MAX_PARTNER_FIELD_LENGTH = 50
MAX_ITEM_REF_LENGTH = 50
MAX_ITEM_NAME_LENGTH = 100
MIN_QTY = 1
MAX_QTY = 5

QTY_MESSAGE = "Quantity must be between 1 and 5."
UNIT_PRICE_MESSAGE = "UnitPrice must be positive."
ITEM_TOTAL_MESSAGE = "Invalid Total Amount in itemDetails."


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_text(
    value: str | None, field: str, max_length: int,
) -> list[str]:
    """Required + max length, with the wire field name in the message."""
    if not isinstance(value, str) or not value.strip():
        return [f"{field} is required."]
    if len(value) > max_length:
        return [f"{field} cannot exceed {max_length} characters."]
    return []


def _check_present(value: str | None, message: str) -> list[str]:
    if not isinstance(value, str) or not value.strip():
        return [message]
    return []


def check_item_fields(item: ItemLine) -> list[str]:
    """Field-level constraints of a single item line."""
    violations = _check_text(item.partner_item_ref, "PartnerItemRef", MAX_ITEM_REF_LENGTH)
    violations += _check_text(item.name, "Name", MAX_ITEM_NAME_LENGTH)
    if not _is_int(item.qty) or not MIN_QTY <= item.qty <= MAX_QTY:
        violations.append(QTY_MESSAGE)
    if not _is_int(item.unit_price) or item.unit_price < 1:
        violations.append(UNIT_PRICE_MESSAGE)
    return violations


def check_fields(request: TransactionRequest) -> list[str]:
    """All field-level violations of a request, in wire field order."""
    violations: list[str] = []
    violations += _check_text(request.partner_key, "PartnerKey", MAX_PARTNER_FIELD_LENGTH)
    violations += _check_text(request.partner_ref_no, "PartnerRefNo", MAX_PARTNER_FIELD_LENGTH)
    violations += _check_text(
        request.partner_password, "PartnerPassword", MAX_PARTNER_FIELD_LENGTH,
    )
    if request.total_amount is None:
        violations.append("TotalAmount is required.")
    elif not _is_int(request.total_amount) or request.total_amount < 1:
        violations.append("TotalAmount must be positive.")
    violations += _check_present(request.timestamp, "Timestamp is required.")
    violations += _check_present(request.sig, "Signature is required.")
    for item in request.items or ():
        violations += check_item_fields(item)
    return violations


def check_items(request: TransactionRequest) -> Rejected | None:
    """Item reconciliation: per-line bounds, then sum(qty * unit_price) == total."""
    if request.items is None:
        return None
    for item in request.items:
        if item.qty <= 1 or item.qty > MAX_QTY:
            return Rejected(RejectionReason.ITEM_VALIDATION, QTY_MESSAGE)
        if item.unit_price <= 0:
            return Rejected(RejectionReason.ITEM_VALIDATION, UNIT_PRICE_MESSAGE)

    items_total = sum(item.qty * item.unit_price for item in request.items)
    if items_total != request.total_amount:
        return Rejected(RejectionReason.ITEM_TOTAL_MISMATCH, ITEM_TOTAL_MESSAGE)
    return None


def validate_transaction(request: TransactionRequest) -> ValidationOutcome:
    """Run field validation then item reconciliation. First failing phase wins."""
    violations = check_fields(request)
    if violations:
        return Rejected(RejectionReason.FIELD_VALIDATION, "; ".join(violations))

    rejected = check_items(request)
    if rejected:
        return rejected

    return Accepted(
        total_amount=request.total_amount,
        total_discount=0,
        final_amount=request.total_amount,
    )
