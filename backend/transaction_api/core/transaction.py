"""Transaction Request - immutable domain view of an inbound partner request.

Invariants:
    - Frozen: produced once by the transport boundary, consumed only by core stages
    - Every field may be None; the validator owns presence/range checks
    - items is a tuple (ordered, immutable) or None when the request had no item lines
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemLine:
    """One item line of a transaction."""
    partner_item_ref: str | None = None
    name: str | None = None
    qty: int | None = None
    unit_price: int | None = None


@dataclass(frozen=True)
class TransactionRequest:
    """Signed transaction submitted by a partner."""
    partner_key: str | None = None
    partner_ref_no: str | None = None
    partner_password: str | None = None
    total_amount: int | None = None
    items: tuple[ItemLine, ...] | None = None
    timestamp: str | None = None
    sig: str | None = None

    def __repr__(self) -> str:
        # Credentials are masked so the request can be logged as-is.
        return (
            f"TransactionRequest(partner_key={self.partner_key!r}, "
            f"partner_ref_no={self.partner_ref_no!r}, "
            f"partner_password='***', total_amount={self.total_amount!r}, "
            f"items={len(self.items) if self.items is not None else None}, "
            f"timestamp={self.timestamp!r}, sig='***')"
        )
