"""Root conftest - shared fixtures: fixed clock, partner registry, signed requests."""

import os
from datetime import datetime, timezone

import pytest

# Ensure tests never pick up a developer's partner table or log format
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.pop("PARTNERS", None)

from transaction_api.config import DEFAULT_PARTNERS  # noqa: E402
from transaction_api.core.partner_registry import InMemoryPartnerRegistry  # noqa: E402
from transaction_api.core.signature import compute_signature, format_timestamp  # noqa: E402
from transaction_api.core.transaction import ItemLine, TransactionRequest  # noqa: E402


FIXED_NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def registry() -> InMemoryPartnerRegistry:
    return InMemoryPartnerRegistry(DEFAULT_PARTNERS)


@pytest.fixture
def make_request():
    """Factory for TransactionRequest, signed correctly unless sig is given.

    items: list of (qty, unit_price) pairs, or None for no item lines.
    """
    def _make(
        partner_key: str = "FG-00001",
        partner_password: str = "FAKEPASSWORD1234",
        partner_ref_no: str = "FG-REF-0001",
        total_amount: int = 1000,
        items: list[tuple[int, int]] | None = None,
        signed_at: datetime = FIXED_NOW,
        timestamp: str | None = None,
        sig: str | None = None,
    ) -> TransactionRequest:
        if timestamp is None:
            timestamp = format_timestamp(signed_at)
        if sig is None:
            sig = compute_signature(
                signed_at, partner_key, partner_ref_no, total_amount, partner_password,
            )
        lines = None
        if items is not None:
            lines = tuple(
                ItemLine(
                    partner_item_ref=f"ITEM-{i:03d}", name=f"Item {i}",
                    qty=qty, unit_price=unit_price,
                )
                for i, (qty, unit_price) in enumerate(items, start=1)
            )
        return TransactionRequest(
            partner_key=partner_key,
            partner_ref_no=partner_ref_no,
            partner_password=partner_password,
            total_amount=total_amount,
            items=lines,
            timestamp=timestamp,
            sig=sig,
        )
    return _make


@pytest.fixture
def make_payload(make_request):
    """Factory for the JSON body of POST /submittrxmessage."""
    def _make(**kwargs) -> dict:
        request = make_request(**kwargs)
        payload = {
            "PartnerKey": request.partner_key,
            "PartnerRefNo": request.partner_ref_no,
            "PartnerPassword": request.partner_password,
            "TotalAmount": request.total_amount,
            "Timestamp": request.timestamp,
            "Sig": request.sig,
        }
        if request.items is not None:
            payload["Items"] = [
                {
                    "PartnerItemRef": item.partner_item_ref,
                    "Name": item.name,
                    "Qty": item.qty,
                    "UnitPrice": item.unit_price,
                }
                for item in request.items
            ]
        return payload
    return _make
