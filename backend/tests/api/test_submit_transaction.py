"""POST /submittrxmessage - end-to-end through the FastAPI app.

Invariants:
    - 200 + {Result:1, TotalAmount, TotalDiscount, FinalAmount} on success
    - 400 + {Result:0, ResultMessage} on any rejection, no amounts
    - Unbindable bodies get the same uniform denial
    - Unexpected faults -> 500 with an error envelope, no Result field
"""

from datetime import timedelta

from transaction_api.core.domain_types import RejectionReason
from transaction_api.core.errors import DiscountComputationError
from transaction_api.core.outcomes import Accepted, Rejected


DENIED = {"Result": 0, "ResultMessage": "Access Denied!"}


async def test_signed_request_is_priced(client, make_payload):
    res = await client.post("/submittrxmessage", json=make_payload(total_amount=1000))
    assert res.status_code == 200
    assert res.json() == {
        "Result": 1, "TotalAmount": 1000, "TotalDiscount": 100, "FinalAmount": 900,
    }


async def test_request_with_items_is_priced(client, make_payload):
    payload = make_payload(items=[(5, 181)], total_amount=905)
    res = await client.post("/submittrxmessage", json=payload)
    assert res.status_code == 200
    assert res.json()["TotalDiscount"] == 181
    assert res.json()["FinalAmount"] == 724
    assert "ResultMessage" not in res.json()


async def test_wrong_password_denied(client, make_payload):
    res = await client.post(
        "/submittrxmessage", json=make_payload(partner_password="guess"),
    )
    assert res.status_code == 400
    assert res.json() == DENIED


async def test_unknown_partner_denied(client, make_payload):
    res = await client.post("/submittrxmessage", json=make_payload(partner_key="FG-77777"))
    assert res.json() == DENIED


async def test_expired_request(client, make_payload, now):
    payload = make_payload(signed_at=now + timedelta(minutes=5, seconds=1))
    res = await client.post("/submittrxmessage", json=payload)
    assert res.status_code == 400
    assert res.json() == {"Result": 0, "ResultMessage": "Expired."}


async def test_forged_signature_denied(client, make_payload):
    res = await client.post("/submittrxmessage", json=make_payload(sig="forged"))
    assert res.json() == DENIED


async def test_admin_bypasses_timestamp_and_signature(client, make_payload, now):
    payload = make_payload(
        partner_key="Admin", partner_password="Admin",
        signed_at=now - timedelta(days=30), sig="anything",
    )
    res = await client.post("/submittrxmessage", json=payload)
    assert res.status_code == 200
    assert res.json()["Result"] == 1


async def test_item_qty_one_denied(client, make_payload):
    payload = make_payload(items=[(1, 1000)], total_amount=1000)
    res = await client.post("/submittrxmessage", json=payload)
    assert res.status_code == 400
    assert res.json() == DENIED


async def test_item_total_mismatch_denied(client, make_payload):
    payload = make_payload(items=[(2, 500)], total_amount=1001)
    res = await client.post("/submittrxmessage", json=payload)
    assert res.json() == DENIED


async def test_missing_fields_denied(client, make_payload):
    payload = make_payload()
    del payload["PartnerRefNo"]
    res = await client.post("/submittrxmessage", json=payload)
    assert res.status_code == 400
    assert res.json() == DENIED


async def test_string_amount_denied_at_binding(client, make_payload):
    payload = make_payload()
    payload["TotalAmount"] = "1000"
    res = await client.post("/submittrxmessage", json=payload)
    assert res.status_code == 400
    assert res.json() == DENIED


async def test_invalid_json_denied(client):
    res = await client.post(
        "/submittrxmessage", content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == DENIED


class _FaultyService:
    def __init__(self, error: Exception):
        self._error = error

    def submit(self, request):
        raise self._error


class _RecordingService:
    """Exposes only submit(): the route must not reach into individual stages."""
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    def submit(self, request):
        self.calls.append(request)
        return self.outcome


async def test_route_delegates_whole_pipeline_to_submit(client, override_service, make_payload):
    service = _RecordingService(Accepted(905, 181, 724))
    override_service(service)
    res = await client.post("/submittrxmessage", json=make_payload(total_amount=905))
    assert res.status_code == 200
    assert res.json() == {
        "Result": 1, "TotalAmount": 905, "TotalDiscount": 181, "FinalAmount": 724,
    }
    assert len(service.calls) == 1
    assert service.calls[0].total_amount == 905


async def test_rejected_submit_maps_to_400(client, override_service, make_payload):
    override_service(_RecordingService(Rejected(RejectionReason.EXPIRED, "Expired.")))
    res = await client.post("/submittrxmessage", json=make_payload())
    assert res.status_code == 400
    assert res.json() == {"Result": 0, "ResultMessage": "Expired."}


async def test_unexpected_fault_returns_500(raw_client, override_service, make_payload):
    override_service(_FaultyService(RuntimeError("boom")))
    res = await raw_client.post("/submittrxmessage", json=make_payload())
    assert res.status_code == 500
    body = res.json()
    assert "Result" not in body
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert "boom" not in res.text


async def test_typed_fault_returns_its_envelope(raw_client, override_service, make_payload):
    override_service(_FaultyService(DiscountComputationError(0)))
    res = await raw_client.post("/submittrxmessage", json=make_payload())
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "DISCOUNT_PRECONDITION_VIOLATED"
    assert "positive integer" not in res.text


async def test_lower_case_wire_names_are_priced(client, make_payload):
    payload = {key.lower(): value for key, value in make_payload(total_amount=1000).items()}
    res = await client.post("/submittrxmessage", json=payload)
    assert res.status_code == 200
    assert res.json()["FinalAmount"] == 900
