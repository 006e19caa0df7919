"""Transaction Schemas - Pydantic wire models for POST /submittrxmessage.

Invariants:
    - Inbound models bind JSON types only: every field optional, no length/range
      rules (core/validate_request.py owns those and re-checks everything)
    - Integers are strict: "12", 12.0 and true are binding errors, not coerced
    - Field names matched case-insensitively (PartnerKey, partnerKey, PARTNERKEY)
    - TransactionResponse serializes PascalCase and omits None fields

Design Decisions:
    - Schemas kept separate from core dataclasses: core stays framework-free,
      to_domain() is the single translation point
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from transaction_api.core.outcomes import Accepted, Rejected
from transaction_api.core.transaction import ItemLine, TransactionRequest

MAX_AMOUNT = 2**63 - 1

WireInt = Annotated[StrictInt, Field(le=MAX_AMOUNT, ge=-MAX_AMOUNT - 1)]


class _WireModel(BaseModel):
    """Binds wire names case-insensitively onto their PascalCase aliases."""
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def fold_wire_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        canonical = {
            field.validation_alias.lower(): field.validation_alias
            for field in cls.model_fields.values()
        }
        return {
            canonical.get(key.lower(), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }


class ItemDetailIn(_WireModel):
    """One inbound item line."""
    partner_item_ref: str | None = Field(None, validation_alias="PartnerItemRef")
    name: str | None = Field(None, validation_alias="Name")
    qty: WireInt | None = Field(None, validation_alias="Qty")
    unit_price: WireInt | None = Field(None, validation_alias="UnitPrice")

    def to_domain(self) -> ItemLine:
        return ItemLine(
            partner_item_ref=self.partner_item_ref,
            name=self.name,
            qty=self.qty,
            unit_price=self.unit_price,
        )


class TransactionRequestIn(_WireModel):
    """Inbound signed transaction request."""

    partner_key: str | None = Field(None, validation_alias="PartnerKey")
    partner_ref_no: str | None = Field(None, validation_alias="PartnerRefNo")
    partner_password: str | None = Field(None, validation_alias="PartnerPassword")
    total_amount: WireInt | None = Field(None, validation_alias="TotalAmount")
    items: list[ItemDetailIn] | None = Field(None, validation_alias="Items")
    timestamp: str | None = Field(None, validation_alias="Timestamp")
    sig: str | None = Field(None, validation_alias="Sig")

    def to_domain(self) -> TransactionRequest:
        return TransactionRequest(
            partner_key=self.partner_key,
            partner_ref_no=self.partner_ref_no,
            partner_password=self.partner_password,
            total_amount=self.total_amount,
            items=(
                tuple(item.to_domain() for item in self.items)
                if self.items is not None else None
            ),
            timestamp=self.timestamp,
            sig=self.sig,
        )


class TransactionResponse(BaseModel):
    """Outbound response. Serialize with to_wire() so None fields are dropped."""
    result: int = Field(serialization_alias="Result")
    total_amount: int | None = Field(None, serialization_alias="TotalAmount")
    total_discount: int | None = Field(None, serialization_alias="TotalDiscount")
    final_amount: int | None = Field(None, serialization_alias="FinalAmount")
    result_message: str | None = Field(None, serialization_alias="ResultMessage")

    @classmethod
    def from_outcome(cls, outcome: Accepted | Rejected) -> "TransactionResponse":
        if isinstance(outcome, Rejected):
            return cls(result=int(outcome.result), result_message=outcome.caller_message)
        return cls(
            result=int(outcome.result),
            total_amount=outcome.total_amount,
            total_discount=outcome.total_discount,
            final_amount=outcome.final_amount,
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
